"""Command for saving a resolved conflict file."""

import logging
from pathlib import Path
from typing import Annotated

import typer

logger = logging.getLogger(__name__)

DestArg = Annotated[
	Path,
	typer.Argument(help="Directory holding the conflict files", file_okay=False),
]

RelPathArg = Annotated[
	str,
	typer.Argument(help="Path of the file relative to DEST"),
]

SourceArg = Annotated[
	Path,
	typer.Argument(help="File with the resolved content", exists=True, dir_okay=False),
]

AllowMarkersFlag = Annotated[
	bool,
	typer.Option("--allow-markers", help="Save even if conflict markers remain"),
]


def register_command(app: typer.Typer) -> None:
	"""Register the save command with the CLI app."""

	@app.command(name="save")
	def save_command(
		dest: DestArg,
		rel_path: RelPathArg,
		source: SourceArg,
		allow_markers: AllowMarkersFlag = False,
	) -> None:
		"""Save the resolved content of SOURCE as REL_PATH under DEST."""
		_save_command_impl(dest=dest, rel_path=rel_path, source=source, allow_markers=allow_markers)


def _save_command_impl(dest: Path, rel_path: str, source: Path, allow_markers: bool) -> None:
	"""Actual implementation of the save command."""
	from branchdiff.utils.cli_utils import exit_with_error
	from branchdiff.utils.file_utils import save_resolved_file

	try:
		content = source.read_text(encoding="utf-8")
		written = save_resolved_file(dest, rel_path, content, allow_markers=allow_markers)
	except (ValueError, OSError) as e:
		exit_with_error(f"Could not save '{rel_path}': {e}", exception=e)

	typer.secho(f"Saved {written}", fg=typer.colors.GREEN)
