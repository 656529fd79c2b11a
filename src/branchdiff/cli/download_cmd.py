"""Command for writing changed files to a local directory."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from .cli_types import BaseOpt, ConfigOpt, RepoOpt, TargetArg, YesFlag

logger = logging.getLogger(__name__)

DestOpt = Annotated[
	Path | None,
	typer.Option(
		"--dest",
		"-d",
		help="Destination directory, defaults to download.output_dir from config. It is cleared first!",
		file_okay=False,
	),
]

TempFlag = Annotated[
	bool,
	typer.Option("--temp", help="Write into a new temporary directory instead of --dest"),
]


def register_command(app: typer.Typer) -> None:
	"""Register the download command with the CLI app."""

	@app.command(name="download")
	def download_command(
		target: TargetArg,
		base: BaseOpt = None,
		dest: DestOpt = None,
		temp: TempFlag = False,
		yes: YesFlag = False,
		repo: RepoOpt = None,
		config: ConfigOpt = None,
	) -> None:
		"""
		Write the files added or modified on TARGET into a directory.

		The destination directory is deleted before writing, so anything
		already in it is lost.

		"""
		_download_command_impl(
			target=target, base=base, dest=dest, temp=temp, yes=yes, repo=repo, config_file=config
		)


def _download_command_impl(
	target: str,
	base: str | None,
	dest: Path | None,
	temp: bool,
	yes: bool,
	repo: Path | None,
	config_file: Path | None,
) -> None:
	"""Actual implementation of the download command."""
	from branchdiff.cli.common import open_session, resolve_base
	from branchdiff.config import ConfigError
	from branchdiff.git.materializer import MaterializeError
	from branchdiff.git.utils import GitError
	from branchdiff.utils.cli_utils import exit_with_error, handle_keyboard_interrupt, loading_spinner
	from branchdiff.utils.file_utils import create_temp_dir, remove_temp_dir

	temp_dir: Path | None = None
	try:
		session, config = open_session(repo, config_file)
		base_branch = resolve_base(base, config)

		if temp:
			temp_dir = create_temp_dir(prefix=f"branchdiff-{target.replace('/', '-')}-")
			destination = temp_dir
		else:
			destination = dest or Path(config.get.download.output_dir)
			if destination.exists() and any(destination.iterdir()) and not yes:
				typer.confirm(f"{destination} is not empty and will be cleared. Continue?", abort=True)

		try:
			with loading_spinner(f"Writing changed files of '{target}'..."):
				written = session.download_changed_files(target, base_branch, destination)
		except MaterializeError as e:
			# Partial output in a temp dir is kept for inspection
			if temp_dir is not None and not e.written:
				remove_temp_dir(temp_dir)
			raise
		except (GitError, OSError):
			if temp_dir is not None:
				remove_temp_dir(temp_dir)
			raise

		if not written:
			typer.secho(f"No added or modified files between '{target}' and '{base_branch}'.", fg=typer.colors.GREEN)
			if temp_dir is not None:
				remove_temp_dir(temp_dir)
			return

		for path in written:
			typer.echo(str(path))
		typer.secho(f"{len(written)} files written to {destination}", fg=typer.colors.GREEN, err=True)
		if temp_dir is not None:
			typer.secho(
				f"{temp_dir} is a temporary directory and is not removed automatically.",
				fg=typer.colors.YELLOW,
				err=True,
			)

	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except MaterializeError as e:
		exit_with_error(f"Download of '{target}' stopped part way: {e}", exception=e)
	except (GitError, ConfigError, OSError) as e:
		exit_with_error(f"Could not download changed files: {e}", exception=e)
