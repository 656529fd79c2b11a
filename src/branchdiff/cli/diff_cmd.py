"""Commands for rendering conflict-marked diffs."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from .cli_types import BaseOpt, ConfigOpt, RepoOpt, TargetArg

logger = logging.getLogger(__name__)

FileArg = Annotated[
	str,
	typer.Argument(help="Repository-relative path of the file, with forward slashes"),
]

OutputOpt = Annotated[
	Path | None,
	typer.Option(
		"--output",
		"-o",
		help="Write the diff to this file instead of stdout",
		dir_okay=False,
	),
]

BranchArg = Annotated[
	str,
	typer.Argument(help="Branch to compare the directory against (\"theirs\")"),
]

DirectoryArg = Annotated[
	Path,
	typer.Argument(
		help="Local directory laid out like the repository (\"ours\")",
		exists=True,
		file_okay=False,
	),
]

ShowFlag = Annotated[
	bool,
	typer.Option("--show", help="Print every rendered diff after the table"),
]


def register_command(app: typer.Typer) -> None:
	"""Register the diff commands with the CLI app."""

	@app.command(name="diff")
	def diff_command(
		target: TargetArg,
		path: FileArg,
		base: BaseOpt = None,
		output: OutputOpt = None,
		repo: RepoOpt = None,
		config: ConfigOpt = None,
	) -> None:
		"""
		Render PATH with conflict markers: TARGET is "ours", the base branch is "theirs".

		Lines are compared by position. Every differing line gets its own
		conflict block.

		"""
		_diff_command_impl(target=target, path=path, base=base, output=output, repo=repo, config_file=config)

	@app.command(name="diff-dir")
	def diff_dir_command(
		branch: BranchArg,
		directory: DirectoryArg,
		show: ShowFlag = False,
		repo: RepoOpt = None,
		config: ConfigOpt = None,
	) -> None:
		"""List files in DIRECTORY that differ from their version on BRANCH."""
		_diff_dir_command_impl(branch=branch, directory=directory, show=show, repo=repo, config_file=config)


def _diff_command_impl(
	target: str,
	path: str,
	base: str | None,
	output: Path | None,
	repo: Path | None,
	config_file: Path | None,
) -> None:
	"""Actual implementation of the diff command."""
	from branchdiff.cli.common import open_session, resolve_base
	from branchdiff.config import ConfigError
	from branchdiff.git.conflict_diff import count_conflict_blocks
	from branchdiff.git.utils import GitError
	from branchdiff.utils.cli_utils import console, exit_with_error, handle_keyboard_interrupt

	try:
		session, config = open_session(repo, config_file)
		base_branch = resolve_base(base, config)
		text = session.diff_file(target, base_branch, path)

		if output is None:
			typer.echo(text, nl=False)
			return

		output.parent.mkdir(parents=True, exist_ok=True)
		output.write_text(text, encoding="utf-8")
		console.print(f"Wrote {output} ({count_conflict_blocks(text)} conflict blocks)", markup=False)

	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except (GitError, ConfigError, OSError) as e:
		exit_with_error(f"Could not diff '{path}': {e}", exception=e)


def _diff_dir_command_impl(
	branch: str,
	directory: Path,
	show: bool,
	repo: Path | None,
	config_file: Path | None,
) -> None:
	"""Actual implementation of the diff-dir command."""
	from rich.table import Table
	from rich.text import Text

	from branchdiff.cli.common import open_session
	from branchdiff.config import ConfigError
	from branchdiff.git.conflict_diff import count_conflict_blocks
	from branchdiff.git.utils import GitError
	from branchdiff.utils.cli_utils import console, exit_with_error, handle_keyboard_interrupt

	try:
		session, _ = open_session(repo, config_file)
		diffs = session.diff_directory(branch, directory)

		if not diffs:
			typer.secho(f"No files in {directory} differ from '{branch}'.", fg=typer.colors.GREEN)
			return

		table = Table(title=Text(f"Files in {directory} differing from '{branch}'"))
		table.add_column("Path")
		table.add_column("Conflict blocks", justify="right")
		for rel_path, text in diffs.items():
			table.add_row(Text(rel_path), str(count_conflict_blocks(text)))
		console.print(table)

		if show:
			for rel_path, text in diffs.items():
				console.rule(Text(rel_path))
				typer.echo(text)

	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except (GitError, ConfigError) as e:
		exit_with_error(f"Could not compare {directory} with '{branch}': {e}", exception=e)
