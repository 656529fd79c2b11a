"""Command for listing the files that differ between two branches."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from .cli_types import BaseOpt, ConfigOpt, JsonFlag, RepoOpt, TargetArg

logger = logging.getLogger(__name__)

AllFlag = Annotated[
	bool,
	typer.Option("--all", "-a", help="Include files deleted on the target branch"),
]

ACTION_STYLES = {
	"added": "green",
	"modified": "yellow",
	"deleted": "red",
}


def register_command(app: typer.Typer) -> None:
	"""Register the changes command with the CLI app."""

	@app.command(name="changes")
	def changes_command(
		target: TargetArg,
		base: BaseOpt = None,
		include_deleted: AllFlag = False,
		as_json: JsonFlag = False,
		repo: RepoOpt = None,
		config: ConfigOpt = None,
	) -> None:
		"""
		List files added, modified or deleted on TARGET relative to the base branch.

		Without --all, deletions are left out.

		"""
		_changes_command_impl(
			target=target,
			base=base,
			include_deleted=include_deleted,
			as_json=as_json,
			repo=repo,
			config_file=config,
		)


def _changes_command_impl(
	target: str,
	base: str | None,
	include_deleted: bool,
	as_json: bool,
	repo: Path | None,
	config_file: Path | None,
) -> None:
	"""Actual implementation of the changes command."""
	from rich.table import Table
	from rich.text import Text

	from branchdiff.cli.common import open_session, resolve_base
	from branchdiff.config import ConfigError
	from branchdiff.git.schemas import ChangeFilter
	from branchdiff.git.tree_diff import summarize_changes
	from branchdiff.git.utils import GitError
	from branchdiff.utils.cli_utils import console, exit_with_error, handle_keyboard_interrupt, loading_spinner

	try:
		session, config = open_session(repo, config_file)
		base_branch = resolve_base(base, config)
		change_filter = ChangeFilter.ALL if include_deleted else ChangeFilter.ADDED_OR_MODIFIED

		with loading_spinner(f"Comparing '{target}' with '{base_branch}'..."):
			changes = session.compare_branches(target, base_branch, change_filter)

		if as_json:
			typer.echo(json.dumps([change.to_dict() for change in changes], indent=2))
			return

		if not changes:
			typer.secho(f"No changes between '{target}' and '{base_branch}'.", fg=typer.colors.GREEN)
			return

		table = Table(title=Text(f"Changes in '{target}' relative to '{base_branch}'"))
		table.add_column("Action")
		table.add_column("Path")
		for change in changes:
			style = ACTION_STYLES[change.action.value]
			# Paths are plain text, never markup
			table.add_row(Text(change.action.value, style=style), Text(change.path))
		console.print(table)

		summary = summarize_changes(changes)
		console.print(
			f"Total: {summary.total}  "
			f"added: {summary.added}  modified: {summary.modified}  deleted: {summary.deleted}",
			markup=False,
		)

	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except (GitError, ConfigError) as e:
		exit_with_error(f"Could not compare branches: {e}", exception=e)
