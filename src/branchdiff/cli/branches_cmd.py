"""Command for listing repository branches."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from branchdiff.git.branches import BranchScope

from .cli_types import ConfigOpt, RepoOpt

logger = logging.getLogger(__name__)

ScopeOpt = Annotated[
	BranchScope | None,
	typer.Option(
		"--scope",
		"-s",
		help="Which branches to list, defaults to repository.branch_scope from config",
		case_sensitive=False,
	),
]


def register_command(app: typer.Typer) -> None:
	"""Register the branches command with the CLI app."""

	@app.command(name="branches")
	def branches_command(
		scope: ScopeOpt = None,
		repo: RepoOpt = None,
		config: ConfigOpt = None,
	) -> None:
		"""List the branches of a repository."""
		_branches_command_impl(scope=scope, repo=repo, config_file=config)


def _branches_command_impl(scope: BranchScope | None, repo: Path | None, config_file: Path | None) -> None:
	"""Actual implementation of the branches command."""
	from branchdiff.cli.common import open_session
	from branchdiff.config import ConfigError
	from branchdiff.git.utils import GitError
	from branchdiff.utils.cli_utils import exit_with_error, handle_keyboard_interrupt

	try:
		session, config = open_session(repo, config_file)
		selected_scope = scope or config.get.repository.branch_scope
		names = session.list_branches(selected_scope)
		current = session.current_branch()

		if not names:
			typer.secho(f"No {selected_scope.value} branches found.", fg=typer.colors.YELLOW)
			return

		for name in names:
			marker = "*" if name == current else " "
			typer.echo(f"{marker} {name}")

	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except (GitError, ConfigError) as e:
		exit_with_error(f"Could not list branches: {e}", exception=e)
