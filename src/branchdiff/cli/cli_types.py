"""Type definitions for CLI parameters."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

# Type aliases for common CLI parameters
RepoOpt = Annotated[
	Path | None,
	typer.Option(
		"--repo",
		"-r",
		help="Path to the git repository (overrides config, defaults to the current directory)",
		file_okay=False,
	),
]

ConfigOpt = Annotated[
	Path | None,
	typer.Option(
		"--config",
		"-c",
		help="Path to config file",
	),
]

TargetArg = Annotated[
	str,
	typer.Argument(
		help="Target branch (\"ours\")",
	),
]

BaseOpt = Annotated[
	str | None,
	typer.Option(
		"--base",
		"-b",
		help="Base branch (\"theirs\"), defaults to repository.base_branch from config",
	),
]

JsonFlag = Annotated[
	bool,
	typer.Option(
		"--json",
		help="Print machine readable JSON instead of a table",
	),
]

YesFlag = Annotated[
	bool,
	typer.Option(
		"--yes",
		"-y",
		help="Do not ask for confirmation",
	),
]
