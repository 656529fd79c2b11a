"""Utility functions for CLI operations in branchdiff."""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING, NoReturn

import typer
from rich.console import Console
from rich.text import Text

from branchdiff.git.materializer import MaterializeError
from branchdiff.git.utils import (
	BranchNotFoundError,
	CloneError,
	FileDeletedOrUnchangedError,
	FileNotInDiffError,
	ReadError,
	RepositoryNotInitializedError,
	RepositoryOpenError,
)
from branchdiff.utils.file_utils import UnsafePathError
from branchdiff.utils.log_setup import err_console, render_summary

if TYPE_CHECKING:
	from collections.abc import Iterator

# Command results; messages and summaries go to err_console
console = Console()
logger = logging.getLogger(__name__)


@contextlib.contextmanager
def loading_spinner(message: str) -> Iterator[None]:
	"""
	Show a spinner on stderr while the block runs.

	Nothing is shown when stderr is not a terminal (pipes, CI, tests).

	Args:
	    message: Status text next to the spinner.

	Yields:
	    None

	"""
	if not err_console.is_terminal:
		yield
		return

	with err_console.status(Text(message), spinner="dots"):
		yield


def error_details(error: BaseException) -> list[str]:
	"""
	Turn the context carried by a branchdiff error into display lines.

	Args:
	    error: The exception that stopped the command.

	Returns:
	    One line per known attribute, followed by the chained cause if any.

	"""
	details: list[str] = []
	if isinstance(error, RepositoryNotInitializedError):
		details.append(f"Operation: {error.operation}")
	if isinstance(error, RepositoryOpenError | CloneError):
		details.append(f"Repository path: {error.path}")
	if isinstance(error, CloneError):
		details.append(f"Clone source: {error.url}")
	if isinstance(error, BranchNotFoundError):
		details.append(f"{error.side.capitalize()} branch: {error.branch}")
	if isinstance(error, FileNotInDiffError | FileDeletedOrUnchangedError | ReadError):
		details.append(f"File: {error.path}")
	if isinstance(error, ReadError):
		details.append(f"Read from: {error.source}")
	if isinstance(error, UnsafePathError):
		details.append(f"Rejected path: {error.path} (must stay under {error.base})")
	if isinstance(error, MaterializeError):
		details.append(f"Files written before the failure: {len(error.written)}")
		details.extend(f"  {path}" for path in error.written)

	cause = error.__cause__
	if cause is not None:
		details.append(f"Caused by: {type(cause).__name__}: {cause}")
	return details


def exit_with_error(message: str, exit_code: int = 1, exception: BaseException | None = None) -> NoReturn:
	"""
	Print an error summary to stderr and end the command.

	Args:
	        message: What the command was doing when it failed.
	        exit_code: Process exit status.
	        exception: The error, whose context is listed below the message.

	"""
	lines = [message]
	if exception is not None:
		logger.debug("Command failed", exc_info=exception)
		lines.extend(error_details(exception))

	render_summary("branchdiff error", lines, "red")
	raise typer.Exit(exit_code) from exception


def handle_keyboard_interrupt() -> NoReturn:
	"""End the command after Ctrl-C with the SIGINT exit status."""
	err_console.print("Cancelled.", style="yellow")
	raise typer.Exit(130)
