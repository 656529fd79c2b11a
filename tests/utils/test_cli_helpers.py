"""Tests for CLI helper and logging functions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING
from unittest.mock import patch

import pygit2
import pytest
import typer

from branchdiff.git.materializer import MaterializeError
from branchdiff.git.utils import BranchNotFoundError, CloneError, ReadError, RepositoryNotInitializedError
from branchdiff.utils.cli_utils import error_details, exit_with_error, handle_keyboard_interrupt, loading_spinner
from branchdiff.utils.file_utils import UnsafePathError
from branchdiff.utils.log_setup import PACKAGE_LOGGER, setup_logging

if TYPE_CHECKING:
	from collections.abc import Iterator


@pytest.mark.unit
class TestErrorDetails:
	"""Test cases for listing the context carried by errors."""

	def test_branch_not_found(self) -> None:
		"""The failing side and branch are named."""
		assert error_details(BranchNotFoundError("ghost", "base")) == ["Base branch: ghost"]

	def test_read_error(self) -> None:
		"""Read errors name the file and where it was read from."""
		details = error_details(ReadError("a/b.txt", "target branch 'x'", "no such file"))

		assert details == ["File: a/b.txt", "Read from: target branch 'x'"]

	def test_clone_error(self) -> None:
		"""Clone errors name both the source and the destination."""
		details = error_details(CloneError("https://example.com/r.git", "/tmp/r", "timeout"))

		assert "Clone source: https://example.com/r.git" in details
		assert f"Repository path: {Path('/tmp/r')}" in details

	def test_materialize_error_lists_written(self) -> None:
		"""Files written before a failure are listed one per line."""
		error = MaterializeError("stopped", [Path("out/a.txt"), Path("out/b.txt")])

		details = error_details(error)

		assert details[0] == "Files written before the failure: 2"
		assert details[1:] == [f"  {Path('out/a.txt')}", f"  {Path('out/b.txt')}"]

	def test_unsafe_path(self) -> None:
		"""Rejected save paths show the directory they must stay under."""
		details = error_details(UnsafePathError("../x", Path("/dest")))

		assert details == [f"Rejected path: ../x (must stay under {Path('/dest')})"]

	def test_not_initialized(self) -> None:
		"""The operation that needed a repository is named."""
		assert error_details(RepositoryNotInitializedError("diff_file")) == ["Operation: diff_file"]

	def test_cause_is_appended(self) -> None:
		"""A chained pygit2 error is shown last."""
		try:
			try:
				raise pygit2.GitError("corrupt object")
			except pygit2.GitError as inner:
				raise BranchNotFoundError("main", "target") from inner
		except BranchNotFoundError as error:
			details = error_details(error)

		assert details[-1] == "Caused by: GitError: corrupt object"

	def test_plain_exception(self) -> None:
		"""Errors without known context produce no lines."""
		assert error_details(RuntimeError("boom")) == []


@pytest.mark.unit
class TestCliUtils:
	"""Test cases for error and progress helpers."""

	def test_exit_with_error(self) -> None:
		"""The summary holds the message and the error context."""
		cause = BranchNotFoundError("ghost", "target")

		with (
			patch("branchdiff.utils.cli_utils.render_summary") as mock_summary,
			pytest.raises(typer.Exit) as exc_info,
		):
			exit_with_error("Could not compare branches", exit_code=2, exception=cause)

		assert exc_info.value.exit_code == 2
		assert exc_info.value.__cause__ is cause
		title, lines, style = mock_summary.call_args[0]
		assert style == "red"
		assert lines == ["Could not compare branches", "Target branch: ghost"]

	def test_exit_without_exception(self) -> None:
		"""A bare message still exits with status 1."""
		with patch("branchdiff.utils.cli_utils.render_summary"), pytest.raises(typer.Exit) as exc_info:
			exit_with_error("nothing to do")

		assert exc_info.value.exit_code == 1

	def test_keyboard_interrupt_exit_code(self) -> None:
		"""Cancelling exits with the SIGINT code."""
		with pytest.raises(typer.Exit) as exc_info:
			handle_keyboard_interrupt()

		assert exc_info.value.exit_code == 130

	def test_spinner_skipped_without_terminal(self) -> None:
		"""No status display is started when stderr is not a terminal."""
		with patch("branchdiff.utils.cli_utils.err_console") as mock_console:
			mock_console.is_terminal = False
			with loading_spinner("working"):
				pass

		mock_console.status.assert_not_called()

	def test_spinner_on_terminal(self) -> None:
		"""On a terminal the message is shown as plain text."""
		with patch("branchdiff.utils.cli_utils.err_console") as mock_console:
			mock_console.is_terminal = True
			with loading_spinner("Comparing '[x]'"):
				pass

		status_text = mock_console.status.call_args[0][0]
		assert status_text.plain == "Comparing '[x]'"


@pytest.mark.unit
@pytest.mark.fs
class TestSetupLogging:
	"""Test cases for logging configuration."""

	@pytest.fixture(autouse=True)
	def restore_logger(self) -> Iterator[None]:
		"""Put the package logger back the way it was."""
		package_logger = logging.getLogger(PACKAGE_LOGGER)
		saved = (package_logger.handlers[:], package_logger.level, package_logger.propagate)
		yield
		for handler in package_logger.handlers[:]:
			package_logger.removeHandler(handler)
			handler.close()
		package_logger.handlers[:], package_logger.level, package_logger.propagate = saved

	def test_repeated_setup_replaces_handlers(self) -> None:
		"""Calling setup twice does not duplicate output."""
		setup_logging()
		setup_logging()

		assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 1

	def test_terminal_level(self) -> None:
		"""Verbose mode lowers the terminal threshold to debug."""
		setup_logging(is_verbose=False)
		assert logging.getLogger(PACKAGE_LOGGER).handlers[0].level == logging.WARNING

		setup_logging(is_verbose=True)
		assert logging.getLogger(PACKAGE_LOGGER).handlers[0].level == logging.DEBUG

	def test_log_file_gets_debug_records(self, tmp_path: Path) -> None:
		"""The log file receives debug records even when the terminal does not."""
		log_file = tmp_path / "logs" / "run.log"

		setup_logging(log_file_path=log_file)
		logging.getLogger("branchdiff.git.tree_diff").debug("compared %d trees", 2)

		for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
			handler.flush()
		assert "compared 2 trees" in log_file.read_text(encoding="utf-8")
