"""
Logging setup for branchdiff.

Log records of the ``branchdiff`` package go to stderr through rich, so
command output on stdout (rendered diffs, JSON) stays clean. A log file,
when requested, receives every record at debug level.

"""

from __future__ import annotations

import logging
import platform
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

if TYPE_CHECKING:
	from collections.abc import Iterable

PACKAGE_LOGGER = "branchdiff"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d %(message)s"

err_console = Console(stderr=True)


def setup_logging(is_verbose: bool = False, log_file_path: Path | str | None = None) -> None:
	"""
	Attach handlers to the ``branchdiff`` logger.

	Calling this again replaces the handlers installed by the previous call.

	Args:
	    is_verbose: Show debug records and the emitting module on the terminal.
	    log_file_path: Also append every record to this file.

	"""
	package_logger = logging.getLogger(PACKAGE_LOGGER)
	package_logger.setLevel(logging.DEBUG)
	package_logger.propagate = False
	for handler in package_logger.handlers[:]:
		package_logger.removeHandler(handler)
		handler.close()

	terminal_handler = RichHandler(
		console=err_console,
		level=logging.DEBUG if is_verbose else logging.WARNING,
		show_time=is_verbose,
		show_path=is_verbose,
		markup=False,
		rich_tracebacks=True,
	)
	package_logger.addHandler(terminal_handler)

	if log_file_path is None:
		return

	log_path = Path(log_file_path)
	try:
		log_path.parent.mkdir(parents=True, exist_ok=True)
		file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
	except OSError as e:
		# Keep running with terminal logging only
		package_logger.warning("Cannot write log file %s: %s", log_path, e)
		return

	file_handler.setLevel(logging.DEBUG)
	file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
	package_logger.addHandler(file_handler)
	package_logger.debug("Logging to file: %s", log_path)


def log_environment_info() -> None:
	"""Log the versions and libgit2 features that decide what a run can do."""
	import pygit2

	from branchdiff import __version__

	logger = logging.getLogger(__name__)
	features = pygit2.enums.Feature(pygit2.features)
	logger.info("branchdiff %s on Python %s (%s)", __version__, platform.python_version(), platform.platform())
	logger.info("pygit2 %s, libgit2 %s", pygit2.__version__, pygit2.LIBGIT2_VERSION)
	logger.info(
		"libgit2 transports: https=%s ssh=%s",
		bool(features & pygit2.enums.Feature.HTTPS),
		bool(features & pygit2.enums.Feature.SSH),
	)


def render_summary(title: str, lines: Iterable[str], style: str) -> None:
	"""
	Print a titled block of plain text lines to stderr.

	Lines are never parsed as rich markup, so branch names and paths with
	square brackets print as they are.

	Args:
	    title: Heading shown in the top rule.
	    lines: Body lines.
	    style: Rich color used for the rules and the title.

	"""
	err_console.print(Rule(Text(title, style=f"bold {style}"), style=style))
	for line in lines:
		err_console.print(Text(line))
	err_console.print(Rule(style=style))
