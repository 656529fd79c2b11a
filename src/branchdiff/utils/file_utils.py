"""Utility functions for file operations in branchdiff."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

from branchdiff.git.conflict_diff import has_conflict_markers

logger = logging.getLogger(__name__)


class UnsafePathError(ValueError):
	"""Raised when a relative path would escape its base directory."""

	def __init__(self, path: str, base: Path) -> None:
		"""Record the rejected path."""
		self.path = path
		self.base = base
		super().__init__(f"Path '{path}' resolves outside {base}")


def resolve_inside(base_dir: Path | str, rel_path: str) -> Path:
	"""
	Join ``rel_path`` onto ``base_dir`` and make sure the result stays inside it.

	Raises:
	    UnsafePathError: If the path is absolute or climbs out of ``base_dir``.

	"""
	base = Path(base_dir).resolve()
	if Path(rel_path).is_absolute():
		raise UnsafePathError(rel_path, base)
	candidate = (base / rel_path).resolve()
	if not candidate.is_relative_to(base) or candidate == base:
		raise UnsafePathError(rel_path, base)
	return candidate


def save_resolved_file(
	dest_dir: Path | str,
	rel_path: str,
	content: str,
	*,
	allow_markers: bool = False,
) -> Path:
	"""
	Persist a file whose conflicts were resolved by the user.

	Args:
	    dest_dir: Directory holding the conflict files.
	    rel_path: Path of the file relative to ``dest_dir``.
	    content: Resolved content.
	    allow_markers: Write even if conflict markers remain.

	Returns:
	    The path written.

	Raises:
	    UnsafePathError: If ``rel_path`` escapes ``dest_dir``.
	    ValueError: If the content still has conflict markers and ``allow_markers`` is False.
	    OSError: If the file cannot be written.

	"""
	target = resolve_inside(dest_dir, rel_path)
	if not allow_markers and has_conflict_markers(content):
		msg = f"Content for '{rel_path}' still contains conflict markers"
		logger.error(msg)
		raise ValueError(msg)

	target.parent.mkdir(parents=True, exist_ok=True)
	target.write_text(content, encoding="utf-8")
	logger.info("Saved resolved file %s", target)
	return target


def create_temp_dir(prefix: str = "branchdiff-", parent: Path | str | None = None) -> Path:
	"""
	Create a new temporary directory.

	Args:
	    prefix: Name prefix of the directory.
	    parent: Directory to create it in, the system temp dir when omitted.

	Returns:
	    Path of the new directory.

	"""
	try:
		return Path(tempfile.mkdtemp(prefix=prefix, dir=parent))
	except OSError:
		logger.exception("Failed to create temporary directory in %s", parent or tempfile.gettempdir())
		raise


def remove_temp_dir(path: Path | str) -> None:
	"""Remove a temporary directory and its contents."""
	try:
		shutil.rmtree(path)
	except FileNotFoundError:
		logger.debug("Temporary directory %s already removed", path)
	except OSError:
		logger.exception("Failed to remove temporary directory %s", path)
		raise
