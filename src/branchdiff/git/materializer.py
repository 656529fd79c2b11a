"""Write the files changed on a branch into a local directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from branchdiff.git.schemas import ChangeFilter
from branchdiff.git.tree_diff import resolve_and_classify
from branchdiff.git.utils import GitError, ReadError

if TYPE_CHECKING:
	from branchdiff.git.utils import GitRepoContext

logger = logging.getLogger(__name__)


class MaterializeError(GitError):
	"""Raised when materialization stops part way through."""

	def __init__(self, message: str, written: list[Path]) -> None:
		"""Record the files written before the failure."""
		self.written = written
		super().__init__(message)


def clear_destination(dest_dir: Path) -> None:
	"""Remove ``dest_dir`` and everything under it, if it exists."""
	if dest_dir.exists():
		logger.info("Clearing destination directory %s", dest_dir)
		shutil.rmtree(dest_dir)


def download_changed_files(
	context: GitRepoContext,
	target_branch: str,
	base_branch: str,
	dest_dir: Path | str,
) -> list[Path]:
	"""
	Write every file added or modified on the target branch into ``dest_dir``.

	This is a clear-then-write operation: ``dest_dir`` is deleted first, so
	anything already in it is lost. Directory structure from the repository
	is recreated under ``dest_dir``. A failure part way through leaves the
	files written so far in place.

	Args:
		context: The opened repository.
		target_branch: Branch whose versions are written.
		base_branch: Branch it is compared against.
		dest_dir: Destination directory.

	Returns:
		Paths of the written files.

	Raises:
		BranchNotFoundError: If either branch cannot be resolved.
		MaterializeError: If a file cannot be read or written; ``written``
			holds the files completed before the failure.
	"""
	destination = Path(dest_dir)
	clear_destination(destination)

	compared = resolve_and_classify(context, target_branch, base_branch)
	changes = [c for c in compared.changes if ChangeFilter.ADDED_OR_MODIFIED.accepts(c.action)]

	written: list[Path] = []
	for change in changes:
		try:
			content = compared.target.read_bytes(change.path)
		except ReadError as e:
			logger.exception("Failed to read %s from '%s'", change.path, target_branch)
			msg = f"Stopped after {len(written)} files: {e}"
			raise MaterializeError(msg, written) from e

		dest_path = destination.joinpath(*change.path.split("/"))
		try:
			dest_path.parent.mkdir(parents=True, exist_ok=True)
			dest_path.write_bytes(content)
		except OSError as e:
			logger.exception("Failed to write %s", dest_path)
			msg = f"Stopped after {len(written)} files: failed to write {dest_path}: {e}"
			raise MaterializeError(msg, written) from e

		logger.debug("Wrote %s", dest_path)
		written.append(dest_path)

	logger.info("Wrote %d changed files from '%s' to %s", len(written), target_branch, destination)
	return written
