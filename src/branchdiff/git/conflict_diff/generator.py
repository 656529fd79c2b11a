"""Generate conflict-marked diffs for files on two branches."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from branchdiff.git.schemas import ChangeAction
from branchdiff.git.tree_diff import resolve_and_classify
from branchdiff.git.utils import FileDeletedOrUnchangedError, FileNotInDiffError, ReadError

from .constants import LINE_SEPARATOR, OURS_MARKER, SEPARATOR_MARKER, THEIRS_MARKER
from .strategies import ConflictDiffStrategy, PositionalStrategy

if TYPE_CHECKING:
	from branchdiff.git.utils import GitRepoContext

logger = logging.getLogger(__name__)

_MARKERS = frozenset((OURS_MARKER, SEPARATOR_MARKER, THEIRS_MARKER))


def generate_conflict_diff(theirs: str, ours: str, strategy: ConflictDiffStrategy | None = None) -> str:
	"""
	Render two versions of a file as one text with conflict markers.

	Args:
		theirs: Base branch version.
		ours: Target branch version.
		strategy: Alignment strategy, positional when omitted.

	Returns:
		The annotated text. Identical inputs are returned unchanged.
	"""
	return (strategy or PositionalStrategy()).generate(theirs, ours)


def count_conflict_blocks(text: str) -> int:
	"""Count the conflict blocks in a rendered diff."""
	return sum(1 for line in text.split(LINE_SEPARATOR) if line == OURS_MARKER)


def has_conflict_markers(text: str) -> bool:
	"""Return True if any line of ``text`` is a conflict marker."""
	return any(line.rstrip("\r") in _MARKERS for line in text.split(LINE_SEPARATOR))


def diff_file(
	context: GitRepoContext,
	target_branch: str,
	base_branch: str,
	path: str,
	strategy: ConflictDiffStrategy | None = None,
) -> dict[str, str]:
	"""
	Render one changed file with conflict markers.

	The base branch supplies "theirs" and the target branch "ours". A file
	that is new on the target branch is diffed against empty content.

	Args:
		context: The opened repository.
		target_branch: Branch whose version is "ours".
		base_branch: Branch whose version is "theirs".
		path: Repository-relative path of the file.
		strategy: Alignment strategy, positional when omitted.

	Returns:
		A single-entry mapping of ``path`` to the rendered diff.

	Raises:
		BranchNotFoundError: If either branch cannot be resolved.
		FileNotInDiffError: If the file does not differ between the branches.
		FileDeletedOrUnchangedError: If the file was deleted on the target branch.
		ReadError: If the target version cannot be read.
	"""
	compared = resolve_and_classify(context, target_branch, base_branch)

	change = compared.find(path)
	if change is None:
		logger.error("File %s not found among changes of '%s' vs '%s'", path, target_branch, base_branch)
		raise FileNotInDiffError(path, target_branch, base_branch)
	if change.action is ChangeAction.DELETED:
		logger.error("File %s was deleted on '%s', nothing to diff", path, target_branch)
		raise FileDeletedOrUnchangedError(path)

	base_content = compared.base.read_text(path) if compared.base.contains(path) else ""
	target_content = compared.target.read_text(path)

	return {path: generate_conflict_diff(base_content, target_content, strategy)}


def diff_directory_with_branch(
	context: GitRepoContext,
	branch: str,
	directory: Path | str,
	strategy: ConflictDiffStrategy | None = None,
) -> dict[str, str]:
	"""
	Compare files in a local directory with their versions on a branch.

	The branch supplies "theirs" and the local file "ours". Files that do
	not exist on the branch, and files identical to it, are left out.

	Args:
		context: The opened repository.
		branch: Branch to compare against.
		directory: Local directory whose layout mirrors the repository.
		strategy: Alignment strategy, positional when omitted.

	Returns:
		Rendered diffs keyed by forward-slash path relative to ``directory``.

	Raises:
		BranchNotFoundError: If the branch cannot be resolved.
		ReadError: If the directory or one of its files cannot be read.
	"""
	root = Path(directory)
	if not root.is_dir():
		logger.error("Directory %s does not exist", root)
		raise ReadError(str(root), "local filesystem", "directory not found")

	snapshot = context.branch_snapshot(branch, "base")
	diffs: dict[str, str] = {}

	for file_path in sorted(root.rglob("*")):
		if not file_path.is_file():
			continue
		rel_path = file_path.relative_to(root).as_posix()
		if not snapshot.contains(rel_path):
			logger.debug("Skipping %s, not present on branch '%s'", rel_path, branch)
			continue

		try:
			local_bytes = file_path.read_bytes()
		except OSError as e:
			logger.exception("Failed to read local file %s", file_path)
			raise ReadError(rel_path, f"local directory {root}", str(e)) from e

		branch_content = snapshot.read_text(rel_path)
		local_content = local_bytes.decode("utf-8", errors="replace")
		if local_content == branch_content:
			continue

		diffs[rel_path] = generate_conflict_diff(branch_content, local_content, strategy)

	logger.debug("Found %d differing files in %s against '%s'", len(diffs), root, branch)
	return diffs
