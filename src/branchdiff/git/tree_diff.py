"""Classify the files that differ between two branches."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pygit2 import GitError as Pygit2GitError
from pygit2.enums import DeltaStatus

from branchdiff.git.schemas import ChangeAction, ChangeFilter, ChangeSummary, FileChange
from branchdiff.git.utils import GitError

if TYPE_CHECKING:
	from collections.abc import Iterable

	from branchdiff.git.utils import GitRepoContext, TreeSnapshot

logger = logging.getLogger(__name__)


@dataclass
class ComparedTrees:
	"""Both sides of a branch comparison and the changes between them."""

	target: TreeSnapshot
	base: TreeSnapshot
	changes: list[FileChange]

	def find(self, path: str) -> FileChange | None:
		"""Return the change recorded for ``path``, if any."""
		for change in self.changes:
			if change.path == path:
				return change
		return None


def _classify_delta(status: int, old_path: str, new_path: str) -> FileChange | None:
	"""Map a raw pygit2 delta to a change, or None when the action is not one we track."""
	if status == DeltaStatus.ADDED:
		return FileChange(path=new_path, action=ChangeAction.ADDED)
	if status == DeltaStatus.MODIFIED:
		return FileChange(path=new_path, action=ChangeAction.MODIFIED)
	if status == DeltaStatus.DELETED:
		return FileChange(path=old_path, action=ChangeAction.DELETED)
	return None


def resolve_and_classify(context: GitRepoContext, target_branch: str, base_branch: str) -> ComparedTrees:
	"""
	Resolve both branches and classify every path that differs.

	Args:
		context: The opened repository.
		target_branch: Branch whose content is "ours".
		base_branch: Branch compared against ("theirs").

	Returns:
		Both tree snapshots and the unfiltered change list.

	Raises:
		BranchNotFoundError: If either branch cannot be resolved.
		GitError: If the trees cannot be compared.
	"""
	target = context.branch_snapshot(target_branch, "target")
	base = context.branch_snapshot(base_branch, "base")

	try:
		diff = base.diff(target)
	except Pygit2GitError as e:
		msg = f"Failed to compare trees of '{target_branch}' and '{base_branch}': {e}"
		logger.exception(msg)
		raise GitError(msg) from e

	changes: list[FileChange] = []
	for delta in diff.deltas:
		change = _classify_delta(delta.status, delta.old_file.path, delta.new_file.path)
		if change is None:
			logger.debug(
				"Skipping delta with unhandled status %s: %s -> %s",
				delta.status,
				delta.old_file.path,
				delta.new_file.path,
			)
			continue
		changes.append(change)

	logger.debug("Found %d changes between '%s' and '%s'", len(changes), target_branch, base_branch)
	return ComparedTrees(target=target, base=base, changes=changes)


def compare_branches(
	context: GitRepoContext,
	target_branch: str,
	base_branch: str,
	change_filter: ChangeFilter = ChangeFilter.ALL,
) -> list[FileChange]:
	"""
	List the files that differ between two branches.

	Args:
		context: The opened repository.
		target_branch: Branch being inspected.
		base_branch: Branch it is compared against.
		change_filter: ``ADDED_OR_MODIFIED`` drops deletions, ``ALL`` keeps everything.

	Returns:
		Classified changes in the order pygit2 reports them (sorted by path).
	"""
	compared = resolve_and_classify(context, target_branch, base_branch)
	return [change for change in compared.changes if change_filter.accepts(change.action)]


def get_modified_files(context: GitRepoContext, target_branch: str, base_branch: str) -> list[str]:
	"""Paths added or modified on the target branch."""
	return [c.path for c in compare_branches(context, target_branch, base_branch, ChangeFilter.ADDED_OR_MODIFIED)]


def get_all_changed_files(context: GitRepoContext, target_branch: str, base_branch: str) -> list[str]:
	"""Paths added, modified or deleted on the target branch."""
	return [c.path for c in compare_branches(context, target_branch, base_branch, ChangeFilter.ALL)]


def get_file_changes(context: GitRepoContext, target_branch: str, base_branch: str) -> list[FileChange]:
	"""Path and action of every change on the target branch."""
	return compare_branches(context, target_branch, base_branch, ChangeFilter.ALL)


def summarize_changes(changes: Iterable[FileChange]) -> ChangeSummary:
	"""Count changes per action."""
	counts = dict.fromkeys(ChangeAction, 0)
	for change in changes:
		counts[change.action] += 1
	return ChangeSummary(
		added=counts[ChangeAction.ADDED],
		modified=counts[ChangeAction.MODIFIED],
		deleted=counts[ChangeAction.DELETED],
	)
