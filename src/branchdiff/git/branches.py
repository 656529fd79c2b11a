"""Branch enumeration."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pygit2 import GitError as Pygit2GitError

from branchdiff.git.utils import GitError

if TYPE_CHECKING:
	from branchdiff.git.utils import GitRepoContext

logger = logging.getLogger(__name__)


class BranchScope(str, Enum):
	"""Which branches to list."""

	LOCAL = "local"
	REMOTE = "remote"
	ALL = "all"


def list_branches(context: GitRepoContext, scope: BranchScope = BranchScope.LOCAL) -> list[str]:
	"""
	List branch names visible in the repository.

	Args:
		context: The opened repository.
		scope: Local branches, remote-tracking branches, or both.

	Returns:
		Branch short names (``main``, ``origin/main``) sorted lexicographically.

	Raises:
		GitError: If the references cannot be read.
	"""
	try:
		branches = context.repo.branches
		names: set[str] = set()
		if scope in (BranchScope.LOCAL, BranchScope.ALL):
			names.update(branches.local)
		if scope in (BranchScope.REMOTE, BranchScope.ALL):
			# Skip remote HEAD pointers such as origin/HEAD
			names.update(name for name in branches.remote if not name.endswith("/HEAD"))
	except Pygit2GitError as e:
		msg = f"Failed to list {scope.value} branches: {e}"
		logger.exception(msg)
		raise GitError(msg) from e

	logger.debug("Found %d %s branches in %s", len(names), scope.value, context.repo.path)
	return sorted(names)
