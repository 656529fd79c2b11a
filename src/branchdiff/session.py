"""Comparison session: the entry point callers use to query a repository."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from branchdiff.git.branches import BranchScope, list_branches
from branchdiff.git.conflict_diff import diff_directory_with_branch, diff_file, get_strategy
from branchdiff.git.conflict_diff.strategies import DiffStrategyName
from branchdiff.git.materializer import download_changed_files
from branchdiff.git.schemas import ChangeFilter
from branchdiff.git.tree_diff import compare_branches
from branchdiff.git.utils import GitRepoContext, RepositoryNotInitializedError

if TYPE_CHECKING:
	from branchdiff.git.conflict_diff import ConflictDiffStrategy
	from branchdiff.git.schemas import FileChange

logger = logging.getLogger(__name__)


class BranchDiffSession:
	"""
	One comparison session over at most one repository.

	A session is not thread safe. Give each caller its own session instead
	of sharing one, and never run two downloads into the same directory at
	the same time.
	"""

	def __init__(self, strategy: DiffStrategyName | str = DiffStrategyName.POSITIONAL) -> None:
		"""
		Create an unbound session.

		Args:
			strategy: Name of the conflict diff strategy used by diff operations.
		"""
		self._context: GitRepoContext | None = None
		self.strategy: ConflictDiffStrategy = get_strategy(strategy)

	@property
	def is_initialized(self) -> bool:
		"""True once a repository is bound."""
		return self._context is not None

	def context(self, operation: str = "query") -> GitRepoContext:
		"""
		Return the bound repository context.

		Raises:
			RepositoryNotInitializedError: If no repository is bound.
		"""
		if self._context is None:
			logger.error("%s called before a repository was bound", operation)
			raise RepositoryNotInitializedError(operation)
		return self._context

	def bind_repository(self, path: Path | str) -> None:
		"""
		Bind the session to the repository at ``path``, replacing any previous one.

		Raises:
			PathNotFoundError: If the path does not exist.
			NotAGitRepoError: If the path is not inside a git repository.
		"""
		self._context = GitRepoContext.open_local(path)
		logger.info("Bound session to repository %s", self._context.path)

	def clone_repository(self, url: str, local_path: Path | str) -> None:
		"""
		Clone ``url`` into ``local_path`` and bind the session to the clone.

		Raises:
			CloneError: If the clone fails.
		"""
		self._context = GitRepoContext.clone_remote(url, local_path)
		logger.info("Bound session to clone of %s at %s", url, self._context.path)

	def list_branches(self, scope: BranchScope = BranchScope.LOCAL) -> list[str]:
		"""List local, remote or all branch names, sorted."""
		return list_branches(self.context("list_branches"), scope)

	def current_branch(self) -> str | None:
		"""Short name of the checked out branch, None when detached or unborn."""
		return self.context("current_branch").current_branch()

	def compare_branches(
		self,
		target_branch: str,
		base_branch: str,
		change_filter: ChangeFilter = ChangeFilter.ALL,
	) -> list[FileChange]:
		"""Classified changes between ``target_branch`` and ``base_branch``."""
		return compare_branches(self.context("compare_branches"), target_branch, base_branch, change_filter)

	def diff_file(self, target_branch: str, base_branch: str, path: str) -> str:
		"""Conflict-marked rendering of one changed file."""
		diffs = diff_file(self.context("diff_file"), target_branch, base_branch, path, self.strategy)
		return diffs[path]

	def download_changed_files(self, target_branch: str, base_branch: str, dest_dir: Path | str) -> list[Path]:
		"""
		Write added and modified files of ``target_branch`` into ``dest_dir``.

		``dest_dir`` is cleared first.
		"""
		return download_changed_files(self.context("download_changed_files"), target_branch, base_branch, dest_dir)

	def diff_directory(self, branch: str, directory: Path | str) -> dict[str, str]:
		"""Conflict-marked renderings of local files that differ from ``branch``."""
		return diff_directory_with_branch(self.context("diff_directory"), branch, directory, self.strategy)
