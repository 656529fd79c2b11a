"""Git repository access and error types for branchdiff."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pygit2 import Blob, Commit, Repository, Tree, clone_repository, discover_repository
from pygit2 import GitError as Pygit2GitError

if TYPE_CHECKING:
	from collections.abc import Iterator

	from pygit2 import Diff

logger = logging.getLogger(__name__)


class GitError(Exception):
	"""Custom exception for Git-related errors."""


class RepositoryNotInitializedError(GitError):
	"""Raised when a query runs before any repository is bound."""

	def __init__(self, operation: str) -> None:
		"""Record the operation that needed a repository."""
		self.operation = operation
		super().__init__(f"{operation}: repository not initialized, bind a repository first")


class RepositoryOpenError(GitError):
	"""Raised when a repository cannot be bound to a path."""

	def __init__(self, path: Path | str, reason: str) -> None:
		"""Record the offending path."""
		self.path = Path(path)
		super().__init__(f"{reason}: {self.path}")


class PathNotFoundError(RepositoryOpenError):
	"""The repository path does not exist."""

	def __init__(self, path: Path | str) -> None:
		"""Initialize with the missing path."""
		super().__init__(path, "Path not found")


class NotAGitRepoError(RepositoryOpenError):
	"""The path exists but is not inside a git repository."""

	def __init__(self, path: Path | str) -> None:
		"""Initialize with the path that is not a repository."""
		super().__init__(path, "Not a git repository")


class CloneError(GitError):
	"""Raised when cloning a remote repository fails."""

	def __init__(self, url: str, path: Path | str, reason: str) -> None:
		"""Record the clone source and destination."""
		self.url = url
		self.path = Path(path)
		super().__init__(f"Failed to clone '{url}' into {self.path}: {reason}")


class BranchNotFoundError(GitError):
	"""Raised when a branch name cannot be resolved to a commit."""

	def __init__(self, branch: str, side: str) -> None:
		"""Record which branch failed and on which side of the comparison."""
		self.branch = branch
		self.side = side
		super().__init__(f"Could not resolve {side} branch '{branch}'")


class FileNotInDiffError(GitError):
	"""Raised when a single-file diff is requested for a path with no change."""

	def __init__(self, path: str, target: str, base: str) -> None:
		"""Record the path and the compared branches."""
		self.path = path
		super().__init__(f"File '{path}' is not among the differences between '{target}' and '{base}'")


class FileDeletedOrUnchangedError(GitError):
	"""Raised when a diff is requested for a path that has no target-side content."""

	def __init__(self, path: str) -> None:
		"""Record the path that cannot be diffed."""
		self.path = path
		super().__init__(f"File '{path}' was deleted or not modified on the target branch")


class ReadError(GitError):
	"""Raised when content expected to exist cannot be read."""

	def __init__(self, path: str, source: str, reason: str) -> None:
		"""Record the path, where it was read from and why it failed."""
		self.path = path
		self.source = source
		super().__init__(f"Failed to read '{path}' from {source}: {reason}")


class TreeSnapshot:
	"""
	Immutable view of the files stored in one commit tree.

	Paths are repository-relative and use forward slashes.
	"""

	def __init__(self, tree: Tree, label: str) -> None:
		"""
		Wrap a pygit2 tree.

		Args:
			tree: The commit tree.
			label: Human readable origin of the tree, used in error messages.
		"""
		self._tree = tree
		self.label = label

	@property
	def tree(self) -> Tree:
		"""The underlying pygit2 tree."""
		return self._tree

	def contains(self, path: str) -> bool:
		"""Return True if ``path`` names a file in this tree."""
		try:
			obj = self._tree[path]
		except KeyError:
			return False
		return isinstance(obj, Blob)

	def read_bytes(self, path: str) -> bytes:
		"""
		Read the raw content of a file.

		Args:
			path: Repository-relative path of the file.

		Returns:
			The blob content.

		Raises:
			ReadError: If the path is absent or is not a regular file.
		"""
		try:
			obj = self._tree[path]
		except KeyError as e:
			raise ReadError(path, self.label, "no such file") from e
		if not isinstance(obj, Blob):
			raise ReadError(path, self.label, "not a file")
		return obj.data

	def read_text(self, path: str) -> str:
		"""Read a file and decode it as UTF-8."""
		data = self.read_bytes(path)
		try:
			return data.decode("utf-8")
		except UnicodeDecodeError:
			logger.warning("File %s in %s is not valid UTF-8, decoding with errors='replace'", path, self.label)
			return data.decode("utf-8", errors="replace")

	def paths(self) -> Iterator[str]:
		"""Yield every file path in the tree."""
		yield from self._walk(self._tree, "")

	def _walk(self, tree: Tree, prefix: str) -> Iterator[str]:
		for entry in tree:
			entry_path = f"{prefix}{entry.name}"
			if isinstance(entry, Tree):
				yield from self._walk(entry, f"{entry_path}/")
			elif isinstance(entry, Blob):
				yield entry_path

	def diff(self, other: TreeSnapshot) -> Diff:
		"""
		Diff this tree against another one.

		The resulting deltas describe the move from ``self`` to ``other``:
		an added delta is a file present only in ``other``.
		"""
		return self._tree.diff_to_tree(other.tree)


class GitRepoContext:
	"""
	Handle on one opened git repository.

	A context is a plain value: create one per comparison session and pass
	it to the operations that need it.
	"""

	def __init__(self, repo: Repository) -> None:
		"""Initialize the context around an opened pygit2 repository."""
		self.repo = repo

	@classmethod
	def open_local(cls, path: Path | str) -> GitRepoContext:
		"""
		Open the repository containing ``path``.

		Args:
			path: Repository root or any directory inside it.

		Returns:
			A bound context.

		Raises:
			PathNotFoundError: If the path does not exist.
			NotAGitRepoError: If no repository is found at the path.
		"""
		repo_path = Path(path).expanduser()
		if not repo_path.exists():
			logger.error("Repository path does not exist: %s", repo_path)
			raise PathNotFoundError(repo_path)

		git_dir = discover_repository(str(repo_path))
		if git_dir is None:
			logger.error("No git repository found at %s", repo_path)
			raise NotAGitRepoError(repo_path)

		try:
			repo = Repository(git_dir)
		except Pygit2GitError as e:
			logger.exception("Failed to open repository at %s", git_dir)
			raise NotAGitRepoError(repo_path) from e

		logger.debug("Opened repository %s", repo.path)
		return cls(repo)

	@classmethod
	def clone_remote(cls, url: str, local_path: Path | str) -> GitRepoContext:
		"""
		Clone a repository and open the clone.

		Args:
			url: Anything libgit2 can clone from (URL or local path).
			local_path: Destination directory for the clone.

		Returns:
			A context bound to the new clone.

		Raises:
			CloneError: If the clone fails.
		"""
		destination = Path(local_path).expanduser()
		logger.info("Cloning %s into %s", url, destination)
		try:
			repo = clone_repository(url, str(destination))
		except (Pygit2GitError, KeyError, ValueError) as e:
			logger.exception("Clone of %s failed", url)
			raise CloneError(url, destination, str(e)) from e
		return cls(repo)

	@property
	def path(self) -> Path:
		"""Working directory of the repository, or the git dir for bare repositories."""
		return Path(self.repo.workdir or self.repo.path)

	def current_branch(self) -> str | None:
		"""Return the short name of the checked out branch, or None when detached or unborn."""
		if self.repo.head_is_unborn or self.repo.head_is_detached:
			return None
		return self.repo.head.shorthand

	def resolve_branch(self, name: str, side: str) -> Commit:
		"""
		Resolve a branch name to its commit.

		Local branches take precedence over remote-tracking ones.

		Args:
			name: Branch name, e.g. ``main`` or ``origin/main``.
			side: Which side of a comparison the branch belongs to ("target" or "base").

		Returns:
			The commit the branch points to.

		Raises:
			BranchNotFoundError: If the branch does not exist or does not point to a commit.
		"""
		try:
			branch = self.repo.branches.get(name)
			if branch is None:
				logger.error("Branch '%s' (%s) not found in %s", name, side, self.repo.path)
				raise BranchNotFoundError(name, side)
			return branch.peel(Commit)
		except (Pygit2GitError, ValueError) as e:
			logger.exception("Failed to resolve %s branch '%s'", side, name)
			raise BranchNotFoundError(name, side) from e

	def tree_of(self, commit: Commit, label: str) -> TreeSnapshot:
		"""Return the tree snapshot of a commit."""
		return TreeSnapshot(commit.tree, label)

	def branch_snapshot(self, name: str, side: str) -> TreeSnapshot:
		"""Resolve a branch and return its tree snapshot."""
		commit = self.resolve_branch(name, side)
		return self.tree_of(commit, f"{side} branch '{name}'")
