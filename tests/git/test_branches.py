"""Tests for branch listing."""

from __future__ import annotations

from unittest.mock import MagicMock, PropertyMock

import pygit2
import pytest

from branchdiff.git.branches import BranchScope, list_branches
from branchdiff.git.utils import GitError, GitRepoContext
from tests.base import GitTestBase


@pytest.mark.unit
@pytest.mark.git
class TestListBranches(GitTestBase):
	"""Test cases for listing local and remote branches."""

	def test_local_is_default(self) -> None:
		"""Without a scope only local branches are listed, sorted."""
		assert list_branches(self.context) == ["feature", "main", "nested"]

	def test_remote(self) -> None:
		"""Remote-tracking branches carry their remote prefix."""
		assert list_branches(self.context, BranchScope.REMOTE) == ["origin/main"]

	def test_all(self) -> None:
		"""The all scope merges both lists."""
		assert list_branches(self.context, BranchScope.ALL) == ["feature", "main", "nested", "origin/main"]

	def test_scope_from_string(self) -> None:
		"""Scopes compare equal to their string values."""
		assert BranchScope("remote") is BranchScope.REMOTE

	def test_pygit2_failure_is_wrapped(self) -> None:
		"""Errors from pygit2 surface as GitError."""
		broken_repo = MagicMock()
		type(broken_repo.branches).local = PropertyMock(side_effect=pygit2.GitError("broken refs"))

		with pytest.raises(GitError, match="broken refs"):
			list_branches(GitRepoContext(broken_repo))
