"""Tests for conflict-marked diff generation."""

from __future__ import annotations

import pytest

from branchdiff.git.conflict_diff import (
	OURS_MARKER,
	SEPARATOR_MARKER,
	THEIRS_MARKER,
	count_conflict_blocks,
	diff_directory_with_branch,
	diff_file,
	generate_conflict_diff,
	get_strategy,
	has_conflict_markers,
)
from branchdiff.git.conflict_diff.strategies import DiffStrategyName, PositionalStrategy, conflict_block, split_lines
from branchdiff.git.utils import BranchNotFoundError, FileDeletedOrUnchangedError, FileNotInDiffError, ReadError
from tests.base import GitTestBase


@pytest.mark.unit
class TestPositionalStrategy:
	"""Test cases for line-by-line conflict rendering."""

	def test_single_line_change(self) -> None:
		"""One differing line becomes one conflict block, ours above theirs."""
		result = generate_conflict_diff("x\ny\n", "x\nz\n")

		assert result == "x\n<<<<<<< HEAD\nz\n=======\ny\n>>>>>>> branch\n"

	def test_ours_longer_has_no_markers(self) -> None:
		"""Extra trailing lines on our side are emitted as they are."""
		assert generate_conflict_diff("a\nb", "a\nb\nc") == "a\nb\nc"

	def test_theirs_longer_has_no_markers(self) -> None:
		"""Extra trailing lines on their side are emitted as they are."""
		assert generate_conflict_diff("a\nb\nc", "a\nb") == "a\nb\nc"

	@pytest.mark.parametrize("content", ["", "single", "a\nb\n", "line\n\n\nafter"])
	def test_identical_inputs_unchanged(self, content: str) -> None:
		"""Identical versions come back byte for byte."""
		assert generate_conflict_diff(content, content) == content

	def test_empty_theirs(self) -> None:
		"""A file diffed against empty content has no markers."""
		assert generate_conflict_diff("", "new\ncontent\n") == "new\ncontent\n"

	def test_adjacent_lines_are_separate_blocks(self) -> None:
		"""Each differing index gets its own block, even when adjacent."""
		result = generate_conflict_diff("a\nb\nc", "a\nX\nY")

		assert result == "a\n" + conflict_block("X", "b") + "\n" + conflict_block("Y", "c")
		assert count_conflict_blocks(result) == 2

	def test_insertion_shifts_later_lines(self) -> None:
		"""Inserting a line marks every following line as a conflict."""
		result = generate_conflict_diff("a\nb\nc", "new\na\nb\nc")

		assert count_conflict_blocks(result) == 3
		assert result.endswith("\nc")

	@pytest.mark.parametrize(
		("theirs", "ours"),
		[
			("a\nb\nc", "a\nX\nc"),
			("one\ntwo", "uno\ndos\ntres"),
			("p\nq\nr\ns", "p"),
			("x\ny\n", "x\nz\n"),
		],
	)
	def test_line_count(self, theirs: str, ours: str) -> None:
		"""Output has max(n, m) lines plus four per conflict block."""
		result = generate_conflict_diff(theirs, ours)
		longest = max(len(split_lines(theirs)), len(split_lines(ours)))

		assert len(split_lines(result)) == longest + 4 * count_conflict_blocks(result)

	def test_marker_literals(self) -> None:
		"""Markers are the standard git conflict markers."""
		assert OURS_MARKER == "<<<<<<< HEAD"
		assert SEPARATOR_MARKER == "======="
		assert THEIRS_MARKER == ">>>>>>> branch"

	def test_crlf_is_part_of_the_line(self) -> None:
		"""Only LF separates lines, so a CRLF file differs from its LF twin on every line."""
		result = generate_conflict_diff("a\nb", "a\r\nb")

		assert count_conflict_blocks(result) == 1
		assert "a\r" in result


@pytest.mark.unit
class TestMarkerHelpers:
	"""Test cases for marker detection helpers."""

	def test_has_conflict_markers(self) -> None:
		"""Rendered conflicts are detected."""
		assert has_conflict_markers(generate_conflict_diff("a", "b"))

	def test_no_markers(self) -> None:
		"""Ordinary text has no markers."""
		assert not has_conflict_markers("plain\ntext\n")

	def test_marker_inside_line_is_ignored(self) -> None:
		"""Only whole-line markers count."""
		assert not has_conflict_markers("x = '======='\n")

	def test_crlf_markers_detected(self) -> None:
		"""Markers followed by CR still count."""
		assert has_conflict_markers("ok\r\n=======\r\n")

	def test_count_blocks_none(self) -> None:
		"""No markers means zero blocks."""
		assert count_conflict_blocks("a\nb\n") == 0


@pytest.mark.unit
class TestStrategyRegistry:
	"""Test cases for strategy lookup."""

	def test_default_is_positional(self) -> None:
		"""The default strategy aligns by position."""
		assert isinstance(get_strategy(), PositionalStrategy)

	def test_lookup_by_string(self) -> None:
		"""Strategies can be looked up by their config value."""
		assert get_strategy("positional").name is DiffStrategyName.POSITIONAL

	def test_unknown_strategy(self) -> None:
		"""An unknown name lists the available strategies."""
		with pytest.raises(ValueError, match="positional"):
			get_strategy("myers")


@pytest.mark.unit
@pytest.mark.git
class TestDiffFile(GitTestBase):
	"""Test cases for rendering one changed file between branches."""

	def test_modified_file(self) -> None:
		"""A modified file shows the target line above the base line."""
		result = diff_file(self.context, "feature", "main", "src/app.py")

		assert result == {"src/app.py": "<<<<<<< HEAD\nprint('b')\n=======\nprint('a')\n>>>>>>> branch\n"}

	def test_nested_modified_file(self) -> None:
		"""Unchanged lines of a nested file pass through."""
		result = diff_file(self.context, "feature", "main", "a/b/c.txt")

		assert result["a/b/c.txt"] == "one\n<<<<<<< HEAD\nthree\n=======\ntwo\n>>>>>>> branch\n"

	def test_added_file(self) -> None:
		"""A file new on the target branch is returned verbatim."""
		result = diff_file(self.context, "feature", "main", "newfile.txt")

		assert result == {"newfile.txt": "new\ncontent\n"}
		assert not has_conflict_markers(result["newfile.txt"])

	def test_unchanged_file(self) -> None:
		"""A file identical on both branches is not in the diff."""
		with pytest.raises(FileNotInDiffError) as exc_info:
			diff_file(self.context, "feature", "main", "README.md")

		assert exc_info.value.path == "README.md"

	def test_unknown_file(self) -> None:
		"""A path on neither branch is not in the diff."""
		with pytest.raises(FileNotInDiffError):
			diff_file(self.context, "feature", "main", "nowhere.txt")

	def test_deleted_file(self) -> None:
		"""A file deleted on the target branch has nothing to render."""
		with pytest.raises(FileDeletedOrUnchangedError):
			diff_file(self.context, "feature", "main", "docs/old.txt")

	def test_missing_branch(self) -> None:
		"""Branch resolution errors propagate."""
		with pytest.raises(BranchNotFoundError):
			diff_file(self.context, "feature", "ghost", "src/app.py")

	def test_explicit_strategy(self) -> None:
		"""A strategy instance can be passed in."""
		result = diff_file(self.context, "nested", "main", "a/b/c.txt", PositionalStrategy())

		assert count_conflict_blocks(result["a/b/c.txt"]) == 1


@pytest.mark.unit
@pytest.mark.git
@pytest.mark.fs
class TestDiffDirectoryWithBranch(GitTestBase):
	"""Test cases for comparing a local directory with a branch."""

	def test_only_differing_files_reported(self) -> None:
		"""Identical files and files absent from the branch are left out."""
		self.create_test_file("local/README.md", "hello\nworld\n")
		self.create_test_file("local/src/app.py", "print('local')\n")
		self.create_test_file("local/a/b/c.txt", "one\ntwo\n")
		self.create_test_file("local/extra.txt", "not on the branch\n")

		result = diff_directory_with_branch(self.context, "main", self.temp_dir / "local")

		assert list(result) == ["src/app.py"]
		assert result["src/app.py"] == "<<<<<<< HEAD\nprint('local')\n=======\nprint('a')\n>>>>>>> branch\n"

	def test_keys_use_forward_slashes(self) -> None:
		"""Nested files are keyed by their repository-style path."""
		self.create_test_file("local/a/b/c.txt", "one\nchanged\n")

		result = diff_directory_with_branch(self.context, "main", self.temp_dir / "local")

		assert list(result) == ["a/b/c.txt"]

	def test_empty_directory(self) -> None:
		"""An empty directory yields no diffs."""
		(self.temp_dir / "empty").mkdir()

		assert diff_directory_with_branch(self.context, "main", self.temp_dir / "empty") == {}

	def test_missing_directory(self) -> None:
		"""A directory that does not exist cannot be read."""
		with pytest.raises(ReadError):
			diff_directory_with_branch(self.context, "main", self.temp_dir / "missing")

	def test_missing_branch(self) -> None:
		"""An unknown branch is reported."""
		(self.temp_dir / "local").mkdir()

		with pytest.raises(BranchNotFoundError):
			diff_directory_with_branch(self.context, "ghost", self.temp_dir / "local")
