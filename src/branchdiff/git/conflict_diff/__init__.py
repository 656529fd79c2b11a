"""Conflict-marker rendering of two file versions."""

from branchdiff.git.conflict_diff.constants import OURS_MARKER, SEPARATOR_MARKER, THEIRS_MARKER
from branchdiff.git.conflict_diff.generator import (
	count_conflict_blocks,
	diff_directory_with_branch,
	diff_file,
	generate_conflict_diff,
	has_conflict_markers,
)
from branchdiff.git.conflict_diff.strategies import (
	ConflictDiffStrategy,
	DiffStrategyName,
	PositionalStrategy,
	get_strategy,
)

__all__ = [
	"OURS_MARKER",
	"SEPARATOR_MARKER",
	"THEIRS_MARKER",
	"ConflictDiffStrategy",
	"DiffStrategyName",
	"PositionalStrategy",
	"count_conflict_blocks",
	"diff_directory_with_branch",
	"diff_file",
	"generate_conflict_diff",
	"get_strategy",
	"has_conflict_markers",
]
