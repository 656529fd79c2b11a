"""Strategies for aligning two file versions into conflict-marked text."""

import logging
from enum import Enum

from .constants import LINE_SEPARATOR, OURS_MARKER, SEPARATOR_MARKER, THEIRS_MARKER

logger = logging.getLogger(__name__)


class DiffStrategyName(str, Enum):
	"""Available conflict diff strategies."""

	POSITIONAL = "positional"  # Align lines by index


def split_lines(content: str) -> list[str]:
	"""
	Split content into lines on ``\\n``.

	A trailing separator yields a final empty element. Empty content has no lines.
	"""
	if not content:
		return []
	return content.split(LINE_SEPARATOR)


def conflict_block(ours: str, theirs: str) -> str:
	"""Render one conflict block, without a trailing separator."""
	return LINE_SEPARATOR.join((OURS_MARKER, ours, SEPARATOR_MARKER, theirs, THEIRS_MARKER))


class ConflictDiffStrategy:
	"""Base class for conflict diff strategies."""

	name: DiffStrategyName

	def generate(self, theirs: str, ours: str) -> str:
		"""
		Render both versions as one text with conflict markers.

		Args:
		    theirs: Base branch version.
		    ours: Target branch version.

		Returns:
		    The annotated text.

		"""
		msg = "Subclasses must implement this method"
		raise NotImplementedError(msg)


class PositionalStrategy(ConflictDiffStrategy):
	"""
	Compare the two versions line by line, by index.

	Every index whose lines differ gets its own conflict block, so two
	adjacent differing lines produce two blocks. Inserting or deleting a
	single line shifts every later line and marks all of them as conflicts.
	"""

	name = DiffStrategyName.POSITIONAL

	def generate(self, theirs: str, ours: str) -> str:
		"""Render ``theirs`` and ``ours`` aligned by line index."""
		theirs_lines = split_lines(theirs)
		ours_lines = split_lines(ours)

		segments: list[str] = []
		for i in range(max(len(theirs_lines), len(ours_lines))):
			if i >= len(theirs_lines):
				segments.append(ours_lines[i])
			elif i >= len(ours_lines):
				segments.append(theirs_lines[i])
			elif theirs_lines[i] == ours_lines[i]:
				segments.append(ours_lines[i])
			else:
				segments.append(conflict_block(ours_lines[i], theirs_lines[i]))

		return LINE_SEPARATOR.join(segments)


_STRATEGIES: dict[DiffStrategyName, type[ConflictDiffStrategy]] = {
	DiffStrategyName.POSITIONAL: PositionalStrategy,
}


def get_strategy(name: DiffStrategyName | str = DiffStrategyName.POSITIONAL) -> ConflictDiffStrategy:
	"""
	Look up a strategy by name.

	Raises:
	    ValueError: If no strategy has that name.

	"""
	try:
		key = DiffStrategyName(name)
	except ValueError as e:
		available = ", ".join(s.value for s in DiffStrategyName)
		msg = f"Unknown diff strategy '{name}'. Available: {available}"
		raise ValueError(msg) from e
	return _STRATEGIES[key]()
