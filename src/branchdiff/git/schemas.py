"""Schema definitions for branch comparison results."""

from dataclasses import dataclass
from enum import Enum


class ChangeAction(str, Enum):
	"""How a path differs between the base and the target branch."""

	ADDED = "added"  # Only in target
	MODIFIED = "modified"  # In both, content differs
	DELETED = "deleted"  # Only in base


class ChangeFilter(str, Enum):
	"""Which classified changes a comparison returns."""

	ADDED_OR_MODIFIED = "added_or_modified"
	ALL = "all"

	def accepts(self, action: ChangeAction) -> bool:
		"""Return True if changes with ``action`` pass this filter."""
		return self is ChangeFilter.ALL or action is not ChangeAction.DELETED


@dataclass(frozen=True)
class FileChange:
	"""A path that differs between two branches."""

	path: str
	action: ChangeAction

	def to_dict(self) -> dict[str, str]:
		"""Convert to the ``{"path", "action"}`` wire shape."""
		return {"path": self.path, "action": self.action.value}


@dataclass(frozen=True)
class ChangeSummary:
	"""Counts of changes per action."""

	added: int = 0
	modified: int = 0
	deleted: int = 0

	@property
	def total(self) -> int:
		"""Total number of changed paths."""
		return self.added + self.modified + self.deleted
