"""Pydantic schemas for the branchdiff configuration file."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from branchdiff.git.branches import BranchScope
from branchdiff.git.conflict_diff.strategies import DiffStrategyName


class RepositorySchema(BaseModel):
	"""Defaults for which repository and branches to compare."""

	model_config = ConfigDict(extra="forbid")

	path: str | None = None
	base_branch: str = "main"
	branch_scope: BranchScope = BranchScope.LOCAL


class DiffSchema(BaseModel):
	"""Conflict diff rendering options."""

	model_config = ConfigDict(extra="forbid")

	strategy: DiffStrategyName = DiffStrategyName.POSITIONAL


class DownloadSchema(BaseModel):
	"""Options for writing changed files to disk."""

	model_config = ConfigDict(extra="forbid")

	output_dir: str = "conflicts"


class AppConfigSchema(BaseModel):
	"""Root configuration schema."""

	model_config = ConfigDict(extra="forbid")

	repository: RepositorySchema = Field(default_factory=RepositorySchema)
	diff: DiffSchema = Field(default_factory=DiffSchema)
	download: DownloadSchema = Field(default_factory=DownloadSchema)
