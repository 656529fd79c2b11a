"""Helpers shared by the CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path

from branchdiff.config import ConfigLoader
from branchdiff.session import BranchDiffSession

logger = logging.getLogger(__name__)


def open_session(repo: Path | None, config_file: Path | None) -> tuple[BranchDiffSession, ConfigLoader]:
	"""
	Load configuration and bind a new session to the selected repository.

	The repository is chosen from ``repo``, then ``repository.path`` in the
	config, then the current directory.
	"""
	config = ConfigLoader.get_instance(config_file=config_file, reload=config_file is not None)
	repo_path = repo or (Path(config.get.repository.path) if config.get.repository.path else Path.cwd())

	session = BranchDiffSession(strategy=config.get.diff.strategy)
	session.bind_repository(repo_path)
	logger.debug("CLI session bound to %s", repo_path)
	return session, config


def resolve_base(base: str | None, config: ConfigLoader) -> str:
	"""Use the given base branch or fall back to the configured one."""
	return base or config.get.repository.base_branch
