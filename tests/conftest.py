"""Global test fixtures and configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from branchdiff.config.config_loader import ConfigLoader

if TYPE_CHECKING:
	from collections.abc import Iterator
	from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
	"""
	Keep tests away from real configuration files.

	Runs every test from an empty working directory, points the XDG config
	home at it and drops the cached ConfigLoader instance.
	"""
	workdir = tmp_path / "cwd"
	workdir.mkdir()
	monkeypatch.chdir(workdir)
	monkeypatch.setattr("branchdiff.config.config_loader.xdg_config_home", str(tmp_path / "xdg"))
	ConfigLoader._instance = None  # noqa: SLF001
	yield
	ConfigLoader._instance = None  # noqa: SLF001
