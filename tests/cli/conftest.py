"""Shared fixtures for CLI tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "cache.yaml"


@pytest.fixture
def config_file(tmp_path: Path, cache_path: Path) -> Path:
    """Config pointing at a temporary cache, generating in threads."""
    path = tmp_path / "keygen.yaml"
    path.write_text(f"cache_path: {cache_path}\nexecutor: thread\nmax_workers: 4\ncache_size: 4\ntries: 64\n")
    return path
