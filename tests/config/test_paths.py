"""Tests for config/paths.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from ygg_keygen.config.paths import (
    default_cache_path,
    default_config_path,
    legacy_cache_path,
    migrate_legacy_cache,
)


class TestDefaultPaths:
    def test_follow_xdg_dirs(self, isolated_dirs: Path) -> None:
        assert default_config_path() == isolated_dirs / ".config" / "yggdrasil-keygen" / "config.yaml"
        assert default_cache_path() == isolated_dirs / ".cache" / "yggdrasil-keygen" / "cache.yaml"
        assert legacy_cache_path() == isolated_dirs / ".cache" / "yggdrasilkeygenerator" / "cache.yaml"

    def test_relative_xdg_value_ignored(self, isolated_dirs: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CACHE_HOME", "relative/cache")
        assert default_cache_path() == isolated_dirs / ".cache" / "yggdrasil-keygen" / "cache.yaml"

    def test_unset_xdg_falls_back_to_home(self, isolated_dirs: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME")
        assert default_config_path() == isolated_dirs / ".config" / "yggdrasil-keygen" / "config.yaml"


class TestMigrateLegacyCache:
    def test_moves_file(self, tmp_path: Path) -> None:
        legacy = tmp_path / "old" / "cache.yaml"
        legacy.parent.mkdir()
        legacy.write_text("keys: []\n")
        current = tmp_path / "new" / "cache.yaml"

        assert migrate_legacy_cache(legacy, current) is True
        assert current.read_text() == "keys: []\n"
        assert not legacy.exists()

    def test_replaces_empty_current_file(self, tmp_path: Path) -> None:
        legacy = tmp_path / "old.yaml"
        legacy.write_text("keys: []\n")
        current = tmp_path / "new.yaml"
        current.write_text("")

        assert migrate_legacy_cache(legacy, current) is True
        assert current.read_text() == "keys: []\n"

    def test_populated_current_cache_is_kept(self, tmp_path: Path) -> None:
        """An existing cache is never swapped out from under a running invocation."""
        legacy = tmp_path / "old.yaml"
        legacy.write_text("keys: []\n")
        current = tmp_path / "new.yaml"
        current.write_text("signing: []\n")

        assert migrate_legacy_cache(legacy, current) is False
        assert current.read_text() == "signing: []\n"
        assert legacy.exists()

    def test_nothing_to_move(self, tmp_path: Path) -> None:
        current = tmp_path / "new" / "cache.yaml"

        assert migrate_legacy_cache(tmp_path / "old.yaml", current) is False
        assert not current.exists()
