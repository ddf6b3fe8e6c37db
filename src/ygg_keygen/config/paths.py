"""Config and cache file locations."""

import os
import shutil
from pathlib import Path

import structlog

from ygg_keygen.config.constants import (
    APP_DIR_NAME,
    CACHE_FILE_NAME,
    CONFIG_FILE_NAME,
    LEGACY_APP_DIR_NAME,
)

logger = structlog.get_logger()


def _xdg_dir(env_var: str, fallback: str) -> Path:
    value = os.environ.get(env_var)
    if value and Path(value).is_absolute():
        return Path(value)
    return Path.home() / fallback


def default_config_path() -> Path:
    """~/.config/yggdrasil-keygen/config.yaml (or under $XDG_CONFIG_HOME)."""
    return _xdg_dir("XDG_CONFIG_HOME", ".config") / APP_DIR_NAME / CONFIG_FILE_NAME


def default_cache_path() -> Path:
    """~/.cache/yggdrasil-keygen/cache.yaml (or under $XDG_CACHE_HOME)."""
    return _xdg_dir("XDG_CACHE_HOME", ".cache") / APP_DIR_NAME / CACHE_FILE_NAME


def legacy_cache_path() -> Path:
    """Cache location used by releases before the rename."""
    return _xdg_dir("XDG_CACHE_HOME", ".cache") / LEGACY_APP_DIR_NAME / CACHE_FILE_NAME


def migrate_legacy_cache(legacy: Path, current: Path) -> bool:
    """Move a legacy cache file to its current location.

    Only done while ``current`` is missing or empty, so a populated cache
    (possibly locked by a running invocation) is never replaced. Returns
    True if a file was moved.
    """
    if not legacy.is_file():
        return False
    if current.exists() and current.stat().st_size > 0:
        logger.debug("legacy_cache_skipped", source=str(legacy), destination=str(current))
        return False
    current.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(legacy), str(current))
    logger.info("legacy_cache_migrated", source=str(legacy), destination=str(current))
    return True
