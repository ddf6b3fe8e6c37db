"""Configuration constants.

Values here are not user-configurable. For configurable values, see
models.py (KeygenConfig, KindSettings, LoggingConfig).
"""

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_CACHE_SIZE = 2**8
"""Candidates retained per kind when nothing else is configured."""

DEFAULT_TRIES = 2**8
"""Producers spawned per kind per round when nothing else is configured."""

# =============================================================================
# Locations
# =============================================================================

APP_DIR_NAME = "yggdrasil-keygen"
"""Directory name under the XDG config/cache roots."""

LEGACY_APP_DIR_NAME = "yggdrasilkeygenerator"
"""Cache directory name used by releases before the rename."""

CONFIG_FILE_NAME = "config.yaml"
CACHE_FILE_NAME = "cache.yaml"

ENV_PREFIX = "YGG_KEYGEN__"
"""Environment variable prefix, e.g. YGG_KEYGEN__CACHE_SIZE=1024."""
