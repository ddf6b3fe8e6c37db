"""Config module exports."""

from ygg_keygen.config.loader import load_config
from ygg_keygen.config.models import (
    KeygenConfig,
    KindPlan,
    KindSettings,
    LoggingConfig,
)
from ygg_keygen.config.paths import default_cache_path, default_config_path

__all__ = [
    "load_config",
    "KeygenConfig",
    "KindPlan",
    "KindSettings",
    "LoggingConfig",
    "default_cache_path",
    "default_config_path",
]
