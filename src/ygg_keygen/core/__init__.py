"""Core module exports."""

from ygg_keygen.core.errors import (
    CacheFileError,
    CacheLockError,
    ChannelClosedError,
    ConfigError,
    ErrorCode,
    InternalError,
    KeyDecodeError,
    KeygenError,
    NoCandidatesError,
    UnknownKindError,
)
from ygg_keygen.core.logging import (
    clear_round_id,
    configure_logging,
    get_logger,
    get_round_id,
    set_round_id,
)
from ygg_keygen.core.progress import spinner, status

__all__ = [
    # Errors
    "CacheFileError",
    "CacheLockError",
    "ChannelClosedError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "KeyDecodeError",
    "KeygenError",
    "NoCandidatesError",
    "UnknownKindError",
    # Logging
    "clear_round_id",
    "configure_logging",
    "get_logger",
    "get_round_id",
    "set_round_id",
    # Progress
    "spinner",
    "status",
]
