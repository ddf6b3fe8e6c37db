"""ygg-keygen error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Cache file
- 4xxx: Keys
- 5xxx: Generation
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Cache file (3xxx)
    CACHE_LOCK_FAILED = 3001
    CACHE_PARSE_ERROR = 3002
    CACHE_WRITE_FAILED = 3003

    # Keys (4xxx)
    KEY_DECODE_ERROR = 4001
    UNKNOWN_KIND = 4002

    # Generation (5xxx)
    NO_CANDIDATES = 5001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001
    INTERNAL_CHANNEL_CLOSED = 9003


@dataclass(frozen=True, slots=True)
class KeygenError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CACHE_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(KeygenError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class CacheLockError(KeygenError):
    """The cache file could not be opened or exclusively locked."""

    @classmethod
    def acquire_failed(cls, path: str, reason: str) -> "CacheLockError":
        return cls(
            code=ErrorCode.CACHE_LOCK_FAILED,
            message=f"Couldn't lock cache file {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class CacheFileError(KeygenError):
    """The persisted cache file is unusable as a whole."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "CacheFileError":
        return cls(
            code=ErrorCode.CACHE_PARSE_ERROR,
            message=f"Failed to parse cache file {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "CacheFileError":
        return cls(
            code=ErrorCode.CACHE_WRITE_FAILED,
            message=f"Failed to write cache file {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class KeyDecodeError(KeygenError):
    """A single hex-encoded key could not be decoded."""

    @classmethod
    def invalid(cls, kind: str, reason: str) -> "KeyDecodeError":
        return cls(
            code=ErrorCode.KEY_DECODE_ERROR,
            message=f"Invalid {kind} key: {reason}",
            details={"kind": kind, "reason": reason},
        )


class UnknownKindError(KeygenError):
    @classmethod
    def for_name(cls, name: str, known: list[str]) -> "UnknownKindError":
        return cls(
            code=ErrorCode.UNKNOWN_KIND,
            message=f"Unknown key kind '{name}' (known: {', '.join(known)})",
            details={"kind": name, "known": known},
        )


class NoCandidatesError(KeygenError):
    """A kind has no retained candidate to hand out."""

    @classmethod
    def for_kind(cls, kind: str) -> "NoCandidatesError":
        return cls(
            code=ErrorCode.NO_CANDIDATES,
            message=f"No {kind} candidates available; increase tries or run again",
            details={"kind": kind},
        )


class InternalError(KeygenError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )


class ChannelClosedError(InternalError):
    """A producer tried to deliver after its collector stopped listening."""

    @classmethod
    def for_kind(cls, kind: str) -> "ChannelClosedError":
        return cls(
            code=ErrorCode.INTERNAL_CHANNEL_CLOSED,
            message=f"Could not send {kind} candidate: channel already closed",
            details={"kind": kind},
        )
