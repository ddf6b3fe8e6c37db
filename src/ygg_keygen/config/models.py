"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI flags)
2. Environment variables (YGG_KEYGEN__KEY)
3. YAML config file (~/.config/yggdrasil-keygen/config.yaml or --config)
4. Built-in defaults (this file)

Examples:
    YGG_KEYGEN__CACHE_SIZE=1024
    YGG_KEYGEN__KINDS='["signing", "encryption"]'
    YGG_KEYGEN__LOGGING__LEVEL=DEBUG
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from ygg_keygen.config.constants import DEFAULT_CACHE_SIZE, DEFAULT_TRIES

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
KindName = Literal["signing", "encryption"]
EmptyPolicy = Literal["omit", "fail"]
ExecutorKind = Literal["process", "thread"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v == "stderr":
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        YGG_KEYGEN__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. INFO reports cache and round summaries.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class KindSettings(BaseModel):
    """Per-kind overrides. Unset fields fall back to the top-level values."""

    cache_size: int | None = Field(default=None, ge=1)
    tries: int | None = Field(default=None, ge=0)


class KindPlan(BaseModel):
    """Resolved per-kind round parameters."""

    kind: KindName
    cache_size: int
    tries: int


class KeygenConfig(BaseModel):
    """Root configuration for ygg-keygen."""

    cache_size: int = Field(
        default=DEFAULT_CACHE_SIZE,
        ge=1,
        description="Candidates kept per kind between runs.",
    )
    tries: int = Field(
        default=DEFAULT_TRIES,
        ge=0,
        description="Candidates generated per kind per run.",
    )
    kinds: list[KindName] = Field(
        default_factory=lambda: ["signing"],
        min_length=1,
        description="Key kinds to generate and emit.",
    )
    kind_settings: dict[KindName, KindSettings] = Field(default_factory=dict)
    cache_path: Path | None = Field(
        default=None,
        description="Cache file location. Defaults to the XDG cache directory.",
    )
    on_empty: EmptyPolicy = Field(
        default="omit",
        description="'omit' reports a kind without candidates as null; 'fail' aborts the run.",
    )
    executor: ExecutorKind = Field(
        default="process",
        description="Where key generation runs. 'process' uses every core.",
    )
    max_workers: int | None = Field(default=None, ge=1)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("kinds")
    @classmethod
    def dedupe_kinds(cls, v: list[KindName]) -> list[KindName]:
        return list(dict.fromkeys(v))

    @field_validator("cache_path")
    @classmethod
    def expand_cache_path(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None

    def plan_for(self, kind: KindName) -> KindPlan:
        """Resolve cache size and tries for one kind."""
        overrides = self.kind_settings.get(kind, KindSettings())
        return KindPlan(
            kind=kind,
            cache_size=overrides.cache_size if overrides.cache_size is not None else self.cache_size,
            tries=overrides.tries if overrides.tries is not None else self.tries,
        )

    def plans(self) -> list[KindPlan]:
        return [self.plan_for(kind) for kind in self.kinds]
