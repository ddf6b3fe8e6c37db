"""Structured logging for key generation runs.

Every event goes through structlog into stdlib handlers, one per configured
output. Console output always goes to stderr since stdout carries the
generated keys. Events logged during a round carry its ``round_id``.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from ygg_keygen.config.models import LoggingConfig, LogOutputConfig

_round_id: ContextVar[str | None] = ContextVar("round_id", default=None)

# First file output of the current configuration, shown on fatal errors
_log_file: Path | None = None


def get_round_id() -> str | None:
    return _round_id.get()


def set_round_id(round_id: str | None = None) -> str:
    """Tag subsequent events with ``round_id``, or a fresh 12-digit hex one."""
    rid = round_id or uuid4().hex[:12]
    _round_id.set(rid)
    return rid


def clear_round_id() -> None:
    _round_id.set(None)


def get_log_file_path() -> Path | None:
    return _log_file


def _add_round_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if rid := get_round_id():
        event_dict["round_id"] = rid
    return event_dict


def _level(name: str | None, fallback: int = logging.WARNING) -> int:
    if name is None:
        return fallback
    return logging.getLevelNamesMapping().get(name.upper(), fallback)


_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    _add_round_id,  # type: ignore[list-item]
]


def _output_handler(output: LogOutputConfig, level: int) -> logging.Handler:
    from ygg_keygen.core.progress import ConsoleSuppressingFilter

    handler: logging.Handler
    renderer: structlog.types.Processor
    if output.destination == "stderr":
        handler = logging.StreamHandler(sys.stderr)
        # Paused while a spinner owns the terminal
        handler.addFilter(ConsoleSuppressingFilter())
        colors = sys.stderr.isatty()
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")
        colors = False

    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)

    handler.setLevel(level)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_PRE_CHAIN))
    return handler


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "WARNING",
) -> None:
    """Route logging to the outputs in ``config``.

    Without a config a single stderr output is set up from ``json_format``
    and ``level``. Safe to call again; previous handlers are closed.
    """
    global _log_file
    from ygg_keygen.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )
    root_level = _level(config.level)

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for old in root.handlers:
        old.close()
    root.handlers.clear()
    root.setLevel(root_level)
    # asyncio reports slow executor callbacks at DEBUG
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    _log_file = next((Path(o.destination) for o in config.outputs if o.destination != "stderr"), None)
    for output in config.outputs:
        root.addHandler(_output_handler(output, _level(output.level, root_level)))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
