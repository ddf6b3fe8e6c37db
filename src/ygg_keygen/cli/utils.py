"""CLI utilities."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import click

from ygg_keygen.config.loader import load_config
from ygg_keygen.config.models import KeygenConfig
from ygg_keygen.core.errors import KeygenError
from ygg_keygen.core.logging import configure_logging, get_log_file_path


def load_cli_config(ctx: click.Context, **overrides: Any) -> KeygenConfig:
    """Load config for a command and configure logging from it.

    ``--verbose`` on the group forces DEBUG regardless of the configured level.

    Raises:
        click.ClickException: On any config error.
    """
    obj = ctx.ensure_object(dict)
    config_path: Path | None = obj.get("config_path")
    with keygen_errors():
        config = load_config(config_path, **overrides)

    if obj.get("verbose"):
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)
    return config


@contextmanager
def keygen_errors() -> Iterator[None]:
    """Turn KeygenError into a ClickException (exit status 1)."""
    try:
        yield
    except KeygenError as e:
        message = e.message
        if log_path := get_log_file_path():
            message += f"\nSee {log_path} for details."
        raise click.ClickException(message) from e


def kind_option(help_text: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    return click.option(
        "--kind",
        "kinds",
        multiple=True,
        type=click.Choice(["signing", "encryption"]),
        help=help_text,
    )
