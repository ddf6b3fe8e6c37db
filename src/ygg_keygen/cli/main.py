"""ygg-keygen CLI."""

from pathlib import Path

import click

from ygg_keygen import __version__
from ygg_keygen.cli.clear import clear_command
from ygg_keygen.cli.generate import generate_command
from ygg_keygen.cli.status import status_command


@click.group()
@click.version_option(version=__version__, prog_name="ygg-keygen")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/yggdrasil-keygen/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Yggdrasil key generator with a cache of strong keys across runs."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path


cli.add_command(generate_command, name="generate")
cli.add_command(status_command, name="status")
cli.add_command(clear_command, name="clear")


if __name__ == "__main__":
    cli()
