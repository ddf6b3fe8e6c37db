"""ygg-keygen generate - run a round and print the best keys."""

import json

import click

from ygg_keygen.cli.utils import keygen_errors, kind_option, load_cli_config
from ygg_keygen.keygen import generate_keys


@click.command()
@click.option("--cache-size", type=click.IntRange(min=1), default=None, help="Keys kept per kind between runs")
@click.option("-t", "--tries", type=click.IntRange(min=0), default=None, help="Keys generated per kind this run")
@kind_option("Kind to generate (repeatable). Default: signing")
@click.option(
    "--on-empty",
    type=click.Choice(["omit", "fail"]),
    default=None,
    help="What to do when a kind has no key to hand out",
)
@click.pass_context
def generate_command(
    ctx: click.Context,
    cache_size: int | None,
    tries: int | None,
    kinds: tuple[str, ...],
    on_empty: str | None,
) -> None:
    """Generate keys and print the strongest one of each kind as JSON.

    The printed key is removed from the cache; the runners-up stay cached
    and make later runs better.
    """
    config = load_cli_config(
        ctx,
        cache_size=cache_size,
        tries=tries,
        kinds=list(kinds) or None,
        on_empty=on_empty,
    )

    with keygen_errors():
        outputs = generate_keys(config)

    payload = {
        name: output.model_dump(mode="json") if output is not None else None
        for name, output in outputs.items()
    }
    click.echo(json.dumps(payload, indent=2))
