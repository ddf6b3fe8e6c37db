"""ygg-keygen status - show what the cache holds."""

import json

import click

from ygg_keygen.cli.utils import keygen_errors, kind_option, load_cli_config
from ygg_keygen.keygen import inspect_cache, resolve_cache_path


@click.command()
@kind_option("Kind to show (repeatable). Default: configured kinds")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def status_command(ctx: click.Context, kinds: tuple[str, ...], as_json: bool) -> None:
    """Show cached key counts and strengths without consuming anything."""
    config = load_cli_config(ctx, kinds=list(kinds) or None)

    with keygen_errors():
        path = resolve_cache_path(config)
        caches = inspect_cache(config)

    summary = {
        name: {
            "size": len(cache),
            "target_size": cache.target_size,
            "strongest": cache.strengths()[0] if len(cache) else None,
            "weakest": cache.strengths()[-1] if len(cache) else None,
        }
        for name, cache in caches.items()
    }

    if as_json:
        click.echo(json.dumps({"path": str(path), "kinds": summary}))
        return

    click.echo(f"Cache: {path}")
    for name, info in summary.items():
        if not info["size"]:
            click.echo(f"  {name}: empty")
            continue
        click.echo(
            f"  {name}: {info['size']}/{info['target_size']} keys, "
            f"strength {info['weakest']}..{info['strongest']}"
        )
