"""ygg-keygen clear - drop every cached key."""

import click
import questionary

from ygg_keygen.cli.utils import keygen_errors, load_cli_config
from ygg_keygen.core.progress import get_console, status
from ygg_keygen.keygen import clear_cache, resolve_cache_path


@click.command()
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def clear_command(ctx: click.Context, yes: bool) -> None:
    """Remove all cached keys, of every kind.

    The cache file is emptied under the lock, so a running generate
    finishes first.
    """
    config = load_cli_config(ctx)
    console = get_console()

    with keygen_errors():
        path = resolve_cache_path(config)

    if not path.exists() or path.stat().st_size == 0:
        console.print("[yellow]Nothing to clear[/yellow] - cache is empty")
        return

    if not yes:
        console.print(f"\n[bold]All cached keys in {path} will be discarded.[/bold]\n")
        answer = questionary.select(
            "This action cannot be undone. Are you sure?",
            choices=[
                questionary.Choice("No, keep my keys", value=False),
                questionary.Choice("Yes, clear the cache", value=True),
            ],
            style=questionary.Style(
                [
                    ("question", "bold"),
                    ("highlighted", "fg:red bold"),
                    ("selected", "fg:red"),
                ]
            ),
        ).ask()

        if not answer:
            console.print("[dim]Cancelled[/dim]")
            return

    with keygen_errors():
        clear_cache(config)
    status(f"Cleared {path}", style="success")
