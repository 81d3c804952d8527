"""Open command implementation."""

import typer
from rich.console import Console
from rich.markup import escape

from ..errors import StoreError
from ..store import FeedCache, create_store
from .sync import load_settings

console = Console()


def open_command(
    item_id: int = typer.Argument(..., help="ID of the cached item to open"),
) -> None:
    """Open a cached item's link in the browser."""
    store = create_store(load_settings())

    try:
        items = FeedCache(store).load_items()
    except StoreError as e:
        console.print(f"[red]Failed to read cache: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    finally:
        store.close()

    if not items:
        console.print("[red]No cached items. Run 'dailyfeed sync' first.[/red]")
        raise typer.Exit(1)

    item = next((i for i in items if i.id == item_id), None)
    if item is None:
        console.print(f"[red]Item {item_id} not found in cache.[/red]")
        raise typer.Exit(1)

    console.print(f"Opening: [bold]{item.title}[/bold]\n{item.url}")
    typer.launch(item.url)
