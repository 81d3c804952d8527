"""List command implementation."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..models import SortOrder
from .sync import build_engine, run_sync

console = Console()

SUMMARY_WIDTH = 60


def list_command(
    query: Optional[str] = typer.Option(
        None,
        "--query",
        "-q",
        help="Only show items whose title or summary contains this text",
    ),
    order: Optional[SortOrder] = typer.Option(
        None,
        "--order",
        "-o",
        case_sensitive=False,
        help="Order by publication date",
    ),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum rows to show (0 for all)", min=0),
) -> None:
    """List feed items, syncing first if today's cache is missing."""
    engine = build_engine()
    try:
        run_sync(engine)
    finally:
        engine.cache.store.close()

    if query:
        engine.filter(query)
    if order is not None:
        engine.sort(order)

    items = engine.visible_items
    if not items:
        console.print("[yellow]No items match.[/yellow]")
        return

    shown = items[:limit] if limit else items

    table = Table(title="Daily Feed")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Date", style="magenta")
    table.add_column("Title", style="bold")
    table.add_column("Summary", style="dim")

    for item in shown:
        summary = item.summary
        if len(summary) > SUMMARY_WIDTH:
            summary = summary[:SUMMARY_WIDTH] + "..."
        table.add_row(str(item.id), item.published_date.isoformat(), item.title, summary)

    console.print(table)
    console.print(f"[dim]Showing {len(shown)} of {len(items)} items ({len(engine.items)} synced)[/dim]")
