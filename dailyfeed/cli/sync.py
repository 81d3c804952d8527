"""Sync and reset command implementations."""

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from ..config import Config
from ..errors import StoreError, SyncError
from ..models import SyncResult, SyncSource
from ..sync import SyncEngine

console = Console()


def load_settings() -> Config:
    """Load configuration, exiting on an invalid config file."""
    config = Config()
    try:
        config.config
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    return config


def build_engine() -> SyncEngine:
    """Build the engine from configuration."""
    return SyncEngine.from_config(load_settings())


def run_sync(engine: SyncEngine, force: bool = False) -> SyncResult:
    """Run one sync with a spinner, exiting with status 1 on failure."""
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Refreshing feed..." if force else "Synchronizing feed...", total=None)
            return engine.run(force=force)
    except SyncError as e:
        console.print(f"[red]❌ Sync failed: {escape(str(e))}[/red]")
        console.print("Previously synced items are unchanged. Try again later.")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Sync interrupted by user[/yellow]")
        raise typer.Exit(1)


def print_sync_summary(result: SyncResult) -> None:
    """Print summary of a sync result."""
    if result.source is SyncSource.CACHE:
        body = f"[green]✅ Loaded {result.item_count} items from today's cache[/green]"
    else:
        body = (
            f"[green]✅ Synced {result.item_count} items from the network[/green]\n\n"
            f"Pages: {result.pages_fetched}\n"
            f"Requests: {result.requests_made}\n"
            f"Retries: {result.retries}"
        )
    if result.synced_at is not None:
        body += f"\nLast synced: {result.synced_at.isoformat(timespec='seconds')}"

    console.print(Panel(body, title="Sync Summary", style="green"))

    for warning in result.warnings:
        console.print(f"[yellow]⚠️  {escape(warning)}[/yellow]")


def sync_command(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Ignore today's cache and refresh from the network",
    ),
) -> None:
    """Synchronize the local copy of the feed."""
    engine = build_engine()
    try:
        result = run_sync(engine, force=force)
    finally:
        engine.cache.store.close()

    print_sync_summary(result)


def reset_command() -> None:
    """Delete the cached items and sync timestamp."""
    engine = build_engine()
    try:
        asyncio.run(engine.reset_cache())
    except StoreError as e:
        console.print(f"[red]❌ Failed to reset cache: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    finally:
        engine.cache.store.close()

    console.print("[green]✅ Cache reset[/green]")
