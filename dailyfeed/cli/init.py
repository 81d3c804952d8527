"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..config import ConfigModel, FeedConfig, StoreConfig, default_config_path, save_config
from ..errors import StoreError
from ..store import init_schema, validate_connection

console = Console()


def init_command(
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        "-c",
        help="Configuration directory (default: ~/.config/dailyfeed or $DAILYFEED_CONFIG's directory)",
    ),
    base_url: str = typer.Option(
        FeedConfig.model_fields["base_url"].default,
        "--base-url",
        help="Paginated feed endpoint",
    ),
    page_size: int = typer.Option(100, "--page-size", help="Items per page", min=1, max=1000),
    backend: str = typer.Option("file", "--backend", "-b", help="Cache backend (file, postgres)"),
    cache_dir: Path = typer.Option(
        Path.home() / ".cache" / "dailyfeed",
        "--cache-dir",
        help="Cache directory for the file backend",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("dailyfeed", "--db-name", help="Database name"),
    db_user: str = typer.Option("dailyfeed_user", "--db-user", help="Database user"),
) -> None:
    """Write the dailyfeed configuration (and set up Postgres if selected)."""
    console.print(Panel.fit("📰 dailyfeed - Initialization", style="bold blue"))

    if backend not in ("file", "postgres"):
        console.print(f"[red]Unknown backend '{backend}'. Use 'file' or 'postgres'.[/red]")
        raise typer.Exit(1)

    config_path = default_config_path() if config_dir is None else config_dir / "config.yaml"

    try:
        config = ConfigModel(
            feed=FeedConfig(base_url=base_url, page_size=page_size),
            store=StoreConfig(
                backend=backend,
                path=str(cache_dir),
                postgres={
                    "host": db_host,
                    "port": db_port,
                    "database": db_name,
                    "user": db_user,
                    "password_env": "DAILYFEED_DB_PASSWORD",
                },
            ),
        )
    except ValueError as e:
        console.print(f"[red]❌ Invalid settings: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if backend == "file":
        try:
            cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            console.print(f"[red]❌ Failed to create cache directory: {escape(str(e))}[/red]")
            raise typer.Exit(1)
        console.print(f"✅ Created cache directory: {cache_dir}")
    else:
        console.print("\n[bold]Testing database connection...[/bold]")
        db_config = config.store.postgres.model_dump()

        if not validate_connection(db_config):
            console.print(
                "[red]❌ Database connection failed![/red]\n"
                "Please ensure Postgres is running and credentials are correct.\n"
                "Set the password via environment variable: "
                "[bold]export DAILYFEED_DB_PASSWORD=your_password[/bold]"
            )
            raise typer.Exit(1)

        console.print("✅ Database connection successful")

        try:
            init_schema(db_config)
            console.print("✅ Cache table initialized")
        except StoreError as e:
            console.print(f"[red]❌ Failed to initialize database: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]✅ dailyfeed initialized![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Feed: {base_url}\n"
            f"Cache: {backend}\n\n"
            f"Next steps:\n"
            f"1. Run: [bold]dailyfeed sync[/bold]\n"
            f"2. Browse: [bold]dailyfeed list --query rust[/bold]",
            style="green",
        )
    )
