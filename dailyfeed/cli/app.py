"""Main CLI application."""

import logging

import typer
from dotenv import load_dotenv
from rich.logging import RichHandler

# Load .env file if it exists
load_dotenv()

from .init import init_command
from .items import list_command
from .open import open_command
from .sync import reset_command, sync_command

app = typer.Typer(
    name="dailyfeed",
    help="Daily news feed synchronizer with a local cache",
    no_args_is_help=True,
)


def setup_logging(verbosity: int) -> None:
    """Route library logging through rich; -v for info, -vv for debug."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(show_path=False, markup=False)],
        force=True,
    )
    # Quiet noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.callback()
def main(
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log output (-v info, -vv debug)",
    ),
) -> None:
    """Daily news feed synchronizer."""
    setup_logging(verbose)


# Register commands
app.command("init")(init_command)
app.command("sync")(sync_command)
app.command("list")(list_command)
app.command("reset")(reset_command)
app.command("open")(open_command)


if __name__ == "__main__":
    app()
