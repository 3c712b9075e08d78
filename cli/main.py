"""GiftBoard CLI: entry-point for all backend operations.

Usage:
    python cli/main.py --help

Command groups:
    db      → database setup
    scrape  → preview a product URL without saving it
    board   → create / list boards
    item    → add items from URLs, toggle purchased, add notes
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from backend.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio

import typer

from backend.config import settings
from backend.db import get_connection, init_db
from backend.logging_setup import configure_logging
from backend.scraper.models import InvalidScrapeRequest, ScrapeFailure
from backend.scraper.pipeline import scrape_product
from cli.commands.board import board_app
from cli.commands.item import item_app

app = typer.Typer(
    name="giftboard",
    help="GiftBoard backend CLI.",
    no_args_is_help=True,
)
app.add_typer(board_app, name="board")
app.add_typer(item_app, name="item")


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, help="Logging level."),
) -> None:
    """Configure logging before any sub-command runs."""
    configure_logging(log_level)


# ---------------------------------------------------------------------------
# DB commands
# ---------------------------------------------------------------------------
db_app = typer.Typer(help="Database operations.", no_args_is_help=True)
app.add_typer(db_app, name="db")


@db_app.command("init")
def db_init() -> None:
    """Initialise the SQLite database (create tables if they do not exist)."""
    conn = get_connection()
    init_db(conn)
    conn.close()
    typer.echo(f"[db init] Database ready at {settings.db_path}")


# ---------------------------------------------------------------------------
# Scrape command
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Option(..., help="Product page URL to preview."),
) -> None:
    """Fetch a product page and print its title and preview image."""
    typer.echo(f"[scrape] Fetching {url!r} …")
    try:
        outcome = asyncio.run(scrape_product(url))
    except InvalidScrapeRequest as exc:
        typer.echo(f"[scrape] {exc}")
        raise typer.Exit(1)

    if isinstance(outcome, ScrapeFailure):
        typer.echo(f"[scrape] {outcome.message} ({outcome.reason}: {outcome.detail})")
        raise typer.Exit(1)

    typer.echo(f"[scrape] Title  : {outcome.title}")
    typer.echo(f"[scrape] Image  : {outcome.image}")
    typer.echo(f"[scrape] URL    : {outcome.url}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
