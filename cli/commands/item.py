"""Item commands: add from a URL, list, toggle purchased, annotate."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Optional

import typer

from backend.db import get_connection, init_db
from backend.db.boards import get_board
from backend.db.items import create_item_from_result, list_items, toggle_status, update_item
from backend.scraper.models import InvalidScrapeRequest, ScrapeFailure
from backend.scraper.pipeline import scrape_product, validate_request

item_app = typer.Typer(help="Manage the items on a board.", no_args_is_help=True)


@item_app.command("add")
def item_add(
    board: str = typer.Option(..., "--board", help="Board id."),
    url: str = typer.Option(..., help="Product page URL."),
    title: Optional[str] = typer.Option(None, help="Override the scraped title."),
) -> None:
    """Scrape a product URL and save it to a board.

    When the shop blocks the scraper (or anything else goes wrong) a blank
    manual-entry card is saved instead, so the item is never lost.
    """
    conn = get_connection()
    init_db(conn)
    try:
        if get_board(conn, board) is None:
            typer.echo(f"❌ Board not found: {board}")
            raise typer.Exit(code=1)

        try:
            request = validate_request(url)
        except InvalidScrapeRequest as exc:
            typer.echo(f"❌ {exc}")
            raise typer.Exit(code=1)

        outcome = asyncio.run(scrape_product(request.url))
        if isinstance(outcome, ScrapeFailure):
            typer.echo(f"⚠️  {outcome.message}")
            outcome = ScrapeFailure.fallback_card(request.url)

        if title:
            outcome = replace(outcome, title=title)

        item = create_item_from_result(conn, board, outcome)
    finally:
        conn.close()

    typer.echo(f"✅ Added item: {item.title or '(untitled)'} ({item.id})")


@item_app.command("list")
def item_list(
    board: str = typer.Option(..., "--board", help="Board id."),
) -> None:
    """List the items on a board, newest first."""
    conn = get_connection()
    init_db(conn)
    try:
        items = list_items(conn, board)
    finally:
        conn.close()

    if not items:
        typer.echo("No items on this board.")
        return
    for i in items:
        mark = "x" if i.is_purchased else " "
        typer.echo(f"[{mark}] {i.title or '(untitled)'} \t{i.product_url} \t[{i.id}]")


@item_app.command("toggle")
def item_toggle(
    item_id: str = typer.Argument(..., help="Item id."),
) -> None:
    """Flip an item between to-buy and purchased."""
    conn = get_connection()
    init_db(conn)
    try:
        item = toggle_status(conn, item_id)
    except ValueError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)
    finally:
        conn.close()
    typer.echo(f"✅ {item.title or '(untitled)'} is now {item.status}")


@item_app.command("note")
def item_note(
    item_id: str = typer.Argument(..., help="Item id."),
    text: str = typer.Argument(..., help="Note text (size, colour, ...)."),
) -> None:
    """Attach a note to an item."""
    conn = get_connection()
    init_db(conn)
    try:
        update_item(conn, item_id, note=text)
    except ValueError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)
    finally:
        conn.close()
    typer.echo("✅ Note saved.")
