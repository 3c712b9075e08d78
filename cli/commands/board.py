"""Board management commands."""

import typer

from backend.db import get_connection, init_db
from backend.db.boards import create_board, list_boards

board_app = typer.Typer(help="Manage wishlist boards.", no_args_is_help=True)


@board_app.command("create")
def board_create(
    name: str = typer.Option(..., help="Board name, e.g. 'Christmas'."),
) -> None:
    """Create a new board."""
    conn = get_connection()
    init_db(conn)
    try:
        board = create_board(conn, name)
    finally:
        conn.close()
    typer.echo(f"✅ Board created: {board.name} ({board.id})")


@board_app.command("list")
def board_list() -> None:
    """List all boards, oldest first."""
    conn = get_connection()
    init_db(conn)
    try:
        boards = list_boards(conn)
    finally:
        conn.close()

    if not boards:
        typer.echo("No boards found.")
        return
    for b in boards:
        typer.echo(f"  {b.name} \t[{b.id}]")
