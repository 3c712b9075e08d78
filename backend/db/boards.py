"""CRUD operations for the ``boards`` table.

A board is a named wishlist ("Mum's birthday", "Christmas 2026") that owns
any number of items.
"""

from __future__ import annotations

import sqlite3
import uuid
from time import time
from typing import Optional

from backend.db.models import Board


def _row_to_board(row: sqlite3.Row) -> Board:
    return Board(id=row["id"], name=row["name"], created_at=row["created_at"])


def create_board(conn: sqlite3.Connection, name: str) -> Board:
    """Insert a new board and return it."""
    bid = str(uuid.uuid4())
    with conn:
        conn.execute(
            "INSERT INTO boards (id, name, created_at) VALUES (?, ?, ?)",
            (bid, name, int(time())),
        )
    return get_board(conn, bid)  # type: ignore[return-value]


def get_board(conn: sqlite3.Connection, board_id: str) -> Optional[Board]:
    """Fetch a board by id.  Returns ``None`` if not found."""
    row = conn.execute("SELECT * FROM boards WHERE id = ?", (board_id,)).fetchone()
    return _row_to_board(row) if row else None


def list_boards(conn: sqlite3.Connection) -> list[Board]:
    """Return all boards, oldest first (the first one is the default tab)."""
    rows = conn.execute(
        "SELECT * FROM boards ORDER BY created_at, rowid"
    ).fetchall()
    return [_row_to_board(r) for r in rows]


def delete_board(conn: sqlite3.Connection, board_id: str) -> None:
    """Delete a board and, via CASCADE, all of its items.  No-op if absent."""
    with conn:
        conn.execute("DELETE FROM boards WHERE id = ?", (board_id,))
