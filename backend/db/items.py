"""CRUD operations for the ``items`` table."""

from __future__ import annotations

import sqlite3
import uuid
from time import time
from typing import Any, Optional

from backend.db.boards import get_board
from backend.db.models import ITEM_STATUSES, Item
from backend.scraper.models import ScrapeResult


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _row_to_item(row: sqlite3.Row) -> Item:
    return Item(
        id=row["id"],
        board_id=row["board_id"],
        title=row["title"],
        image_url=row["image_url"],
        product_url=row["product_url"],
        status=row["status"],
        note=row["note"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _check_status(status: str) -> None:
    if status not in ITEM_STATUSES:
        raise ValueError(f"Invalid status {status!r}; expected one of {ITEM_STATUSES}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def create_item(
    conn: sqlite3.Connection,
    board_id: str,
    title: str,
    image_url: str,
    product_url: str,
    status: str = "to_buy",
    note: Optional[str] = None,
) -> Item:
    """Insert a new item on *board_id* and return it.

    Raises:
        ValueError: If the board does not exist or *status* is unknown.
    """
    if get_board(conn, board_id) is None:
        raise ValueError(f"Board not found: {board_id!r}")
    _check_status(status)

    iid = str(uuid.uuid4())
    now = int(time())
    with conn:
        conn.execute(
            """
            INSERT INTO items
                (id, board_id, title, image_url, product_url, status, note, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (iid, board_id, title, image_url, product_url, status, note, now, now),
        )
    return get_item(conn, iid)  # type: ignore[return-value]


def create_item_from_result(
    conn: sqlite3.Connection, board_id: str, result: ScrapeResult
) -> Item:
    """Persist an accepted scrape preview as a ``to_buy`` item."""
    return create_item(
        conn,
        board_id=board_id,
        title=result.title,
        image_url=result.image,
        product_url=result.url,
    )


def get_item(conn: sqlite3.Connection, item_id: str) -> Optional[Item]:
    """Fetch a single item by id.  Returns ``None`` if not found."""
    row = conn.execute("SELECT * FROM items WHERE id = ?", (item_id,)).fetchone()
    return _row_to_item(row) if row else None


def list_items(conn: sqlite3.Connection, board_id: str) -> list[Item]:
    """Return the items of a board, newest first."""
    rows = conn.execute(
        "SELECT * FROM items WHERE board_id = ? ORDER BY created_at DESC, rowid DESC",
        (board_id,),
    ).fetchall()
    return [_row_to_item(r) for r in rows]


def update_item(conn: sqlite3.Connection, item_id: str, **kwargs: Any) -> Item:
    """Update one or more fields on an item.

    Allowed keyword arguments: ``title``, ``image_url``, ``product_url``,
    ``status``, ``note``.  ``updated_at`` is always refreshed automatically.

    Raises:
        ValueError: If ``item_id`` does not exist, a field is not updatable,
            or no fields are given.
    """
    if get_item(conn, item_id) is None:
        raise ValueError(f"Item not found: {item_id!r}")

    allowed = {"title", "image_url", "product_url", "status", "note"}
    updates: dict[str, Any] = {}
    for key, value in kwargs.items():
        if key not in allowed:
            raise ValueError(f"Cannot update field {key!r}")
        if key == "status":
            _check_status(value)
        updates[key] = value

    if not updates:
        raise ValueError("No valid fields provided to update_item()")

    updates["updated_at"] = int(time())
    set_clause = ", ".join(f"{col} = ?" for col in updates)
    values = list(updates.values()) + [item_id]

    with conn:
        conn.execute(
            f"UPDATE items SET {set_clause} WHERE id = ?", values  # noqa: S608
        )

    return get_item(conn, item_id)  # type: ignore[return-value]


def toggle_status(conn: sqlite3.Connection, item_id: str) -> Item:
    """Flip an item between ``to_buy`` and ``purchased``."""
    item = get_item(conn, item_id)
    if item is None:
        raise ValueError(f"Item not found: {item_id!r}")
    new_status = "to_buy" if item.is_purchased else "purchased"
    return update_item(conn, item_id, status=new_status)


def delete_item(conn: sqlite3.Connection, item_id: str) -> None:
    """Delete an item.  No-op if it does not exist."""
    with conn:
        conn.execute("DELETE FROM items WHERE id = ?", (item_id,))
