"""Database layer tests for boards and items.

All tests use an in-memory SQLite database so they are:
- Fast (no disk I/O)
- Isolated (each fixture gets a fresh DB)
- Side-effect free (nothing written to ~/.giftboard_data)
"""

from __future__ import annotations

import sqlite3
from typing import Generator

import pytest

from backend.db.boards import create_board, delete_board, get_board, list_boards
from backend.db.connection import get_connection
from backend.db.items import (
    create_item,
    create_item_from_result,
    delete_item,
    get_item,
    list_items,
    toggle_status,
    update_item,
)
from backend.db.migrations import current_version, init_db
from backend.db.models import Board, Item
from backend.scraper.models import ScrapeResult


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def conn() -> Generator[sqlite3.Connection, None, None]:
    """In-memory connection with the schema initialised."""
    connection = get_connection(db_path=":memory:")  # type: ignore[arg-type]
    init_db(connection)
    yield connection
    connection.close()


@pytest.fixture()
def board(conn: sqlite3.Connection) -> Board:
    return create_board(conn, "Birthday")


def _add(conn: sqlite3.Connection, board: Board, title: str = "Mug") -> Item:
    return create_item(
        conn,
        board_id=board.id,
        title=title,
        image_url="https://cdn.example/mug.jpg",
        product_url="https://shop.example/mug",
    )


# ---------------------------------------------------------------------------
# connection / init
# ---------------------------------------------------------------------------

class TestConnection:
    def test_foreign_keys_enabled(self, conn: sqlite3.Connection) -> None:
        row = conn.execute("PRAGMA foreign_keys").fetchone()
        assert row[0] == 1

    def test_tables_exist(self, conn: sqlite3.Connection) -> None:
        names = {
            r[0]
            for r in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
        assert {"boards", "items", "schema_version"} <= names

    def test_init_db_is_idempotent(self, conn: sqlite3.Connection) -> None:
        init_db(conn)
        init_db(conn)
        assert current_version(conn) == 0


# ---------------------------------------------------------------------------
# boards
# ---------------------------------------------------------------------------

class TestBoards:
    def test_create_and_get(self, conn: sqlite3.Connection) -> None:
        board = create_board(conn, "Christmas")
        assert len(board.id) == 36
        assert get_board(conn, board.id) == board

    def test_get_missing_returns_none(self, conn: sqlite3.Connection) -> None:
        assert get_board(conn, "nope") is None

    def test_list_oldest_first(self, conn: sqlite3.Connection) -> None:
        create_board(conn, "A")
        create_board(conn, "B")
        assert [b.name for b in list_boards(conn)] == ["A", "B"]

    def test_delete_cascades_to_items(self, conn: sqlite3.Connection, board: Board) -> None:
        item = _add(conn, board)
        delete_board(conn, board.id)
        assert get_board(conn, board.id) is None
        assert get_item(conn, item.id) is None


# ---------------------------------------------------------------------------
# items
# ---------------------------------------------------------------------------

class TestItems:
    def test_create_defaults_to_to_buy(self, conn: sqlite3.Connection, board: Board) -> None:
        item = _add(conn, board)
        assert item.status == "to_buy"
        assert item.note is None
        assert item.board_id == board.id

    def test_create_on_unknown_board(self, conn: sqlite3.Connection) -> None:
        with pytest.raises(ValueError, match="Board not found"):
            create_item(conn, "missing", "t", "i", "u")

    def test_invalid_status_rejected(self, conn: sqlite3.Connection, board: Board) -> None:
        with pytest.raises(ValueError, match="Invalid status"):
            create_item(conn, board.id, "t", "i", "u", status="lost")

    def test_create_from_scrape_result(self, conn: sqlite3.Connection, board: Board) -> None:
        result = ScrapeResult(
            title="Blue Mug",
            image="https://shop.example/m.jpg",
            url="https://shop.example/mug",
        )
        item = create_item_from_result(conn, board.id, result)
        assert item.title == "Blue Mug"
        assert item.image_url == "https://shop.example/m.jpg"
        assert item.product_url == "https://shop.example/mug"
        assert item.status == "to_buy"

    def test_list_newest_first(self, conn: sqlite3.Connection, board: Board) -> None:
        _add(conn, board, "older")
        _add(conn, board, "newer")
        assert [i.title for i in list_items(conn, board.id)] == ["newer", "older"]

    def test_list_scoped_to_board(self, conn: sqlite3.Connection, board: Board) -> None:
        other = create_board(conn, "Other")
        _add(conn, other, "elsewhere")
        assert list_items(conn, board.id) == []

    def test_update_title_and_note(self, conn: sqlite3.Connection, board: Board) -> None:
        item = _add(conn, board)
        updated = update_item(conn, item.id, title="Big Mug", note="size L")
        assert updated.title == "Big Mug"
        assert updated.note == "size L"

    def test_update_unknown_field(self, conn: sqlite3.Connection, board: Board) -> None:
        item = _add(conn, board)
        with pytest.raises(ValueError, match="Cannot update field"):
            update_item(conn, item.id, board_id="x")

    def test_update_missing_item(self, conn: sqlite3.Connection) -> None:
        with pytest.raises(ValueError, match="Item not found"):
            update_item(conn, "missing", title="x")

    def test_update_with_no_fields(self, conn: sqlite3.Connection, board: Board) -> None:
        item = _add(conn, board)
        with pytest.raises(ValueError):
            update_item(conn, item.id)

    def test_toggle_status_round_trip(self, conn: sqlite3.Connection, board: Board) -> None:
        item = _add(conn, board)
        assert toggle_status(conn, item.id).status == "purchased"
        assert toggle_status(conn, item.id).status == "to_buy"

    def test_delete(self, conn: sqlite3.Connection, board: Board) -> None:
        item = _add(conn, board)
        delete_item(conn, item.id)
        assert get_item(conn, item.id) is None
