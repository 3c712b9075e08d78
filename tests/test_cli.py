"""Tests for the Typer CLI (db / scrape / board / item commands)."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from backend.db import get_connection, init_db
from backend.db.boards import create_board
from backend.db.items import create_item, get_item, list_items
from backend.scraper.models import MANUAL_ENTRY_IMAGE, ScrapeFailure, ScrapeResult
from cli.main import app

runner = CliRunner()

_URL = "https://shop.example/mug"


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Point the on-disk workspace at a temporary directory."""
    monkeypatch.setattr("backend.config.settings.workspace_dir", tmp_path)
    return tmp_path


@pytest.fixture
def board_id(workspace) -> str:
    conn = get_connection()
    init_db(conn)
    board = create_board(conn, "Birthday")
    conn.close()
    return board.id


def _items(board_id: str):
    conn = get_connection()
    try:
        return list_items(conn, board_id)
    finally:
        conn.close()


def test_db_init(workspace):
    result = runner.invoke(app, ["db", "init"])
    assert result.exit_code == 0
    assert (workspace / "giftboard.db").exists()


def test_scrape_prints_preview(workspace):
    preview = ScrapeResult(title="Blue Mug", image="https://shop.example/m.jpg", url=_URL)
    with patch("cli.main.scrape_product", new=AsyncMock(return_value=preview)):
        result = runner.invoke(app, ["scrape", "--url", _URL])

    assert result.exit_code == 0
    assert "Blue Mug" in result.stdout
    assert "https://shop.example/m.jpg" in result.stdout


def test_scrape_blocked_exits_nonzero(workspace):
    failure = ScrapeFailure(reason="blocked", detail="403 Forbidden")
    with patch("cli.main.scrape_product", new=AsyncMock(return_value=failure)):
        result = runner.invoke(app, ["scrape", "--url", _URL])

    assert result.exit_code == 1
    assert "blocked" in result.stdout


def test_scrape_rejects_relative_url(workspace):
    result = runner.invoke(app, ["scrape", "--url", "/just/a/path"])
    assert result.exit_code == 1


def test_board_create_and_list(workspace):
    result = runner.invoke(app, ["board", "create", "--name", "Christmas"])
    assert result.exit_code == 0
    assert "Board created: Christmas" in result.stdout

    result = runner.invoke(app, ["board", "list"])
    assert result.exit_code == 0
    assert "Christmas" in result.stdout


def test_item_add_saves_scraped_card(board_id):
    preview = ScrapeResult(title="Blue Mug", image="https://shop.example/m.jpg", url=_URL)
    with patch("cli.commands.item.scrape_product", new=AsyncMock(return_value=preview)):
        result = runner.invoke(app, ["item", "add", "--board", board_id, "--url", _URL])

    assert result.exit_code == 0
    [item] = _items(board_id)
    assert item.title == "Blue Mug"
    assert item.image_url == "https://shop.example/m.jpg"
    assert item.product_url == _URL


def test_item_add_falls_back_to_manual_card(board_id):
    failure = ScrapeFailure(reason="blocked", detail="403 Forbidden")
    with patch("cli.commands.item.scrape_product", new=AsyncMock(return_value=failure)):
        result = runner.invoke(
            app, ["item", "add", "--board", board_id, "--url", _URL, "--title", "Mug"]
        )

    assert result.exit_code == 0
    assert "enter details manually" in result.stdout
    [item] = _items(board_id)
    assert item.title == "Mug"
    assert item.image_url == MANUAL_ENTRY_IMAGE


def test_item_add_fallback_uses_cleaned_url(board_id):
    failure = ScrapeFailure(reason="transport", detail="ConnectError")
    mock_scrape = AsyncMock(return_value=failure)
    with patch("cli.commands.item.scrape_product", new=mock_scrape):
        result = runner.invoke(app, ["item", "add", "--board", board_id, "--url", f"  {_URL} "])

    assert result.exit_code == 0
    mock_scrape.assert_awaited_once_with(_URL)
    [item] = _items(board_id)
    assert item.product_url == _URL


def test_item_add_unknown_board(workspace):
    with patch("cli.commands.item.scrape_product", new=AsyncMock()) as mock_scrape:
        result = runner.invoke(app, ["item", "add", "--board", "nope", "--url", _URL])

    assert result.exit_code == 1
    mock_scrape.assert_not_called()


def test_item_toggle_and_note(board_id):
    conn = get_connection()
    item = create_item(conn, board_id, "Mug", "https://cdn.example/m.jpg", _URL)
    conn.close()

    assert runner.invoke(app, ["item", "toggle", item.id]).exit_code == 0
    assert runner.invoke(app, ["item", "note", item.id, "size L"]).exit_code == 0

    conn = get_connection()
    stored = get_item(conn, item.id)
    conn.close()
    assert stored.status == "purchased"
    assert stored.note == "size L"

    result = runner.invoke(app, ["item", "list", "--board", board_id])
    assert "[x] Mug" in result.stdout


def test_item_toggle_unknown(workspace):
    result = runner.invoke(app, ["item", "toggle", "missing"])
    assert result.exit_code == 1
