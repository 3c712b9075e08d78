"""Board endpoints.

Routes
------
POST   /boards                  Create a board
GET    /boards                  List boards (oldest first)
GET    /boards/{board_id}       Fetch one board
DELETE /boards/{board_id}       Delete a board and its items
GET    /boards/{board_id}/items Items on a board, newest first
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel

from backend.api.routers.items import ItemResponse
from backend.db.boards import create_board, delete_board, get_board, list_boards
from backend.db.items import list_items

router = APIRouter()


class BoardCreate(BaseModel):
    name: str


class BoardResponse(BaseModel):
    id: str
    name: str
    created_at: int


def _require_board(conn, board_id: str):  # type: ignore[no-untyped-def]
    board = get_board(conn, board_id)
    if board is None:
        raise HTTPException(status_code=404, detail=f"Board not found: {board_id!r}")
    return board


@router.post("", response_model=BoardResponse, status_code=201)
def create(body: BoardCreate, request: Request) -> dict[str, Any]:
    """Create a new board."""
    name = body.name.strip()
    if not name:
        raise HTTPException(status_code=422, detail="Board name must not be blank.")
    return create_board(request.app.state.db, name).to_dict()


@router.get("", response_model=list[BoardResponse])
def list_all(request: Request) -> list[dict[str, Any]]:
    """Return every board."""
    return [b.to_dict() for b in list_boards(request.app.state.db)]


@router.get("/{board_id}", response_model=BoardResponse)
def get_one(board_id: str, request: Request) -> dict[str, Any]:
    """Fetch a single board."""
    return _require_board(request.app.state.db, board_id).to_dict()


@router.delete("/{board_id}")
def remove(board_id: str, request: Request) -> Response:
    """Delete a board; its items go with it."""
    delete_board(request.app.state.db, board_id)
    return Response(status_code=204)


@router.get("/{board_id}/items", response_model=list[ItemResponse])
def board_items(board_id: str, request: Request) -> list[dict[str, Any]]:
    """Return the items on a board, newest first."""
    conn = request.app.state.db
    _require_board(conn, board_id)
    return [i.to_dict() for i in list_items(conn, board_id)]
