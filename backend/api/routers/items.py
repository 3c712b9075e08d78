"""Item endpoints.

Routes
------
POST   /items                 Save a (possibly edited) preview card
GET    /items/{item_id}       Fetch one item
PATCH  /items/{item_id}       Update title / image / url / status / note
POST   /items/{item_id}/toggle  Flip to_buy <-> purchased
DELETE /items/{item_id}       Delete an item
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel

from backend.db.items import create_item, delete_item, get_item, toggle_status, update_item

router = APIRouter()

Status = Literal["to_buy", "purchased"]


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------

class ItemCreate(BaseModel):
    board_id: str
    title: str
    image_url: str
    product_url: str
    status: Status = "to_buy"
    note: Optional[str] = None


class ItemUpdate(BaseModel):
    title: Optional[str] = None
    image_url: Optional[str] = None
    product_url: Optional[str] = None
    status: Optional[Status] = None
    note: Optional[str] = None


class ItemResponse(BaseModel):
    id: str
    board_id: str
    title: str
    image_url: str
    product_url: str
    status: str
    note: Optional[str]
    created_at: int
    updated_at: int


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("", response_model=ItemResponse, status_code=201)
def create(body: ItemCreate, request: Request) -> dict[str, Any]:
    """Save a card to a board."""
    try:
        item = create_item(request.app.state.db, **body.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return item.to_dict()


@router.get("/{item_id}", response_model=ItemResponse)
def get_one(item_id: str, request: Request) -> dict[str, Any]:
    """Fetch a single item."""
    item = get_item(request.app.state.db, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item not found: {item_id!r}")
    return item.to_dict()


@router.patch("/{item_id}", response_model=ItemResponse)
def update(item_id: str, body: ItemUpdate, request: Request) -> dict[str, Any]:
    """Update one or more fields on an item."""
    # ``note`` may be cleared with null; other columns are NOT NULL.
    updates = {
        key: value
        for key, value in body.model_dump(exclude_unset=True).items()
        if value is not None or key == "note"
    }
    if not updates:
        raise HTTPException(status_code=422, detail="No fields provided to update.")
    try:
        item = update_item(request.app.state.db, item_id, **updates)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return item.to_dict()


@router.post("/{item_id}/toggle", response_model=ItemResponse)
def toggle(item_id: str, request: Request) -> dict[str, Any]:
    """Mark an item purchased, or back to to-buy."""
    try:
        item = toggle_status(request.app.state.db, item_id)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return item.to_dict()


@router.delete("/{item_id}")
def remove(item_id: str, request: Request) -> Response:
    """Delete an item."""
    delete_item(request.app.state.db, item_id)
    return Response(status_code=204)
