"""Dataclass models representing DB rows.

These are plain Python objects, not ORM models.  The DB layer serialises /
deserialises to and from these types.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional

ITEM_STATUSES = ("to_buy", "purchased")


@dataclass
class Board:
    id: str
    name: str
    created_at: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Item:
    id: str
    board_id: str
    title: str
    image_url: str
    product_url: str
    status: str
    note: Optional[str]
    created_at: int
    updated_at: int

    @property
    def is_purchased(self) -> bool:
        return self.status == "purchased"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
