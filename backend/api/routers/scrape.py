"""Product preview endpoint.

Routes
------
POST /scrape    Body: {"url": "https://..."}    → scrape_product

Status codes
------------
200  preview card ``{title, image, url}``
400  missing / blank / non-absolute URL (no request is made)
422  the shop refused the request; enter details manually
502  network failure reaching the shop
500  unexpected fault while reading the page

Every failure body carries a ``fallback`` card (blank title, "details
needed" image) so the frontend can always offer manual entry.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from backend.scraper.models import InvalidScrapeRequest, ScrapeFailure
from backend.scraper.pipeline import scrape_product, validate_request

router = APIRouter()

_FAILURE_STATUS = {"blocked": 422, "transport": 502, "malformed": 500}


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ScrapeBody(BaseModel):
    url: Optional[str] = None


class ScrapeResponse(BaseModel):
    title: str
    image: str
    url: str


class ScrapeErrorResponse(BaseModel):
    error: str
    reason: str
    fallback: Optional[ScrapeResponse] = None


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=ScrapeResponse,
    responses={
        400: {"model": ScrapeErrorResponse},
        422: {"model": ScrapeErrorResponse},
        500: {"model": ScrapeErrorResponse},
        502: {"model": ScrapeErrorResponse},
    },
)
async def scrape(body: ScrapeBody) -> Any:
    """Fetch a product page and return its title and preview image."""
    try:
        scrape_request = validate_request(body.url)
    except InvalidScrapeRequest as exc:
        return JSONResponse(
            status_code=400,
            content={"error": str(exc), "reason": "invalid", "fallback": None},
        )

    outcome = await scrape_product(scrape_request.url)
    if isinstance(outcome, ScrapeFailure):
        return JSONResponse(
            status_code=_FAILURE_STATUS[outcome.reason],
            content={
                "error": outcome.message,
                "reason": outcome.reason,
                "fallback": ScrapeFailure.fallback_card(scrape_request.url).to_dict(),
            },
        )
    return outcome.to_dict()
