"""Product preview pipeline.

``scrape_product`` runs the four stages strictly in order:

    fetch → parse → extract → normalize

A refused or failed fetch short-circuits into a :class:`ScrapeFailure`;
nothing is retried.  Faults raised while parsing or extracting are logged and
reported as ``malformed`` so no internal error escapes to the caller.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit

import httpx

from backend.scraper.extractor import extract_fields
from backend.scraper.fetcher import fetch_page
from backend.scraper.models import (
    FetchBlocked,
    FetchOk,
    InvalidScrapeRequest,
    ScrapeFailure,
    ScrapeOutcome,
    ScrapeRequest,
    ScrapeResult,
)
from backend.scraper.normalizer import normalize
from backend.scraper.parser import parse_document

logger = logging.getLogger(__name__)


def validate_request(url: Optional[str]) -> ScrapeRequest:
    """Check *url* before any network activity.

    Raises:
        InvalidScrapeRequest: If *url* is missing, blank, or not an absolute
            ``http``/``https`` URL.
    """
    if url is None or not url.strip():
        raise InvalidScrapeRequest("URL is required")
    parts = urlsplit(url.strip())
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidScrapeRequest(f"URL must be absolute http(s): {url!r}")
    return ScrapeRequest(url=url.strip())


def extract_from_html(html: str, request_url: str) -> ScrapeResult:
    """Run the synchronous stages (parse, extract, normalize) on *html*."""
    soup = parse_document(html)
    fields = extract_fields(soup)
    return normalize(fields, request_url)


async def scrape_product(
    url: Optional[str],
    client: Optional[httpx.AsyncClient] = None,
) -> ScrapeOutcome:
    """Fetch *url* and return its preview card or a typed failure.

    Raises:
        InvalidScrapeRequest: Only for bad input; every other problem is
            returned as a :class:`ScrapeFailure`.
    """
    request = validate_request(url)

    try:
        outcome = await fetch_page(request.url, client=client)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error fetching %s", request.url)
        return ScrapeFailure(reason="malformed", detail=str(exc))

    if isinstance(outcome, FetchBlocked):
        return ScrapeFailure(
            reason="blocked",
            detail=f"{outcome.status_code} {outcome.status_text}".strip(),
        )
    if not isinstance(outcome, FetchOk):
        return ScrapeFailure(reason="transport", detail=outcome.cause)

    try:
        result = extract_from_html(outcome.html, request.url)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Scrape error for %s", request.url)
        return ScrapeFailure(reason="malformed", detail=str(exc))

    logger.info("Scraped %s -> %r", request.url, result.title)
    return result
