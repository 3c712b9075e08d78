"""HTTP fetcher that presents itself as an ordinary desktop browser."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from backend.config import settings
from backend.scraper.models import (
    FetchBlocked,
    FetchOk,
    FetchOutcome,
    FetchTransportError,
)

logger = logging.getLogger(__name__)

# Navigation headers of desktop Chrome.  No ``br`` in Accept-Encoding: httpx
# only decodes Brotli when the optional ``brotli`` package is installed.
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Cache-Control": "max-age=0",
}


def _classify(response: httpx.Response) -> FetchOutcome:
    if response.is_success:
        return FetchOk(html=response.text, final_url=str(response.url))
    return FetchBlocked(
        status_code=response.status_code,
        status_text=response.reason_phrase,
    )


async def fetch_page(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
) -> FetchOutcome:
    """Issue exactly one GET for *url* and classify the result.

    A non-2xx status is returned as :class:`FetchBlocked` rather than raised:
    anti-bot refusals are routine.  Network-level problems (DNS, timeouts,
    resets, undecodable responses) become :class:`FetchTransportError`.

    Args:
        url: Absolute http(s) URL.
        client: Optional shared client.  When omitted a short-lived client
            is created for this call, so nothing outlives the request.  The
            browser headers, redirect policy and timeout are applied per
            request either way.
    """
    logger.debug("Fetching %s", url)
    try:
        if client is not None:
            response = await client.get(
                url,
                headers=BROWSER_HEADERS,
                follow_redirects=True,
                timeout=settings.request_timeout,
            )
        else:
            async with httpx.AsyncClient(
                headers=BROWSER_HEADERS,
                timeout=settings.request_timeout,
                follow_redirects=True,
            ) as own_client:
                response = await own_client.get(url)
    except httpx.RequestError as exc:
        logger.warning("Transport error fetching %s: %r", url, exc)
        return FetchTransportError(cause=f"{type(exc).__name__}: {exc}")

    outcome = _classify(response)
    if isinstance(outcome, FetchBlocked):
        logger.warning(
            "Failed to fetch %s: %s %s", url, outcome.status_code, outcome.status_text
        )
    return outcome
