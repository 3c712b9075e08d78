"""Title and image extraction from a parsed product page.

Each strategy reads one kind of metadata and reports a ``(title, image)``
pair, either of which may be ``None``.  :data:`STRATEGIES` lists them from
highest to lowest priority; for every field the first strategy with a
non-blank value wins.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup

from backend.scraper.models import (
    UNKNOWN_TITLE,
    Candidate,
    CandidateSet,
    ExtractedFields,
    ProductRecord,
)

logger = logging.getLogger(__name__)

FieldPair = Tuple[Optional[str], Optional[str]]
Strategy = Callable[[BeautifulSoup], FieldPair]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _attr(soup: BeautifulSoup, selector: str, attribute: str) -> Optional[str]:
    """Return *attribute* of the first element matching *selector*."""
    tag = soup.select_one(selector)
    if tag is None:
        return None
    value = tag.get(attribute)
    if isinstance(value, list):
        value = " ".join(value)
    return value


def _parse_block(text: Optional[str]) -> Optional[Any]:
    try:
        return json.loads(text or "")
    except (ValueError, RecursionError) as exc:
        logger.debug("Skipping malformed JSON-LD block: %.200s", exc)
        return None


def _flatten(data: Any) -> Iterator[Any]:
    """Yield the records of one JSON-LD block in document order.

    Walks an explicit stack, so arbitrarily nested arrays cannot exhaust the
    interpreter's recursion limit.
    """
    pending = [data]
    while pending:
        node = pending.pop()
        if isinstance(node, list):
            pending.extend(reversed(node))
        elif isinstance(node, dict):
            yield node
            graph = node.get("@graph")
            if isinstance(graph, list):
                pending.append(graph)


def _json_ld_blocks(soup: BeautifulSoup) -> Iterable[Any]:
    scripts = soup.select('script[type="application/ld+json"]')
    parsed = (_parse_block(script.string or script.get_text()) for script in scripts)
    return (data for data in parsed if data is not None)


def find_product_record(soup: BeautifulSoup) -> Optional[ProductRecord]:
    """Return the first ``Product`` record embedded as JSON-LD, if any.

    Every ``<script type="application/ld+json">`` is parsed on its own; a
    block with invalid JSON is simply absent from the scan.
    """
    records = (
        record
        for data in _json_ld_blocks(soup)
        for record in _flatten(data)
    )
    products = (r for r in records if r.get("@type") == "Product")
    first = next(products, None)
    return ProductRecord.from_json(first) if first is not None else None


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def open_graph(soup: BeautifulSoup) -> FieldPair:
    return (
        _attr(soup, 'meta[property="og:title"]', "content"),
        _attr(soup, 'meta[property="og:image"]', "content"),
    )


def twitter_card(soup: BeautifulSoup) -> FieldPair:
    return (
        _attr(soup, 'meta[name="twitter:title"]', "content"),
        _attr(soup, 'meta[name="twitter:image"]', "content"),
    )


def json_ld(soup: BeautifulSoup) -> FieldPair:
    record = find_product_record(soup)
    if record is None:
        return None, None
    return record.name, record.first_image


def plain_html(soup: BeautifulSoup) -> FieldPair:
    title_tag = soup.find("title")
    title = title_tag.get_text() if title_tag is not None else None
    return title, _attr(soup, "img", "src")


STRATEGIES: List[Tuple[str, Strategy]] = [
    ("open_graph", open_graph),
    ("twitter_card", twitter_card),
    ("json_ld", json_ld),
    ("html", plain_html),
]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def collect_candidates(
    soup: BeautifulSoup,
    strategies: Optional[List[Tuple[str, Strategy]]] = None,
) -> CandidateSet:
    """Run every strategy over *soup* and record what each one found."""
    candidates = CandidateSet()
    for name, strategy in strategies or STRATEGIES:
        title, image = strategy(soup)
        candidates.title.append((name, title))
        candidates.image.append((name, image))
    return candidates


def first_present(candidates: List[Candidate]) -> Tuple[Optional[str], Optional[str]]:
    """Return the first ``(name, value)`` whose value is non-blank.

    ``(None, None)`` when every candidate is missing or whitespace.
    """
    for name, value in candidates:
        if value and value.strip():
            return name, value
    return None, None


def extract_fields(
    soup: BeautifulSoup,
    strategies: Optional[List[Tuple[str, Strategy]]] = None,
) -> ExtractedFields:
    """Pick the best title and image from *soup*.

    The title falls back to :data:`UNKNOWN_TITLE`; the image falls back to an
    empty string, which the normalizer turns into a placeholder.
    """
    candidates = collect_candidates(soup, strategies)
    title_source, title = first_present(candidates.title)
    image_source, image = first_present(candidates.image)
    logger.debug("title from %s, image from %s", title_source, image_source)
    return ExtractedFields(
        title=title if title_source else UNKNOWN_TITLE,
        image=image if image_source else "",
        title_source=title_source,
        image_source=image_source,
    )
