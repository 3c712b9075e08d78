"""Lenient HTML parsing into a queryable tree."""

from __future__ import annotations

from bs4 import BeautifulSoup


def parse_document(html: str) -> BeautifulSoup:
    """Parse *html* with the forgiving ``html.parser`` backend.

    Unclosed tags, stray end tags and missing ``<head>``/``<body>`` sections
    are repaired the way a browser would rather than rejected, so any string
    (including an empty one) yields a document.
    """
    return BeautifulSoup(html or "", "html.parser")
