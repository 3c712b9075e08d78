"""Scraper package: product title & preview image extraction."""

from backend.scraper.extractor import extract_fields
from backend.scraper.fetcher import fetch_page
from backend.scraper.models import ScrapeFailure, ScrapeResult
from backend.scraper.pipeline import scrape_product, validate_request

__all__ = [
    "fetch_page",
    "extract_fields",
    "scrape_product",
    "validate_request",
    "ScrapeResult",
    "ScrapeFailure",
]
