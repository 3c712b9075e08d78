"""Data models for the product metadata pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, List, Literal, Optional, Tuple, Union

UNKNOWN_TITLE = "Unknown Product"

# Shown when a page was scraped but no strategy found an image.
NO_IMAGE_PLACEHOLDER = "https://via.placeholder.com/400x300?text=No+Image+Found"

# Shown on the manual-entry card after a failed scrape.
MANUAL_ENTRY_IMAGE = "https://via.placeholder.com/400x300?text=Details+Needed"

FailureReason = Literal["blocked", "transport", "malformed"]


class InvalidScrapeRequest(ValueError):
    """The submitted URL is missing, blank, or not an absolute http(s) URL."""


@dataclass(frozen=True)
class ScrapeRequest:
    url: str


# ---------------------------------------------------------------------------
# Fetch outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FetchOk:
    """A successful (2xx) response body."""

    html: str
    final_url: str


@dataclass(frozen=True)
class FetchBlocked:
    """The site answered, but with a non-success status."""

    status_code: int
    status_text: str


@dataclass(frozen=True)
class FetchTransportError:
    """No HTTP response was obtained (DNS, timeout, reset, ...)."""

    cause: str


FetchOutcome = Union[FetchOk, FetchBlocked, FetchTransportError]


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProductRecord:
    """A JSON-LD record declaring ``"@type": "Product"``."""

    type: str
    name: Optional[str] = None
    image: Union[str, List[str], None] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "ProductRecord":
        name = data.get("name")
        return cls(
            type=str(data.get("@type")),
            name=name if isinstance(name, str) else None,
            image=_image_urls(data.get("image")),
        )

    @property
    def first_image(self) -> Optional[str]:
        if isinstance(self.image, list):
            return self.image[0] if self.image else None
        return self.image


def _image_urls(value: Any) -> Union[str, List[str], None]:
    """Reduce a JSON-LD ``image`` value to a URL or a list of URLs.

    ImageObject entries (``{"url": ...}``) are replaced by their ``url``;
    anything else that is not a string is dropped.  Nested lists are not
    descended into.
    """
    if isinstance(value, list):
        urls = [u for u in (_image_url(v) for v in value) if u is not None]
        return urls or None
    return _image_url(value)


def _image_url(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        value = value.get("url") or value.get("contentUrl")
    return value if isinstance(value, str) else None


Candidate = Tuple[str, Optional[str]]


@dataclass
class CandidateSet:
    """Per-field ``(strategy name, value)`` pairs in priority order."""

    title: List[Candidate] = field(default_factory=list)
    image: List[Candidate] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractedFields:
    """Winning values picked from a :class:`CandidateSet`.

    ``image`` is empty when no strategy produced one; the ``*_source``
    attributes name the strategy that won, or ``None`` for the default.
    """

    title: str
    image: str
    title_source: Optional[str] = None
    image_source: Optional[str] = None


# ---------------------------------------------------------------------------
# Pipeline output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScrapeResult:
    title: str
    image: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


_FAILURE_MESSAGES: dict[str, str] = {
    "blocked": "Site blocked the scraper. Please enter details manually.",
    "transport": "Failed to scrape product details.",
    "malformed": "Failed to scrape product details.",
}


@dataclass(frozen=True)
class ScrapeFailure:
    reason: FailureReason
    detail: str

    @property
    def message(self) -> str:
        """Human-readable error safe to show to the user."""
        return _FAILURE_MESSAGES[self.reason]

    @property
    def is_blocked(self) -> bool:
        return self.reason == "blocked"

    @staticmethod
    def fallback_card(url: str) -> ScrapeResult:
        """Blank, editable card offered after any failed scrape."""
        return ScrapeResult(title="", image=MANUAL_ENTRY_IMAGE, url=url)


ScrapeOutcome = Union[ScrapeResult, ScrapeFailure]
