"""Turn extracted fields into a :class:`ScrapeResult` with an absolute image."""

from __future__ import annotations

from urllib.parse import urljoin, urlsplit

from backend.scraper.models import NO_IMAGE_PLACEHOLDER, ExtractedFields, ScrapeResult


def normalize_image(image: str, page_url: str) -> str:
    """Return *image* as an absolute URL.

    Root-relative values (``/images/shirt.jpg``) are joined to the scheme and
    host of *page_url*, which must be the URL the user asked for, not a
    redirect target.  Protocol-relative and path-relative values are
    resolved against the same URL.  A ``//host/path`` value is deliberately
    treated as protocol-relative (``scheme://host/path``), not glued onto
    the page's host as a plain leading ``/`` would be.  An empty value becomes
    :data:`NO_IMAGE_PLACEHOLDER`.
    """
    if not image:
        return NO_IMAGE_PLACEHOLDER

    base = urlsplit(page_url)
    if image.startswith("//"):
        return f"{base.scheme}:{image}"
    if image.startswith("/"):
        return f"{base.scheme}://{base.netloc}{image}"
    if urlsplit(image).scheme:
        return image
    return urljoin(page_url, image)


def normalize(fields: ExtractedFields, request_url: str) -> ScrapeResult:
    """Build the final result.  The title is passed through verbatim."""
    return ScrapeResult(
        title=fields.title,
        image=normalize_image(fields.image, request_url),
        url=request_url,
    )
