"""Logging configuration shared by the API and the CLI."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from backend.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_ROOT_LOGGER = "backend"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a single stderr handler to the ``backend`` logger.

    Safe to call repeatedly: the handler is only installed once, later calls
    just adjust the level.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel((level or settings.log_level).upper())

    if not any(getattr(h, "_giftboard", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._giftboard = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
