"""Loguru sink setup for the backend process."""
from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message} {extra}"


def configure_logging(level: str = "INFO") -> None:
    """Replace the default sink with one that prints bound event fields."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT, backtrace=False, diagnose=False)
