"""Console logging setup for host applications.

The library only creates module loggers; call :func:`setup_logging` once
from the host before driving a scene to see them.
"""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: int = logging.INFO) -> None:
    """Route ``forest_rails`` records to stderr with a unified format."""
    logger = logging.getLogger("forest_rails")
    logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.handlers.clear()
    logger.addHandler(handler)
