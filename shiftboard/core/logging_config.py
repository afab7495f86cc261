"""Logging setup for the shiftboard package."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-28s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Attach a console handler to the ``shiftboard`` logger.

    Safe to call more than once: the handler is only added the first time,
    later calls just change the level.  Records still propagate to the root
    logger.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger("shiftboard")
    package_logger.setLevel(log_level)

    if not any(getattr(h, "_shiftboard", False) for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._shiftboard = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)

    # Quieten the HTTP client used by TestClient
    logging.getLogger("httpx").setLevel(logging.WARNING)
