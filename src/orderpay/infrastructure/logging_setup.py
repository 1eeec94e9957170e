"""Logging configuration for the command-line entry point."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s - [%(levelname)s] - %(name)s - %(message)s"

_handler: logging.Handler | None = None


def configure_logging(level: str = "INFO") -> None:
    """Send ``orderpay`` log records to stderr at *level*.

    Safe to call more than once; the previous handler is replaced so it
    always writes to the current ``sys.stderr``.
    """
    global _handler

    logger = logging.getLogger("orderpay")
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level)
