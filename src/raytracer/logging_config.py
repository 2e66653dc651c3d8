"""Logging configuration for the terminal ray tracer."""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"


def setup_logging(level: str = "WARNING", stream: Optional[object] = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Output goes to stderr so it never interleaves with frames on stdout.
    """

    logger = logging.getLogger("src")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)  # type: ignore[arg-type]
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
