"""Logging setup for transcript-stream.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
attached by applications (the CLI) through :func:`setup_logging`.  Records
use ISO 8601 timestamps and pipe-separated fields.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Marks the handler installed here so repeated setup calls reuse it.
_HANDLER_ATTR = "_transcript_stream_handler"


def _resolve_level(level: str | int) -> int:
    """Translate a level name or number into a numeric logging level."""
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Invalid log level: {level!r}")
    return numeric


def setup_logging(level: str | int = "INFO", stream: TextIO | None = None) -> None:
    """Attach the project handler to the root logger.

    A second call adjusts the level of the existing handler instead of
    adding another one.  Handlers installed by other code are left alone.

    Args:
        level: Level name (``"DEBUG"``, ``"warning"``, ...) or number.
        stream: Destination for log records.  Defaults to *stderr* so that
            entries printed on *stdout* stay machine-readable.

    Raises:
        ValueError: If *level* is not a recognised level name.
    """
    numeric_level = _resolve_level(level)

    root = logging.getLogger()
    root.setLevel(numeric_level)

    existing = next(
        (h for h in root.handlers if getattr(h, _HANDLER_ATTR, False)),
        None,
    )
    if existing is not None:
        existing.setLevel(numeric_level)
        return

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger called *name* (usually ``__name__``)."""
    return logging.getLogger(name)
