"""Process-wide logging setup for the dashboard host."""

from __future__ import annotations

import logging
import sys

__all__ = ["LOG_FORMAT", "setup_logging"]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | int = "WARNING") -> None:
    """Install a single stderr handler on the root logger.

    Safe to call on every Streamlit rerun: existing handlers are replaced, not stacked.

    Args:
        level (str | int): Level name or number for the root logger.
    """
    lvl = logging.getLevelName(level) if isinstance(level, str) else level
    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(lvl)
    # Per-request lines from the HTTP client are noise at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
