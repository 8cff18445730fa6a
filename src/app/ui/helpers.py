"""
Shared text formatting helpers for dashboard components.

Small, pure helpers used by several components (truncation, number formatting,
whitespace collapsing). Kept here to avoid circular imports between component
modules.
"""

from __future__ import annotations

import re

from aigit.core.constants import DECISION_FAIL, DECISION_PASS

__all__ = [
    "ELLIPSIS",
    "trunc",
    "fmt2",
    "fmt_percent",
    "collapse_ws",
    "decision_class",
]

ELLIPSIS = "…"

_WS_RE = re.compile(r"\s+")


def trunc(s: str, max_len: int) -> str:
    """Shorten ``s`` to at most ``max_len`` characters, ending with an ellipsis.

    Examples:
        >>> trunc("abcdef", 4)
        'abc…'
        >>> trunc("abc", 4)
        'abc'
    """
    if len(s) <= max_len:
        return s
    return s[: max(0, max_len - 1)] + ELLIPSIS


def fmt2(v: float) -> str:
    return f"{v:.2f}"


def fmt_percent(rate: float) -> str:
    """Format a 0..1 rate with one decimal, e.g. ``0.5 -> '50.0%'``."""
    return f"{rate * 100:.1f}%"


def collapse_ws(s: str) -> str:
    return _WS_RE.sub(" ", s)


def decision_class(decision: str) -> str:
    return DECISION_PASS if decision == DECISION_PASS else DECISION_FAIL
