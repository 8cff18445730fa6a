"""
Dashboard-wide defaults.

Zero-IO constants shared by the data source, the store and the UI shell.
Changing the bootstrap source or the instructional message should happen here.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "EXPORT_SCHEMA_VERSION",
    "DEFAULT_DATA_SOURCE",
    "NO_DATA_MESSAGE",
    "DRAWER_MAX_ITEMS",
    "DECISION_PASS",
    "DECISION_FAIL",
]

# Schema tag written by `aigit dashboard export`. Informational only; loads never enforce it.
EXPORT_SCHEMA_VERSION: Final[str] = "aigit-dashboard/0.1"

# Source attempted once at session start.
DEFAULT_DATA_SOURCE: Final[str] = "./data.json"

# Shown (with status=idle) when the bootstrap load fails.
NO_DATA_MESSAGE: Final[str] = (
    "No ./data.json found. Generate it with: "
    "`aigit dashboard export --out dashboard/public/data.json` then serve dashboard/public/."
)

# Transcripts listed in the drill-down drawer.
DRAWER_MAX_ITEMS: Final[int] = 30

DECISION_PASS: Final[str] = "pass"
DECISION_FAIL: Final[str] = "fail"
