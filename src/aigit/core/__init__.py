"""
aigit.core: zero-IO data model, selectors and errors.

Public surface:
    - errors: AigitError, DataSourceError
    - model: export TypedDicts, UserRow, read-time accessors
    - selectors: aggregate_users, filter_users, entries_for_user, kpis,
      time_series_avg_score, effective_selection
    - constants: bootstrap source and messages
"""

from __future__ import annotations

from .errors import AigitError, DataSourceError
from .model import UserRow
from .selectors import (
    Kpis,
    Point,
    aggregate_users,
    effective_selection,
    entries_for_user,
    filter_users,
    kpis,
    time_series_avg_score,
    to_ms,
)

__all__ = [
    "AigitError",
    "DataSourceError",
    "UserRow",
    "Kpis",
    "Point",
    "aggregate_users",
    "effective_selection",
    "entries_for_user",
    "filter_users",
    "kpis",
    "time_series_avg_score",
    "to_ms",
]
