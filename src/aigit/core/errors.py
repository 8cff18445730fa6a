"""
Exception types for the aigit dashboard library.

- AigitError is the common base so callers can catch library failures at once.
- DataSourceError covers every malformed or unreachable input bundle: wrong
  top-level shape, invalid JSON, unreadable file, non-success HTTP status.

Notes:
    DataSourceError is always recoverable. The UI keeps running, displays the
    message and accepts a new load attempt.

Examples:
    >>> from aigit.core.errors import DataSourceError
    >>> try:
    ...     raise DataSourceError("data.json: missing entries")
    ... except DataSourceError as e:
    ...     msg = str(e)
    >>> "entries" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "AigitError",
    "DataSourceError",
]


class AigitError(Exception):
    """Base class for aigit dashboard library errors."""


class DataSourceError(AigitError, ValueError):
    """Input bundle could not be fetched, read, parsed or structurally validated."""
