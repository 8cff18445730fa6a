"""
aigit.io: loading the dashboard export and runtime settings.

Public surface:
    - datasource: load_from_url, load_from_file, load, validate
    - config: DashboardSettings (env > TOML > defaults)

Depends on aigit.core, httpx and pydantic. Never imports the ``app`` UI package.
"""

from __future__ import annotations

from .config import DashboardSettings
from .datasource import load, load_from_file, load_from_url, validate

__all__ = [
    "DashboardSettings",
    "load",
    "load_from_file",
    "load_from_url",
    "validate",
]
