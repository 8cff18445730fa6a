"""
aigit dashboard library.

Zero-UI building blocks for the transcript dashboard: the data model accessors,
pure selectors, the data source and runtime settings. The Streamlit UI shell
lives in the sibling ``app`` package and depends on this one, never the other
way around.

Subpackages:
    - aigit.core: constants, errors, entry accessors and selectors (stdlib only).
    - aigit.io: data source (httpx, pydantic) and DashboardSettings.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
