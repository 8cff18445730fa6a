"""
Top-level Streamlit app package for the aigit dashboard.

The library side (data model, selectors, loading, config) lives under aigit.*;
this package holds the UI state store, chart builders and the component tree.

CLI entrypoint (configured in pyproject.toml):
    aigit-dashboard = app.main:main
"""

from __future__ import annotations
