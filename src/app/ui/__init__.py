"""
Dashboard UI package.

Modules:
    - style: scoped stylesheets, escaped markup builder, per-component RenderContext.
    - component: Component base class (mount, render, intents).
    - topbar, kpi_card, line_chart, user_table, detail_drawer: the leaf components.
    - dashboard: DashboardApp root and startup load.
    - app: Streamlit host (streamlit_app).

Usage:
    from app.ui import streamlit_app
    streamlit_app(default_data="./data.json")
"""

from __future__ import annotations

from .app import streamlit_app
from .dashboard import DashboardApp

__all__ = [
    "streamlit_app",
    "DashboardApp",
]
