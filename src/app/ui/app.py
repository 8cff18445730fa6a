"""
Streamlit host for the aigit dashboard.

Streamlit reruns this script top to bottom on every interaction, while the
dashboard itself is a persistent component tree over one Store. The host keeps
that tree in ``st.session_state`` (one per browser session), mounts it and runs
the startup load once, relays widget callbacks to component intents, and then
paints each component's current render output.

Responsibilities:
    - Configure the page and logging from DashboardSettings.
    - Own the per-session DashboardApp and Store.
    - Map widgets (filter box, file uploader, answers toggle, user and transcript
      pickers, close button) onto component intents.
    - Paint HTML blocks with st.html and chart blocks with st.altair_chart.

Notes:
    - Widget callbacks run before the script body, so by the time painting starts
      every intent has already been applied and every component redrawn.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

import streamlit as st

from aigit.core.model import sha
from aigit.io.config import DashboardSettings
from aigit.logs import setup_logging
from app.charts import users_frame
from app.store import Store

from .component import Component
from .dashboard import DashboardApp
from .helpers import trunc

__all__ = ["streamlit_app", "get_dashboard", "paint"]

logger = logging.getLogger(__name__)

SESSION_KEY = "aigit_dashboard"


def get_dashboard(settings: DashboardSettings) -> DashboardApp:
    """Return this session's dashboard, creating, mounting and bootstrapping it on first use.

    Args:
        settings (DashboardSettings): Settings used only when the session is new.

    Returns:
        DashboardApp: The mounted root component.
    """
    dash = st.session_state.get(SESSION_KEY)
    if isinstance(dash, DashboardApp):
        return dash
    dash = DashboardApp(Store(), settings)
    dash.mount()
    with st.spinner("Loading data ..."):
        asyncio.run(dash.bootstrap())
    st.session_state[SESSION_KEY] = dash
    logger.debug("new dashboard session (source=%s)", settings.data_source)
    return dash


def paint(component: Component) -> None:
    """Write a component's render output into the current Streamlit container."""
    for block in component.ctx.segments():
        if block.kind == "chart":
            st.altair_chart(block.body, theme=None, width="stretch")
        else:
            st.html(str(block.body))


# ---------- widget callbacks ----------


def _on_filter(dash: DashboardApp) -> None:
    dash.topbar.set_filter(st.session_state.get("dd_filter", ""))


def _on_answers(dash: DashboardApp) -> None:
    dash.topbar.set_show_answers(bool(st.session_state.get("dd_answers", False)))


def _on_upload(dash: DashboardApp) -> None:
    uploaded = st.session_state.get("dd_upload")
    if uploaded is None:
        return
    asyncio.run(dash.topbar.load_file(uploaded))


def _on_user(dash: DashboardApp) -> None:
    email = st.session_state.get("dd_user") or ""
    if email:
        dash.table.select_user(email)
    else:
        dash.drawer.close()


def _on_commit(dash: DashboardApp, key: str) -> None:
    commit_sha = st.session_state.get(key)
    if commit_sha:
        dash.drawer.select_commit(commit_sha)


def _on_close(dash: DashboardApp) -> None:
    dash.drawer.close()
    st.session_state["dd_user"] = ""


# ---------- layout ----------


def _render_sidebar(dash: DashboardApp) -> None:
    state = dash.current_state()
    with st.sidebar:
        st.header("Controls")
        st.text_input(
            "Filter users",
            value=state.user_filter,
            key="dd_filter",
            placeholder="name or email",
            on_change=_on_filter,
            args=(dash,),
        )
        st.checkbox(
            "Show answers",
            value=state.show_answers,
            key="dd_answers",
            on_change=_on_answers,
            args=(dash,),
        )
        st.file_uploader(
            "Load data.json",
            type=["json"],
            key="dd_upload",
            on_change=_on_upload,
            args=(dash,),
            help="Exported with `aigit dashboard export`.",
        )
        st.download_button(
            "Download users (CSV)",
            data=users_frame(dash.table.users).write_csv(),
            file_name="aigit-users.csv",
            mime="text/csv",
            disabled=not dash.table.users,
        )


def _render_drawer(dash: DashboardApp) -> None:
    state = dash.current_state()
    emails = [""] + [u.email for u in dash.table.users]
    if state.selected_email and state.selected_email not in emails:
        emails.append(state.selected_email)
    st.selectbox(
        "Drill into user",
        options=emails,
        key="dd_user",
        format_func=lambda e: e or "(none)",
        on_change=_on_user,
        args=(dash,),
    )
    if not state.selected_email:
        return

    shas = [sha(e) for e in dash.drawer.visible_entries]
    if shas:
        current = dash.drawer.selected_entry
        index = next((i for i, e in enumerate(dash.drawer.visible_entries) if e is current), 0)
        key = f"dd_commit_{state.selected_email}"
        st.radio(
            "Transcript",
            options=shas,
            index=index,
            key=key,
            format_func=lambda s: trunc(s, 10) or "(no sha)",
            horizontal=True,
            on_change=_on_commit,
            args=(dash, key),
        )
    st.button("Close", key="dd_close", on_click=_on_close, args=(dash,))
    paint(dash.drawer)


def streamlit_app(default_data: str | None = None) -> None:
    """Render the aigit dashboard.

    Args:
        default_data (str | None): Optional data source (URL or path) overriding the
            configured one for new sessions.

    Returns:
        None
    """
    settings = DashboardSettings.load()
    if default_data:
        settings = replace(settings, data_source=default_data)
    setup_logging(settings.log_level)

    st.set_page_config(page_title=settings.page_title, layout="wide")

    dash = get_dashboard(settings)
    _render_sidebar(dash)

    paint(dash.topbar)
    for col, card in zip(st.columns(len(dash.cards)), dash.cards, strict=True):
        with col:
            paint(card)

    left, right = st.columns([3, 2])
    with left:
        paint(dash.chart)
        paint(dash.table)
    with right:
        _render_drawer(dash)

    if dash.status_lines:
        paint(dash)
