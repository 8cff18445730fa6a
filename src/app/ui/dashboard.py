"""
Root component: composes the topbar, KPI cards, score chart, users table and
drill-down drawer, and drives the startup load.

On every store change the root recomputes the derived views (KPIs, filtered user
rows, score series) and pushes them into its setter-driven children. Listening
children (topbar, table, drawer) redraw from their own subscriptions.

Notes:
    - Mount order is children first, then the root, so the root's pushes always
      land on already-mounted children.
    - bootstrap() never raises: a failed startup load leaves status=idle with an
      instructional message and waits for a manual upload.
"""

from __future__ import annotations

import logging
from typing import ClassVar

import httpx
from markupsafe import Markup

from aigit.core.constants import NO_DATA_MESSAGE
from aigit.core.model import data_entries, data_generated_at
from aigit.core.selectors import aggregate_users, filter_users, kpis, time_series_avg_score
from aigit.io.config import DashboardSettings
from aigit.io.datasource import load
from app.store import AppState, Store

from .component import Component
from .detail_drawer import DetailDrawer
from .helpers import fmt_percent
from .kpi_card import KpiCard
from .line_chart import LineChart
from .style import el
from .topbar import Topbar
from .user_table import UserTable

__all__ = ["DashboardApp"]

logger = logging.getLogger(__name__)


class DashboardApp(Component):
    tag: ClassVar[str] = "dd-app"
    css: ClassVar[str] = """
    :host { display:block; }
    .status {
      margin-top: 14px;
      border: 1px dashed #d1d5db;
      border-radius: 12px;
      padding: 12px 14px;
      color: #6b7280;
      font-size: 13px;
    }
    .status strong { color: #111827; }
    """

    def __init__(
        self,
        store: Store,
        settings: DashboardSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(store)
        self.settings = settings or DashboardSettings()
        self.client = client
        self.topbar = Topbar(store, brand=self.settings.page_title)
        self.cards = [
            KpiCard("Transcripts"),
            KpiCard("Users"),
            KpiCard("Pass rate"),
            KpiCard("Hallucination flags"),
        ]
        self.chart = LineChart("Score over time")
        self.table = UserTable(store)
        self.drawer = DetailDrawer(store, max_items=self.settings.drawer_max_items)
        self.status_lines: list[str] = []

    @property
    def children(self) -> list[Component]:
        return [self.topbar, *self.cards, self.chart, self.table, self.drawer]

    def mount(self) -> None:
        if self.mounted:
            return
        for child in self.children:
            child.mount()
        super().mount()

    def unmount(self) -> None:
        super().unmount()
        for child in self.children:
            child.unmount()

    async def bootstrap(self) -> None:
        """Load the configured data source once at startup."""
        source = self.settings.data_source
        self.dispatch(status="loading", error=None)
        try:
            data = await load(source, client=self.client, timeout=self.settings.fetch_timeout)
        except Exception as e:
            logger.warning("startup load of %s failed: %s", source, e)
            self.dispatch(status="idle", error=NO_DATA_MESSAGE)
            return
        logger.info("loaded %s (%d entries)", source, len(data["entries"]))
        self.bound_store.set_data(data)

    def draw(self, state: AppState) -> None:
        entries = data_entries(state.data)
        stats = kpis(entries)
        transcripts, users, pass_rate, flags = self.cards
        transcripts.set(value=str(stats.total))
        users.set(value=str(stats.users))
        pass_rate.set(value=fmt_percent(stats.pass_rate), hint=f"{stats.passed} pass • {stats.failed} fail")
        flags.set(value=str(stats.flags))

        self.table.users = filter_users(aggregate_users(entries), state.user_filter)
        self.chart.points = time_series_avg_score(entries)

        lines: list[str] = []
        if state.status == "loading":
            lines.append("Loading…")
        if state.error:
            lines.append(state.error)
        if state.data is not None:
            lines.append(f"Generated at: {data_generated_at(state.data)}")
        self.status_lines = lines
        if lines:
            body: list[Markup | str] = [el("strong", {}, ["Status"])]
            for line in lines:
                body += [Markup("<br/>"), line]
            self.ctx.append(el("div", {"class": "status"}, body))

    def to_html(self) -> Markup:
        """Whole tree as one HTML fragment, children first and status panel last."""
        return Markup("").join(c.to_html() for c in self.children) + self.ctx.to_html()
