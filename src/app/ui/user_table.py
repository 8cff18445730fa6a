"""
Users table: one row per author with pass/fail counts, average score and last seen date.

Rows are pushed in through the ``users`` setter by the root component (already
aggregated and filtered); the table also listens to the store so the selected row
highlight follows ``selected_email``. Selecting a row opens the drill-down drawer
for that author with no explicit transcript chosen.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar

from aigit.core.model import UserRow
from app.store import AppState, Store

from .component import Component
from .helpers import fmt2, trunc
from .style import classes, el

__all__ = ["UserTable"]


class UserTable(Component):
    tag: ClassVar[str] = "dd-user-table"
    css: ClassVar[str] = """
    :host { display:block; }
    .card { border: 1px solid #e5e7eb; border-radius: 12px; overflow: hidden; background: #ffffff; }
    .head {
      padding: 14px 16px;
      display:flex;
      align-items:baseline;
      justify-content:space-between;
      border-bottom: 1px solid #f3f4f6;
    }
    .title { color: #6b7280; font-size: 12px; letter-spacing: 0.06em; text-transform: uppercase; }
    .meta { color: #9ca3af; font-size: 12px; }
    table { width:100%; border-collapse: collapse; font-size: 13px; }
    th, td { padding: 10px 14px; border-bottom: 1px solid #f3f4f6; text-align: left; }
    th { color: #6b7280; font-weight: 600; font-size: 12px; }
    tr.selected td { background: rgba(124,92,255,0.12); }
    .pill { padding: 4px 10px; border-radius: 999px; border: 1px solid #e5e7eb; font-size: 12px; color: #374151; }
    .score { font-variant-numeric: tabular-nums; }
    .muted { color: #9ca3af; }
    """

    def __init__(self, store: Store) -> None:
        super().__init__(store)
        self._users: list[UserRow] = []

    @property
    def users(self) -> list[UserRow]:
        return self._users

    @users.setter
    def users(self, value: Sequence[UserRow]) -> None:
        self._users = list(value)
        self.rerender()

    def select_user(self, email: str) -> None:
        """Open the drawer for ``email``; any previous transcript choice is dropped."""
        self.dispatch(selected_email=email, selected_commit=None)

    def draw(self, state: AppState) -> None:
        header = el(
            "tr",
            {},
            [el("th", {}, [h]) for h in ("User", "Email", "Pass/Fail", "Avg score", "Last seen")],
        )
        rows = []
        for u in self._users:
            rows.append(
                el(
                    "tr",
                    {"class": classes(selected=state.selected_email == u.email) or None, "data-email": u.email},
                    [
                        el("td", {}, [trunc(u.name, 26)]),
                        el("td", {"class": "muted"}, [trunc(u.email, 34)]),
                        el("td", {}, [el("span", {"class": "pill"}, [f"{u.passes} pass / {u.fails} fail"])]),
                        el("td", {"class": "score"}, [fmt2(u.avg_score)]),
                        el("td", {"class": "muted"}, [u.last_seen_iso]),
                    ],
                )
            )
        self.ctx.append(
            el(
                "div",
                {"class": "card"},
                [
                    el(
                        "div",
                        {"class": "head"},
                        [el("div", {"class": "title"}, ["Users"]), el("div", {"class": "meta"}, [f"{len(self._users)} users"])],
                    ),
                    el("table", {}, [el("thead", {}, [header]), el("tbody", {}, rows)]),
                ],
            )
        )
