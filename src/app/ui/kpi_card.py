"""KPI card: label, big value, optional hint and badge. Setter-driven, not a store listener."""

from __future__ import annotations

from typing import ClassVar

from app.store import AppState

from .component import Component
from .style import el

__all__ = ["KpiCard"]

EMPTY_VALUE = "—"


class KpiCard(Component):
    tag: ClassVar[str] = "dd-kpi-card"
    listens: ClassVar[bool] = False
    css: ClassVar[str] = """
    :host { display: block; }
    .card {
      border: 1px solid #e5e7eb;
      border-radius: 12px;
      padding: 14px 14px 12px;
      background: #ffffff;
      box-shadow: 0 1px 2px rgba(0,0,0,0.04);
      min-height: 92px;
    }
    .top { display:flex; align-items:center; justify-content:space-between; gap:12px; }
    .label { color: #6b7280; font-size: 12px; letter-spacing: 0.06em; text-transform: uppercase; }
    .value { font-size: 26px; font-weight: 700; margin-top: 10px; color: #111827; }
    .hint { color: #9ca3af; font-size: 12px; margin-top: 6px; }
    .badge {
      border: 1px solid #e5e7eb;
      border-radius: 999px;
      padding: 4px 10px;
      font-size: 12px;
      color: #6b7280;
    }
    """

    def __init__(self, label: str = "", value: str | None = None, hint: str = "", badge: str = "") -> None:
        super().__init__(None)
        self.label = label
        self.value = value
        self.hint = hint
        self.badge = badge

    def set(
        self,
        *,
        label: str | None = None,
        value: str | None = None,
        hint: str | None = None,
        badge: str | None = None,
    ) -> None:
        """Update any subset of the card fields and re-render."""
        if label is not None:
            self.label = label
        if value is not None:
            self.value = value
        if hint is not None:
            self.hint = hint
        if badge is not None:
            self.badge = badge
        self.rerender()

    def draw(self, state: AppState) -> None:
        top = [el("div", {"class": "label"}, [self.label])]
        if self.badge:
            top.append(el("div", {"class": "badge"}, [self.badge]))
        self.ctx.append(
            el(
                "div",
                {"class": "card"},
                [
                    el("div", {"class": "top"}, top),
                    el("div", {"class": "value"}, [self.value if self.value is not None else EMPTY_VALUE]),
                    el("div", {"class": "hint"}, [self.hint]),
                ],
            )
        )
