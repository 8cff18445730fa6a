"""Score-over-time chart card. Setter-driven: the root component pushes points on every render."""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar

from aigit.core.selectors import Point
from app.charts import score_line_chart
from app.store import AppState

from .component import Component
from .style import el

__all__ = ["LineChart"]


class LineChart(Component):
    tag: ClassVar[str] = "dd-line-chart"
    listens: ClassVar[bool] = False
    css: ClassVar[str] = """
    :host { display: block; }
    .title { color: #6b7280; font-size: 12px; letter-spacing: 0.06em; text-transform: uppercase; }
    .empty { color: #9ca3af; font-size: 12px; margin-top: 12px; }
    """

    def __init__(self, title: str = "") -> None:
        super().__init__(None)
        self._title = title
        self._points: list[Point] = []

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = value
        self.rerender()

    @property
    def points(self) -> list[Point]:
        return self._points

    @points.setter
    def points(self, value: Sequence[Point]) -> None:
        self._points = list(value)
        self.rerender()

    def draw(self, state: AppState) -> None:
        self.ctx.append(el("div", {"class": "title"}, [self._title]))
        # A single point has no trend to draw.
        if len(self._points) < 2:
            self.ctx.append(el("div", {"class": "empty"}, ["No data yet."]))
            return
        self.ctx.add_chart(score_line_chart(self._points))
