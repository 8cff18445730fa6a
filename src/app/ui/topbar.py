"""
Top bar: brand, loaded repository, and the global controls' current values.

Intents handled here:
    - set_filter: user table filter query.
    - set_show_answers: answer text in the drawer.
    - load_file: manual load of a local export. Validation failures land in the
      status panel verbatim with status=error; nothing propagates to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from aigit.core.errors import DataSourceError
from aigit.core.model import data_repo_id
from aigit.io.datasource import FileSource, load_from_file
from app.store import AppState, Store

from .component import Component
from .style import el

__all__ = ["Topbar"]

logger = logging.getLogger(__name__)

NO_REPO = "no data (export required)"


class Topbar(Component):
    tag: ClassVar[str] = "dd-topbar"
    css: ClassVar[str] = """
    :host { display:block; }
    .bar {
      display:flex;
      align-items:center;
      justify-content:space-between;
      gap: 14px;
      padding: 12px 4px;
      border-bottom: 1px solid #e5e7eb;
    }
    .left, .right { display:flex; align-items:center; gap: 12px; }
    .brand {
      font-weight: 800;
      font-size: 14px;
      padding: 6px 10px;
      border-radius: 999px;
      border: 1px solid #e5e7eb;
    }
    .sub { color: #6b7280; font-size: 12px; }
    .chip { background: #f3f4f6; border-radius: 14px; padding: 4px 10px; font-size: 12px; color: #374151; }
    """

    def __init__(self, store: Store, *, brand: str = "aigit / dashboard") -> None:
        super().__init__(store)
        self.brand = brand

    def set_filter(self, query: str) -> None:
        self.dispatch(user_filter=query)

    def set_show_answers(self, show: bool) -> None:
        self.dispatch(show_answers=bool(show))

    async def load_file(self, file: FileSource | Any) -> None:
        """Load a user-supplied export into the store.

        Sets status=loading first, then either set_data or set_error with the
        failure message verbatim. Concurrent calls are not cancelled; the last one
        to finish writes the final state.
        """
        name = getattr(file, "name", file)
        self.dispatch(status="loading", error=None)
        try:
            data = await load_from_file(file)
        except DataSourceError as e:
            logger.warning("manual load of %s failed: %s", name, e)
            message = str(e)
        except Exception as e:
            logger.exception("unexpected failure loading %s", name)
            message = str(e) or e.__class__.__name__
        else:
            logger.info("loaded %s (%d entries)", name, len(data["entries"]))
            self.bound_store.set_data(data)
            return
        self.bound_store.set_error(message)

    def draw(self, state: AppState) -> None:
        repo = data_repo_id(state.data) or NO_REPO
        right = []
        if state.user_filter.strip():
            right.append(el("span", {"class": "chip"}, [f"filter: {state.user_filter}"]))
        right.append(el("span", {"class": "chip"}, ["answers shown" if state.show_answers else "answers hidden"]))
        self.ctx.append(
            el(
                "div",
                {"class": "bar"},
                [
                    el(
                        "div",
                        {"class": "left"},
                        [el("div", {"class": "brand"}, [self.brand]), el("div", {"class": "sub"}, [f"repo: {repo}"])],
                    ),
                    el("div", {"class": "right"}, right),
                ],
            )
        )
