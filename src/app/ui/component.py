"""
Base class for dashboard rendering units.

A Component owns a private RenderContext and exposes a single ``render(state)``
entry point that clears the context and redraws the whole subtree. Nothing is
diffed: rendering the same inputs twice yields identical output.

Lifecycle:
    - mount(): subscribe to the store (when the component listens to it) and render once.
    - every store change signal: full render with the new state.
    - setter inputs (users, points, card values): store the value and re-render.
    - unmount(): drop the subscription.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar

from markupsafe import Markup

from app.store import AppState, Store

from .style import RenderContext

__all__ = ["Component"]


class Component:
    """Self-contained rendering unit with an isolated style scope.

    Class attributes:
        tag (str): Scope class name, also used as the wrapper element class.
        css (str): Component stylesheet; scoped to ``tag`` on construction.
        listens (bool): Whether mount() subscribes to store change signals.
    """

    tag: ClassVar[str] = "dd-component"
    css: ClassVar[str] = ""
    listens: ClassVar[bool] = True

    def __init__(self, store: Store | None = None) -> None:
        self.store = store
        self.ctx = RenderContext(self.tag, self.css)
        self._unsubscribe: Callable[[], None] | None = None
        self.mounted = False
        self.render_count = 0

    def mount(self) -> None:
        if self.mounted:
            return
        self.mounted = True
        if self.listens and self.store is not None:
            self._unsubscribe = self.store.subscribe(self.render)
        self.rerender()

    def unmount(self) -> None:
        self.mounted = False
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def bound_store(self) -> Store:
        if self.store is None:
            raise RuntimeError(f"{self.tag} is not bound to a store")
        return self.store

    def dispatch(self, **changes: Any) -> None:
        """Forward a user intent to the store as one state patch."""
        self.bound_store.set_state(**changes)

    def current_state(self) -> AppState:
        return self.store.get_state() if self.store is not None else AppState()

    def rerender(self) -> None:
        self.render(self.current_state())

    def render(self, state: AppState) -> None:
        self.ctx.clear()
        self.draw(state)
        self.render_count += 1

    def draw(self, state: AppState) -> None:
        raise NotImplementedError

    def to_html(self) -> Markup:
        return self.ctx.to_html()
