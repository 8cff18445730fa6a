"""
Observable application state for the dashboard.

A Store holds one immutable AppState snapshot and a plain list of subscriber
callbacks. Every mutation goes through set_state (or its convenience wrappers),
which swaps in a new snapshot and synchronously notifies each subscriber, in
subscription order, before returning. There is no batching: each call raises
exactly one change signal, so two consecutive calls redraw the tree twice.

Notes:
    - One Store per session. The Streamlit host creates it once per browser session
      and hands it by reference to the root component.
    - Execution is single-threaded; no locking.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Literal

__all__ = [
    "LoadStatus",
    "AppState",
    "Listener",
    "Store",
    "initial_state",
]

LoadStatus = Literal["idle", "loading", "ready", "error"]


@dataclass(frozen=True)
class AppState:
    """Process-wide UI state snapshot.

    Attributes:
        status (LoadStatus): Load lifecycle: idle -> loading -> ready | error.
        error (str | None): Message shown in the status panel.
        data (Any): Loaded export (a JSON object), replaced wholesale on reload.
        user_filter (str): Current user table filter query.
        selected_email (str | None): Author whose drawer is open.
        selected_commit (str | None): Explicit transcript selection within that author.
        show_answers (bool): Whether the drawer shows answer text.
    """

    status: LoadStatus = "idle"
    error: str | None = None
    data: Any = None
    user_filter: str = ""
    selected_email: str | None = None
    selected_commit: str | None = None
    show_answers: bool = False


def initial_state() -> AppState:
    return AppState()


Listener = Callable[[AppState], None]

_FIELDS = frozenset(f.name for f in fields(AppState))


class Store:
    """Single source of truth with change notification."""

    def __init__(self, initial: AppState | None = None) -> None:
        self._state = initial if initial is not None else initial_state()
        self._listeners: list[Listener] = []

    def get_state(self) -> AppState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for change signals.

        Returns:
            Callable[[], None]: Unsubscribe function; calling it twice is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_state(self, patch: Mapping[str, Any] | None = None, /, **changes: Any) -> None:
        """Shallow-merge a partial update and broadcast one change signal.

        Args:
            patch (Mapping[str, Any] | None): Fields to replace.
            **changes: Same, as keywords; they win over ``patch`` on conflicts.

        Raises:
            TypeError: For names that are not AppState fields.
        """
        merged = {**(patch or {}), **changes}
        unknown = set(merged) - _FIELDS
        if unknown:
            raise TypeError(f"unknown AppState field(s): {', '.join(sorted(unknown))}")
        self._state = replace(self._state, **merged)
        # Snapshot so unsubscribing mid-broadcast does not skip anyone.
        for listener in list(self._listeners):
            listener(self._state)

    def set_data(self, data: Any) -> None:
        self.set_state(data=data, status="ready", error=None)

    def set_error(self, message: str) -> None:
        self.set_state(status="error", error=message)
