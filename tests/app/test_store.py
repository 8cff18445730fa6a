from __future__ import annotations

import pytest

from app.store import AppState, Store, initial_state


def test_initial_state_is_idle_and_empty() -> None:
    s = initial_state()
    assert s == AppState()
    assert s.status == "idle"
    assert s.data is None and s.error is None
    assert s.user_filter == "" and s.show_answers is False
    assert s.selected_email is None and s.selected_commit is None


def test_set_state_merges_and_notifies_in_order() -> None:
    store = Store()
    calls: list[tuple[str, AppState]] = []
    store.subscribe(lambda st: calls.append(("first", st)))
    store.subscribe(lambda st: calls.append(("second", st)))

    store.set_state({"user_filter": "al"}, show_answers=True)

    assert [name for name, _ in calls] == ["first", "second"]
    seen = calls[0][1]
    assert seen is store.get_state()
    assert seen.user_filter == "al" and seen.show_answers is True
    assert seen.status == "idle"


def test_each_call_raises_exactly_one_signal() -> None:
    store = Store()
    count = []
    store.subscribe(lambda st: count.append(1))
    store.set_state(status="loading")
    store.set_state(status="idle")
    assert len(count) == 2


def test_listeners_run_before_set_state_returns() -> None:
    store = Store()
    seen = []
    store.subscribe(lambda st: seen.append(st.status))
    store.set_state(status="loading")
    assert seen == ["loading"]


def test_unsubscribe_stops_notifications() -> None:
    store = Store()
    seen = []
    unsubscribe = store.subscribe(lambda st: seen.append(st.status))
    store.set_state(status="loading")
    unsubscribe()
    unsubscribe()
    store.set_state(status="ready")
    assert seen == ["loading"]


def test_unsubscribe_during_broadcast_does_not_skip_others() -> None:
    store = Store()
    seen = []
    holder = {}

    def first(st: AppState) -> None:
        seen.append("first")
        holder["unsub"]()

    holder["unsub"] = store.subscribe(first)
    store.subscribe(lambda st: seen.append("second"))
    store.set_state(status="loading")
    assert seen == ["first", "second"]


def test_unknown_field_is_rejected() -> None:
    store = Store()
    with pytest.raises(TypeError, match="selectedEmail"):
        store.set_state(selectedEmail="a@x.com")
    assert store.get_state() == AppState()


def test_set_data_and_set_error(sample_data) -> None:
    store = Store()
    store.set_state(status="loading", error="old")
    store.set_data(sample_data)
    s = store.get_state()
    assert (s.status, s.error, s.data) == ("ready", None, sample_data)

    store.set_error("boom")
    s = store.get_state()
    assert (s.status, s.error) == ("error", "boom")
    # Data from the previous successful load is kept.
    assert s.data is sample_data
