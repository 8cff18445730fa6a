from __future__ import annotations

from aigit.core.model import UserRow
from aigit.core.selectors import Point
from app.store import Store
from app.ui.kpi_card import EMPTY_VALUE, KpiCard
from app.ui.line_chart import LineChart
from app.ui.topbar import NO_REPO, Topbar
from app.ui.user_table import UserTable


def test_kpi_card_defaults_and_setter_rerenders() -> None:
    card = KpiCard("Transcripts")
    card.mount()
    assert EMPTY_VALUE in card.to_html()
    before = card.render_count

    card.set(value="12", hint="3 pass • 9 fail", badge="24h")

    html = card.to_html()
    assert card.render_count == before + 1
    assert ">12<" in html
    assert "3 pass • 9 fail" in html
    assert 'class="badge"' in html
    assert html.startswith("<style>.dd-kpi-card {")


def test_kpi_card_ignores_store_signals() -> None:
    store = Store()
    card = KpiCard("Users")
    card.mount()
    count = card.render_count
    store.set_state(status="loading")
    assert card.render_count == count


def test_line_chart_needs_two_points() -> None:
    chart = LineChart("Score over time")
    chart.mount()
    assert "No data yet." in chart.to_html()

    chart.points = [Point(0, 0.5)]
    assert "No data yet." in chart.to_html()
    assert all(b.kind == "html" for b in chart.ctx.blocks)

    chart.points = [Point(1_700_000_000_000, 0.5), Point(1_700_000_100_000, 0.9)]
    kinds = [b.kind for b in chart.ctx.blocks]
    assert kinds == ["html", "chart"]
    assert "No data yet." not in chart.to_html()


def test_line_chart_title_setter() -> None:
    chart = LineChart()
    chart.mount()
    chart.title = "Trend"
    assert ">Trend<" in chart.to_html()


def test_user_table_rows_escape_and_highlight() -> None:
    store = Store()
    table = UserTable(store)
    table.mount()
    assert "0 users" in table.to_html()

    table.users = [
        UserRow(name="<script>x</script>", email="evil@x.com", passes=1, fails=2, avg_score=0.456, last_seen_iso="2024-01-01"),
        UserRow(name="Bob", email="bob@x.com", passes=3, fails=0, avg_score=1.0, last_seen_iso="2024-01-02"),
    ]
    html = table.to_html()
    assert "2 users" in html
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "1 pass / 2 fail" in html
    assert "0.46" in html
    assert 'class="selected"' not in html

    table.select_user("bob@x.com")
    assert store.get_state().selected_email == "bob@x.com"
    assert '<tr class="selected" data-email="bob@x.com">' in table.to_html()


def test_user_table_truncates_long_values() -> None:
    table = UserTable(Store())
    table.mount()
    table.users = [UserRow(name="N" * 40, email="e" * 50 + "@x.com")]
    html = table.to_html()
    assert "N" * 25 + "…" in html
    assert "N" * 26 not in html


def test_topbar_reflects_state_and_intents(sample_data) -> None:
    store = Store()
    bar = Topbar(store, brand="acme dash")
    bar.mount()
    html = bar.to_html()
    assert "acme dash" in html
    assert f"repo: {NO_REPO}" in html
    assert "answers hidden" in html

    store.set_data(sample_data)
    bar.set_filter("ali")
    bar.set_show_answers(True)

    s = store.get_state()
    assert s.user_filter == "ali" and s.show_answers is True
    html = bar.to_html()
    assert "repo: acme/widgets" in html
    assert "filter: ali" in html
    assert "answers shown" in html


def test_topbar_unmount_stops_rendering() -> None:
    store = Store()
    bar = Topbar(store)
    bar.mount()
    bar.mount()
    count = bar.render_count
    store.set_state(status="loading")
    assert bar.render_count == count + 1
    bar.unmount()
    store.set_state(status="idle")
    assert bar.render_count == count + 1
