from __future__ import annotations

from collections.abc import Sequence

import altair as alt
import polars as pl

from aigit.core.model import UserRow
from aigit.core.selectors import Point

ACCENT = "#7c5cff"

USER_COLUMNS: dict[str, type[pl.DataType]] = {
    "name": pl.Utf8,
    "email": pl.Utf8,
    "passes": pl.Int64,
    "fails": pl.Int64,
    "avg_score": pl.Float64,
    "last_seen": pl.Utf8,
}


# Uniform chart defaults
def _apply_chart_defaults(ch: alt.TopLevelMixin) -> alt.TopLevelMixin:
    return (
        ch.configure_axis(labelFontSize=11, titleFontSize=11, grid=True, gridOpacity=0.4)
        .configure_title(fontSize=13)
        .configure_view(strokeOpacity=0)
    )


# ----------------------------
# Frames
# ----------------------------


def points_frame(points: Sequence[Point]) -> pl.DataFrame:
    """Score points as a frame with columns x (epoch ms), score, and t (UTC datetime)."""
    frame = pl.DataFrame(
        {"x": [p.x for p in points], "score": [p.y for p in points]},
        schema={"x": pl.Int64, "score": pl.Float64},
    )
    return frame.with_columns(pl.from_epoch("x", time_unit="ms").alias("t"))


def users_frame(users: Sequence[UserRow]) -> pl.DataFrame:
    """UserRows as a frame for tabular display (one row per author, input order kept)."""
    return pl.DataFrame(
        {
            "name": [u.name for u in users],
            "email": [u.email for u in users],
            "passes": [u.passes for u in users],
            "fails": [u.fails for u in users],
            "avg_score": [u.avg_score for u in users],
            "last_seen": [u.last_seen_iso for u in users],
        },
        schema=USER_COLUMNS,
    )


# ----------------------------
# Charts
# ----------------------------


def score_line_chart(points: Sequence[Point], *, height: int = 140) -> alt.TopLevelMixin:
    """Area + line chart of total_score over author time.

    Vega-Lite reads the numeric x values as epoch milliseconds on the temporal axis.

    Args:
        points (Sequence[Point]): Chronological points (see time_series_avg_score).
        height (int): Chart height in pixels.

    Returns:
        alt.TopLevelMixin: Layered chart with dashboard defaults applied.
    """
    values = points_frame(points).select("x", "score").to_dicts()
    base = alt.Chart(alt.Data(values=values)).encode(
        x=alt.X("x:T", title=None),
        y=alt.Y("score:Q", title=None, scale=alt.Scale(zero=False)),
        tooltip=[alt.Tooltip("x:T", title="author date"), alt.Tooltip("score:Q", format=".2f")],
    )
    area = base.mark_area(color=ACCENT, opacity=0.2)
    line = base.mark_line(color=ACCENT, strokeWidth=2.2)
    return _apply_chart_defaults(alt.layer(area, line).properties(height=height))
