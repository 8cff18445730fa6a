"""
Pure derivations from the raw entry list.

Every function here is side-effect free and total over JSON-like input: nested
fields are read through aigit.core.model accessors, so sparse entries contribute
zeros and blanks instead of raising. Results are recomputed from scratch on every
render; nothing is cached or patched incrementally.

Functions:
    - aggregate_users: one UserRow per distinct author email.
    - filter_users: case-insensitive name/email substring filter.
    - entries_for_user: an author's entries, newest first.
    - kpis: top-level aggregate statistics.
    - time_series_avg_score: chronological (epoch millis, total_score) points.
    - effective_selection: drill-down selection with the most-recent fallback.

Notes:
    aggregate_users keeps a running mean in encounter order. Two exports holding the
    same entries in a different order can therefore report different avg_score
    values for the same author; this matches the published dashboard numbers.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, NamedTuple

from .model import (
    UserRow,
    author_date_iso,
    author_email,
    author_name,
    hallucination_flags,
    is_pass,
    sha,
    total_score,
)

__all__ = [
    "Kpis",
    "Point",
    "to_ms",
    "aggregate_users",
    "filter_users",
    "entries_for_user",
    "kpis",
    "time_series_avg_score",
    "effective_selection",
]


@dataclass(frozen=True)
class Kpis:
    """Top-level aggregate statistics.

    Attributes:
        total (int): Number of entries (duplicates included).
        users (int): Distinct author emails.
        passed (int): Entries with decision ``"pass"``.
        failed (int): ``total - passed``.
        pass_rate (float): ``passed / total``, 0 when there are no entries.
        avg_score (float): Mean ``total_score``, 0 when there are no entries.
        flags (int): Sum of hallucination flag counts.
    """

    total: int = 0
    users: int = 0
    passed: int = 0
    failed: int = 0
    pass_rate: float = 0.0
    avg_score: float = 0.0
    flags: int = 0


class Point(NamedTuple):
    x: int  # epoch millis
    y: float


def to_ms(iso: str) -> int:
    """Parse an ISO-8601 timestamp into epoch milliseconds.

    Args:
        iso (str): Timestamp such as ``2024-05-01T10:00:00+02:00`` or ``...Z``.
            Naive timestamps are read as UTC.

    Returns:
        int: Milliseconds since the epoch, or 0 when the value does not parse.
    """
    if not isinstance(iso, str) or not iso:
        return 0
    try:
        dt = datetime.fromisoformat(iso)
    except ValueError:
        return 0
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp() * 1000)


def aggregate_users(entries: Iterable[Any]) -> list[UserRow]:
    """Group entries by author email into UserRows.

    The first entry of an email seeds the row (name and last seen date). Each entry,
    the first included, bumps passes or fails and folds its score into the running
    mean ``avg' = (avg * (n - 1) + score) / n`` where n is the post-increment count.
    ``last_seen_iso`` keeps the lexicographically greatest date string; timestamps
    share one zone so string order equals time order.

    Args:
        entries (Iterable[Any]): Raw dashboard entries.

    Returns:
        list[UserRow]: Sorted by last seen (parsed time) descending, then email ascending.
    """
    by_email: dict[str, UserRow] = {}
    for e in entries:
        email = author_email(e)
        row = by_email.get(email)
        if row is None:
            row = UserRow(name=author_name(e), email=email, last_seen_iso=author_date_iso(e))
            by_email[email] = row

        if is_pass(e):
            row.passes += 1
        else:
            row.fails += 1

        n = row.passes + row.fails
        row.avg_score = (row.avg_score * (n - 1) + total_score(e)) / n
        date = author_date_iso(e)
        if date > row.last_seen_iso:
            row.last_seen_iso = date

    return sorted(by_email.values(), key=lambda u: (-to_ms(u.last_seen_iso), u.email))


def filter_users(users: list[UserRow], query: str) -> list[UserRow]:
    """Case-insensitive substring match on name or email.

    A blank or whitespace-only query returns ``users`` itself, unfiltered.
    """
    q = (query or "").strip().lower()
    if not q:
        return users
    return [u for u in users if q in u.name.lower() or q in u.email.lower()]


def entries_for_user(entries: Iterable[Any], email: str) -> list[Any]:
    """Entries authored by ``email``, newest ``author_date_iso`` first (string order)."""
    mine = [e for e in entries if author_email(e) == email]
    return sorted(mine, key=author_date_iso, reverse=True)


def kpis(entries: Sequence[Any]) -> Kpis:
    total = len(entries)
    if total == 0:
        return Kpis()
    passed = sum(1 for e in entries if is_pass(e))
    return Kpis(
        total=total,
        users=len({author_email(e) for e in entries}),
        passed=passed,
        failed=total - passed,
        pass_rate=passed / total,
        avg_score=sum(total_score(e) for e in entries) / total,
        flags=sum(len(hallucination_flags(e)) for e in entries),
    )


def time_series_avg_score(entries: Iterable[Any]) -> list[Point]:
    """Score points ordered by ``author_date_iso`` ascending.

    Unparseable dates map to x=0 rather than dropping the point.
    """
    ordered = sorted(entries, key=author_date_iso)
    return [Point(x=to_ms(author_date_iso(e)), y=total_score(e)) for e in ordered]


def effective_selection(user_entries: Sequence[Any], selected_sha: str | None) -> Any | None:
    """Resolve the transcript shown in the drill-down.

    Args:
        user_entries (Sequence[Any]): One author's entries, newest first
            (as returned by entries_for_user).
        selected_sha (str | None): Stored selection, possibly stale or unset.

    Returns:
        Any | None: The entry whose sha matches, else the most recent entry, else None
        when the author has no entries. The stored selection itself is never changed.
    """
    if not user_entries:
        return None
    if selected_sha:
        for e in user_entries:
            if sha(e) == selected_sha:
                return e
    return user_entries[0]
