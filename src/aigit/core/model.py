"""
Data model for the dashboard export and read-time accessors over it.

The export (``data.json``) is loosely typed JSON. Only the top-level bundle shape
is validated on load (see aigit.io.datasource.validate); everything nested is read
through the accessors below, which substitute an empty/zero default for absent or
wrongly typed fields. A structurally valid bundle with sparse entries therefore
renders with blanks and zeros instead of failing.

Responsibilities
- Document the export shape with TypedDicts (annotations only, never enforced).
- Provide total accessors for every nested field the selectors and UI read.
- Define the derived UserRow record.

Notes:
    - Zero-IO; stdlib only.
    - Accessors never raise for any JSON-like input.

Examples:
    >>> entry = {"commit": {"author_email": "a@x.com"}, "transcript": {}}
    >>> author_email(entry), total_score(entry), hallucination_flags(entry)
    ('a@x.com', 0.0, [])
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, NotRequired, TypedDict

from .constants import DECISION_PASS

__all__ = [
    "JsonDict",
    "Decision",
    "TranscriptQuestion",
    "PerQuestionScore",
    "Score",
    "Transcript",
    "CommitMeta",
    "DashboardEntry",
    "DashboardData",
    "UserRow",
    "data_entries",
    "data_repo_id",
    "data_generated_at",
    "commit_of",
    "transcript_of",
    "sha",
    "author_name",
    "author_email",
    "author_date_iso",
    "subject",
    "decision",
    "is_pass",
    "total_score",
    "hallucination_flags",
    "per_question",
    "questions",
    "answers",
    "patch_id",
    "provider_label",
    "min_total_score",
    "redaction_count",
]

JsonDict = dict[str, Any]
Decision = Literal["pass", "fail"]


# ============================================================================
# Export shape (documentation only)
# ============================================================================


class TranscriptQuestion(TypedDict):
    id: str
    category: str
    prompt: str
    choices: NotRequired[list[str] | None]


class PerQuestionScore(TypedDict):
    id: str
    category: str
    score: float
    completeness: float
    specificity: float
    notes: list[str]


class Score(TypedDict):
    total_score: float
    hallucination_flags: list[str]
    per_question: list[PerQuestionScore]


class Transcript(TypedDict):
    schema_version: str
    commit: NotRequired[str | None]
    timestamp: str
    repo_id: str
    repo_fingerprint: str
    diff_fingerprint: dict[str, str]
    exam: dict[str, Any]
    answers: dict[str, Any]
    score: Score
    decision: Decision


class CommitMeta(TypedDict):
    sha: str
    author_name: str
    author_email: str
    author_date_iso: str
    subject: str


class DashboardEntry(TypedDict):
    commit: CommitMeta
    transcript: Transcript


class DashboardData(TypedDict):
    schema_version: str
    generated_at: str
    repo_id: str
    entries: list[DashboardEntry]


@dataclass
class UserRow:
    """Per-author aggregate, recomputed from scratch on every render.

    Attributes:
        name (str): Author name from the first entry seen for this email.
        email (str): Grouping key (``commit.author_email``).
        passes (int): Entries with decision ``"pass"``.
        fails (int): Entries with any other decision.
        avg_score (float): Running mean of ``total_score`` in encounter order.
        last_seen_iso (str): Lexicographically greatest ``author_date_iso``.
    """

    name: str
    email: str
    passes: int = 0
    fails: int = 0
    avg_score: float = 0.0
    last_seen_iso: str = ""


# ============================================================================
# Coercion helpers
# ============================================================================


def _field(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    return None


def _as_str(v: Any) -> str:
    return v if isinstance(v, str) else ""


def _as_float(v: Any) -> float:
    if isinstance(v, bool):
        return 0.0
    if isinstance(v, (int, float)):
        return float(v)
    return 0.0


def _as_list(v: Any) -> list[Any]:
    return v if isinstance(v, list) else []


def _as_dict(v: Any) -> dict[str, Any]:
    return v if isinstance(v, dict) else {}


# ============================================================================
# Accessors
# ============================================================================


def data_entries(data: Any) -> list[Any]:
    """Return ``data["entries"]`` or an empty list when data is missing."""
    return _as_list(_field(data, "entries"))


def commit_of(entry: Any) -> dict[str, Any]:
    return _as_dict(_field(entry, "commit"))


def transcript_of(entry: Any) -> dict[str, Any]:
    return _as_dict(_field(entry, "transcript"))


def sha(entry: Any) -> str:
    return _as_str(commit_of(entry).get("sha"))


def author_name(entry: Any) -> str:
    return _as_str(commit_of(entry).get("author_name"))


def author_email(entry: Any) -> str:
    return _as_str(commit_of(entry).get("author_email"))


def author_date_iso(entry: Any) -> str:
    return _as_str(commit_of(entry).get("author_date_iso"))


def subject(entry: Any) -> str:
    return _as_str(commit_of(entry).get("subject"))


def decision(entry: Any) -> str:
    return _as_str(transcript_of(entry).get("decision"))


def is_pass(entry: Any) -> bool:
    """Only the literal ``"pass"`` counts as a pass; anything else is a fail."""
    return decision(entry) == DECISION_PASS


def _score(entry: Any) -> dict[str, Any]:
    return _as_dict(transcript_of(entry).get("score"))


def total_score(entry: Any) -> float:
    return _as_float(_score(entry).get("total_score"))


def hallucination_flags(entry: Any) -> list[Any]:
    return _as_list(_score(entry).get("hallucination_flags"))


def per_question(entry: Any) -> list[dict[str, Any]]:
    """Per-question score rows; non-mapping rows are dropped."""
    return [q for q in _as_list(_score(entry).get("per_question")) if isinstance(q, dict)]


def questions(entry: Any) -> list[dict[str, Any]]:
    exam = _as_dict(transcript_of(entry).get("exam"))
    return [q for q in _as_list(exam.get("questions")) if isinstance(q, dict)]


def answers(entry: Any) -> dict[str, str]:
    """Question id -> answer text.

    The export nests the mapping (``answers.answers``); a flat mapping is read as-is.
    Non-string answers are dropped.
    """
    raw = _as_dict(transcript_of(entry).get("answers"))
    inner = raw.get("answers")
    mapping = inner if isinstance(inner, dict) else raw
    return {str(k): v for k, v in mapping.items() if isinstance(v, str)}


def patch_id(entry: Any) -> str:
    fp = _as_dict(transcript_of(entry).get("diff_fingerprint"))
    return _as_str(fp.get("patch_id"))


def provider_label(entry: Any) -> str:
    """``provider/model`` of the grading run, or empty when not exported."""
    prov = _as_dict(transcript_of(entry).get("provider"))
    parts = [p for p in (_as_str(prov.get("provider")), _as_str(prov.get("model"))) if p]
    return "/".join(parts)


def min_total_score(entry: Any) -> float | None:
    """Policy threshold recorded with the transcript, None when not exported."""
    thr = _as_dict(transcript_of(entry).get("thresholds"))
    v = thr.get("min_total_score")
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    return float(v)


def redaction_count(entry: Any) -> int:
    return len(_as_list(transcript_of(entry).get("redactions")))


def data_repo_id(data: Any) -> str:
    return _as_str(_field(data, "repo_id"))


def data_generated_at(data: Any) -> str:
    return _as_str(_field(data, "generated_at"))
