from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from aigit.core.constants import EXPORT_SCHEMA_VERSION


def make_entry(
    sha: str,
    email: str,
    date: str,
    *,
    name: str | None = None,
    decision: str = "pass",
    score: float = 0.8,
    flags: int = 0,
    subject: str = "change something",
) -> dict[str, Any]:
    """Build one dashboard entry shaped like the aigit export."""
    return {
        "commit": {
            "sha": sha,
            "author_name": name if name is not None else email.split("@")[0].title(),
            "author_email": email,
            "author_date_iso": date,
            "subject": subject,
        },
        "transcript": {
            "version": "aigit/0.1",
            "created_at": date,
            "commit_sha": sha,
            "diff_fingerprint": {"patch_id": f"patch-{sha}-0123456789", "files_changed": 1},
            "policy": {"policy_id": "default", "policy_version": "1"},
            "provider": {"provider": "openai", "model": "gpt-4o-mini"},
            "thresholds": {"min_total_score": 0.6},
            "redactions": [{"kind": "secret"}],
            "exam": {
                "questions": [
                    {"id": "q1", "category": "intent", "prompt": "What  does\nthis change do?"},
                    {"id": "q2", "category": "risk", "prompt": "What could break?"},
                ]
            },
            "answers": {"answers": {"q1": "It adds a thing.", "q2": "   "}},
            "score": {
                "total_score": score,
                "hallucination_flags": [f"flag-{i}" for i in range(flags)],
                "per_question": [
                    {"id": "q1", "category": "intent", "score": 0.9, "completeness": 0.8, "specificity": 0.7},
                    {"id": "q2", "category": "risk", "score": 0.5, "completeness": 0.4, "specificity": 0.3},
                ],
            },
            "decision": decision,
        },
    }


def make_data(entries: list[dict[str, Any]], **extra: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "schema_version": EXPORT_SCHEMA_VERSION,
        "generated_at": "2024-06-01T12:00:00Z",
        "repo_id": "acme/widgets",
        "entries": entries,
    }
    data.update(extra)
    return data


@pytest.fixture
def entry_factory() -> Callable[..., dict[str, Any]]:
    return make_entry


@pytest.fixture
def sample_entries() -> list[dict[str, Any]]:
    return [
        make_entry("a1", "alice@example.com", "2024-05-01T10:00:00Z", name="Alice", score=0.8),
        make_entry("a2", "alice@example.com", "2024-05-03T10:00:00Z", name="Alice", decision="fail", score=0.4, flags=2),
        make_entry("b1", "bob@example.com", "2024-05-02T09:00:00Z", name="Bob", score=1.0, flags=1),
    ]


@pytest.fixture
def sample_data(sample_entries: list[dict[str, Any]]) -> dict[str, Any]:
    return make_data(sample_entries)


@pytest.fixture
def data_factory() -> Callable[..., dict[str, Any]]:
    return make_data
