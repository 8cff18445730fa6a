"""
Drill-down drawer for one author.

Closed while no author is selected. When open it lists the author's most recent
transcripts and the per-question detail of the effective selection: the stored
``selected_commit`` when it belongs to this author, otherwise the author's most
recent transcript. The stored value is never corrected here, only displayed as if
it were.

Selection states:
    NoSelection --select_user--> UserSelected --select_commit--> CommitSelected
    close() returns to NoSelection from either open state.
"""

from __future__ import annotations

from typing import Any, ClassVar

from markupsafe import Markup

from aigit.core.constants import DRAWER_MAX_ITEMS
from aigit.core.model import (
    answers,
    author_date_iso,
    author_name,
    data_entries,
    decision,
    hallucination_flags,
    min_total_score,
    patch_id,
    per_question,
    provider_label,
    questions,
    redaction_count,
    sha,
    subject,
    total_score,
)
from aigit.core.selectors import effective_selection, entries_for_user
from app.store import AppState, Store

from .component import Component
from .helpers import collapse_ws, decision_class, fmt2, trunc
from .style import classes, el

__all__ = ["DetailDrawer"]

EMPTY_ANSWER = "(empty / not exported)"


def _num(v: Any) -> float:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return 0.0
    return float(v)


class DetailDrawer(Component):
    tag: ClassVar[str] = "dd-detail-drawer"
    css: ClassVar[str] = """
    :host { display:block; }
    .drawer { display:none; }
    .drawer.open { display:flex; flex-direction: column; }
    .head { padding: 4px 0 10px; border-bottom: 1px solid #e5e7eb; }
    .title { font-weight: 800; font-size: 16px; }
    .subtitle { color: #6b7280; font-size: 12px; margin-top: 6px; }
    .section { margin-top: 14px; }
    .sectionTitle { color: #6b7280; font-size: 12px; letter-spacing: 0.06em; text-transform: uppercase; margin-bottom: 10px; }
    .list { display:flex; flex-direction: column; gap: 10px; }
    .item { border: 1px solid #e5e7eb; border-radius: 12px; padding: 12px; }
    .item.selected { border-color: rgba(124,92,255,0.45); background: rgba(124,92,255,0.10); }
    .row { display:flex; align-items:center; justify-content:space-between; gap: 12px; }
    .mono { font-variant-numeric: tabular-nums; }
    .muted { color: #9ca3af; font-size: 12px; }
    .pill { padding: 4px 10px; border-radius: 999px; border: 1px solid #e5e7eb; font-size: 12px; }
    .pill.pass { border-color: rgba(20,160,100,0.35); color: #0f9d63; }
    .pill.fail { border-color: rgba(220,60,90,0.35); color: #d43c5a; }
    pre {
      white-space: pre-wrap;
      word-break: break-word;
      background: #f9fafb;
      border: 1px solid #e5e7eb;
      border-radius: 12px;
      padding: 12px;
      font-size: 12px;
    }
    """

    def __init__(self, store: Store, *, max_items: int = DRAWER_MAX_ITEMS) -> None:
        super().__init__(store)
        self.max_items = max_items
        self.visible_entries: list[Any] = []
        self.selected_entry: Any | None = None

    # ---------- intents ----------

    def select_commit(self, commit_sha: str) -> None:
        self.dispatch(selected_commit=commit_sha)

    def close(self) -> None:
        self.dispatch(selected_email=None, selected_commit=None)

    # ---------- rendering ----------

    def draw(self, state: AppState) -> None:
        email = state.selected_email
        self.visible_entries = []
        self.selected_entry = None
        if not email:
            self.ctx.append(el("div", {"class": "drawer"}))
            return

        user_entries = entries_for_user(data_entries(state.data), email)
        name = author_name(user_entries[0]) if user_entries else "Unknown"
        selected = effective_selection(user_entries, state.selected_commit)
        self.visible_entries = user_entries[: self.max_items]
        self.selected_entry = selected

        selected_sha = sha(selected) if selected is not None else None
        items = [self._item(e, selected=sha(e) == selected_sha) for e in self.visible_entries]
        self.ctx.append(
            el(
                "div",
                {"class": "drawer open"},
                [
                    el(
                        "div",
                        {"class": "head"},
                        [
                            el("div", {"class": "title"}, [name or "Unknown"]),
                            el("div", {"class": "subtitle"}, [f"{email} • {len(user_entries)} transcripts"]),
                        ],
                    ),
                    el(
                        "div",
                        {"class": "section"},
                        [el("div", {"class": "sectionTitle"}, ["Transcripts"]), el("div", {"class": "list"}, items)],
                    ),
                    el(
                        "div",
                        {"class": "section"},
                        [el("div", {"class": "sectionTitle"}, ["Details"]), self._detail(selected, state.show_answers)],
                    ),
                ],
            )
        )

    def _item(self, entry: Any, *, selected: bool) -> Markup:
        verdict = decision(entry)
        return el(
            "div",
            {"class": classes("item", selected=selected), "data-sha": sha(entry)},
            [
                el(
                    "div",
                    {"class": "row"},
                    [
                        el("div", {"class": "mono"}, [f"{trunc(sha(entry), 10)} • {author_date_iso(entry)}"]),
                        el("span", {"class": f"pill {decision_class(verdict)}"}, [verdict]),
                    ],
                ),
                el(
                    "div",
                    {"class": "muted"},
                    [f"score {fmt2(total_score(entry))} • patch {trunc(patch_id(entry), 12)}"],
                ),
                el("div", {"class": "muted"}, [trunc(subject(entry), 70)]),
            ],
        )

    def _meta(self, entry: Any) -> Markup:
        parts = []
        provider = provider_label(entry)
        if provider:
            parts.append(f"graded by {provider}")
        threshold = min_total_score(entry)
        if threshold is not None:
            parts.append(f"min score {fmt2(threshold)}")
        parts.append(f"{len(hallucination_flags(entry))} flags")
        parts.append(f"{redaction_count(entry)} redactions")
        return el("div", {"class": "muted"}, [" • ".join(parts)])

    def _detail(self, entry: Any | None, show_answers: bool) -> Markup:
        if entry is None:
            return el("div", {"class": "muted"}, ["No transcript selected."])

        prompts = {str(q.get("id")): q.get("prompt") for q in questions(entry)}
        texts = answers(entry) if show_answers else {}
        blocks: list[Markup] = [self._meta(entry)]
        for q in per_question(entry):
            qid = str(q.get("id", ""))
            category = q.get("category", "")
            prompt = prompts.get(qid)
            prompt = prompt if isinstance(prompt, str) else ""
            score_line = (
                f"{fmt2(_num(q.get('score')))} "
                f"(c {fmt2(_num(q.get('completeness')))}, s {fmt2(_num(q.get('specificity')))})"
            )
            blocks.append(
                el(
                    "div",
                    {"class": "item"},
                    [
                        el(
                            "div",
                            {"class": "row"},
                            [el("div", {}, [f"{qid} [{category}]"]), el("div", {"class": "mono muted"}, [score_line])],
                        ),
                        el("div", {"class": "muted"}, [trunc(collapse_ws(prompt), 220)]),
                    ],
                )
            )
            if show_answers:
                blocks.append(el("pre", {}, [texts.get(qid, "").strip() or EMPTY_ANSWER]))
        return el("div", {}, blocks)
