"""
Style isolation and markup helpers for dashboard components.

Each component renders into its own RenderContext: a private, ordered list of
output blocks (escaped HTML or Altair charts) plus a stylesheet rewritten by
scope_css so its rules only match inside the component's wrapper element. Two
components can therefore both style ``.card`` or ``.muted`` without leaking into
each other once painted on the same Streamlit page.

Notes:
    - Markup is built with markupsafe; every plain string child or attribute value
      is escaped, Markup children are inserted as-is.
    - No Streamlit import here; the host decides how blocks are painted.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from markupsafe import Markup, escape

__all__ = [
    "scope_css",
    "el",
    "classes",
    "Block",
    "RenderContext",
]

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.S)
_HOST_FN_RE = re.compile(r":host\(([^)]*)\)")
# At-rules whose body holds ordinary style rules that need scoping.
_NESTED_AT = ("@media", "@supports", "@container", "@layer")
_VOID_TAGS = frozenset({"br", "hr", "img", "input", "meta", "link"})


def _scope_selector(sel: str, scope: str) -> str:
    sel = sel.strip()
    if ":host" in sel:
        sel = _HOST_FN_RE.sub(rf".{scope}\1", sel)
        return sel.replace(":host", f".{scope}")
    return f".{scope} {sel}"


def _split_rules(css: str) -> Iterator[tuple[str, str]]:
    """Yield (prelude, body) for each top-level rule, matching nested braces."""
    i, n = 0, len(css)
    while i < n:
        open_at = css.find("{", i)
        if open_at < 0:
            return
        depth = 0
        j = open_at
        while j < n:
            if css[j] == "{":
                depth += 1
            elif css[j] == "}":
                depth -= 1
                if depth == 0:
                    break
            j += 1
        yield css[i:open_at].strip(), css[open_at + 1 : j].strip()
        i = j + 1


def _split_selectors(prelude: str) -> list[str]:
    """Split a selector list on top-level commas only, so `:is(.a, .b)` stays whole."""
    parts: list[str] = []
    depth, start = 0, 0
    for i, ch in enumerate(prelude):
        if ch in "([":
            depth += 1
        elif ch in ")]":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append(prelude[start:i])
            start = i + 1
    parts.append(prelude[start:])
    return [p for p in parts if p.strip()]


def scope_css(css: str, scope: str) -> str:
    """Rewrite a stylesheet so it only applies inside ``.<scope>``.

    ``:host`` (and ``:host(.x)``) map to the scope element itself; every other
    selector becomes a descendant of it. Grouping at-rules (@media, @supports, ...)
    are scoped recursively; @keyframes, @font-face and other at-rules are kept verbatim.

    Args:
        css (str): Source stylesheet.
        scope (str): Class name of the wrapper element.

    Returns:
        str: Scoped stylesheet, one rule per line.

    Examples:
        >>> scope_css(":host { display:block; } .card, .row { gap: 4px; }", "dd-x")
        '.dd-x { display:block; }\\n.dd-x .card, .dd-x .row { gap: 4px; }'
    """
    out: list[str] = []
    for prelude, body in _split_rules(_COMMENT_RE.sub("", css)):
        if prelude.startswith(_NESTED_AT):
            out.append(f"{prelude} {{\n{scope_css(body, scope)}\n}}")
        elif prelude.startswith("@"):
            out.append(f"{prelude} {{ {body} }}")
        else:
            sels = ", ".join(_scope_selector(s, scope) for s in _split_selectors(prelude))
            out.append(f"{sels} {{ {body} }}")
    return "\n".join(out)


def classes(*names: str, **conditional: bool) -> str:
    """Join class names, adding each keyword name whose flag is true."""
    picked = [n for n in names if n] + [k for k, on in conditional.items() if on]
    return " ".join(picked)


def el(tag: str, attrs: Mapping[str, Any] | None = None, children: Iterable[Any] = ()) -> Markup:
    """Build one escaped HTML element.

    Args:
        tag (str): Element name (trusted).
        attrs (Mapping[str, Any] | None): Attributes; None values are omitted.
        children (Iterable[Any]): Markup is inserted as-is, anything else escaped.

    Returns:
        Markup: Rendered element.
    """
    attr_s = Markup("").join(
        Markup(' {}="{}"').format(Markup(k), v) for k, v in (attrs or {}).items() if v is not None
    )
    if tag in _VOID_TAGS:
        return Markup("<{}{}>").format(Markup(tag), attr_s)
    inner = Markup("").join(escape(c) for c in children)
    return Markup("<{0}{1}>{2}</{0}>").format(Markup(tag), attr_s, inner)


@dataclass(frozen=True)
class Block:
    kind: Literal["html", "chart"]
    body: Any


class RenderContext:
    """Private output of one rendering unit.

    Attributes:
        scope (str): Wrapper class name every style rule is scoped to.
        stylesheet (str): The component CSS after scope_css.
    """

    def __init__(self, scope: str, css: str = "") -> None:
        self.scope = scope
        self.stylesheet = scope_css(css, scope) if css else ""
        self._blocks: list[Block] = []

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)

    def clear(self) -> None:
        self._blocks.clear()

    def append(self, *nodes: Markup) -> None:
        for node in nodes:
            self._blocks.append(Block("html", escape(node)))

    def add_chart(self, chart: Any) -> None:
        self._blocks.append(Block("chart", chart))

    def wrap(self, markup: Markup) -> Markup:
        """Wrap markup in the scope element, prefixed by the scoped stylesheet."""
        style = el("style", {}, [Markup(self.stylesheet)]) if self.stylesheet else Markup("")
        return style + el("div", {"class": self.scope}, [markup])

    def segments(self) -> Iterator[Block]:
        """Paintable blocks: consecutive HTML merged and wrapped, charts passed through."""
        pending: list[Markup] = []
        for block in self._blocks:
            if block.kind == "html":
                pending.append(block.body)
                continue
            if pending:
                yield Block("html", self.wrap(Markup("").join(pending)))
                pending = []
            yield block
        if pending:
            yield Block("html", self.wrap(Markup("").join(pending)))

    def to_html(self) -> Markup:
        """All HTML blocks as one wrapped fragment (charts omitted)."""
        return self.wrap(Markup("").join(b.body for b in self._blocks if b.kind == "html"))
