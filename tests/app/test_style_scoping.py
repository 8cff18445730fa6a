from __future__ import annotations

from markupsafe import Markup

from app.ui.style import RenderContext, classes, el, scope_css


def test_scope_css_host_and_descendants() -> None:
    out = scope_css(":host { display:block; } .card, .row { gap: 4px; }", "dd-x")
    assert out == ".dd-x { display:block; }\n.dd-x .card, .dd-x .row { gap: 4px; }"


def test_scope_css_host_function_and_comments() -> None:
    out = scope_css("/* theme */ :host(.open) .title { color: red; }", "dd-x")
    assert out == ".dd-x.open .title { color: red; }"


def test_scope_css_media_is_scoped_recursively() -> None:
    out = scope_css("@media (max-width: 900px) { .grid { display: block; } }", "dd-x")
    assert out.startswith("@media (max-width: 900px) {")
    assert ".dd-x .grid { display: block; }" in out


def test_scope_css_keyframes_left_untouched() -> None:
    out = scope_css("@keyframes spin { from { opacity: 0; } to { opacity: 1; } }", "dd-x")
    assert out == "@keyframes spin { from { opacity: 0; } to { opacity: 1; } }"
    assert ".dd-x" not in out


def test_two_scopes_do_not_share_rules() -> None:
    a = scope_css(".card { color: red; }", "dd-a")
    b = scope_css(".card { color: blue; }", "dd-b")
    assert a.startswith(".dd-a .card")
    assert b.startswith(".dd-b .card")


def test_el_escapes_text_and_attributes() -> None:
    html = el("div", {"class": "x", "title": '"quoted"', "hidden": None}, ["<b>hi</b>", Markup("<i>ok</i>")])
    assert html == Markup('<div class="x" title="&#34;quoted&#34;">&lt;b&gt;hi&lt;/b&gt;<i>ok</i></div>')
    assert el("br") == Markup("<br>")


def test_classes_joins_enabled_flags() -> None:
    assert classes("item", selected=True, muted=False) == "item selected"
    assert classes(selected=False) == ""


def test_render_context_segments_merge_html_around_charts() -> None:
    ctx = RenderContext("dd-x", ".a { color: red; }")
    chart = object()
    ctx.append(el("p", {}, ["one"]), el("p", {}, ["two"]))
    ctx.add_chart(chart)
    ctx.append(el("p", {}, ["three"]))

    segments = list(ctx.segments())
    assert [s.kind for s in segments] == ["html", "chart", "html"]
    assert segments[1].body is chart
    first = str(segments[0].body)
    assert first.startswith("<style>.dd-x .a { color: red; }</style>")
    assert '<div class="dd-x"><p>one</p><p>two</p></div>' in first

    ctx.clear()
    assert ctx.blocks == ()
    assert list(ctx.segments()) == []


def test_scope_css_keeps_commas_inside_pseudo_class_arguments() -> None:
    out = scope_css("a:is(.b, .c), :host(.x) li:not(.d, .e) { color: red; }", "s")
    assert out == ".s a:is(.b, .c), .s.x li:not(.d, .e) { color: red; }"
