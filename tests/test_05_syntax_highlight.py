"""
Tests for SyntaxHighlightStream and the Pygments highlighter behind it.
"""
from __future__ import annotations

import pytest

from redwood.markdown.events import (
    CodeBlock, End, Html, Paragraph, Start, Text,
)
from redwood.markdown.highlight import create_highlighter, highlight_css
from redwood.markdown.streams import SyntaxHighlightStream


class FakeHighlighter:
    def __init__(self, language):
        self.language = language
        self.lines: list[str] = []

    def feed_line(self, line: str) -> None:
        self.lines.append(line)

    def finalize(self) -> str:
        return f"<{self.language}>" + "|".join(self.lines) + "</>"


class FakeFactory:
    def __init__(self):
        self.created: list[FakeHighlighter] = []

    def __call__(self, language):
        hl = FakeHighlighter(language)
        self.created.append(hl)
        return hl


def _run(events, factory=None):
    return list(SyntaxHighlightStream(events, factory or FakeFactory()))


# ── Stream ────────────────────────────────────────────────────────────────────

def test_block_text_is_replaced_by_highlighted_html():
    tag = CodeBlock("python")
    factory = FakeFactory()
    out = _run([Start(tag), Text("a = 1\nb = 2\n"), End(tag)], factory)
    assert out == [Start(tag), Html("<python>a = 1\n|b = 2\n</>"), End(tag)]
    assert factory.created[0].lines == ["a = 1\n", "b = 2\n"]


def test_lines_keep_their_terminators():
    tag = CodeBlock(None)
    factory = FakeFactory()
    _run([Start(tag), Text("one\r\ntwo\nthree"), End(tag)], factory)
    assert factory.created[0].lines == ["one\r\n", "two\n", "three"]


def test_empty_block_still_yields_one_html_event():
    tag = CodeBlock(None)
    assert _run([Start(tag), End(tag)]) == [Start(tag), Html("<None></>"), End(tag)]


def test_events_outside_blocks_pass_through():
    events = [Start(Paragraph()), Text("x = 1\n"), End(Paragraph())]
    assert _run(events) == events


def test_each_block_gets_a_fresh_highlighter():
    a, b = CodeBlock("c"), CodeBlock("rust")
    factory = FakeFactory()
    out = _run([Start(a), Text("1\n"), End(a), Text("between"), Start(b), Text("2\n"), End(b)], factory)
    assert [h.language for h in factory.created] == ["c", "rust"]
    assert out == [
        Start(a), Html("<c>1\n</>"), End(a),
        Text("between"),
        Start(b), Html("<rust>2\n</>"), End(b),
    ]


def test_every_block_has_one_html_followed_by_its_end_tag():
    tag = CodeBlock("sh")
    events = [Start(tag), Text("ls\n"), End(tag)] * 3
    out = _run(events)
    for i, event in enumerate(out):
        if isinstance(event, Start):
            assert isinstance(out[i + 1], Html)
            assert out[i + 2] == End(tag)


def test_unbalanced_end_tag_raises():
    tag = CodeBlock("python")
    with pytest.raises(RuntimeError):
        _run([Text("x"), End(tag)])


def test_end_tag_is_emitted_on_the_following_pull():
    tag = CodeBlock(None)

    def upstream():
        yield Start(tag)
        yield Text("x\n")
        yield End(tag)
        raise AssertionError("pulled too far")

    stream = SyntaxHighlightStream(upstream(), FakeFactory())
    assert next(stream) == Start(tag)
    assert isinstance(next(stream), Html)
    assert next(stream) == End(tag)


# ── Pygments highlighter ──────────────────────────────────────────────────────

def test_python_is_highlighted_with_spans():
    hl = create_highlighter("python")
    hl.feed_line("x = 1\n")
    html = hl.finalize()
    assert '<span class="n">x</span>' in html
    assert "<pre" not in html


def test_language_found_by_file_extension():
    hl = create_highlighter("pyw")
    hl.feed_line("def f(): pass\n")
    assert '<span class="k">def</span>' in hl.finalize()


def test_unknown_language_falls_back_to_plain_text():
    hl = create_highlighter("zzznotalang")
    hl.feed_line("a < b\n")
    assert hl.finalize() == "a &lt; b\n"


def test_no_language_is_plain_text():
    hl = create_highlighter(None)
    hl.feed_line("plain\n")
    assert hl.finalize() == "plain\n"


def test_no_lines_finalize_to_empty_string():
    assert create_highlighter("python").finalize() == ""


def test_stylesheet_is_scoped():
    css = highlight_css("friendly")
    assert ".highlight .k" in css
