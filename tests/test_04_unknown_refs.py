"""
Tests for UnknownRefHandlingStream and the article reference resolver.
"""
from __future__ import annotations

from collections import deque

from redwood.markdown.events import (
    Emphasis, End, Link, LinkType, Paragraph, SoftBreak, Start, Text,
)
from redwood.markdown.streams import UnknownRefHandlingStream, literal_ref_resolver
from redwood.services.renderer import ArticleRefResolver


UNKNOWN = Link(LinkType.SHORTCUT_UNKNOWN, "", "")


def _ref(label: str) -> list:
    return [Start(UNKNOWN), Text(label), End(UNKNOWN)]


class FakeStore:
    def __init__(self, titles: dict[int, str]):
        self.titles = titles
        self.calls: list[int] = []

    def lookup_title(self, article_id: int):
        self.calls.append(article_id)
        return self.titles.get(article_id)


# ── Stream ────────────────────────────────────────────────────────────────────

def test_default_resolver_writes_label_back():
    events = [Start(Paragraph()), Text("see "), *_ref("nowhere"), End(Paragraph())]
    assert list(UnknownRefHandlingStream(events)) == [
        Start(Paragraph()), Text("see "), Text("[nowhere]"), End(Paragraph()),
    ]


def test_resolver_receives_queue_and_label():
    seen = []

    def resolver(queue, dest_url, title, label):
        seen.append((dest_url, title, label))
        queue.append(Text("A"))
        queue.append(Text("B"))

    out = list(UnknownRefHandlingStream([*_ref("x"), Text("after")], resolver))
    assert seen == [("", "", "x")]
    assert out == [Text("A"), Text("B"), Text("after")]


def test_other_links_are_not_touched():
    tag = Link(LinkType.INLINE, "https://example.com", "")
    events = [Start(tag), Text("label"), End(tag)]
    assert list(UnknownRefHandlingStream(events)) == events


def test_extra_body_events_are_discarded():
    events = [
        Start(UNKNOWN), Text("label"), Start(Emphasis()), Text("junk"), End(Emphasis()), End(UNKNOWN),
        Text("after"),
    ]
    assert list(UnknownRefHandlingStream(events)) == [Text("[label]"), Text("after")]


def test_body_without_text_skips_the_resolver():
    calls = []

    def resolver(queue, dest_url, title, label):
        calls.append(label)

    events = [Start(UNKNOWN), SoftBreak(), Text("x"), End(UNKNOWN), Text("after")]
    assert list(UnknownRefHandlingStream(events, resolver)) == [Text("after")]
    assert calls == []


def test_empty_reference_is_swallowed():
    events = [Start(UNKNOWN), End(UNKNOWN), Text("after")]
    assert list(UnknownRefHandlingStream(events)) == [Text("after")]


def test_missing_end_tag_stops_at_exhaustion():
    events = [Text("before"), Start(UNKNOWN), Text("label"), Text("lost")]
    assert list(UnknownRefHandlingStream(events)) == [Text("before"), Text("[label]")]


def test_start_at_end_of_stream():
    assert list(UnknownRefHandlingStream([Start(UNKNOWN)])) == []


def test_literal_ref_resolver():
    queue = deque()
    literal_ref_resolver(queue, "", "", "article:5")
    assert list(queue) == [Text("[article:5]")]


# ── Article references ────────────────────────────────────────────────────────

def _resolve(store, label, base_url="https://wiki.example"):
    queue = deque()
    ArticleRefResolver(store, base_url)(queue, "", "", label)
    return list(queue)


def test_article_ref_with_display_text():
    out = _resolve(FakeStore({5: "Redwood"}), "article:5|Custom Title")
    link = Link(LinkType.INLINE, "https://wiki.example/article/5/redwood", "Redwood")
    assert out == [Start(link), Text("Custom Title"), End(link)]


def test_article_ref_without_display_text_uses_title():
    out = _resolve(FakeStore({12: "Giant Sequoia"}), "article:12")
    link = Link(LinkType.INLINE, "https://wiki.example/article/12/giant-sequoia", "Giant Sequoia")
    assert out == [Start(link), Text("Giant Sequoia"), End(link)]


def test_article_ref_empty_display_text_uses_title():
    out = _resolve(FakeStore({5: "Redwood"}), "article:5|")
    assert out[1] == Text("Redwood")


def test_display_text_keeps_later_pipes():
    out = _resolve(FakeStore({5: "Redwood"}), "article:5|a|b")
    assert out[1] == Text("a|b")


def test_missing_article_falls_back_to_literal():
    store = FakeStore({})
    assert _resolve(store, "article:5|Custom Title") == [Text("[article:5|Custom Title]")]
    assert store.calls == [5]


def test_unrecognised_labels_are_not_looked_up():
    store = FakeStore({5: "Redwood"})
    for label in ("article:", "article:x", "Article:5", "article:5x", "see also", "article: 5"):
        assert _resolve(store, label) == [Text(f"[{label}]")]
    assert store.calls == []


def test_resolver_in_stream():
    store = FakeStore({5: "Redwood"})
    events = [Text("see "), *_ref("article:5|Custom Title"), Text(".")]
    out = list(UnknownRefHandlingStream(events, ArticleRefResolver(store, "")))
    link = Link(LinkType.INLINE, "/article/5/redwood", "Redwood")
    assert out == [Text("see "), Start(link), Text("Custom Title"), End(link), Text(".")]


def test_overlong_id_is_written_back_literally():
    store = FakeStore({5: "Redwood"})
    for digits in ("1" * 20, "9" * 5000):
        label = f"article:{digits}"
        assert _resolve(store, label) == [Text(f"[{label}]")]
    assert store.calls == []


def test_overlong_id_does_not_break_the_render():
    label = "article:" + "9" * 5000
    events = [Text("see "), *_ref(label), Text(".")]
    out = list(UnknownRefHandlingStream(events, ArticleRefResolver(FakeStore({}), "")))
    assert out == [Text("see "), Text(f"[{label}]"), Text(".")]


def test_non_ascii_digits_are_not_ids():
    store = FakeStore({5: "Redwood"})
    assert _resolve(store, "article:٥") == [Text("[article:٥]")]
    assert store.calls == []
