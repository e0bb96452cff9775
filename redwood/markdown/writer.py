#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
HTML writer
===========
Serialises a markdown event stream to HTML.

Text is escaped, ``Html`` events are written verbatim, and link / image
URLs are vetted with mistune's ``safe_url`` so ``javascript:`` and friends
turn into ``#harmful-link``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable, Iterator

from mistune import HTMLRenderer, escape

from .events import (
    BlockQuote, Code, CodeBlock, Emphasis, End, Event, HardBreak, Heading,
    Html, Image, Item, Link, List, Paragraph, Rule, SoftBreak, Start,
    Strikethrough, Strong, Table, TableBody, TableCell, TableHead, TableRow,
    TaskListMarker, Text,
)
from .highlight import CSS_CLASS


_url_vetter = HTMLRenderer(escape=False)


# -----------------------------------------------------------------------------

def _attr(name: str, value: str) -> str:
    return f' {name}="{escape(value)}"'


def _cell_open(cell: TableCell) -> str:
    tag = "th" if cell.head else "td"
    if cell.align:
        return f'<{tag} style="text-align:{escape(cell.align)}">'
    return f"<{tag}>"


def _start_tag(tag) -> str:
    if isinstance(tag, Paragraph):
        return "<p>"
    if isinstance(tag, Heading):
        return f"<h{tag.level}>"
    if isinstance(tag, BlockQuote):
        return "<blockquote>\n"
    if isinstance(tag, CodeBlock):
        lang = _attr("class", f"language-{tag.language}") if tag.language else ""
        return f'<pre class="{CSS_CLASS}"><code{lang}>'
    if isinstance(tag, List):
        if tag.start is None:
            return "<ul>\n"
        if tag.start == 1:
            return "<ol>\n"
        return f'<ol start="{tag.start}">\n'
    if isinstance(tag, Item):
        return "<li>"
    if isinstance(tag, Table):
        return "<table>\n"
    if isinstance(tag, TableHead):
        return "<thead>\n<tr>\n"
    if isinstance(tag, TableBody):
        return "<tbody>\n"
    if isinstance(tag, TableRow):
        return "<tr>\n"
    if isinstance(tag, TableCell):
        return _cell_open(tag)
    if isinstance(tag, Emphasis):
        return "<em>"
    if isinstance(tag, Strong):
        return "<strong>"
    if isinstance(tag, Strikethrough):
        return "<del>"
    if isinstance(tag, Link):
        title = _attr("title", tag.title) if tag.title else ""
        return f'<a href="{_url_vetter.safe_url(tag.dest_url)}"{title}>'
    raise ValueError(f"Unsupported start tag: {tag!r}")


def _end_tag(tag) -> str:
    if isinstance(tag, Paragraph):
        return "</p>\n"
    if isinstance(tag, Heading):
        return f"</h{tag.level}>\n"
    if isinstance(tag, BlockQuote):
        return "</blockquote>\n"
    if isinstance(tag, CodeBlock):
        return "</code></pre>\n"
    if isinstance(tag, List):
        return "</ul>\n" if tag.start is None else "</ol>\n"
    if isinstance(tag, Item):
        return "</li>\n"
    if isinstance(tag, Table):
        return "</table>\n"
    if isinstance(tag, TableHead):
        return "</tr>\n</thead>\n"
    if isinstance(tag, TableBody):
        return "</tbody>\n"
    if isinstance(tag, TableRow):
        return "</tr>\n"
    if isinstance(tag, TableCell):
        return "</th>\n" if tag.head else "</td>\n"
    if isinstance(tag, Emphasis):
        return "</em>"
    if isinstance(tag, Strong):
        return "</strong>"
    if isinstance(tag, Strikethrough):
        return "</del>"
    if isinstance(tag, Link):
        return "</a>"
    raise ValueError(f"Unsupported end tag: {tag!r}")


# -----------------------------------------------------------------------------

def _image_alt(events: Iterator[Event]) -> str:
    """Consume events up to the image's end tag, returning their plain text."""
    parts: list[str] = []
    depth = 1
    for event in events:
        if isinstance(event, Start) and isinstance(event.tag, Image):
            depth += 1
        elif isinstance(event, End) and isinstance(event.tag, Image):
            depth -= 1
            if depth == 0:
                break
        elif isinstance(event, (Text, Code, Html)):
            parts.append(event.content)
        elif isinstance(event, (SoftBreak, HardBreak)):
            parts.append(" ")
    return "".join(parts)


def iter_html(events: Iterable[Event]) -> Iterator[str]:
    """Yield HTML fragments for *events* as they are pulled."""
    stream = iter(events)
    for event in stream:
        if isinstance(event, Text):
            yield escape(event.content)
        elif isinstance(event, Start):
            if isinstance(event.tag, Image):
                tag = event.tag
                alt = _image_alt(stream)
                title = _attr("title", tag.title) if tag.title else ""
                yield f'<img src="{_url_vetter.safe_url(tag.dest_url)}"{_attr("alt", alt)}{title} />'
            else:
                yield _start_tag(event.tag)
        elif isinstance(event, End):
            yield _end_tag(event.tag)
        elif isinstance(event, Code):
            yield f"<code>{escape(event.content)}</code>"
        elif isinstance(event, Html):
            yield event.content
        elif isinstance(event, SoftBreak):
            yield "\n"
        elif isinstance(event, HardBreak):
            yield "<br />\n"
        elif isinstance(event, Rule):
            yield "<hr />\n"
        elif isinstance(event, TaskListMarker):
            checked = " checked" if event.checked else ""
            yield f'<input type="checkbox" disabled{checked} /> '


def push_html(events: Iterable[Event]) -> str:
    return "".join(iter_html(events))


# -----------------------------------------------------------------------------
