#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Markdown tokenizer
==================
Parses markdown with mistune (AST mode) and flattens the nested token tree
into the flat event stream defined in :mod:`redwood.markdown.events`.

Enabled syntax: CommonMark plus tables, ``~~strikethrough~~`` and
``- [ ]`` task lists.

References written as ``[label]`` with no matching ``[label]: url``
definition are surfaced as ``shortcut_unknown`` links (empty destination and
title, body is the raw label) instead of being left as literal brackets.
Deciding what they mean is up to ``UnknownRefHandlingStream``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from typing import Any, Optional

import mistune
from mistune.plugins.formatting import strikethrough
from mistune.plugins.table import table
from mistune.plugins.task_lists import task_lists
from mistune.util import unescape, unikey

from .events import (
    BlockQuote, Code, CodeBlock, Emphasis, End, Event, HardBreak, Heading,
    Html, Image, Item, Link, LinkType, List, Paragraph, Rule, SoftBreak,
    Start, Strikethrough, Strong, Table, TableBody, TableCell, TableHead,
    TableRow, TaskListMarker, Text,
)


log = logging.getLogger(__name__)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Shortcut reference plugin
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

# [label] not followed by "(" or "[". Labels may not be blank or contain
# brackets, backslashes or newlines.
SHORTCUT_REF = r"\[[^\s\\\[\]][^\\\[\]\n]*\](?![(\[])"

_LINK_START = re.compile(r"!?\[")


def parse_shortcut_ref(inline, m: re.Match, state) -> Optional[int]:
    label = m.group(0)[1:-1]
    ref_links = state.env.get("ref_links") or {}
    if state.in_link or unikey(label) in ref_links:
        # a real reference (or nested brackets), let mistune's link rule have it
        return inline.parse_link(_LINK_START.match(state.src, m.start()), state)

    state.append_token({"type": "shortcut_unknown", "raw": label})
    return m.end()


def shortcut_refs(md: mistune.Markdown) -> None:
    """mistune plugin: surface undefined ``[label]`` references as tokens."""
    md.inline.register("shortcut_ref", SHORTCUT_REF, parse_shortcut_ref, before="link")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Parser
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def make_parser() -> mistune.Markdown:
    return mistune.create_markdown(
        renderer=None,
        plugins=[table, strikethrough, task_lists, shortcut_refs],
    )


_parser: Optional[mistune.Markdown] = None


def _get_parser() -> mistune.Markdown:
    global _parser
    if _parser is None:
        _parser = make_parser()
    return _parser


# -----------------------------------------------------------------------------

def iter_events(
    source: str,
    parser: Optional[mistune.Markdown] = None,
    escape_html: bool = False,
) -> Iterator[Event]:
    """Parse *source* and yield its events in document order."""
    tokens, _state = (parser or _get_parser()).parse(source)
    return _flatten(tokens, escape_html)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# AST → events
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_SIMPLE_TAGS = {
    "paragraph":     Paragraph(),
    "block_quote":   BlockQuote(),
    "list_item":     Item(),
    "table":         Table(),
    "table_head":    TableHead(),
    "table_body":    TableBody(),
    "table_row":     TableRow(),
    "emphasis":      Emphasis(),
    "strong":        Strong(),
    "strikethrough": Strikethrough(),
}


def _wrap(tag, children: Iterable[dict[str, Any]], escape_html: bool) -> Iterator[Event]:
    yield Start(tag)
    yield from _flatten(children, escape_html)
    yield End(tag)


def _link_type(token: dict[str, Any]) -> LinkType:
    if "ref" in token:
        return LinkType.REFERENCE
    url = token["attrs"].get("url", "")
    children = token.get("children") or []
    if len(children) == 1 and children[0].get("type") == "text":
        text = children[0].get("raw", "")
        if url == f"mailto:{text}":
            return LinkType.EMAIL
        if url == text:
            return LinkType.AUTOLINK
    return LinkType.INLINE


def _code_language(token: dict[str, Any]) -> Optional[str]:
    info = (token.get("attrs") or {}).get("info") or ""
    words = info.split()
    return words[0] if words else None


def _flatten(tokens: Iterable[dict[str, Any]], escape_html: bool) -> Iterator[Event]:
    for token in tokens:
        kind = token["type"]
        attrs = token.get("attrs") or {}

        if kind == "text":
            # mistune leaves character references in text for its own renderer
            yield Text(unescape(token["raw"]))
        elif kind in _SIMPLE_TAGS:
            yield from _wrap(_SIMPLE_TAGS[kind], token.get("children", []), escape_html)
        elif kind == "block_text":
            yield from _flatten(token.get("children", []), escape_html)
        elif kind == "heading":
            yield from _wrap(Heading(attrs["level"]), token.get("children", []), escape_html)
        elif kind == "block_code":
            tag = CodeBlock(_code_language(token))
            yield Start(tag)
            if token["raw"]:
                yield Text(token["raw"])
            yield End(tag)
        elif kind == "list":
            start = attrs.get("start", 1) if attrs.get("ordered") else None
            yield from _wrap(List(start), token.get("children", []), escape_html)
        elif kind == "task_list_item":
            yield Start(Item())
            yield TaskListMarker(bool(attrs.get("checked")))
            yield from _flatten(token.get("children", []), escape_html)
            yield End(Item())
        elif kind == "table_cell":
            tag = TableCell(attrs.get("align"), bool(attrs.get("head")))
            yield from _wrap(tag, token.get("children", []), escape_html)
        elif kind == "link":
            tag = Link(_link_type(token), attrs.get("url", ""), attrs.get("title") or "")
            yield from _wrap(tag, token.get("children", []), escape_html)
        elif kind == "image":
            tag = Image(LinkType.INLINE, attrs.get("url", ""), attrs.get("title") or "")
            yield from _wrap(tag, token.get("children", []), escape_html)
        elif kind == "shortcut_unknown":
            tag = Link(LinkType.SHORTCUT_UNKNOWN, "", "")
            yield Start(tag)
            yield Text(token["raw"])
            yield End(tag)
        elif kind == "codespan":
            yield Code(token["raw"])
        elif kind == "linebreak":
            yield HardBreak()
        elif kind == "softbreak":
            yield SoftBreak()
        elif kind == "thematic_break":
            yield Rule()
        elif kind in ("inline_html", "block_html"):
            raw = token["raw"]
            if kind == "block_html" and not raw.endswith("\n"):
                raw += "\n"
            yield Text(raw) if escape_html else Html(raw)
        elif kind == "blank_line":
            continue
        elif "children" in token:
            log.debug("Unhandled token %r, flattening its children", kind)
            yield from _flatten(token["children"], escape_html)
        elif "raw" in token:
            log.debug("Unhandled token %r, emitting it as text", kind)
            yield Text(token["raw"])


# -----------------------------------------------------------------------------
