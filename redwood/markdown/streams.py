#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Event stream filters
====================
Lazy iterator stages that rewrite the markdown event stream between the
tokenizer and the HTML writer.

  TextMergeStream          — coalesce runs of Text events into one
  LinkHighlightStream      — turn bare http(s) URLs in text into links
  UnknownRefHandlingStream — hand [label] references with no definition to a
                             resolver callback
  SyntaxHighlightStream    — replace fenced code text with highlighted HTML

Each stage pulls from its upstream only when its own consumer asks for the
next event.  Stages that emit more events than they consume keep them in a
small FIFO queue which is always drained before the next upstream pull.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from collections import deque
from collections.abc import Callable, Iterable
from typing import Deque, Optional

from .events import (
    CodeBlock, End, Event, Html, Image, Link, LinkType, Start, Text,
    is_end, is_start,
)
from .highlight import Highlighter, create_highlighter
from .partition import partition


log = logging.getLogger(__name__)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Text merging
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TextMergeStream:
    """Merge consecutive ``Text`` events into a single event.

    The tokenizer is free to split a text run into several fragments (around
    brackets, emphasis markers, escapes ...).  Later stages pattern-match on
    whole runs, so they must see one event per run.  A run whose merged
    content is empty is dropped.
    """

    def __init__(self, events: Iterable[Event]) -> None:
        self._events = iter(events)
        self._lookahead: Optional[Event] = None

    def __iter__(self) -> "TextMergeStream":
        return self

    def __next__(self) -> Event:
        while True:
            if self._lookahead is not None:
                event, self._lookahead = self._lookahead, None
            else:
                event = next(self._events)

            if not isinstance(event, Text):
                return event

            chunks = [event.content]
            for following in self._events:
                if isinstance(following, Text):
                    chunks.append(following.content)
                else:
                    self._lookahead = following
                    break

            merged = "".join(chunks)
            if merged:
                return Text(merged) if len(chunks) > 1 else event


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Bare URL highlighting
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

# Unreserved and reserved characters of RFC 3986 (sections 2.2 and 2.3):
#   A-Za-z0-9 - _ . ~ : / ? # [ ] @ ! $ & ' ( ) * + , ; =
URL_RE = re.compile(
    r"(?P<scheme>https?)://(?P<rest>[A-Za-z0-9\-_.~:/?#\[\]@!$&'()*+,;=]+)"
)


class LinkHighlightStream:
    """Replace bare URLs inside ``Text`` events with autolinks.

    Text inside an existing link (or image) is passed through untouched so
    links are never nested or duplicated.  Expects merged text: a URL split
    over two ``Text`` events would be cut in half.
    """

    def __init__(self, events: Iterable[Event], pattern: re.Pattern[str] = URL_RE) -> None:
        self._events = iter(events)
        self._pattern = pattern
        self._queue: Deque[Event] = deque()
        self._link_depth = 0

    @property
    def inside_link(self) -> bool:
        return self._link_depth > 0

    def __iter__(self) -> "LinkHighlightStream":
        return self

    def __next__(self) -> Event:
        if self._queue:
            return self._queue.popleft()

        event = next(self._events)

        if is_start(event, (Link, Image)):
            self._link_depth += 1
            return event
        if is_end(event, (Link, Image)):
            self._link_depth = max(0, self._link_depth - 1)
            return event
        if self.inside_link or not isinstance(event, Text):
            return event

        parts = list(partition(self._pattern, event.content))
        if not parts:
            return event
        if len(parts) == 1 and not parts[0].matched:
            return event

        for part in parts:
            if part.matched:
                tag = Link(LinkType.AUTOLINK, part.text, "")
                self._queue.extend((Start(tag), Text(part.text), End(tag)))
            else:
                self._queue.append(Text(part.text))
        return self._queue.popleft()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Unknown shortcut references
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

# resolver(queue, dest_url, title, label) pushes replacement events onto queue
UnknownRefResolver = Callable[[Deque[Event], str, str, str], None]


def literal_ref_resolver(queue: Deque[Event], dest_url: str, title: str, label: str) -> None:
    """Emit the reference back as the bracketed text it was written as."""
    queue.append(Text(f"[{label}]"))


def _is_unknown_ref(event: Event, cls: type) -> bool:
    return (
        isinstance(event, cls)
        and isinstance(event.tag, Link)
        and event.tag.link_type is LinkType.SHORTCUT_UNKNOWN
    )


class UnknownRefHandlingStream:
    """Rewrite ``[label]`` references the tokenizer could not resolve.

    Looks for ``Start(Link(shortcut_unknown))``, ``Text(label)``,
    ``End(Link(shortcut_unknown))`` and lets *resolver* decide what to emit
    instead.  Anything else between the start and the end tag is discarded.
    A reference whose body does not start with text is dropped without
    calling the resolver.
    """

    def __init__(self, events: Iterable[Event], resolver: UnknownRefResolver = literal_ref_resolver) -> None:
        self._events = iter(events)
        self._resolver = resolver
        self._queue: Deque[Event] = deque()

    def __iter__(self) -> "UnknownRefHandlingStream":
        return self

    def __next__(self) -> Event:
        while True:
            if self._queue:
                return self._queue.popleft()

            event = next(self._events)
            if not _is_unknown_ref(event, Start):
                return event

            body = next(self._events, None)
            if body is None or _is_unknown_ref(body, End):
                log.debug("Dropping empty shortcut reference")
                continue

            if isinstance(body, Text):
                link = event.tag
                self._resolver(self._queue, link.dest_url, link.title, body.content)
            else:
                log.debug("Dropping shortcut reference without a text label: %r", body)
            self._skip_to_end()

    def _skip_to_end(self) -> None:
        for event in self._events:
            if _is_unknown_ref(event, End):
                return


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Code block highlighting
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

HighlighterFactory = Callable[[Optional[str]], Highlighter]


class SyntaxHighlightStream:
    """Feed code block text into a highlighter and emit its HTML at block end.

    ``Start(CodeBlock)`` opens a highlighter and is passed through.  Text
    inside the block is consumed line by line.  At ``End(CodeBlock)`` the
    highlighted fragment is emitted as one ``Html`` event, immediately
    followed by the end tag.  Text must be merged beforehand so no line
    reaches the highlighter in pieces.
    """

    def __init__(
        self,
        events: Iterable[Event],
        highlighter_factory: HighlighterFactory = create_highlighter,
    ) -> None:
        self._events = iter(events)
        self._factory = highlighter_factory
        self._highlighter: Optional[Highlighter] = None
        self._pending: Optional[Event] = None

    def __iter__(self) -> "SyntaxHighlightStream":
        return self

    def __next__(self) -> Event:
        if self._pending is not None:
            event, self._pending = self._pending, None
            return event

        while True:
            event = next(self._events)

            if is_start(event, CodeBlock):
                self._highlighter = self._factory(event.tag.language)
                return event

            if is_end(event, CodeBlock):
                highlighter, self._highlighter = self._highlighter, None
                if highlighter is None:
                    raise RuntimeError("code block end tag without a matching start tag")
                self._pending = event
                return Html(highlighter.finalize())

            if self._highlighter is not None and isinstance(event, Text):
                for line in event.content.splitlines(keepends=True):
                    self._highlighter.feed_line(line)
                continue

            return event


# -----------------------------------------------------------------------------
