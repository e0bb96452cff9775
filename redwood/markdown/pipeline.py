#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Render pipeline
===============
Chains the stream filters between the tokenizer and the HTML writer:

    tokenizer
      → UnknownRefHandlingStream   (needs the untouched start/text/end triple)
      → TextMergeStream            (whole text runs from here on)
      → SyntaxHighlightStream      (needs complete lines)
      → LinkHighlightStream        (needs whole runs, must not see code text)
      → HTML writer

The order is load-bearing; see the individual stages.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Optional

from .events import Event
from .highlight import create_highlighter
from .streams import (
    HighlighterFactory,
    LinkHighlightStream,
    SyntaxHighlightStream,
    TextMergeStream,
    UnknownRefHandlingStream,
    UnknownRefResolver,
    literal_ref_resolver,
)
from .tokenizer import iter_events
from .writer import push_html


# -----------------------------------------------------------------------------

def build_pipeline(
    events: Iterable[Event],
    resolver: UnknownRefResolver = literal_ref_resolver,
    highlighter_factory: HighlighterFactory = create_highlighter,
) -> Iterator[Event]:
    stream: Iterator[Event] = UnknownRefHandlingStream(events, resolver)
    stream = TextMergeStream(stream)
    stream = SyntaxHighlightStream(stream, highlighter_factory)
    return LinkHighlightStream(stream)


# -----------------------------------------------------------------------------

def markdown_to_html(
    source: str,
    resolver: Optional[UnknownRefResolver] = None,
    escape_html: bool = False,
) -> str:
    events = iter_events(source, escape_html=escape_html)
    return push_html(build_pipeline(events, resolver or literal_ref_resolver))


# -----------------------------------------------------------------------------
