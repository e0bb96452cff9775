#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Markdown events
===============
The flat event stream that sits between the tokenizer and the HTML writer.

A document is a sequence of ``Start(tag)`` / ``End(tag)`` pairs with leaf
events (``Text``, ``Code``, ``Html``, breaks, ...) in between.  Every value
here is immutable and compares by value, so test expectations can be written
as plain lists of events.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Tags
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class LinkType(str, Enum):
    INLINE           = "inline"             # [text](url)
    REFERENCE        = "reference"          # [text][ref] / [ref] with a definition
    AUTOLINK         = "autolink"           # <https://...> or a bare URL
    EMAIL            = "email"              # <user@example.com>
    SHORTCUT_UNKNOWN = "shortcut_unknown"   # [label] with no matching definition


@dataclass(frozen=True)
class Paragraph:
    pass


@dataclass(frozen=True)
class Heading:
    level: int


@dataclass(frozen=True)
class BlockQuote:
    pass


@dataclass(frozen=True)
class CodeBlock:
    language: Optional[str] = None


@dataclass(frozen=True)
class List:
    start: Optional[int] = None     # None for bullet lists


@dataclass(frozen=True)
class Item:
    pass


@dataclass(frozen=True)
class Table:
    pass


@dataclass(frozen=True)
class TableHead:
    pass


@dataclass(frozen=True)
class TableBody:
    pass


@dataclass(frozen=True)
class TableRow:
    pass


@dataclass(frozen=True)
class TableCell:
    align: Optional[str] = None
    head: bool = False


@dataclass(frozen=True)
class Emphasis:
    pass


@dataclass(frozen=True)
class Strong:
    pass


@dataclass(frozen=True)
class Strikethrough:
    pass


@dataclass(frozen=True)
class Link:
    link_type: LinkType
    dest_url: str
    title: str = ""


@dataclass(frozen=True)
class Image:
    link_type: LinkType
    dest_url: str
    title: str = ""


Tag = Union[
    Paragraph, Heading, BlockQuote, CodeBlock, List, Item,
    Table, TableHead, TableBody, TableRow, TableCell,
    Emphasis, Strong, Strikethrough, Link, Image,
]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Events
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class Start:
    tag: Tag


@dataclass(frozen=True)
class End:
    tag: Tag


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class Code:
    """Inline code span."""
    content: str


@dataclass(frozen=True)
class Html:
    """Raw HTML, written out verbatim."""
    content: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class Rule:
    pass


@dataclass(frozen=True)
class TaskListMarker:
    checked: bool


Event = Union[Start, End, Text, Code, Html, SoftBreak, HardBreak, Rule, TaskListMarker]


# -----------------------------------------------------------------------------

def is_start(event: Event, tag_type: type | tuple[type, ...]) -> bool:
    return isinstance(event, Start) and isinstance(event.tag, tag_type)


def is_end(event: Event, tag_type: type | tuple[type, ...]) -> bool:
    return isinstance(event, End) and isinstance(event.tag, tag_type)


# -----------------------------------------------------------------------------
