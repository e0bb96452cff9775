#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Partition
=========
Split a string into alternating matched / unmatched spans of a regex.

    >>> [p.text for p in partition(r"\\d+", "ab12cd")]
    ['ab', '12', 'cd']

Concatenating the parts in order always gives back the source string.
Empty parts are never produced, and adjacent matches are coalesced, so two
consecutive parts never have the same ``matched`` flag.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Optional, Union


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Part:
    text: str
    matched: bool

    @classmethod
    def match(cls, text: str) -> "Part":
        return cls(text, True)

    @classmethod
    def no_match(cls, text: str) -> "Part":
        return cls(text, False)


# -----------------------------------------------------------------------------

def partition(pattern: Union[str, re.Pattern[str]], text: str) -> Iterator[Part]:
    """Lazily yield the :class:`Part` spans of *text* against *pattern*.

    Zero-width matches are ignored.  Each call returns a fresh iterator.
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    pos = 0                                    # end of the last emitted part
    pending: Optional[tuple[int, int]] = None  # match span not yet emitted

    for m in regex.finditer(text):
        start, end = m.span()
        if start == end:
            continue
        if pending is not None:
            if start == pending[1]:
                pending = (pending[0], end)
                continue
            yield Part.match(text[pending[0]:pending[1]])
            pos = pending[1]
        if start > pos:
            yield Part.no_match(text[pos:start])
        pending = (start, end)

    if pending is not None:
        yield Part.match(text[pending[0]:pending[1]])
        pos = pending[1]
    if pos < len(text):
        yield Part.no_match(text[pos:])


# -----------------------------------------------------------------------------
