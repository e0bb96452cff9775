#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Code highlighter
================
Line-fed Pygments highlighter used by ``SyntaxHighlightStream``.

    hl = create_highlighter("python")
    hl.feed_line("x = 1\\n")
    html = hl.finalize()      # class-based <span> markup, no <pre> wrapper

The surrounding ``<pre><code>`` comes from the code block tags themselves,
so the stylesheet from :func:`highlight_css` is scoped to ``.highlight``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, get_lexer_for_filename
from pygments.util import ClassNotFound


log = logging.getLogger(__name__)

CSS_CLASS = "highlight"


# -----------------------------------------------------------------------------

def _find_lexer(language: Optional[str]) -> Lexer:
    """Resolve a fence token to a lexer: alias, then file extension, then plain text."""
    token = (language or "").strip()
    if not token:
        return TextLexer(stripnl=False)
    try:
        return get_lexer_by_name(token, stripnl=False)
    except ClassNotFound:
        pass
    try:
        return get_lexer_for_filename(f"code.{token}", stripnl=False)
    except ClassNotFound:
        log.debug("No lexer for %r, falling back to plain text", token)
        return TextLexer(stripnl=False)


# -----------------------------------------------------------------------------

class Highlighter:
    """Accumulates the lines of one code block and renders them on finalize."""

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self._lines: list[str] = []

    def feed_line(self, line: str) -> None:
        self._lines.append(line)

    def finalize(self) -> str:
        if not self._lines:
            return ""
        formatter = HtmlFormatter(nowrap=True)
        return highlight("".join(self._lines), self.lexer, formatter)


def create_highlighter(language: Optional[str] = None) -> Highlighter:
    return Highlighter(_find_lexer(language))


# -----------------------------------------------------------------------------

@lru_cache
def highlight_css(style: str = "friendly") -> str:
    """Stylesheet for the token classes emitted by :class:`Highlighter`."""
    return HtmlFormatter(style=style).get_style_defs(f".{CSS_CLASS}")


# -----------------------------------------------------------------------------
