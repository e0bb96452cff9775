#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Markup renderer
===============
Renders article text (markdown) to HTML through the event pipeline in
``redwood.markdown``.

Shortcut references the document does not define (``[label]``) are handed to
a resolver.  ``ArticleRefResolver`` turns ``[article:12]`` and
``[article:12|display text]`` into links to other articles, looking the title
up through an ``ArticleStore``; anything else is written back literally.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from typing import Deque, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from redwood.core.config import get_settings
from redwood.markdown import UnknownRefResolver, markdown_to_html
from redwood.markdown.events import End, Event, Link, LinkType, Start, Text
from redwood.models import Article


log = logging.getLogger(__name__)


# Bump this whenever the render pipeline changes its output.
RENDERER_VERSION = 1

# Ids are ASCII digits and at most 19 of them; anything longer cannot be an
# INTEGER primary key.
_ARTICLE_REF_RE = re.compile(r"article:(?P<id>[0-9]{1,19})(?:\|(?P<display>.*))?", re.DOTALL)

# SQLite INTEGER range; larger ids cannot exist and would overflow the driver.
_MAX_ARTICLE_ID = 2 ** 63 - 1


# -----------------------------------------------------------------------------

def _slugify(text: str) -> str:
    """Convert an article title to a URL slug."""
    text = text.strip().lower()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text.strip("-")


def article_url(base_url: str, article_id: int, title: str) -> str:
    slug = _slugify(title)
    url = f"{base_url.rstrip('/')}/article/{article_id}"
    return f"{url}/{slug}" if slug else url


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Article lookups
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ArticleStore(Protocol):
    def lookup_title(self, article_id: int) -> Optional[str]:
        ...


class SessionArticleStore:
    """Title lookups over a synchronous SQLAlchemy session.

    Database failures are logged and reported as "not found" so a broken
    lookup degrades to a literal ``[article:N]`` instead of failing the page.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def lookup_title(self, article_id: int) -> Optional[str]:
        if article_id < 1 or article_id > _MAX_ARTICLE_ID:
            return None
        try:
            result = self.session.execute(
                select(Article.title).where(Article.id == article_id)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            log.warning("Title lookup for article #%d failed: %s", article_id, exc)
            return None


# -----------------------------------------------------------------------------

class ArticleRefResolver:
    """Resolver for ``[article:<id>]`` and ``[article:<id>|<display text>]``."""

    def __init__(self, store: ArticleStore, base_url: str = "") -> None:
        self.store = store
        self.base_url = base_url

    def __call__(self, queue: Deque[Event], dest_url: str, title: str, label: str) -> None:
        m = _ARTICLE_REF_RE.fullmatch(label)
        article_title = self.store.lookup_title(int(m.group("id"))) if m else None

        if article_title is None:
            log.debug("Unresolved reference [%s]", label)
            queue.append(Text(f"[{label}]"))
            return

        article_id = int(m.group("id"))
        display = m.group("display") or article_title
        link = Link(LinkType.INLINE, article_url(self.base_url, article_id, article_title), article_title)
        queue.append(Start(link))
        queue.append(Text(display))
        queue.append(End(link))


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Public render function
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def render(content: str, resolver: Optional[UnknownRefResolver] = None) -> str:
    """
    Render markdown *content* to HTML.

    Parameters
    ----------
    content  : raw markdown source
    resolver : handles shortcut references the document leaves undefined;
               defaults to writing them back as literal ``[label]`` text
    """
    settings = get_settings()
    return markdown_to_html(content, resolver, escape_html=settings.markdown_escape_html)


def render_with_session(session: Session, content: str) -> str:
    """Render *content*, resolving article references through *session*.

    Meant for ``AsyncSession.run_sync`` which supplies the synchronous session.
    """
    resolver = ArticleRefResolver(SessionArticleStore(session), get_settings().base_url)
    return render(content, resolver)


# -----------------------------------------------------------------------------
