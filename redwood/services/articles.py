#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Article service
===============
Create / read / update / search for articles.

Saving an article bumps its ``revision``; earlier text is not kept.
Rendering runs inside ``AsyncSession.run_sync`` so the reference resolver can
look titles up synchronously while the pipeline is being drained.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re

from fastapi import HTTPException, status
from mistune import escape
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from redwood.markdown import partition
from redwood.models import Article
from redwood.schemas import ArticleCreate, ArticleUpdate
from .renderer import render_with_session


log = logging.getLogger(__name__)


EMPTY_ARTICLE_HTML = '<p class="empty-article">[This article is empty.]</p>\n'

_MATCH_ORDER = {"exact": 0, "title": 1, "text": 2}


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def highlight_matches(pattern: re.Pattern[str], text: str) -> tuple[str, bool]:
    """Escape *text*, wrapping every match of *pattern* in ``<mark>``.

    Returns the HTML and whether anything matched.
    """
    out = []
    matched = False
    for part in partition(pattern, text):
        if part.matched:
            matched = True
            out.append(f"<mark>{escape(part.text)}</mark>")
        else:
            out.append(escape(part.text))
    return "".join(out), matched


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CRUD
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

async def create_article(db: AsyncSession, data: ArticleCreate) -> Article:
    article = Article(title=data.title, text=data.text, revision=1)
    db.add(article)
    await db.flush()
    await db.refresh(article)
    log.info("Created article #%d %r", article.id, article.title)
    return article


# -----------------------------------------------------------------------------

async def get_article(db: AsyncSession, article_id: int) -> Article:
    article = await db.get(Article, article_id)
    if not article:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Article #{article_id} not found",
        )
    return article


# -----------------------------------------------------------------------------

async def list_articles(
    db: AsyncSession,
    skip: int = 0,
    limit: int = 100,
) -> list[Article]:
    """Return articles ordered by title."""
    result = await db.execute(
        select(Article)
        .order_by(func.lower(Article.title), Article.id)
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all())


# -----------------------------------------------------------------------------

async def update_article(db: AsyncSession, article_id: int, data: ArticleUpdate) -> Article:
    article = await get_article(db, article_id)

    if data.title is not None:
        article.title = data.title
    if data.text is not None:
        article.text = data.text
    article.revision += 1

    await db.flush()
    await db.refresh(article)
    log.info("Updated article #%d to revision %d", article.id, article.revision)
    return article


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Rendering
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

async def render_content(db: AsyncSession, content: str) -> str:
    """Render markdown, resolving ``[article:N]`` references against *db*."""
    return await db.run_sync(render_with_session, content)


async def render_article(db: AsyncSession, article: Article) -> str:
    html = await render_content(db, article.text)
    if not html.strip():
        return EMPTY_ARTICLE_HTML
    return html


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Search
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

async def search_articles(
    db: AsyncSession,
    query: str,
    skip: int = 0,
    limit: int = 50,
) -> list[dict]:
    """Case-insensitive substring search across titles and text.

    Hits come back grouped as exact title matches, then title matches, then
    text matches; within a group they keep title order.
    """
    query = query.strip()
    if not query:
        return []

    like = f"%{_escape_like(query)}%"
    result = await db.execute(
        select(Article)
        .where(
            or_(
                Article.title.ilike(like, escape="\\"),
                Article.text.ilike(like, escape="\\"),
            )
        )
        .order_by(func.lower(Article.title), Article.id)
        .offset(skip)
        .limit(limit)
    )
    articles = result.scalars().all()

    pattern = re.compile(re.escape(query), re.IGNORECASE)
    folded = query.casefold()

    results = []
    for a in articles:
        title_html, title_match = highlight_matches(pattern, a.title)
        if a.title.casefold() == folded:
            match = "exact"
        elif title_match:
            match = "title"
        else:
            match = "text"
        results.append({
            "id":         a.id,
            "title":      a.title,
            "title_html": title_html,
            "match":      match,
            "updated_at": a.updated_at,
        })

    results.sort(key=lambda r: _MATCH_ORDER[r["match"]])
    return results


# -----------------------------------------------------------------------------
