#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Articles router
===============
GET    /api/v1/articles              — list articles
POST   /api/v1/articles              — create article
GET    /api/v1/articles/{id}         — get article (rendered)
GET    /api/v1/articles/{id}/raw     — get raw markdown
PUT    /api/v1/articles/{id}         — save new title and/or text
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from redwood.core.database import get_db
from redwood.models import Article
from redwood.schemas import ArticleCreate, ArticleResponse, ArticleSummary, ArticleUpdate
from redwood.services import articles as article_svc


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/articles", tags=["articles"])


# ── List ─────────────────────────────────────────────────────────────────────

@router.get("", response_model=list[ArticleSummary])
async def list_articles(
    skip:  int       = Query(0, ge=0),
    limit: int       = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    return await article_svc.list_articles(db, skip=skip, limit=limit)


# ── Create ────────────────────────────────────────────────────────────────────

@router.post("", response_model=ArticleResponse, status_code=201)
async def create_article(
    data: ArticleCreate,
    db: AsyncSession = Depends(get_db),
):
    article = await article_svc.create_article(db, data)
    return await _article_response(db, article)


# ── Read ──────────────────────────────────────────────────────────────────────

@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: int,
    db: AsyncSession = Depends(get_db),
):
    article = await article_svc.get_article(db, article_id)
    return await _article_response(db, article)


# ── Raw source ────────────────────────────────────────────────────────────────

@router.get("/{article_id}/raw")
async def get_article_raw(
    article_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Return the markdown source as plain text."""
    article = await article_svc.get_article(db, article_id)
    return Response(content=article.text, media_type="text/plain; charset=utf-8")


# ── Update ────────────────────────────────────────────────────────────────────

@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: int,
    data: ArticleUpdate,
    db: AsyncSession = Depends(get_db),
):
    article = await article_svc.update_article(db, article_id, data)
    return await _article_response(db, article)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Response builders
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

async def _article_response(db: AsyncSession, article: Article) -> dict:
    return {
        "id":         article.id,
        "title":      article.title,
        "text":       article.text,
        "revision":   article.revision,
        "rendered":   await article_svc.render_article(db, article),
        "created_at": article.created_at,
        "updated_at": article.updated_at,
    }


# -----------------------------------------------------------------------------
