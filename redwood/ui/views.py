#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Jinja2 UI views (server-rendered HTML pages)
============================================
GET  /                              — article index
GET  /article/{id}                  — view an article
GET  /article/{id}/{slug}           — same; the slug is cosmetic
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from redwood.core.config import get_settings
from redwood.core.database import get_db
from redwood.markdown.highlight import highlight_css
from redwood.services import articles as article_svc
from redwood.services.renderer import article_url


# -----------------------------------------------------------------------------

router = APIRouter(tags=["ui"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _ctx(**extra) -> dict:
    """Base template context (request passed separately as first arg to TemplateResponse)."""
    settings = get_settings()
    return {
        "site_name":   settings.app_name,
        "app_version": settings.app_version,
        "base_url":    settings.base_url,
        **extra,
    }


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Index
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/", response_class=HTMLResponse)
async def home(request: Request, db: AsyncSession = Depends(get_db)):
    settings = get_settings()
    articles = await article_svc.list_articles(db, limit=500)
    entries = [
        {"id": a.id, "title": a.title, "url": article_url(settings.base_url, a.id, a.title)}
        for a in articles
    ]
    return templates.TemplateResponse(request, "index.html", _ctx(articles=entries))


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Articles
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/article/{article_id}", response_class=HTMLResponse)
@router.get("/article/{article_id}/{slug}", response_class=HTMLResponse)
async def view_article(
    request: Request,
    article_id: int,
    slug: str = "",
    db: AsyncSession = Depends(get_db),
):
    settings = get_settings()

    try:
        article = await article_svc.get_article(db, article_id)
    except HTTPException as e:
        if e.status_code == 404:
            return templates.TemplateResponse(
                request,
                "article_not_found.html",
                _ctx(article_id=article_id),
                status_code=404,
            )
        raise

    rendered = await article_svc.render_article(db, article)
    return templates.TemplateResponse(
        request,
        "article.html",
        _ctx(
            article=article,
            rendered=rendered,
            highlight_css=highlight_css(settings.pygments_style),
        ),
    )


# -----------------------------------------------------------------------------
