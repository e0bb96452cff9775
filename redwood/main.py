#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Redwood: FastAPI application factory
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from redwood.core.config import get_settings
from redwood.core.database import create_all_tables, dispose_db, get_session_factory, init_db
from redwood.routes import articles, render, search
from redwood.ui import views


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    init_db()
    await create_all_tables()   # safe: CREATE TABLE IF NOT EXISTS
    await _seed_defaults()
    yield
    await dispose_db()


# -----------------------------------------------------------------------------

async def _seed_defaults() -> None:
    """Create a welcome article when the database is empty."""
    from sqlalchemy import func, select
    from redwood.models import Article

    factory = get_session_factory()

    async with factory() as session:
        count = await session.scalar(select(func.count()).select_from(Article))
        if count:
            return
        session.add(Article(
            title="Main Page",
            text=(
                "# Welcome to Redwood\n\n"
                "Articles are written in **markdown**. Link to another article "
                "with `[article:<id>]` or `[article:<id>|some text]`, e.g. "
                "[article:1|this page].\n\n"
                "Bare URLs such as https://example.com become links, and fenced "
                "code blocks are highlighted:\n\n"
                "```python\nprint(\"hello\")\n```\n"
            ),
        ))
        await session.commit()
        log.info("Seeded welcome article")


# -----------------------------------------------------------------------------

def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A small markdown wiki with article cross references.",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # ── API routers ───────────────────────────────────────────────────────

    prefix = "/api/v1"

    app.include_router(articles.router, prefix=prefix)
    app.include_router(render.router,   prefix=prefix)
    app.include_router(search.router,   prefix=prefix)

    # ── UI (Jinja2) router ────────────────────────────────────────────────

    app.include_router(views.router)

    # ── Global exception handlers ─────────────────────────────────────────

    @app.exception_handler(404)
    async def not_found(request: Request, exc):
        detail = getattr(exc, "detail", None) or "Not found"
        if request.url.path.startswith("/api/"):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"detail": detail},
            )
        return views.templates.TemplateResponse(
            request,
            "error.html",
            views._ctx(message="The page you requested could not be found."),
            status_code=404,
        )

    # ── Health check ──────────────────────────────────────────────────────

    @app.get("/api/health", tags=["system"])
    async def health():
        return {"status": "ok", "version": settings.app_version, "app": settings.app_name}

    return app


# -----------------------------------------------------------------------------

app = create_app()


# -----------------------------------------------------------------------------
