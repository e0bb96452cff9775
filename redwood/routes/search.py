#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Search router
=============
GET /api/v1/search?q=...   — substring search across article titles and text
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from redwood.core.database import get_db
from redwood.schemas import SearchResult
from redwood.services.articles import search_articles


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/search", tags=["search"])


# -----------------------------------------------------------------------------

@router.get("", response_model=list[SearchResult])
async def search(
    q:     str       = Query(..., min_length=1, max_length=256, description="Search query"),
    skip:  int       = Query(0, ge=0),
    limit: int       = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
):
    return await search_articles(db, q, skip=skip, limit=limit)


# -----------------------------------------------------------------------------
