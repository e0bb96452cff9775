#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Render endpoint: live preview for the editor.

GET /api/v1/render?content=...
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from redwood.core.database import get_db
from redwood.schemas import RenderResponse
from redwood.services.articles import render_content


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/render", tags=["render"])


# -----------------------------------------------------------------------------

@router.get("", response_model=RenderResponse)
async def render_preview(
    content: str     = Query(default="", max_length=1_000_000),
    db: AsyncSession = Depends(get_db),
):
    """Return rendered HTML for a snippet of markdown, resolving article references."""
    return RenderResponse(html=await render_content(db, content))


# -----------------------------------------------------------------------------
