#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas for request validation and response serialisation.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


MatchKind = Literal["exact", "title", "text"]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Articles
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ArticleCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    text: str = Field(default="", max_length=10_000_000)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v


# -----------------------------------------------------------------------------

class ArticleUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    text: Optional[str] = Field(default=None, max_length=10_000_000)

    @model_validator(mode="after")
    def something_to_update(self) -> "ArticleUpdate":
        if self.title is None and self.text is None:
            raise ValueError("provide a new title, new text, or both")
        return self


# -----------------------------------------------------------------------------

class ArticleSummary(BaseModel):
    """Lightweight listing item, no text body."""
    id: int
    title: str
    revision: int
    updated_at: datetime

    model_config = {"from_attributes": True}


# -----------------------------------------------------------------------------

class ArticleResponse(BaseModel):
    id: int
    title: str
    text: str
    revision: int
    rendered: str
    created_at: datetime
    updated_at: datetime


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Rendering / search
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RenderResponse(BaseModel):
    html: str


# -----------------------------------------------------------------------------

class SearchResult(BaseModel):
    id: int
    title: str
    title_html: str      # title with query occurrences wrapped in <mark>
    match: MatchKind
    updated_at: datetime


# -----------------------------------------------------------------------------
