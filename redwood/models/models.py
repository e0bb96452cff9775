#!/usr/bin/env python
#
#
# ----------------------------------------------------------------------------
"""
ORM Models for Redwood
======================

Tables
------
articles        — wiki articles, addressed by integer id

Article text is markdown.  Timestamps stored in UTC.  ``revision`` counts
saves; earlier revisions are not kept.
"""
# ----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from redwood.core.database import Base


# ----------------------------------------------------------------------------

def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# articles
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class Article(Base):
    __tablename__ = "articles"

    id:         Mapped[int]      = mapped_column(Integer, primary_key=True, autoincrement=True)
    title:      Mapped[str]      = mapped_column(String(255), nullable=False, index=True)
    text:       Mapped[str]      = mapped_column(Text, nullable=False, default="")
    revision:   Mapped[int]      = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<Article #{self.id} {self.title!r} r{self.revision}>"


# ----------------------------------------------------------------------------
