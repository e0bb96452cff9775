from redwood.schemas.schemas import (
    ArticleCreate, ArticleUpdate,
    ArticleResponse, ArticleSummary,
    RenderResponse,
    SearchResult, MatchKind,
)

__all__ = [
    "ArticleCreate", "ArticleUpdate",
    "ArticleResponse", "ArticleSummary",
    "RenderResponse",
    "SearchResult", "MatchKind",
]
