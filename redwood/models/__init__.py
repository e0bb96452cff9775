from redwood.models.models import Article

__all__ = ["Article"]
