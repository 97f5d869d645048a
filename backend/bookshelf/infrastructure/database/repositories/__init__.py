from .bookmark_repository import SQLAlchemyBookmarkRepository
from .article_rating_repository import SQLAlchemyArticleRatingRepository

__all__ = [
    "SQLAlchemyBookmarkRepository",
    "SQLAlchemyArticleRatingRepository",
]
