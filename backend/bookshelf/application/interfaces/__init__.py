from .bookmark_repository import BookmarkRepository
from .article_rating_repository import ArticleRatingRepository

__all__ = [
    "BookmarkRepository",
    "ArticleRatingRepository",
]
