from .bookmark import BookmarkModel
from .article_rating import ArticleRatingModel

__all__ = [
    "BookmarkModel",
    "ArticleRatingModel",
]
