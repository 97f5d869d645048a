from .bookmark import Bookmark
from .article_rating import (
    ArticleRating,
    RatingAggregate,
    RatingFields,
    RatingListOptions,
    RatingSortField,
    RatingStats,
    SortOrder,
)

__all__ = [
    "Bookmark",
    "ArticleRating",
    "RatingAggregate",
    "RatingFields",
    "RatingListOptions",
    "RatingSortField",
    "RatingStats",
    "SortOrder",
]
