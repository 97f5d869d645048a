from .bookmark import BookmarkCreate, BookmarkResponse
from .rating import (
    RatingCreate,
    RatingUpdate,
    RatingResponse,
    RatingListResponse,
    RatingStatsResponse,
)

__all__ = [
    "BookmarkCreate",
    "BookmarkResponse",
    "RatingCreate",
    "RatingUpdate",
    "RatingResponse",
    "RatingListResponse",
    "RatingStatsResponse",
]
