from .bookmark_service import BookmarkService
from .rating_service import RatingService

__all__ = [
    "BookmarkService",
    "RatingService",
]
