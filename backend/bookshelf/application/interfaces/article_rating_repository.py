"""Port for article rating persistence.

Implementations are plain data access: no validation, no score
computation. They must enforce uniqueness of ``article_id`` and report
integrity violations as ``StoreConstraintError``.
"""

from abc import ABC, abstractmethod
from typing import Any

from bookshelf.domain.entities import ArticleRating, RatingAggregate, RatingListOptions


class ArticleRatingRepository(ABC):
    """Port for article rating persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def create(self, rating: ArticleRating) -> ArticleRating:
        """Persist a new rating and return it with the generated ID and timestamps."""
        ...

    @abstractmethod
    async def find_by_article_id(self, article_id: int) -> ArticleRating | None:
        """Retrieve the rating attached to an article, if any."""
        ...

    @abstractmethod
    async def update(self, article_id: int, changes: dict[str, Any]) -> ArticleRating | None:
        """Apply column changes to the article's rating. Returns None if it does not exist."""
        ...

    @abstractmethod
    async def delete(self, article_id: int) -> bool:
        """Delete the article's rating. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def find_many(self, options: RatingListOptions) -> list[ArticleRating]:
        """List ratings using already-normalized options."""
        ...

    @abstractmethod
    async def get_stats(self) -> RatingAggregate:
        """Aggregate over all ratings (storage scale, no rounding)."""
        ...
