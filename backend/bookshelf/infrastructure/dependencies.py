"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.application.services import BookmarkService, RatingService
from bookshelf.infrastructure.database.session import get_db_session
from bookshelf.infrastructure.database.repositories import (
    SQLAlchemyArticleRatingRepository,
    SQLAlchemyBookmarkRepository,
)


async def get_bookmark_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[BookmarkService, None]:
    """Provides a BookmarkService instance with its repository wired up."""
    repository = SQLAlchemyBookmarkRepository(session)
    yield BookmarkService(repository)


async def get_rating_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[RatingService, None]:
    """Provides a RatingService with the rating store and the bookmark lookup on one session."""
    yield RatingService(
        repository=SQLAlchemyArticleRatingRepository(session),
        bookmark_repository=SQLAlchemyBookmarkRepository(session),
    )
