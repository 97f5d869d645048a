"""Concrete repository implementation backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.application.interfaces import BookmarkRepository
from bookshelf.domain.entities import Bookmark
from bookshelf.infrastructure.database.models import BookmarkModel


class SQLAlchemyBookmarkRepository(BookmarkRepository):
    """Implements the BookmarkRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: BookmarkModel) -> Bookmark:
        """Map ORM model → domain entity."""
        return Bookmark(
            id=model.id,
            url=model.url,
            title=model.title,
            is_read=model.is_read,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Bookmark) -> BookmarkModel:
        """Map domain entity → ORM model (for creation)."""
        return BookmarkModel(
            url=entity.url,
            title=entity.title,
            is_read=entity.is_read,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_id(self, bookmark_id: int) -> Bookmark | None:
        result = await self._session.get(BookmarkModel, bookmark_id)
        return self._to_entity(result) if result else None

    async def get_all(
        self, skip: int = 0, limit: int = 100, is_read: bool | None = None
    ) -> list[Bookmark]:
        stmt = select(BookmarkModel)
        if is_read is not None:
            stmt = stmt.where(BookmarkModel.is_read == is_read)
        stmt = stmt.offset(skip).limit(limit).order_by(
            BookmarkModel.created_at.desc(), BookmarkModel.id.desc()
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, bookmark: Bookmark) -> Bookmark:
        model = self._to_model(bookmark)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, bookmark: Bookmark) -> Bookmark:
        model = await self._session.get(BookmarkModel, bookmark.id)
        if model is None:
            raise ValueError(f"Bookmark {bookmark.id} not found in database")
        model.url = bookmark.url
        model.title = bookmark.title
        model.is_read = bookmark.is_read
        model.updated_at = bookmark.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, bookmark_id: int) -> bool:
        model = await self._session.get(BookmarkModel, bookmark_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
