"""Application service (use case) for Bookmark operations."""

import logging

from bookshelf.application.interfaces import BookmarkRepository
from bookshelf.application.schemas import BookmarkCreate
from bookshelf.domain.entities import Bookmark
from bookshelf.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class BookmarkService:
    """Orchestrates bookmark logic. Depends on the repository port (DI)."""

    def __init__(self, repository: BookmarkRepository):
        self._repository = repository

    async def get_bookmark(self, bookmark_id: int) -> Bookmark:
        bookmark = await self._repository.get_by_id(bookmark_id)
        if bookmark is None:
            raise EntityNotFoundError("Bookmark", bookmark_id)
        return bookmark

    async def list_bookmarks(
        self, skip: int = 0, limit: int = 100, is_read: bool | None = None
    ) -> list[Bookmark]:
        return await self._repository.get_all(skip=skip, limit=limit, is_read=is_read)

    async def create_bookmark(self, data: BookmarkCreate) -> Bookmark:
        bookmark = Bookmark(url=data.url, title=data.title)
        created = await self._repository.create(bookmark)
        logger.info("Saved bookmark %s (%s)", created.id, created.url)
        return created

    async def mark_as_read(self, bookmark_id: int) -> Bookmark:
        bookmark = await self.get_bookmark(bookmark_id)
        bookmark.set_read(True)
        return await self._repository.update(bookmark)

    async def mark_as_unread(self, bookmark_id: int) -> Bookmark:
        bookmark = await self.get_bookmark(bookmark_id)
        bookmark.set_read(False)
        return await self._repository.update(bookmark)

    async def delete_bookmark(self, bookmark_id: int) -> bool:
        exists = await self._repository.get_by_id(bookmark_id)
        if exists is None:
            raise EntityNotFoundError("Bookmark", bookmark_id)
        logger.info("Deleting bookmark %s", bookmark_id)
        return await self._repository.delete(bookmark_id)
