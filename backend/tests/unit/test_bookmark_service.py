"""Unit tests for the BookmarkService."""

import pytest

from bookshelf.application.schemas import BookmarkCreate
from bookshelf.application.services import BookmarkService
from bookshelf.domain.exceptions import EntityNotFoundError
from tests.unit.fakes import FakeBookmarkRepository


@pytest.fixture
def service() -> BookmarkService:
    return BookmarkService(FakeBookmarkRepository())


@pytest.mark.asyncio
async def test_create_bookmark(service: BookmarkService):
    bookmark = await service.create_bookmark(
        BookmarkCreate(url="https://example.com/post", title="Post")
    )
    assert bookmark.id is not None
    assert bookmark.title == "Post"
    assert bookmark.is_read is False


@pytest.mark.asyncio
async def test_get_bookmark_not_found(service: BookmarkService):
    with pytest.raises(EntityNotFoundError):
        await service.get_bookmark(999)


@pytest.mark.asyncio
async def test_list_bookmarks_filters_by_read_state(service: BookmarkService):
    first = await service.create_bookmark(BookmarkCreate(url="https://example.com/1"))
    await service.create_bookmark(BookmarkCreate(url="https://example.com/2"))
    await service.mark_as_read(first.id)

    assert len(await service.list_bookmarks()) == 2
    assert [b.id for b in await service.list_bookmarks(is_read=True)] == [first.id]
    assert len(await service.list_bookmarks(is_read=False)) == 1


@pytest.mark.asyncio
async def test_mark_as_read_and_unread(service: BookmarkService):
    created = await service.create_bookmark(BookmarkCreate(url="https://example.com/x"))
    before = created.updated_at

    read = await service.mark_as_read(created.id)
    assert read.is_read is True
    assert read.updated_at >= before

    unread = await service.mark_as_unread(created.id)
    assert unread.is_read is False


@pytest.mark.asyncio
async def test_delete_bookmark(service: BookmarkService):
    created = await service.create_bookmark(BookmarkCreate(url="https://example.com/gone"))
    result = await service.delete_bookmark(created.id)
    assert result is True
    with pytest.raises(EntityNotFoundError):
        await service.get_bookmark(created.id)
