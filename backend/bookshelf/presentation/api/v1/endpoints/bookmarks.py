"""Bookmark endpoints — the articles that ratings attach to."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from bookshelf.application.schemas import BookmarkCreate, BookmarkResponse
from bookshelf.application.services import BookmarkService
from bookshelf.domain.exceptions import EntityNotFoundError
from bookshelf.infrastructure.dependencies import get_bookmark_service

router = APIRouter(prefix="/bookmarks", tags=["Bookmarks"])


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    is_read: bool | None = Query(None, alias="isRead"),
    service: BookmarkService = Depends(get_bookmark_service),
) -> list[BookmarkResponse]:
    """Retrieve a paginated list of bookmarks, newest first."""
    bookmarks = await service.list_bookmarks(skip=skip, limit=limit, is_read=is_read)
    return [BookmarkResponse.model_validate(b, from_attributes=True) for b in bookmarks]


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: int,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """Retrieve a single bookmark by ID."""
    try:
        bookmark = await service.get_bookmark(bookmark_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return BookmarkResponse.model_validate(bookmark, from_attributes=True)


@router.post("", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    data: BookmarkCreate,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """Save a new bookmark."""
    bookmark = await service.create_bookmark(data)
    return BookmarkResponse.model_validate(bookmark, from_attributes=True)


@router.patch("/{bookmark_id}/read", response_model=BookmarkResponse)
async def mark_bookmark_as_read(
    bookmark_id: int,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """Mark a bookmark as read."""
    try:
        bookmark = await service.mark_as_read(bookmark_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return BookmarkResponse.model_validate(bookmark, from_attributes=True)


@router.patch("/{bookmark_id}/unread", response_model=BookmarkResponse)
async def mark_bookmark_as_unread(
    bookmark_id: int,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """Mark a bookmark as unread."""
    try:
        bookmark = await service.mark_as_unread(bookmark_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return BookmarkResponse.model_validate(bookmark, from_attributes=True)


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    bookmark_id: int,
    service: BookmarkService = Depends(get_bookmark_service),
) -> None:
    """Delete a bookmark (its rating goes with it)."""
    try:
        await service.delete_bookmark(bookmark_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
