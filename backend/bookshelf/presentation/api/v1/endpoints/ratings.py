"""Article rating endpoints.

Error kinds map to status codes: not found → 404, already rated → 409,
invalid input → 400. Anything else propagates as a 500.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from bookshelf.application.schemas import (
    RatingCreate,
    RatingListResponse,
    RatingResponse,
    RatingStatsResponse,
    RatingUpdate,
)
from bookshelf.application.services import RatingService
from bookshelf.domain.entities import RatingListOptions
from bookshelf.domain.exceptions import (
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
)
from bookshelf.infrastructure.dependencies import get_rating_service

router = APIRouter(tags=["Ratings"])

_RATING_ERRORS = (EntityNotFoundError, DuplicateEntityError, DomainValidationError)


def _http_error(error: Exception) -> HTTPException:
    if isinstance(error, EntityNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, DuplicateEntityError):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=str(error))


@router.post(
    "/bookmarks/{article_id}/rating",
    response_model=RatingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_rating(
    article_id: int,
    data: RatingCreate,
    service: RatingService = Depends(get_rating_service),
) -> RatingResponse:
    """Rate an article on the five dimensions."""
    try:
        rating = await service.create_rating(article_id, data.to_fields())
    except _RATING_ERRORS as e:
        raise _http_error(e)
    return RatingResponse.model_validate(rating, from_attributes=True)


@router.get("/bookmarks/{article_id}/rating", response_model=RatingResponse)
async def get_rating(
    article_id: int,
    service: RatingService = Depends(get_rating_service),
) -> RatingResponse:
    """Retrieve the rating of an article."""
    rating = await service.get_rating(article_id)
    if rating is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(EntityNotFoundError("ArticleRating", article_id, field="article_id")),
        )
    return RatingResponse.model_validate(rating, from_attributes=True)


@router.patch("/bookmarks/{article_id}/rating", response_model=RatingResponse)
async def update_rating(
    article_id: int,
    data: RatingUpdate,
    service: RatingService = Depends(get_rating_service),
) -> RatingResponse:
    """Partially update a rating; the total score is recomputed."""
    try:
        rating = await service.update_rating(article_id, data.to_fields())
    except _RATING_ERRORS as e:
        raise _http_error(e)
    return RatingResponse.model_validate(rating, from_attributes=True)


@router.delete("/bookmarks/{article_id}/rating", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rating(
    article_id: int,
    service: RatingService = Depends(get_rating_service),
) -> None:
    """Delete the rating of an article."""
    try:
        await service.delete_rating(article_id)
    except _RATING_ERRORS as e:
        raise _http_error(e)


@router.get("/ratings", response_model=RatingListResponse)
async def list_ratings(
    sort_by: str | None = Query(None, alias="sortBy"),
    order: str | None = Query(None),
    limit: int | None = Query(None),
    offset: int | None = Query(None),
    min_score: float | None = Query(None, alias="minScore"),
    max_score: float | None = Query(None, alias="maxScore"),
    has_comment: bool | None = Query(None, alias="hasComment"),
    service: RatingService = Depends(get_rating_service),
) -> RatingListResponse:
    """List ratings with sorting, score-range and comment filters."""
    options = RatingListOptions(
        sort_by=sort_by,
        order=order,
        limit=limit,
        offset=offset,
        min_score=min_score,
        max_score=max_score,
        has_comment=has_comment,
    )
    try:
        ratings = await service.get_ratings(options)
    except DomainValidationError as e:
        raise _http_error(e)
    return RatingListResponse(
        ratings=[RatingResponse.model_validate(r, from_attributes=True) for r in ratings],
        count=len(ratings),
    )


@router.get("/ratings/stats", response_model=RatingStatsResponse)
async def get_rating_stats(
    service: RatingService = Depends(get_rating_service),
) -> RatingStatsResponse:
    """Aggregate statistics over all ratings."""
    stats = await service.get_rating_stats()
    return RatingStatsResponse.model_validate(stats, from_attributes=True)
