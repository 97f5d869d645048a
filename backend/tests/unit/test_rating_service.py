"""Unit tests for the RatingService."""

import math

import pytest

from bookshelf.application.services import RatingService
from bookshelf.domain.entities import (
    ArticleRating,
    Bookmark,
    RatingFields,
    RatingListOptions,
    RatingSortField,
    SortOrder,
)
from bookshelf.domain.entities.article_rating import DEFAULT_LIST_OPTIONS, compute_total_score
from bookshelf.domain.exceptions import (
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    StoreConstraintError,
)
from tests.unit.fakes import FakeArticleRatingRepository, FakeBookmarkRepository


def _fields(
    practical_value=8,
    technical_depth=7,
    understanding=9,
    novelty=6,
    importance=8,
    comment=None,
) -> RatingFields:
    return RatingFields(
        practical_value=practical_value,
        technical_depth=technical_depth,
        understanding=understanding,
        novelty=novelty,
        importance=importance,
        comment=comment,
    )


@pytest.fixture
def bookmarks() -> FakeBookmarkRepository:
    return FakeBookmarkRepository()


@pytest.fixture
def ratings() -> FakeArticleRatingRepository:
    return FakeArticleRatingRepository()


@pytest.fixture
def service(ratings: FakeArticleRatingRepository, bookmarks: FakeBookmarkRepository) -> RatingService:
    return RatingService(ratings, bookmarks)


async def _bookmark(bookmarks: FakeBookmarkRepository, url: str = "https://example.com/a") -> int:
    created = await bookmarks.create(Bookmark(url=url))
    return created.id


# ── Score formula ────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "scores, expected",
    [
        ((8, 7, 9, 6, 8), 76),
        ((10, 10, 10, 10, 10), 100),
        ((1, 1, 1, 1, 1), 10),
        ((10, 7, 9, 6, 8), 80),
        ((1, 2, 3, 4, 5), 30),
    ],
)
def test_compute_total_score(scores, expected):
    assert compute_total_score(*scores) == expected


# ── create_rating ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_rating(service, bookmarks):
    article_id = await _bookmark(bookmarks)

    rating = await service.create_rating(article_id, _fields(comment="Solid"))

    assert rating.id is not None
    assert rating.article_id == article_id
    assert rating.total_score == 76
    assert rating.comment == "Solid"
    assert rating.created_at is not None
    assert rating.updated_at is not None


@pytest.mark.asyncio
async def test_create_rating_article_not_found(service, ratings):
    with pytest.raises(EntityNotFoundError) as exc_info:
        await service.create_rating(999, _fields())
    assert exc_info.value.entity_type == "Bookmark"
    assert ratings.create_calls == 0


@pytest.mark.asyncio
async def test_create_rating_not_found_is_checked_before_validation(service):
    with pytest.raises(EntityNotFoundError):
        await service.create_rating(999, _fields(practical_value=0))


@pytest.mark.asyncio
async def test_create_rating_twice_conflicts(service, bookmarks):
    article_id = await _bookmark(bookmarks)
    await service.create_rating(article_id, _fields())

    with pytest.raises(DuplicateEntityError):
        await service.create_rating(article_id, _fields(practical_value=1))


@pytest.mark.asyncio
async def test_create_rating_conflict_is_checked_before_validation(service, bookmarks):
    article_id = await _bookmark(bookmarks)
    await service.create_rating(article_id, _fields())

    with pytest.raises(DuplicateEntityError):
        await service.create_rating(article_id, _fields(novelty=42))


@pytest.mark.asyncio
@pytest.mark.parametrize("bad", [0, 11, -1, math.nan, math.inf, 8.5, True, "8", None])
async def test_create_rating_rejects_invalid_dimension(service, bookmarks, ratings, bad):
    article_id = await _bookmark(bookmarks)

    with pytest.raises(DomainValidationError) as exc_info:
        await service.create_rating(article_id, _fields(technical_depth=bad))
    assert exc_info.value.field == "technical_depth"
    assert ratings.create_calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("boundary", [1, 10])
async def test_create_rating_accepts_inclusive_boundaries(service, bookmarks, boundary):
    article_id = await _bookmark(bookmarks)

    rating = await service.create_rating(
        article_id, _fields(boundary, boundary, boundary, boundary, boundary)
    )
    assert rating.total_score == boundary * 10


@pytest.mark.asyncio
async def test_create_rating_narrows_integral_float(service, bookmarks):
    article_id = await _bookmark(bookmarks)

    rating = await service.create_rating(article_id, _fields(practical_value=8.0))
    assert rating.practical_value == 8
    assert isinstance(rating.practical_value, int)


@pytest.mark.asyncio
async def test_create_rating_comment_length_boundary(service, bookmarks):
    ok_id = await _bookmark(bookmarks, "https://example.com/ok")
    too_long_id = await _bookmark(bookmarks, "https://example.com/long")

    rating = await service.create_rating(ok_id, _fields(comment="x" * 1000))
    assert len(rating.comment) == 1000

    with pytest.raises(DomainValidationError) as exc_info:
        await service.create_rating(too_long_id, _fields(comment="x" * 1001))
    assert exc_info.value.field == "comment"


@pytest.mark.asyncio
async def test_create_rating_translates_unique_violation(bookmarks):
    """A store-level uniqueness failure (lost race) surfaces as a conflict."""

    class RacingRepository(FakeArticleRatingRepository):
        async def create(self, rating: ArticleRating) -> ArticleRating:
            raise StoreConstraintError(StoreConstraintError.UNIQUE, "UNIQUE constraint failed")

    service = RatingService(RacingRepository(), bookmarks)
    article_id = await _bookmark(bookmarks)

    with pytest.raises(DuplicateEntityError) as exc_info:
        await service.create_rating(article_id, _fields())
    assert isinstance(exc_info.value.__cause__, StoreConstraintError)


@pytest.mark.asyncio
async def test_create_rating_translates_foreign_key_violation(bookmarks):
    class OrphanRepository(FakeArticleRatingRepository):
        async def create(self, rating: ArticleRating) -> ArticleRating:
            raise StoreConstraintError(StoreConstraintError.FOREIGN_KEY, "FOREIGN KEY constraint failed")

    service = RatingService(OrphanRepository(), bookmarks)
    article_id = await _bookmark(bookmarks)

    with pytest.raises(EntityNotFoundError):
        await service.create_rating(article_id, _fields())


@pytest.mark.asyncio
async def test_create_rating_propagates_unexpected_store_errors(bookmarks):
    class BrokenRepository(FakeArticleRatingRepository):
        async def create(self, rating: ArticleRating) -> ArticleRating:
            raise ConnectionError("database unavailable")

    service = RatingService(BrokenRepository(), bookmarks)
    article_id = await _bookmark(bookmarks)

    with pytest.raises(ConnectionError):
        await service.create_rating(article_id, _fields())


# ── get_rating ───────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_rating_returns_none_when_absent(service):
    assert await service.get_rating(123) is None


@pytest.mark.asyncio
async def test_get_rating(service, bookmarks):
    article_id = await _bookmark(bookmarks)
    created = await service.create_rating(article_id, _fields())

    fetched = await service.get_rating(article_id)
    assert fetched == created


# ── update_rating ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_update_rating_recomputes_total_score(service, bookmarks):
    article_id = await _bookmark(bookmarks)
    created = await service.create_rating(article_id, _fields())
    assert created.total_score == 76

    updated = await service.update_rating(article_id, RatingFields(practical_value=10))

    assert updated.practical_value == 10
    assert updated.technical_depth == 7
    assert updated.total_score == 80
    assert updated.updated_at >= created.updated_at


@pytest.mark.asyncio
async def test_update_rating_comment_only_keeps_consistent_total(service, bookmarks):
    article_id = await _bookmark(bookmarks)
    await service.create_rating(article_id, _fields())

    updated = await service.update_rating(article_id, RatingFields(comment="Revisited"))

    assert updated.comment == "Revisited"
    assert updated.total_score == 76


@pytest.mark.asyncio
async def test_update_rating_empty_payload_rejected(service, bookmarks):
    article_id = await _bookmark(bookmarks)
    await service.create_rating(article_id, _fields())

    with pytest.raises(DomainValidationError, match="No fields to update"):
        await service.update_rating(article_id, RatingFields())


@pytest.mark.asyncio
async def test_update_rating_rejects_invalid_value(service, bookmarks):
    article_id = await _bookmark(bookmarks)
    await service.create_rating(article_id, _fields())

    with pytest.raises(DomainValidationError):
        await service.update_rating(article_id, RatingFields(importance=11))
    with pytest.raises(DomainValidationError):
        await service.update_rating(article_id, RatingFields(comment="y" * 1001))


@pytest.mark.asyncio
async def test_update_rating_article_not_found(service):
    with pytest.raises(EntityNotFoundError) as exc_info:
        await service.update_rating(999, RatingFields())
    assert exc_info.value.entity_type == "Bookmark"


@pytest.mark.asyncio
async def test_update_rating_rating_not_found_has_distinct_message(service, bookmarks):
    article_id = await _bookmark(bookmarks)

    with pytest.raises(EntityNotFoundError) as rating_missing:
        await service.update_rating(article_id, RatingFields(novelty=5))
    with pytest.raises(EntityNotFoundError) as article_missing:
        await service.update_rating(999, RatingFields(novelty=5))

    assert rating_missing.value.entity_type == "ArticleRating"
    assert str(rating_missing.value) != str(article_missing.value)


# ── delete_rating ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_delete_rating(service, bookmarks):
    article_id = await _bookmark(bookmarks)
    await service.create_rating(article_id, _fields())

    await service.delete_rating(article_id)

    assert await service.get_rating(article_id) is None


@pytest.mark.asyncio
async def test_delete_rating_twice_reports_not_found(service, bookmarks):
    article_id = await _bookmark(bookmarks)
    await service.create_rating(article_id, _fields())
    await service.delete_rating(article_id)

    with pytest.raises(EntityNotFoundError):
        await service.delete_rating(article_id)


@pytest.mark.asyncio
async def test_delete_rating_article_not_found(service):
    with pytest.raises(EntityNotFoundError):
        await service.delete_rating(999)


# ── get_ratings ──────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_ratings_without_options_uses_defaults(service, ratings):
    await service.get_ratings()
    assert ratings.last_options == DEFAULT_LIST_OPTIONS
    assert ratings.last_options.limit == 20
    assert ratings.last_options.sort_by == RatingSortField.CREATED_AT
    assert ratings.last_options.order == SortOrder.DESC


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "options, attr, expected",
    [
        (RatingListOptions(limit=500), "limit", 100),
        (RatingListOptions(limit=0), "limit", 1),
        (RatingListOptions(limit=None), "limit", 20),
        (RatingListOptions(limit=math.nan), "limit", 20),
        (RatingListOptions(limit="many"), "limit", 20),
        (RatingListOptions(limit=math.inf), "limit", 20),
        (RatingListOptions(offset=-5), "offset", 0),
        (RatingListOptions(offset=math.nan), "offset", 0),
        (RatingListOptions(offset="later"), "offset", 0),
        (RatingListOptions(sort_by="bogus"), "sort_by", RatingSortField.CREATED_AT),
        (RatingListOptions(sort_by="totalScore"), "sort_by", RatingSortField.TOTAL_SCORE),
        (RatingListOptions(order="sideways"), "order", SortOrder.DESC),
        (RatingListOptions(order="asc"), "order", SortOrder.ASC),
    ],
)
async def test_get_ratings_normalizes_options(service, ratings, options, attr, expected):
    await service.get_ratings(options)
    assert getattr(ratings.last_options, attr) == expected


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "options",
    [
        RatingListOptions(min_score=8, max_score=5),
        RatingListOptions(min_score=0.5),
        RatingListOptions(max_score=10.5),
        RatingListOptions(min_score=math.nan),
    ],
)
async def test_get_ratings_rejects_invalid_score_filters(service, ratings, options):
    with pytest.raises(DomainValidationError):
        await service.get_ratings(options)
    assert ratings.last_options is None


@pytest.mark.asyncio
async def test_get_ratings_score_filter_uses_total_score_scale(service, bookmarks):
    high = await _bookmark(bookmarks, "https://example.com/high")
    low = await _bookmark(bookmarks, "https://example.com/low")
    await service.create_rating(high, _fields())  # 76
    await service.create_rating(low, _fields(5, 5, 5, 5, 5))  # 50

    result = await service.get_ratings(RatingListOptions(min_score=7.6))
    assert [r.article_id for r in result] == [high]

    result = await service.get_ratings(RatingListOptions(max_score=5.0))
    assert [r.article_id for r in result] == [low]


@pytest.mark.asyncio
async def test_get_ratings_has_comment_treats_empty_as_missing(service, bookmarks):
    with_comment = await _bookmark(bookmarks, "https://example.com/1")
    empty_comment = await _bookmark(bookmarks, "https://example.com/2")
    no_comment = await _bookmark(bookmarks, "https://example.com/3")
    await service.create_rating(with_comment, _fields(comment="Worth it"))
    await service.create_rating(empty_comment, _fields(comment=""))
    await service.create_rating(no_comment, _fields())

    commented = await service.get_ratings(RatingListOptions(has_comment=True))
    uncommented = await service.get_ratings(RatingListOptions(has_comment=False))

    assert [r.article_id for r in commented] == [with_comment]
    assert {r.article_id for r in uncommented} == {empty_comment, no_comment}


@pytest.mark.asyncio
async def test_get_ratings_sorts_by_total_score(service, bookmarks):
    ids = [await _bookmark(bookmarks, f"https://example.com/{n}") for n in range(3)]
    await service.create_rating(ids[0], _fields(5, 5, 5, 5, 5))
    await service.create_rating(ids[1], _fields(9, 9, 9, 9, 9))
    await service.create_rating(ids[2], _fields(7, 7, 7, 7, 7))

    result = await service.get_ratings(RatingListOptions(sort_by="totalScore", order="desc"))
    assert [r.total_score for r in result] == [90, 70, 50]

    result = await service.get_ratings(
        RatingListOptions(sort_by="totalScore", order="asc", limit=2, offset=1)
    )
    assert [r.total_score for r in result] == [70, 90]


# ── get_rating_stats ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_rating_stats_with_no_ratings_is_all_zero(service):
    stats = await service.get_rating_stats()

    assert stats.total_count == 0
    assert stats.average_score == 0
    assert stats.average_practical_value == 0
    assert stats.average_technical_depth == 0
    assert stats.average_understanding == 0
    assert stats.average_novelty == 0
    assert stats.average_importance == 0
    assert stats.ratings_with_comments == 0
    assert not any(math.isnan(v) for v in vars(stats).values())


@pytest.mark.asyncio
async def test_get_rating_stats(service, bookmarks):
    first = await _bookmark(bookmarks, "https://example.com/1")
    second = await _bookmark(bookmarks, "https://example.com/2")
    await service.create_rating(first, _fields(comment="Good"))  # 76
    await service.create_rating(second, _fields(10, 10, 10, 10, 10, comment=""))  # 100

    stats = await service.get_rating_stats()

    assert stats.total_count == 2
    assert stats.average_score == pytest.approx(8.8)
    assert stats.average_practical_value == pytest.approx(9.0)
    assert stats.average_technical_depth == pytest.approx(8.5)
    assert stats.average_understanding == pytest.approx(9.5)
    assert stats.average_novelty == pytest.approx(8.0)
    assert stats.average_importance == pytest.approx(9.0)
    assert stats.ratings_with_comments == 1
