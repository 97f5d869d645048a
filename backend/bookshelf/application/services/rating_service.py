"""Application service (use case) for article ratings.

Owns every rule around ratings: article existence, one rating per
article, score ranges, comment length, total score computation, listing
option normalization and statistics shaping. Repositories only store.
"""

import logging
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, TypeVar

from bookshelf.application.interfaces import ArticleRatingRepository, BookmarkRepository
from bookshelf.domain.entities import (
    ArticleRating,
    RatingFields,
    RatingListOptions,
    RatingSortField,
    RatingStats,
    SortOrder,
)
from bookshelf.domain.entities.article_rating import (
    DEFAULT_LIST_OPTIONS,
    DIMENSION_FIELDS,
    MAX_COMMENT_LENGTH,
    MAX_DIMENSION_SCORE,
    MAX_FILTER_SCORE,
    MIN_DIMENSION_SCORE,
    MIN_FILTER_SCORE,
    SCORE_SCALE,
    compute_total_score,
)
from bookshelf.domain.exceptions import (
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    StoreConstraintError,
)

logger = logging.getLogger(__name__)

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

_E = TypeVar("_E", bound=Enum)


class RatingService:
    """Orchestrates article rating logic. Depends on the rating and bookmark ports (DI)."""

    def __init__(
        self,
        repository: ArticleRatingRepository,
        bookmark_repository: BookmarkRepository,
    ):
        self._repository = repository
        self._bookmarks = bookmark_repository

    # ── Commands ─────────────────────────────────────────────────────

    async def create_rating(self, article_id: int, fields: RatingFields) -> ArticleRating:
        await self._require_article(article_id)

        if await self._repository.find_by_article_id(article_id) is not None:
            raise DuplicateEntityError("ArticleRating", "article_id", article_id)

        scores = {
            name: _check_dimension(name, getattr(fields, name))
            for name in DIMENSION_FIELDS
        }
        comment = _check_comment(fields.comment)

        rating = ArticleRating(
            article_id=article_id,
            total_score=compute_total_score(**scores),
            comment=comment,
            **scores,
        )
        try:
            created = await self._repository.create(rating)
        except StoreConstraintError as exc:
            raise self._translate_constraint_error(exc, article_id) from exc

        logger.info(
            "Rated article %s: total_score=%s", article_id, created.total_score
        )
        return created

    async def update_rating(self, article_id: int, fields: RatingFields) -> ArticleRating:
        await self._require_article(article_id)
        existing = await self._require_rating(article_id)

        provided = fields.provided()
        if not provided:
            raise DomainValidationError("No fields to update")

        changes: dict[str, Any] = {}
        for name in DIMENSION_FIELDS:
            if name in provided:
                changes[name] = _check_dimension(name, provided[name])
        if "comment" in provided:
            changes["comment"] = _check_comment(provided["comment"])

        # Always recompute from the merged dimensions, even for comment-only edits
        merged = existing.dimensions()
        merged.update({name: changes[name] for name in DIMENSION_FIELDS if name in changes})
        changes["total_score"] = compute_total_score(**merged)
        changes["updated_at"] = datetime.now(timezone.utc)

        try:
            updated = await self._repository.update(article_id, changes)
        except StoreConstraintError as exc:
            raise self._translate_constraint_error(exc, article_id) from exc

        if updated is None:
            raise EntityNotFoundError("ArticleRating", article_id, field="article_id")

        logger.info(
            "Updated rating for article %s: fields=%s total_score=%s",
            article_id,
            sorted(provided),
            updated.total_score,
        )
        return updated

    async def delete_rating(self, article_id: int) -> None:
        await self._require_article(article_id)
        await self._require_rating(article_id)

        deleted = await self._repository.delete(article_id)
        if not deleted:
            raise EntityNotFoundError("ArticleRating", article_id, field="article_id")
        logger.info("Deleted rating for article %s", article_id)

    # ── Queries ──────────────────────────────────────────────────────

    async def get_rating(self, article_id: int) -> ArticleRating | None:
        return await self._repository.find_by_article_id(article_id)

    async def get_ratings(self, options: RatingListOptions | None = None) -> list[ArticleRating]:
        normalized = self.normalize_list_options(options)
        return await self._repository.find_many(normalized)

    async def get_rating_stats(self) -> RatingStats:
        aggregate = await self._repository.get_stats()

        if not aggregate.total_count:
            return RatingStats()

        return RatingStats(
            total_count=aggregate.total_count,
            average_score=_mean(aggregate.average_total_score) / SCORE_SCALE,
            average_practical_value=_mean(aggregate.average_practical_value),
            average_technical_depth=_mean(aggregate.average_technical_depth),
            average_understanding=_mean(aggregate.average_understanding),
            average_novelty=_mean(aggregate.average_novelty),
            average_importance=_mean(aggregate.average_importance),
            ratings_with_comments=aggregate.ratings_with_comments,
        )

    # ── Listing options ──────────────────────────────────────────────

    @staticmethod
    def normalize_list_options(options: RatingListOptions | None) -> RatingListOptions:
        """Apply defaults and clamps; reject invalid score filters.

        Unknown sort keys fall back to createdAt and unknown orders to
        desc. ``limit`` is clamped into [1, 100] and ``offset`` to >= 0;
        non-numeric values for either fall back to their defaults.
        """
        if options is None:
            return DEFAULT_LIST_OPTIONS

        limit = _coerce_count(options.limit, DEFAULT_LIST_OPTIONS.limit)
        offset = _coerce_count(options.offset, DEFAULT_LIST_OPTIONS.offset)

        min_score = _check_score_filter("min_score", options.min_score)
        max_score = _check_score_filter("max_score", options.max_score)
        if min_score is not None and max_score is not None and min_score > max_score:
            raise DomainValidationError(
                "min_score must be less than or equal to max_score", field="min_score"
            )

        return RatingListOptions(
            sort_by=_coerce_enum(RatingSortField, options.sort_by, RatingSortField.CREATED_AT),
            order=_coerce_enum(SortOrder, options.order, SortOrder.DESC),
            limit=min(max(limit, MIN_PAGE_SIZE), MAX_PAGE_SIZE),
            offset=max(offset, 0),
            min_score=min_score,
            max_score=max_score,
            has_comment=None if options.has_comment is None else bool(options.has_comment),
        )

    # ── Helpers ──────────────────────────────────────────────────────

    async def _require_article(self, article_id: int) -> None:
        if await self._bookmarks.get_by_id(article_id) is None:
            raise EntityNotFoundError("Bookmark", article_id)

    async def _require_rating(self, article_id: int) -> ArticleRating:
        rating = await self._repository.find_by_article_id(article_id)
        if rating is None:
            raise EntityNotFoundError("ArticleRating", article_id, field="article_id")
        return rating

    @staticmethod
    def _translate_constraint_error(error: StoreConstraintError, article_id: int) -> Exception:
        logger.warning(
            "Store rejected rating write for article %s: %s", article_id, error
        )
        if error.kind == StoreConstraintError.UNIQUE:
            return DuplicateEntityError("ArticleRating", "article_id", article_id)
        if error.kind == StoreConstraintError.FOREIGN_KEY:
            return EntityNotFoundError("Bookmark", article_id)
        return error


def _check_dimension(name: str, value: Any) -> int:
    """Accept integers in [1, 10]; integral floats (8.0) are narrowed to int."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if (
        isinstance(value, bool)
        or not isinstance(value, int)
        or not MIN_DIMENSION_SCORE <= value <= MAX_DIMENSION_SCORE
    ):
        raise DomainValidationError(
            f"{name} must be an integer between {MIN_DIMENSION_SCORE} and {MAX_DIMENSION_SCORE}",
            field=name,
        )
    return value


def _check_comment(comment: Any) -> str | None:
    if comment is None:
        return None
    if not isinstance(comment, str):
        raise DomainValidationError("comment must be a string", field="comment")
    if len(comment) > MAX_COMMENT_LENGTH:
        raise DomainValidationError(
            f"comment must be at most {MAX_COMMENT_LENGTH} characters", field="comment"
        )
    return comment


def _check_score_filter(name: str, value: Any) -> float | None:
    if value is None:
        return None
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or math.isnan(value)
        or not MIN_FILTER_SCORE <= value <= MAX_FILTER_SCORE
    ):
        raise DomainValidationError(
            f"{name} must be between {MIN_FILTER_SCORE} and {MAX_FILTER_SCORE}", field=name
        )
    return float(value)


def _coerce_enum(enum_cls: type[_E], value: Any, default: _E) -> _E:
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _coerce_count(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _mean(value: float | None) -> float:
    return float(value) if value is not None else 0.0
