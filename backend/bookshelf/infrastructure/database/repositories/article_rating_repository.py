"""Concrete article rating repository backed by SQLAlchemy.

Pure data access. Score filters arrive on the 1–10 scale and are
converted to the 10–100 scale of ``total_score`` here; everything else
(defaults, clamps, validation) has already been applied by the service.
"""

from typing import Any

from sqlalchemy import and_, asc, case, desc, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.application.interfaces import ArticleRatingRepository
from bookshelf.domain.entities import (
    ArticleRating,
    RatingAggregate,
    RatingListOptions,
    RatingSortField,
    SortOrder,
)
from bookshelf.domain.entities.article_rating import DIMENSION_FIELDS, to_storage_scale
from bookshelf.domain.exceptions import StoreConstraintError
from bookshelf.infrastructure.database.models import ArticleRatingModel

_SORT_COLUMNS = {
    RatingSortField.TOTAL_SCORE: ArticleRatingModel.total_score,
    RatingSortField.CREATED_AT: ArticleRatingModel.created_at,
    RatingSortField.PRACTICAL_VALUE: ArticleRatingModel.practical_value,
    RatingSortField.TECHNICAL_DEPTH: ArticleRatingModel.technical_depth,
    RatingSortField.UNDERSTANDING: ArticleRatingModel.understanding,
    RatingSortField.NOVELTY: ArticleRatingModel.novelty,
    RatingSortField.IMPORTANCE: ArticleRatingModel.importance,
}

_UPDATABLE_COLUMNS = frozenset({*DIMENSION_FIELDS, "total_score", "comment", "updated_at"})


def _has_comment_clause():
    comment = ArticleRatingModel.comment
    return and_(comment.is_not(None), func.trim(comment) != "")


def _no_comment_clause():
    comment = ArticleRatingModel.comment
    return or_(comment.is_(None), func.trim(comment) == "")


def _constraint_error(exc: IntegrityError) -> StoreConstraintError | None:
    """Classify a driver integrity error (SQLite and PostgreSQL wording)."""
    detail = str(exc.orig)
    message = detail.lower()
    if "unique" in message or "duplicate key" in message:
        return StoreConstraintError(StoreConstraintError.UNIQUE, detail)
    if "foreign key" in message:
        return StoreConstraintError(StoreConstraintError.FOREIGN_KEY, detail)
    return None


def _to_float(value: Any) -> float | None:
    return float(value) if value is not None else None


class SQLAlchemyArticleRatingRepository(ArticleRatingRepository):
    """Implements the ArticleRatingRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ArticleRatingModel) -> ArticleRating:
        """Map ORM model → domain entity."""
        return ArticleRating(
            id=model.id,
            article_id=model.article_id,
            practical_value=model.practical_value,
            technical_depth=model.technical_depth,
            understanding=model.understanding,
            novelty=model.novelty,
            importance=model.importance,
            total_score=model.total_score,
            comment=model.comment,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: ArticleRating) -> ArticleRatingModel:
        """Map domain entity → ORM model (for creation)."""
        return ArticleRatingModel(
            article_id=entity.article_id,
            practical_value=entity.practical_value,
            technical_depth=entity.technical_depth,
            understanding=entity.understanding,
            novelty=entity.novelty,
            importance=entity.importance,
            total_score=entity.total_score,
            comment=entity.comment,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def _flush(self) -> None:
        try:
            await self._session.flush()
        except IntegrityError as exc:
            translated = _constraint_error(exc)
            if translated is None:
                raise
            raise translated from exc

    async def _get_model(self, article_id: int) -> ArticleRatingModel | None:
        stmt = select(ArticleRatingModel).where(ArticleRatingModel.article_id == article_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, rating: ArticleRating) -> ArticleRating:
        model = self._to_model(rating)
        self._session.add(model)
        await self._flush()
        return self._to_entity(model)

    async def find_by_article_id(self, article_id: int) -> ArticleRating | None:
        model = await self._get_model(article_id)
        return self._to_entity(model) if model else None

    async def update(self, article_id: int, changes: dict[str, Any]) -> ArticleRating | None:
        unknown = set(changes) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update rating columns: {sorted(unknown)}")

        model = await self._get_model(article_id)
        if model is None:
            return None
        for column, value in changes.items():
            setattr(model, column, value)
        await self._flush()
        return self._to_entity(model)

    async def delete(self, article_id: int) -> bool:
        model = await self._get_model(article_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def find_many(self, options: RatingListOptions) -> list[ArticleRating]:
        stmt = select(ArticleRatingModel)

        if options.min_score is not None:
            stmt = stmt.where(ArticleRatingModel.total_score >= to_storage_scale(options.min_score))
        if options.max_score is not None:
            stmt = stmt.where(ArticleRatingModel.total_score <= to_storage_scale(options.max_score))
        if options.has_comment is not None:
            stmt = stmt.where(_has_comment_clause() if options.has_comment else _no_comment_clause())

        direction = asc if SortOrder(options.order) == SortOrder.ASC else desc
        sort_column = _SORT_COLUMNS[RatingSortField(options.sort_by)]
        # id as secondary key keeps pagination stable across equal sort values
        stmt = (
            stmt.order_by(direction(sort_column), direction(ArticleRatingModel.id))
            .offset(options.offset)
            .limit(options.limit)
        )

        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_stats(self) -> RatingAggregate:
        with_comment = case((_has_comment_clause(), 1), else_=0)
        stmt = select(
            func.count(ArticleRatingModel.id),
            func.avg(ArticleRatingModel.total_score),
            func.avg(ArticleRatingModel.practical_value),
            func.avg(ArticleRatingModel.technical_depth),
            func.avg(ArticleRatingModel.understanding),
            func.avg(ArticleRatingModel.novelty),
            func.avg(ArticleRatingModel.importance),
            func.coalesce(func.sum(with_comment), 0),
        )
        row = (await self._session.execute(stmt)).one()

        return RatingAggregate(
            total_count=row[0] or 0,
            average_total_score=_to_float(row[1]),
            average_practical_value=_to_float(row[2]),
            average_technical_depth=_to_float(row[3]),
            average_understanding=_to_float(row[4]),
            average_novelty=_to_float(row[5]),
            average_importance=_to_float(row[6]),
            ratings_with_comments=int(row[7] or 0),
        )
