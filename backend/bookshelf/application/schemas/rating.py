"""Pydantic DTOs for the article rating feature.

Request bodies accept camelCase (``practicalValue``) or snake_case keys.
Dimension scores are typed but not bounded here: range and length rules
are enforced by ``RatingService`` so every caller gets the same errors.
"""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from bookshelf.domain.entities import RatingFields

_CAMEL_CONFIG = {
    "from_attributes": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class RatingCreate(BaseModel):
    """Schema for rating an article — all five dimensions are required."""

    practical_value: int = Field(..., examples=[8])
    technical_depth: int = Field(..., examples=[7])
    understanding: int = Field(..., examples=[9])
    novelty: int = Field(..., examples=[6])
    importance: int = Field(..., examples=[8])
    comment: str | None = Field(None, examples=["Clear write-up of the trade-offs."])

    model_config = _CAMEL_CONFIG

    def to_fields(self) -> RatingFields:
        return RatingFields(**self.model_dump())


class RatingUpdate(BaseModel):
    """Schema for a partial rating update — all fields optional."""

    practical_value: int | None = None
    technical_depth: int | None = None
    understanding: int | None = None
    novelty: int | None = None
    importance: int | None = None
    comment: str | None = None

    model_config = _CAMEL_CONFIG

    def to_fields(self) -> RatingFields:
        return RatingFields(**self.model_dump())


class RatingResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    article_id: int
    practical_value: int
    technical_depth: int
    understanding: int
    novelty: int
    importance: int
    total_score: int
    comment: str | None
    created_at: datetime
    updated_at: datetime

    model_config = _CAMEL_CONFIG


class RatingListResponse(BaseModel):
    ratings: list[RatingResponse]
    count: int


class RatingStatsResponse(BaseModel):
    """Aggregate statistics — averages on the 1–10 scale."""

    total_count: int
    average_score: float
    average_practical_value: float
    average_technical_depth: float
    average_understanding: float
    average_novelty: float
    average_importance: float
    ratings_with_comments: int

    model_config = _CAMEL_CONFIG
