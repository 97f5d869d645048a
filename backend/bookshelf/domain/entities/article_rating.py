"""Domain entities for article ratings — five dimension scores and a derived total.

Dimension scores live on a 1–10 scale. The total score is stored on a
10–100 scale (mean of the dimensions × 10, rounded half-up) so it can be
kept as an integer column. Anything that compares a 1–10 value with the
total score, or reports an average total, must convert with SCORE_SCALE.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

DIMENSION_FIELDS: tuple[str, ...] = (
    "practical_value",
    "technical_depth",
    "understanding",
    "novelty",
    "importance",
)

MIN_DIMENSION_SCORE = 1
MAX_DIMENSION_SCORE = 10
MIN_FILTER_SCORE = 1.0
MAX_FILTER_SCORE = 10.0
MAX_COMMENT_LENGTH = 1000
SCORE_SCALE = 10


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_total_score(
    practical_value: int,
    technical_depth: int,
    understanding: int,
    novelty: int,
    importance: int,
) -> int:
    """Return round((sum / 5) * 10), e.g. (8, 7, 9, 6, 8) -> 76."""
    total = practical_value + technical_depth + understanding + novelty + importance
    return round_half_up(total / len(DIMENSION_FIELDS) * SCORE_SCALE)


def to_storage_scale(score: float) -> int:
    """Convert a 1–10 score filter to the 10–100 scale of total_score."""
    return round_half_up(score * SCORE_SCALE)


def has_comment_text(comment: str | None) -> bool:
    """A comment counts only when it is non-null and non-blank."""
    return comment is not None and comment.strip() != ""


@dataclass
class ArticleRating:
    """Core domain entity: one rating per bookmarked article."""

    article_id: int
    practical_value: int
    technical_depth: int
    understanding: int
    novelty: int
    importance: int
    total_score: int = 0
    comment: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def dimensions(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in DIMENSION_FIELDS}

    @property
    def has_comment(self) -> bool:
        return has_comment_text(self.comment)


@dataclass
class RatingFields:
    """Caller-supplied rating values.

    ``None`` means "not provided". Values are deliberately untyped beyond
    ``Any`` — the service is the single place that checks them.
    """

    practical_value: Any = None
    technical_depth: Any = None
    understanding: Any = None
    novelty: Any = None
    importance: Any = None
    comment: Any = None

    def provided(self) -> dict[str, Any]:
        """Return only the fields that were supplied."""
        values = {name: getattr(self, name) for name in (*DIMENSION_FIELDS, "comment")}
        return {name: value for name, value in values.items() if value is not None}


class RatingSortField(str, Enum):
    """Columns a rating listing may be sorted by (wire names)."""

    TOTAL_SCORE = "totalScore"
    CREATED_AT = "createdAt"
    PRACTICAL_VALUE = "practicalValue"
    TECHNICAL_DEPTH = "technicalDepth"
    UNDERSTANDING = "understanding"
    NOVELTY = "novelty"
    IMPORTANCE = "importance"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class RatingListOptions:
    """Listing options with their defaults.

    Raw caller input may carry anything (unknown sort keys, negative
    offsets); ``RatingService.get_ratings`` normalizes it before it
    reaches a repository.
    """

    sort_by: RatingSortField | str | None = RatingSortField.CREATED_AT
    order: SortOrder | str | None = SortOrder.DESC
    limit: int | None = 20
    offset: int | None = 0
    min_score: float | None = None
    max_score: float | None = None
    has_comment: bool | None = None


DEFAULT_LIST_OPTIONS = RatingListOptions()


@dataclass
class RatingAggregate:
    """Raw aggregate row as the store computes it (storage scale, None when empty)."""

    total_count: int = 0
    average_total_score: float | None = None
    average_practical_value: float | None = None
    average_technical_depth: float | None = None
    average_understanding: float | None = None
    average_novelty: float | None = None
    average_importance: float | None = None
    ratings_with_comments: int = 0


@dataclass
class RatingStats:
    """Rating statistics as reported to callers (all averages on the 1–10 scale)."""

    total_count: int = 0
    average_score: float = 0.0
    average_practical_value: float = 0.0
    average_technical_depth: float = 0.0
    average_understanding: float = 0.0
    average_novelty: float = 0.0
    average_importance: float = 0.0
    ratings_with_comments: int = 0
