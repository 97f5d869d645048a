"""SQLAlchemy ORM model for the ArticleRating entity."""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.infrastructure.database.base import Base, UTCDateTime


class ArticleRatingModel(Base):
    """ORM model — maps to the 'article_ratings' table.

    ``article_id`` is unique: it is what keeps one rating per article
    when two writers race past the service's pre-check.
    """

    __tablename__ = "article_ratings"
    __table_args__ = (
        CheckConstraint("practical_value BETWEEN 1 AND 10", name="ck_rating_practical_value"),
        CheckConstraint("technical_depth BETWEEN 1 AND 10", name="ck_rating_technical_depth"),
        CheckConstraint("understanding BETWEEN 1 AND 10", name="ck_rating_understanding"),
        CheckConstraint("novelty BETWEEN 1 AND 10", name="ck_rating_novelty"),
        CheckConstraint("importance BETWEEN 1 AND 10", name="ck_rating_importance"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    article_id: Mapped[int] = mapped_column(
        ForeignKey("bookmarks.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    practical_value: Mapped[int] = mapped_column(Integer, nullable=False)
    technical_depth: Mapped[int] = mapped_column(Integer, nullable=False)
    understanding: Mapped[int] = mapped_column(Integer, nullable=False)
    novelty: Mapped[int] = mapped_column(Integer, nullable=False)
    importance: Mapped[int] = mapped_column(Integer, nullable=False)
    total_score: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ArticleRatingModel(article_id={self.article_id}, total_score={self.total_score})>"
