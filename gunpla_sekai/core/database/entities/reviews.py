"""
Review entity models.

A review belongs to one user and one kit and carries a score for every
``ReviewCategory``. Other users mark reviews helpful or not through
``ReviewFeedback``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from gunpla_sekai.core.models.domain.enums import ReviewCategory

from ..base import Base, new_id, utc_now


class Review(Base, table=True):
    """Table: reviews"""

    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "kit_id", name="uq_review_user_kit"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="users.id", index=True)
    kit_id: str = Field(foreign_key="kits.id", index=True)
    title: Optional[str] = Field(default=None)
    content: Optional[str] = Field(default=None)
    overall_score: float = Field(description="Mean of the category scores, one decimal")
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Review(id={self.id}, kit_id={self.kit_id}, overall_score={self.overall_score})"


class ReviewScore(Base, table=True):
    """Table: review_scores"""

    __tablename__ = "review_scores"
    __table_args__ = (
        UniqueConstraint("review_id", "category", name="uq_review_score_category"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    review_id: str = Field(foreign_key="reviews.id", index=True)
    category: ReviewCategory
    score: int = Field(ge=1, le=10)
    notes: Optional[str] = Field(default=None)


class ReviewFeedback(Base, table=True):
    """Table: review_feedback"""

    __tablename__ = "review_feedback"
    __table_args__ = (
        UniqueConstraint("review_id", "user_id", name="uq_review_feedback_user"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    review_id: str = Field(foreign_key="reviews.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    is_helpful: bool
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
