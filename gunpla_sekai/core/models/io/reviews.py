"""
Review I/O models for API requests and responses.

Score values are accepted as plain numbers so that out-of-range or fractional
scores reach the domain validator, which reports every problem in one
response instead of failing on the first.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from gunpla_sekai.core.models.domain.enums import ReviewCategory

from .catalog import KitSummary
from .users import UserSummary


class ReviewScoreInput(BaseModel):
    category: ReviewCategory
    score: Union[int, float]
    notes: Optional[str] = None


class ReviewCreate(BaseModel):
    kit_id: str
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = None
    scores: List[ReviewScoreInput]


class ReviewUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = None
    scores: Optional[List[ReviewScoreInput]] = None


class ReviewScoreRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    category: ReviewCategory
    score: int
    notes: Optional[str] = None


class FeedbackCounts(BaseModel):
    helpful: int = 0
    not_helpful: int = 0


class ReviewRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    kit_id: str
    title: Optional[str] = None
    content: Optional[str] = None
    overall_score: float
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None
    kit: Optional[KitSummary] = None
    scores: List[ReviewScoreRead] = Field(default_factory=list)
    feedback: Optional[FeedbackCounts] = None


class CategoryAverage(BaseModel):
    category: ReviewCategory
    average_score: float
    review_count: int


class ReviewStats(BaseModel):
    total_reviews: int = 0
    average_score: float = 0.0
    category_averages: List[CategoryAverage] = Field(default_factory=list)


class ReviewCategoryInfoRead(BaseModel):
    category: ReviewCategory
    label: str
    description: str


class FeedbackInput(BaseModel):
    is_helpful: StrictBool


class ReviewFeedbackRead(FeedbackCounts):
    review_id: str
    user_feedback: Optional[bool] = Field(default=None, description="The caller's vote, if any")


class FeedbackCountsRequest(BaseModel):
    review_ids: List[str] = Field(default_factory=list)
