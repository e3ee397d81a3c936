"""
Review Service.

Owns the review rules: one review per user per kit, all six categories scored
with integers from 1 to 10, and an overall score that is the mean of the
category scores rounded to one decimal. Feedback votes ("was this review
helpful?") are handled here as well.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from gunpla_sekai.core.database.entities.reviews import Review
from gunpla_sekai.core.database.repositories import KitRepository, ReviewRepository
from gunpla_sekai.core.database.repositories.reviews import ScoreRow
from gunpla_sekai.core.errors import ConflictError, NotFoundError, PermissionDeniedError, ValidationFailedError
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.domain.reviews import calculate_overall_score, validate_scores
from gunpla_sekai.core.models.io.reviews import (
    FeedbackCounts,
    ReviewCreate,
    ReviewFeedbackRead,
    ReviewRead,
    ReviewScoreInput,
    ReviewStats,
    ReviewUpdate,
)
from gunpla_sekai.core.monitoring import log_review_event

logger = get_logger(__name__)


def _checked_scores(scores: Sequence[ReviewScoreInput]) -> List[ScoreRow]:
    errors = validate_scores(scores)
    if errors:
        raise ValidationFailedError(errors)
    return [(s.category, int(s.score), s.notes) for s in scores]


class ReviewService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.reviews = ReviewRepository(session)
        self.kits = KitRepository(session)

    async def _owned_review(self, review_id: str, user_id: str) -> Review:
        review = await self.reviews.get_by_id(review_id)
        if review is None:
            raise NotFoundError("Review")
        if review.user_id != user_id:
            raise PermissionDeniedError()
        return review

    async def _read_one(self, review: Review) -> ReviewRead:
        return (await self.reviews.to_read([review], with_kit=True))[0]

    async def create_review(self, user_id: str, data: ReviewCreate) -> ReviewRead:
        rows = _checked_scores(data.scores)
        if await self.kits.get_by_id(data.kit_id) is None:
            raise NotFoundError("Kit")
        if await self.reviews.get_for_user_kit(user_id, data.kit_id) is not None:
            raise ConflictError("You have already reviewed this kit")

        review = Review(
            user_id=user_id,
            kit_id=data.kit_id,
            title=data.title,
            content=data.content,
            overall_score=calculate_overall_score(score for _, score, _ in rows),
        )
        review = await self.reviews.create_with_scores(review, rows)
        logger.info(f"User {user_id} reviewed kit {data.kit_id} ({review.overall_score})")
        log_review_event("created", review.id, review.kit_id, review.overall_score)
        return await self._read_one(review)

    async def update_review(self, review_id: str, user_id: str, data: ReviewUpdate) -> ReviewRead:
        review = await self._owned_review(review_id, user_id)
        rows: Optional[List[ScoreRow]] = None
        if data.scores is not None:
            rows = _checked_scores(data.scores)
            review.overall_score = calculate_overall_score(score for _, score, _ in rows)

        fields = data.model_dump(exclude_unset=True, exclude={"scores"})
        for key, value in fields.items():
            setattr(review, key, value)

        review = await self.reviews.update_with_scores(review, rows)
        log_review_event("updated", review.id, review.kit_id, review.overall_score)
        return await self._read_one(review)

    async def delete_review(self, review_id: str, user_id: str) -> None:
        review = await self._owned_review(review_id, user_id)
        await self.reviews.delete_cascade(review)
        logger.info(f"Deleted review {review_id}")
        log_review_event("deleted", review_id, review.kit_id)

    async def reviews_for_kit(self, kit_id: str, limit: int = 10, offset: int = 0) -> List[ReviewRead]:
        reviews = await self.reviews.list_for_kit(kit_id, limit, offset)
        return await self.reviews.to_read(reviews, with_feedback=True)

    async def my_review(self, kit_id: str, user_id: str) -> Optional[ReviewRead]:
        review = await self.reviews.get_for_user_kit(user_id, kit_id)
        if review is None:
            return None
        return (await self.reviews.to_read([review]))[0]

    async def kit_stats(self, kit_id: str) -> ReviewStats:
        return await self.reviews.stats(kit_id)

    async def reviews_by_user(self, user_id: str) -> List[ReviewRead]:
        reviews = await self.reviews.list_for_user(user_id)
        return await self.reviews.to_read(reviews, with_user=False, with_kit=True)

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    async def _require_review(self, review_id: str) -> Review:
        review = await self.reviews.get_by_id(review_id)
        if review is None:
            raise NotFoundError("Review")
        return review

    async def feedback(self, review_id: str, user_id: Optional[str]) -> ReviewFeedbackRead:
        await self._require_review(review_id)
        counts = (await self.reviews.feedback_counts([review_id]))[review_id]
        vote = await self.reviews.get_feedback(review_id, user_id) if user_id else None
        return ReviewFeedbackRead(
            review_id=review_id,
            helpful=counts.helpful,
            not_helpful=counts.not_helpful,
            user_feedback=vote.is_helpful if vote else None,
        )

    async def submit_feedback(self, review_id: str, user_id: str, is_helpful: bool) -> ReviewFeedbackRead:
        await self._require_review(review_id)
        await self.reviews.upsert_feedback(review_id, user_id, is_helpful)
        return await self.feedback(review_id, user_id)

    async def remove_feedback(self, review_id: str, user_id: str) -> ReviewFeedbackRead:
        await self._require_review(review_id)
        await self.reviews.remove_feedback(review_id, user_id)
        return await self.feedback(review_id, user_id)

    async def feedback_counts(self, review_ids: Sequence[str]) -> Dict[str, FeedbackCounts]:
        return await self.reviews.feedback_counts(list(dict.fromkeys(review_ids)))
