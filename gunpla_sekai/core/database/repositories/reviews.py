"""
Review repository.

Reviews are written together with their category scores, so the create and
update paths here stage the review and every score before a single commit.
Feedback votes live in the same repository because they are only ever read
alongside reviews.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import case, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gunpla_sekai.core.models.domain.enums import ReviewCategory
from gunpla_sekai.core.models.domain.reviews import round_to_tenth
from gunpla_sekai.core.models.io.reviews import (
    CategoryAverage,
    FeedbackCounts,
    ReviewRead,
    ReviewScoreRead,
    ReviewStats,
)

from ..base import utc_now
from ..entities.reviews import Review, ReviewFeedback, ReviewScore
from .base import AsyncBaseRepository, QueryBuilder
from .kits import KitRepository
from .users import UserRepository

# (category, score, notes)
ScoreRow = Tuple[ReviewCategory, int, Optional[str]]

KIT_REVIEWS_LIMIT = 10


class ReviewRepository(AsyncBaseRepository[Review]):
    """Repository for reviews, their scores and feedback votes."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Review)

    async def get_for_user_kit(self, user_id: str, kit_id: str) -> Optional[Review]:
        stmt = select(Review).where(Review.user_id == user_id, Review.kit_id == kit_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    def _stage_scores(self, review_id: str, scores: Iterable[ScoreRow]) -> None:
        for category, score, notes in scores:
            self.session.add(ReviewScore(review_id=review_id, category=category, score=score, notes=notes))

    async def create_with_scores(self, review: Review, scores: Sequence[ScoreRow]) -> Review:
        self.session.add(review)
        self._stage_scores(review.id, scores)
        await self.session.commit()
        await self.session.refresh(review)
        return review

    async def update_with_scores(self, review: Review, scores: Optional[Sequence[ScoreRow]] = None) -> Review:
        """Save review edits, replacing every score when ``scores`` is given."""
        if scores is not None:
            await self.session.execute(delete(ReviewScore).where(ReviewScore.review_id == review.id))
            self._stage_scores(review.id, scores)
        return await self.update(review)

    async def _stage_delete(self, review_ids: Sequence[str]) -> None:
        ids = list(review_ids)
        if not ids:
            return
        await self.session.execute(delete(ReviewScore).where(ReviewScore.review_id.in_(ids)))
        await self.session.execute(delete(ReviewFeedback).where(ReviewFeedback.review_id.in_(ids)))
        await self.session.execute(delete(Review).where(Review.id.in_(ids)))

    async def delete_cascade(self, review: Review) -> None:
        await self._stage_delete([review.id])
        await self.session.commit()

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def list_for_kit(self, kit_id: str, limit: int = KIT_REVIEWS_LIMIT, offset: int = 0) -> List[Review]:
        stmt = select(Review).where(Review.kit_id == kit_id).order_by(Review.created_at.desc())
        return await self._scalars(QueryBuilder.apply_pagination(stmt, limit, offset))

    async def list_for_user(self, user_id: str, limit: Optional[int] = None) -> List[Review]:
        stmt = select(Review).where(Review.user_id == user_id).order_by(Review.created_at.desc())
        return await self._scalars(QueryBuilder.apply_pagination(stmt, limit, None))

    async def scores_for(self, review_ids: Sequence[str]) -> Dict[str, List[ReviewScore]]:
        scores: Dict[str, List[ReviewScore]] = {rid: [] for rid in review_ids}
        if not review_ids:
            return scores
        rows = await self._scalars(
            select(ReviewScore).where(ReviewScore.review_id.in_(list(review_ids))).order_by(ReviewScore.category)
        )
        for row in rows:
            scores.setdefault(row.review_id, []).append(row)
        return scores

    async def to_read(
        self,
        reviews: Sequence[Review],
        with_user: bool = True,
        with_kit: bool = False,
        with_feedback: bool = False,
    ) -> List[ReviewRead]:
        """Hydrate reviews with scores and, on request, author, kit and vote counts."""
        review_ids = [r.id for r in reviews]
        scores = await self.scores_for(review_ids)
        users = await UserRepository(self.session).summaries(r.user_id for r in reviews) if with_user else {}
        kits = {}
        if with_kit:
            kit_repo = KitRepository(self.session)
            found = await kit_repo.get_many(r.kit_id for r in reviews)
            kits = {s.id: s for s in await kit_repo.summarize(list(found.values()))}
        feedback = await self.feedback_counts(review_ids) if with_feedback else {}

        return [
            ReviewRead.model_validate(r).model_copy(
                update={
                    "scores": [ReviewScoreRead.model_validate(s) for s in scores[r.id]],
                    "user": users.get(r.user_id),
                    "kit": kits.get(r.kit_id),
                    "feedback": feedback.get(r.id),
                }
            )
            for r in reviews
        ]

    async def stats(self, kit_id: str) -> ReviewStats:
        total_stmt = select(func.count(Review.id), func.avg(Review.overall_score)).where(Review.kit_id == kit_id)
        total, average = (await self.session.execute(total_stmt)).one()
        if not total:
            return ReviewStats()

        category_stmt = (
            select(ReviewScore.category, func.avg(ReviewScore.score), func.count(ReviewScore.id))
            .join(Review, Review.id == ReviewScore.review_id)
            .where(Review.kit_id == kit_id)
            .group_by(ReviewScore.category)
            .order_by(ReviewScore.category)
        )
        result = await self.session.execute(category_stmt)
        return ReviewStats(
            total_reviews=int(total),
            average_score=round_to_tenth(float(average)),
            category_averages=[
                CategoryAverage(
                    category=ReviewCategory(category),
                    average_score=round_to_tenth(float(avg)),
                    review_count=int(count),
                )
                for category, avg, count in result.all()
            ],
        )

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    async def get_feedback(self, review_id: str, user_id: str) -> Optional[ReviewFeedback]:
        stmt = select(ReviewFeedback).where(ReviewFeedback.review_id == review_id, ReviewFeedback.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def upsert_feedback(self, review_id: str, user_id: str, is_helpful: bool) -> ReviewFeedback:
        vote = await self.get_feedback(review_id, user_id)
        if vote is None:
            vote = ReviewFeedback(review_id=review_id, user_id=user_id, is_helpful=is_helpful)
        else:
            vote.is_helpful = is_helpful
            vote.updated_at = utc_now()
        self.session.add(vote)
        await self.session.commit()
        await self.session.refresh(vote)
        return vote

    async def remove_feedback(self, review_id: str, user_id: str) -> bool:
        result = await self.session.execute(
            delete(ReviewFeedback).where(ReviewFeedback.review_id == review_id, ReviewFeedback.user_id == user_id)
        )
        await self.session.commit()
        return bool(result.rowcount)

    async def feedback_counts(self, review_ids: Sequence[str]) -> Dict[str, FeedbackCounts]:
        counts = {rid: FeedbackCounts() for rid in review_ids}
        if not review_ids:
            return counts
        stmt = (
            select(
                ReviewFeedback.review_id,
                func.sum(case((ReviewFeedback.is_helpful.is_(True), 1), else_=0)),
                func.sum(case((ReviewFeedback.is_helpful.is_(False), 1), else_=0)),
            )
            .where(ReviewFeedback.review_id.in_(list(review_ids)))
            .group_by(ReviewFeedback.review_id)
        )
        result = await self.session.execute(stmt)
        for review_id, helpful, not_helpful in result.all():
            counts[review_id] = FeedbackCounts(helpful=int(helpful or 0), not_helpful=int(not_helpful or 0))
        return counts
