"""
Review Endpoints.

Multi-category kit reviews, per-kit statistics and helpful / not-helpful
feedback on reviews.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Query, status

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.domain.reviews import REVIEW_CATEGORIES
from gunpla_sekai.core.models.io.reviews import (
    FeedbackCounts,
    FeedbackCountsRequest,
    FeedbackInput,
    ReviewCategoryInfoRead,
    ReviewCreate,
    ReviewFeedbackRead,
    ReviewRead,
    ReviewStats,
    ReviewUpdate,
)
from gunpla_sekai.server.services.auth import CurrentUserId, OptionalUserId
from gunpla_sekai.server.services.deps import ReviewServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["reviews"])


@router.get(
    "/categories",
    response_model=List[ReviewCategoryInfoRead],
    summary="List Review Categories",
    description="Retrieve the six scored categories with their labels and descriptions.",
    response_description="The review categories.",
)
async def list_review_categories() -> List[ReviewCategoryInfoRead]:
    return [
        ReviewCategoryInfoRead(category=info.category, label=info.label, description=info.description)
        for info in REVIEW_CATEGORIES
    ]


@router.post(
    "",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Review",
    description="Review a kit by scoring all six categories from 1 to 10.",
    response_description="The created review with its scores.",
    responses={
        201: {"description": "Review created successfully"},
        401: {"description": "Not authenticated"},
        404: {"description": "Kit not found"},
        409: {"description": "The user already reviewed this kit"},
        422: {"description": "Scores failed validation"},
    },
)
async def create_review(data: ReviewCreate, user_id: CurrentUserId, service: ReviewServiceDep) -> ReviewRead:
    """
    Create a review.

    The overall score is the mean of the category scores rounded to one decimal.

    - **kit_id**: The reviewed kit.
    - **title** / **content**: Optional text of the review.
    - **scores**: One entry per category; integers from 1 to 10, no duplicates.
    """
    return await service.create_review(user_id, data)


@router.post(
    "/feedback/counts",
    response_model=Dict[str, FeedbackCounts],
    summary="Get Feedback Counts",
    description="Retrieve helpful / not-helpful counts for several reviews at once.",
    response_description="Counts keyed by review id.",
)
async def get_feedback_counts(data: FeedbackCountsRequest, service: ReviewServiceDep) -> Dict[str, FeedbackCounts]:
    return await service.feedback_counts(data.review_ids)


@router.get(
    "/kit/{kit_id}",
    response_model=List[ReviewRead],
    summary="List Kit Reviews",
    description="Retrieve the reviews of a kit, newest first, with author, scores and feedback counts.",
    response_description="A page of reviews.",
)
async def list_kit_reviews(
    kit_id: str,
    service: ReviewServiceDep,
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> List[ReviewRead]:
    return await service.reviews_for_kit(kit_id, limit, offset)


@router.get(
    "/kit/{kit_id}/mine",
    response_model=Optional[ReviewRead],
    summary="Get My Review",
    description="Retrieve the caller's review of a kit, or null when there is none or the caller is anonymous.",
    response_description="The caller's review or null.",
)
async def get_my_kit_review(kit_id: str, user_id: OptionalUserId, service: ReviewServiceDep) -> Optional[ReviewRead]:
    if user_id is None:
        return None
    return await service.my_review(kit_id, user_id)


@router.get(
    "/kit/{kit_id}/stats",
    response_model=ReviewStats,
    summary="Get Kit Review Stats",
    description="Total reviews, average overall score and per-category averages for a kit.",
    response_description="Review statistics.",
)
async def get_kit_review_stats(kit_id: str, service: ReviewServiceDep) -> ReviewStats:
    """
    Get review statistics.

    Averages are rounded to one decimal; a kit without reviews reports zeros.
    """
    return await service.kit_stats(kit_id)


@router.get(
    "/user/{user_id}",
    response_model=List[ReviewRead],
    summary="List User Reviews",
    description="Retrieve a member's reviews, newest first, with the reviewed kit and scores.",
    response_description="A list of reviews.",
)
async def list_user_reviews(user_id: str, service: ReviewServiceDep) -> List[ReviewRead]:
    return await service.reviews_by_user(user_id)


@router.patch(
    "/{review_id}",
    response_model=ReviewRead,
    summary="Update Review",
    description="Update a review's text and, optionally, replace its scores. Owner only.",
    response_description="The updated review.",
    responses={
        200: {"description": "Review updated"},
        403: {"description": "Caller does not own the review"},
        404: {"description": "Review not found"},
        422: {"description": "Scores failed validation"},
    },
)
async def update_review(
    review_id: str, data: ReviewUpdate, user_id: CurrentUserId, service: ReviewServiceDep
) -> ReviewRead:
    """
    Update a review.

    When **scores** is supplied it must again cover all six categories and the
    overall score is recomputed.
    """
    return await service.update_review(review_id, user_id, data)


@router.delete(
    "/{review_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Review",
    description="Delete a review together with its scores and feedback. Owner only.",
    responses={
        204: {"description": "Review deleted"},
        403: {"description": "Caller does not own the review"},
        404: {"description": "Review not found"},
    },
)
async def delete_review(review_id: str, user_id: CurrentUserId, service: ReviewServiceDep) -> None:
    await service.delete_review(review_id, user_id)


@router.get(
    "/{review_id}/feedback",
    response_model=ReviewFeedbackRead,
    summary="Get Review Feedback",
    description="Helpful / not-helpful counts for a review plus the caller's own vote when authenticated.",
    response_description="Feedback counts.",
    responses={
        200: {"description": "Feedback retrieved"},
        404: {"description": "Review not found"},
    },
)
async def get_review_feedback(
    review_id: str, user_id: OptionalUserId, service: ReviewServiceDep
) -> ReviewFeedbackRead:
    return await service.feedback(review_id, user_id)


@router.post(
    "/{review_id}/feedback",
    response_model=ReviewFeedbackRead,
    summary="Submit Review Feedback",
    description="Mark a review as helpful or not helpful. A later vote replaces the earlier one.",
    response_description="Updated feedback counts.",
    responses={
        200: {"description": "Feedback recorded"},
        401: {"description": "Not authenticated"},
        404: {"description": "Review not found"},
    },
)
async def submit_review_feedback(
    review_id: str, data: FeedbackInput, user_id: CurrentUserId, service: ReviewServiceDep
) -> ReviewFeedbackRead:
    """
    Vote on a review.

    - **is_helpful**: ``true`` for helpful, ``false`` for not helpful.
    """
    return await service.submit_feedback(review_id, user_id, data.is_helpful)


@router.delete(
    "/{review_id}/feedback",
    response_model=ReviewFeedbackRead,
    summary="Remove Review Feedback",
    description="Withdraw the caller's vote on a review.",
    response_description="Updated feedback counts.",
    responses={
        200: {"description": "Feedback removed"},
        401: {"description": "Not authenticated"},
        404: {"description": "Review not found"},
    },
)
async def remove_review_feedback(
    review_id: str, user_id: CurrentUserId, service: ReviewServiceDep
) -> ReviewFeedbackRead:
    return await service.remove_feedback(review_id, user_id)
