"""
User Service.

Profiles, settings and the full removal of a member's data when Clerk
reports the account as deleted.
"""

from __future__ import annotations

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gunpla_sekai.core.database.entities.builds import BuildComment, BuildLike
from gunpla_sekai.core.database.entities.collections import UserKitCollection
from gunpla_sekai.core.database.entities.gunpla_cards import GunplaCard
from gunpla_sekai.core.database.entities.reviews import Review, ReviewFeedback
from gunpla_sekai.core.database.entities.uploads import Upload
from gunpla_sekai.core.database.entities.users import User
from gunpla_sekai.core.database.repositories import (
    BuildRepository,
    CollectionRepository,
    KitRepository,
    ReviewRepository,
    UploadRepository,
    UserRepository,
)
from gunpla_sekai.core.errors import ConflictError, NotFoundError
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.io.users import (
    CurrentUserRead,
    ProfileBuildRead,
    ProfileReviewRead,
    UserProfileRead,
    UserProfileUpdate,
    UserSettingsRead,
)

logger = get_logger(__name__)

RECENT_ACTIVITY_LIMIT = 5


class UserService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.reviews = ReviewRepository(session)
        self.builds = BuildRepository(session)
        self.collections = CollectionRepository(session)

    async def _require(self, user_id: str) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User")
        return user

    async def current_user(self, user_id: str) -> CurrentUserRead:
        return CurrentUserRead.model_validate(await self._require(user_id))

    async def settings(self, user_id: str) -> UserSettingsRead:
        return UserSettingsRead.model_validate(await self._require(user_id))

    async def update_profile(self, user_id: str, data: UserProfileUpdate) -> UserSettingsRead:
        user = await self._require(user_id)
        changes = data.model_dump(exclude_unset=True)
        username = changes.get("username")
        if username and await self.users.username_taken(username, exclude_user_id=user_id):
            raise ConflictError("Username is already taken")
        for key, value in changes.items():
            setattr(user, key, value)
        user = await self.users.update(user)
        logger.info(f"Updated profile of user {user_id}")
        return UserSettingsRead.model_validate(user)

    async def profile(self, username: str) -> UserProfileRead:
        user = await self.users.get_by_username(username)
        if user is None:
            raise NotFoundError("User")

        reviews = await self.reviews.list_for_user(user.id, RECENT_ACTIVITY_LIMIT)
        review_ids = [r.id for r in reviews]
        feedback = await self.reviews.feedback_counts(review_ids)
        scores = await self.reviews.scores_for(review_ids)
        kits = await KitRepository(self.session).get_many(r.kit_id for r in reviews)
        recent_reviews = [
            ProfileReviewRead(
                id=r.id,
                kit_id=r.kit_id,
                kit_name=kits[r.kit_id].name if r.kit_id in kits else "",
                kit_slug=kits[r.kit_id].slug if r.kit_id in kits else None,
                title=r.title,
                overall_score=r.overall_score,
                created_at=r.created_at,
                helpful=feedback[r.id].helpful,
                not_helpful=feedback[r.id].not_helpful,
                category_scores={s.category.value: s.score for s in scores[r.id]},
            )
            for r in reviews
        ]

        recent_builds = []
        if user.show_builds:
            builds, _ = await self.builds.page(user_id=user.id, limit=RECENT_ACTIVITY_LIMIT)
            for item in await self.builds.to_list_items(builds):
                recent_builds.append(
                    ProfileBuildRead(
                        id=item.id,
                        title=item.title,
                        status=item.status.value,
                        kit_name=item.kit.name if item.kit else "",
                        featured_image_url=(
                            item.featured_image.eager_url or item.featured_image.url if item.featured_image else None
                        ),
                        created_at=item.created_at,
                    )
                )

        return UserProfileRead.model_validate(user).model_copy(
            update={
                "collection_stats": await self.collections.stats(user.id),
                "recent_reviews": recent_reviews,
                "recent_builds": recent_builds,
            }
        )

    async def delete_user(self, user_id: str) -> bool:
        """Remove the user and everything they own in a single transaction."""
        user = await self.users.get_by_id(user_id)
        if user is None:
            return False

        review_ids = await self.reviews._scalars(select(Review.id).where(Review.user_id == user_id))
        await self.reviews._stage_delete(review_ids)
        await self.session.execute(delete(ReviewFeedback).where(ReviewFeedback.user_id == user_id))

        await self.builds._stage_delete(await self.builds.for_user_ids(user_id))
        await self.session.execute(delete(BuildLike).where(BuildLike.user_id == user_id))
        await self.session.execute(delete(BuildComment).where(BuildComment.user_id == user_id))

        await self.session.execute(delete(UserKitCollection).where(UserKitCollection.user_id == user_id))
        await self.session.execute(delete(GunplaCard).where(GunplaCard.user_id == user_id))

        uploads = UploadRepository(self.session)
        upload_ids = await uploads._scalars(select(Upload.id).where(Upload.uploaded_by_id == user_id))
        await uploads._stage_delete(upload_ids)

        await self.session.execute(delete(User).where(User.id == user_id))
        await self.session.commit()
        logger.info(f"Deleted user {user_id} and their content")
        return True
