"""
Build repository.

Covers build logs, their likes and comments, and the media gallery each build
keeps. Deleting a build removes its milestones, milestone images, gallery
links, likes and comments in one transaction.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gunpla_sekai.core.models.domain.enums import BuildSort, BuildStatus
from gunpla_sekai.core.models.io.builds import BuildDetail, BuildListItem, BuildUploadRead, CommentRead
from gunpla_sekai.core.models.io.uploads import UploadRead

from ..entities.builds import Build, BuildComment, BuildLike, BuildMilestone, BuildMilestoneUpload, BuildUpload
from ..entities.uploads import Upload
from .base import AsyncBaseRepository, QueryBuilder
from .kits import KitRepository
from .milestones import MilestoneRepository
from .uploads import UploadRepository
from .users import UserRepository


def _ordering(sort: BuildSort):
    if sort == BuildSort.oldest:
        return [Build.created_at.asc()]
    if sort == BuildSort.completed:
        return [Build.completed_at.desc().nullslast(), Build.created_at.desc()]
    if sort == BuildSort.status:
        return [Build.status.asc(), Build.created_at.desc()]
    return [Build.created_at.desc()]


class BuildRepository(AsyncBaseRepository[Build]):
    """Repository for build logs using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Build)

    async def _stage_delete(self, build_ids: Sequence[str]) -> None:
        ids = list(build_ids)
        if not ids:
            return
        milestone_ids = await self._scalars(select(BuildMilestone.id).where(BuildMilestone.build_id.in_(ids)))
        await MilestoneRepository(self.session)._stage_delete(milestone_ids)
        await self.session.execute(delete(BuildUpload).where(BuildUpload.build_id.in_(ids)))
        await self.session.execute(delete(BuildLike).where(BuildLike.build_id.in_(ids)))
        await self.session.execute(delete(BuildComment).where(BuildComment.build_id.in_(ids)))
        await self.session.execute(delete(Build).where(Build.id.in_(ids)))

    async def delete_cascade(self, build: Build) -> None:
        await self._stage_delete([build.id])
        await self.session.commit()

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def page(
        self,
        user_id: Optional[str] = None,
        status: Optional[BuildStatus] = None,
        sort: BuildSort = BuildSort.newest,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Build], int]:
        stmt = QueryBuilder.apply_filters(select(Build), Build, {"user_id": user_id, "status": status})
        total = await self._count(stmt)
        stmt = QueryBuilder.apply_pagination(stmt.order_by(*_ordering(sort)), limit, offset)
        return await self._scalars(stmt), total

    async def recent(self, limit: int = 10) -> List[Build]:
        return await self._scalars(select(Build).order_by(Build.created_at.desc()).limit(limit))

    async def for_kit(self, kit_id: str, limit: int = 10) -> List[Build]:
        stmt = select(Build).where(Build.kit_id == kit_id).order_by(Build.created_at.desc()).limit(limit)
        return await self._scalars(stmt)

    async def to_list_items(self, builds: Sequence[Build]) -> List[BuildListItem]:
        """Hydrate builds with kit, author, featured image and counters."""
        build_ids = [b.id for b in builds]
        kit_repo = KitRepository(self.session)
        kits = await kit_repo.get_many(b.kit_id for b in builds)
        kit_summaries = {s.id: s for s in await kit_repo.summarize(list(kits.values()))}
        users = await UserRepository(self.session).summaries(b.user_id for b in builds)
        images = await UploadRepository(self.session).get_many(b.featured_image_id for b in builds)
        likes = await self._count_by(BuildLike.build_id, build_ids)
        comments = await self._count_by(BuildComment.build_id, build_ids)
        milestones = await MilestoneRepository(self.session).counts_for(build_ids)

        return [
            BuildListItem.model_validate(b).model_copy(
                update={
                    "kit": kit_summaries.get(b.kit_id),
                    "user": users.get(b.user_id),
                    "featured_image": (
                        UploadRead.model_validate(images[b.featured_image_id])
                        if b.featured_image_id in images
                        else None
                    ),
                    "likes_count": likes[b.id],
                    "comments_count": comments[b.id],
                    "milestones_count": milestones[b.id],
                }
            )
            for b in builds
        ]

    async def detail(self, build: Build, viewer_id: Optional[str] = None) -> BuildDetail:
        item = (await self.to_list_items([build]))[0]
        milestone_repo = MilestoneRepository(self.session)
        milestones = await milestone_repo.to_read(await milestone_repo.for_build(build.id))
        liked = await self.has_liked(build.id, viewer_id) if viewer_id else False
        return BuildDetail(**item.model_dump(), milestones=milestones, liked=liked)

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    async def like_count(self, build_id: str) -> int:
        return (await self._count_by(BuildLike.build_id, [build_id]))[build_id]

    async def has_liked(self, build_id: str, user_id: str) -> bool:
        stmt = select(BuildLike.id).where(BuildLike.build_id == build_id, BuildLike.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def set_like(self, build_id: str, user_id: str, liked: bool) -> None:
        """Idempotently add or remove the user's like."""
        already = await self.has_liked(build_id, user_id)
        if liked and not already:
            self.session.add(BuildLike(build_id=build_id, user_id=user_id))
        elif not liked and already:
            await self.session.execute(
                delete(BuildLike).where(BuildLike.build_id == build_id, BuildLike.user_id == user_id)
            )
        await self.session.commit()

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def get_comment(self, build_id: str, comment_id: str) -> Optional[BuildComment]:
        comment = await self.session.get(BuildComment, comment_id)
        if comment is None or comment.build_id != build_id:
            return None
        return comment

    async def comments(self, build_id: str) -> List[BuildComment]:
        stmt = select(BuildComment).where(BuildComment.build_id == build_id).order_by(BuildComment.created_at.desc())
        return await self._scalars(stmt)

    async def comment_count(self, build_id: str) -> int:
        return (await self._count_by(BuildComment.build_id, [build_id]))[build_id]

    async def comments_to_read(self, comments: Sequence[BuildComment]) -> List[CommentRead]:
        users = await UserRepository(self.session).summaries(c.user_id for c in comments)
        return [CommentRead.model_validate(c).model_copy(update={"user": users.get(c.user_id)}) for c in comments]

    async def save_comment(self, comment: BuildComment) -> BuildComment:
        return await self.update(comment)

    async def remove_comment(self, comment: BuildComment) -> None:
        await self.session.delete(comment)
        await self.session.commit()

    # ------------------------------------------------------------------
    # Gallery
    # ------------------------------------------------------------------

    async def gallery_link(self, build_id: str, upload_id: str) -> Optional[BuildUpload]:
        stmt = select(BuildUpload).where(BuildUpload.build_id == build_id, BuildUpload.upload_id == upload_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def gallery_upload_ids(self, build_id: str) -> set:
        result = await self.session.execute(select(BuildUpload.upload_id).where(BuildUpload.build_id == build_id))
        return {upload_id for (upload_id,) in result.all()}

    async def add_to_gallery(self, build_id: str, upload_id: str, caption: Optional[str] = None) -> BuildUpload:
        """Append an upload to the gallery; re-adding an existing one returns the current link."""
        link = await self.gallery_link(build_id, upload_id)
        if link is not None:
            return link
        next_order = len(await self.gallery_upload_ids(build_id))
        link = BuildUpload(build_id=build_id, upload_id=upload_id, caption=caption, order=next_order)
        self.session.add(link)
        await self.session.commit()
        await self.session.refresh(link)
        return link

    async def gallery(self, build_id: str) -> List[BuildUploadRead]:
        stmt = (
            select(BuildUpload, Upload)
            .join(Upload, Upload.id == BuildUpload.upload_id)
            .where(BuildUpload.build_id == build_id)
            .order_by(BuildUpload.order, BuildUpload.created_at)
        )
        result = await self.session.execute(stmt)
        return [
            BuildUploadRead(
                id=link.id,
                upload_id=link.upload_id,
                caption=link.caption,
                order=link.order,
                upload=UploadRead.model_validate(upload),
            )
            for link, upload in result.all()
        ]

    async def remove_from_gallery(self, build: Build, upload_id: str) -> bool:
        """Detach an upload from the build, its milestones and the featured image slot."""
        link = await self.gallery_link(build.id, upload_id)
        if link is None:
            return False
        milestone_ids = select(BuildMilestone.id).where(BuildMilestone.build_id == build.id)
        await self.session.execute(
            delete(BuildMilestoneUpload).where(
                BuildMilestoneUpload.upload_id == upload_id,
                BuildMilestoneUpload.build_milestone_id.in_(milestone_ids),
            )
        )
        await self.session.execute(delete(BuildUpload).where(BuildUpload.id == link.id))
        if build.featured_image_id == upload_id:
            await self.session.execute(update(Build).where(Build.id == build.id).values(featured_image_id=None))
            build.featured_image_id = None
        await self.session.commit()
        return True

    async def for_user_ids(self, user_id: str) -> List[str]:
        return await self._scalars(select(Build.id).where(Build.user_id == user_id))
