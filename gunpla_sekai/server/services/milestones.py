"""
Milestone Service.

Milestones and their images may only be changed by the author of the build.
For a stranger's build the lookups answer 404 rather than 403 so that the
existence of private drafts is not revealed.
"""

from __future__ import annotations

from typing import List, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from gunpla_sekai.core.database.entities.builds import Build, BuildMilestone, BuildMilestoneUpload
from gunpla_sekai.core.database.repositories import BuildRepository, MilestoneRepository, UploadRepository
from gunpla_sekai.core.errors import BadRequestError, NotFoundError, ValidationFailedError
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.io.milestones import (
    MilestoneCreate,
    MilestoneImageCreate,
    MilestoneImageRead,
    MilestoneImageUpdate,
    MilestoneRead,
    MilestoneUpdate,
)

logger = get_logger(__name__)

BUILD_NOT_FOUND = "Build not found or unauthorized"
MILESTONE_NOT_FOUND = "Milestone not found or unauthorized"


def _clean_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise ValidationFailedError("Milestone title cannot be empty")
    return title


class MilestoneService:
    def __init__(self, session: AsyncSession) -> None:
        self.milestones = MilestoneRepository(session)
        self.builds = BuildRepository(session)
        self.uploads = UploadRepository(session)

    async def _owned_build(self, build_id: str, user_id: str) -> Build:
        build = await self.builds.get_by_id(build_id)
        if build is None or build.user_id != user_id:
            raise NotFoundError("Build", BUILD_NOT_FOUND)
        return build

    async def _owned_milestone(self, milestone_id: str, user_id: str) -> BuildMilestone:
        milestone = await self.milestones.get_by_id(milestone_id)
        if milestone is None:
            raise NotFoundError("Milestone", MILESTONE_NOT_FOUND)
        build = await self.builds.get_by_id(milestone.build_id)
        if build is None or build.user_id != user_id:
            raise NotFoundError("Milestone", MILESTONE_NOT_FOUND)
        return milestone

    async def _read_one(self, milestone: BuildMilestone) -> MilestoneRead:
        return (await self.milestones.to_read([milestone]))[0]

    async def for_build(self, build_id: str) -> List[MilestoneRead]:
        if await self.builds.get_by_id(build_id) is None:
            raise NotFoundError("Build")
        return await self.milestones.to_read(await self.milestones.for_build(build_id))

    async def create(self, user_id: str, data: MilestoneCreate) -> MilestoneRead:
        await self._owned_build(data.build_id, user_id)
        milestone = BuildMilestone(
            build_id=data.build_id,
            type=data.type,
            title=_clean_title(data.title),
            description=data.description,
            order=data.order,
            completed_at=data.completed_at,
        )
        milestone = await self.milestones.create(milestone)
        logger.info(f"Added milestone {milestone.id} to build {data.build_id}")
        return await self._read_one(milestone)

    async def update(self, milestone_id: str, user_id: str, data: MilestoneUpdate) -> MilestoneRead:
        milestone = await self._owned_milestone(milestone_id, user_id)
        changes = data.model_dump(exclude_unset=True)
        if "title" in changes and changes["title"] is not None:
            changes["title"] = _clean_title(changes["title"])
        for key, value in changes.items():
            if value is None and key in ("type", "title", "order"):
                continue
            setattr(milestone, key, value)
        return await self._read_one(await self.milestones.update(milestone))

    async def delete(self, milestone_id: str, user_id: str) -> None:
        milestone = await self._owned_milestone(milestone_id, user_id)
        await self.milestones.delete_cascade(milestone)

    async def reorder(self, build_id: str, user_id: str, milestone_ids: Sequence[str]) -> List[MilestoneRead]:
        await self._owned_build(build_id, user_id)
        await self.milestones.reorder(build_id, milestone_ids)
        return await self.milestones.to_read(await self.milestones.for_build(build_id))

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    async def _image_link(self, milestone_id: str, link_id: str) -> BuildMilestoneUpload:
        link = await self.milestones.get_image_link(milestone_id, link_id)
        if link is None:
            raise NotFoundError("Milestone image")
        return link

    async def add_image(self, milestone_id: str, user_id: str, data: MilestoneImageCreate) -> MilestoneImageRead:
        await self._owned_milestone(milestone_id, user_id)
        upload = await self.uploads.get_by_id(data.upload_id)
        if upload is None or upload.uploaded_by_id != user_id:
            raise NotFoundError("Upload", "Upload not found or unauthorized")
        link = await self.milestones.add_image(milestone_id, data.upload_id, data.caption, data.order)
        images = (await self.milestones.images_for([milestone_id]))[milestone_id]
        return next(image for image in images if image.id == link.id)

    async def update_image(
        self, milestone_id: str, link_id: str, user_id: str, data: MilestoneImageUpdate
    ) -> MilestoneImageRead:
        await self._owned_milestone(milestone_id, user_id)
        link = await self._image_link(milestone_id, link_id)
        changes = data.model_dump(exclude_unset=True)
        if "caption" in changes:
            link.caption = changes["caption"]
        if changes.get("order") is not None:
            link.order = changes["order"]
        link = await self.milestones.save_image_link(link)
        return MilestoneImageRead.model_validate(link)

    async def remove_image(self, milestone_id: str, link_id: str, user_id: str) -> None:
        await self._owned_milestone(milestone_id, user_id)
        await self.milestones.remove_image(await self._image_link(milestone_id, link_id))

    async def set_images(self, milestone_id: str, user_id: str, upload_ids: Sequence[str]) -> MilestoneRead:
        """Replace the milestone's images; every upload must already be in the build gallery."""
        milestone = await self._owned_milestone(milestone_id, user_id)
        gallery = await self.builds.gallery_upload_ids(milestone.build_id)
        if any(upload_id not in gallery for upload_id in upload_ids):
            raise BadRequestError("Some images are not available in the build gallery")
        await self.milestones.set_images(milestone_id, upload_ids)
        return await self._read_one(milestone)

    async def reorder_images(self, milestone_id: str, user_id: str, link_ids: Sequence[str]) -> MilestoneRead:
        milestone = await self._owned_milestone(milestone_id, user_id)
        await self.milestones.reorder_images(milestone_id, link_ids)
        return await self._read_one(milestone)
