"""
Build milestone repository.

Milestones are ordered from 1 within their build; the images linked to a
milestone are ordered from 0.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gunpla_sekai.core.models.io.milestones import MilestoneImageRead, MilestoneRead
from gunpla_sekai.core.models.io.uploads import UploadRead

from ..entities.builds import BuildMilestone, BuildMilestoneUpload
from ..entities.uploads import Upload
from .base import AsyncBaseRepository


class MilestoneRepository(AsyncBaseRepository[BuildMilestone]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, BuildMilestone)

    async def for_build(self, build_id: str) -> List[BuildMilestone]:
        stmt = (
            select(BuildMilestone)
            .where(BuildMilestone.build_id == build_id)
            .order_by(BuildMilestone.order, BuildMilestone.created_at)
        )
        return await self._scalars(stmt)

    async def images_for(self, milestone_ids: Sequence[str]) -> Dict[str, List[MilestoneImageRead]]:
        images: Dict[str, List[MilestoneImageRead]] = {mid: [] for mid in milestone_ids}
        if not milestone_ids:
            return images
        stmt = (
            select(BuildMilestoneUpload, Upload)
            .join(Upload, Upload.id == BuildMilestoneUpload.upload_id)
            .where(BuildMilestoneUpload.build_milestone_id.in_(list(milestone_ids)))
            .order_by(BuildMilestoneUpload.order, BuildMilestoneUpload.created_at)
        )
        result = await self.session.execute(stmt)
        for link, upload in result.all():
            images.setdefault(link.build_milestone_id, []).append(
                MilestoneImageRead.model_validate(link).model_copy(update={"upload": UploadRead.model_validate(upload)})
            )
        return images

    async def to_read(self, milestones: Sequence[BuildMilestone]) -> List[MilestoneRead]:
        images = await self.images_for([m.id for m in milestones])
        return [MilestoneRead.model_validate(m).model_copy(update={"images": images[m.id]}) for m in milestones]

    async def _stage_delete(self, milestone_ids: Sequence[str]) -> None:
        ids = list(milestone_ids)
        if not ids:
            return
        await self.session.execute(delete(BuildMilestoneUpload).where(BuildMilestoneUpload.build_milestone_id.in_(ids)))
        await self.session.execute(delete(BuildMilestone).where(BuildMilestone.id.in_(ids)))

    async def delete_cascade(self, milestone: BuildMilestone) -> None:
        await self._stage_delete([milestone.id])
        await self.session.commit()

    async def reorder(self, build_id: str, milestone_ids: Sequence[str]) -> None:
        """Number the build's milestones from 1 in the given order; foreign ids are ignored."""
        milestones = {m.id: m for m in await self.for_build(build_id)}
        for index, milestone_id in enumerate(milestone_ids):
            milestone = milestones.get(milestone_id)
            if milestone is not None:
                milestone.order = index + 1
                self.session.add(milestone)
        await self.session.commit()

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    async def get_image_link(self, milestone_id: str, link_id: str) -> Optional[BuildMilestoneUpload]:
        link = await self.session.get(BuildMilestoneUpload, link_id)
        if link is None or link.build_milestone_id != milestone_id:
            return None
        return link

    async def add_image(
        self, milestone_id: str, upload_id: str, caption: Optional[str] = None, order: int = 0
    ) -> BuildMilestoneUpload:
        link = BuildMilestoneUpload(build_milestone_id=milestone_id, upload_id=upload_id, caption=caption, order=order)
        self.session.add(link)
        await self.session.commit()
        await self.session.refresh(link)
        return link

    async def save_image_link(self, link: BuildMilestoneUpload) -> BuildMilestoneUpload:
        self.session.add(link)
        await self.session.commit()
        await self.session.refresh(link)
        return link

    async def remove_image(self, link: BuildMilestoneUpload) -> None:
        await self.session.delete(link)
        await self.session.commit()

    async def set_images(self, milestone_id: str, upload_ids: Sequence[str]) -> None:
        """Replace the milestone's images with ``upload_ids``, ordered from 0."""
        await self.session.execute(
            delete(BuildMilestoneUpload).where(BuildMilestoneUpload.build_milestone_id == milestone_id)
        )
        for index, upload_id in enumerate(upload_ids):
            self.session.add(BuildMilestoneUpload(build_milestone_id=milestone_id, upload_id=upload_id, order=index))
        await self.session.commit()

    async def reorder_images(self, milestone_id: str, link_ids: Sequence[str]) -> None:
        stmt = select(BuildMilestoneUpload).where(BuildMilestoneUpload.build_milestone_id == milestone_id)
        links = {link.id: link for link in await self._scalars(stmt)}
        for index, link_id in enumerate(link_ids):
            link = links.get(link_id)
            if link is not None:
                link.order = index
                self.session.add(link)
        await self.session.commit()

    async def counts_for(self, build_ids: Sequence[str]) -> Dict[str, int]:
        return await self._count_by(BuildMilestone.build_id, build_ids)
