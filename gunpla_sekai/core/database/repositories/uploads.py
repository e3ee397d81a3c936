"""
Upload repository.

An upload can be referenced from build galleries, milestone images, kit media
and gunpla cards. Removing an upload removes those references too, and clears
it as a build's featured image.
"""

from __future__ import annotations

from typing import List, Sequence

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gunpla_sekai.core.models.io.uploads import UploadCreate

from ..entities.builds import Build, BuildMilestoneUpload, BuildUpload
from ..entities.catalog import KitUpload
from ..entities.gunpla_cards import GunplaCard
from ..entities.uploads import Upload
from .base import AsyncBaseRepository

USER_UPLOADS_LIMIT = 50


class UploadRepository(AsyncBaseRepository[Upload]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Upload)

    @staticmethod
    def build(user_id: str, data: UploadCreate) -> Upload:
        return Upload(uploaded_by_id=user_id, **data.model_dump())

    async def create_for_user(self, user_id: str, data: UploadCreate) -> Upload:
        return await self.create(self.build(user_id, data))

    async def list_for_user(self, user_id: str, limit: int = USER_UPLOADS_LIMIT) -> List[Upload]:
        stmt = (
            select(Upload)
            .where(Upload.uploaded_by_id == user_id)
            .order_by(Upload.uploaded_at.desc())
            .limit(limit)
        )
        return await self._scalars(stmt)

    async def _stage_unlink(self, upload_ids: Sequence[str]) -> None:
        ids = list(upload_ids)
        if not ids:
            return
        await self.session.execute(delete(BuildUpload).where(BuildUpload.upload_id.in_(ids)))
        await self.session.execute(delete(BuildMilestoneUpload).where(BuildMilestoneUpload.upload_id.in_(ids)))
        await self.session.execute(delete(KitUpload).where(KitUpload.upload_id.in_(ids)))
        await self.session.execute(delete(GunplaCard).where(GunplaCard.upload_id.in_(ids)))
        await self.session.execute(
            update(Build).where(Build.featured_image_id.in_(ids)).values(featured_image_id=None)
        )

    async def _stage_delete(self, upload_ids: Sequence[str]) -> None:
        await self._stage_unlink(upload_ids)
        if upload_ids:
            await self.session.execute(delete(Upload).where(Upload.id.in_(list(upload_ids))))

    async def delete_with_links(self, upload: Upload) -> None:
        await self._stage_delete([upload.id])
        await self.session.commit()
