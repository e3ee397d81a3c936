"""
Gunpla card repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.gunpla_cards import GunplaCard
from ..entities.uploads import Upload
from .base import AsyncBaseRepository
from .uploads import UploadRepository


class GunplaCardRepository(AsyncBaseRepository[GunplaCard]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GunplaCard)

    async def get_for(self, user_id: str, kit_id: str) -> Optional[GunplaCard]:
        stmt = select(GunplaCard).where(GunplaCard.user_id == user_id, GunplaCard.kit_id == kit_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def replace(self, user_id: str, kit_id: str, upload: Upload) -> GunplaCard:
        """Store ``upload`` as the user's card for the kit, dropping the previous card and its image."""
        existing = await self.get_for(user_id, kit_id)
        if existing is not None:
            old_upload_id = existing.upload_id
            await self.session.execute(delete(GunplaCard).where(GunplaCard.id == existing.id))
            await UploadRepository(self.session)._stage_delete([old_upload_id])

        self.session.add(upload)
        card = GunplaCard(user_id=user_id, kit_id=kit_id, upload_id=upload.id)
        self.session.add(card)
        await self.session.commit()
        await self.session.refresh(card)
        return card

    async def list_for_user(self, user_id: str) -> List[GunplaCard]:
        stmt = select(GunplaCard).where(GunplaCard.user_id == user_id).order_by(GunplaCard.created_at.desc())
        return await self._scalars(stmt)
