"""
Collection repository.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gunpla_sekai.core.models.domain.enums import CollectionStatus
from gunpla_sekai.core.models.io.collections import CollectionEntryRead
from gunpla_sekai.core.models.io.users import CollectionStats

from ..entities.collections import UserKitCollection
from .base import AsyncBaseRepository
from .kits import KitRepository


class CollectionRepository(AsyncBaseRepository[UserKitCollection]):
    """Repository for collection entries using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserKitCollection)

    async def get_entry(self, user_id: str, kit_id: str) -> Optional[UserKitCollection]:
        stmt = select(UserKitCollection).where(
            UserKitCollection.user_id == user_id, UserKitCollection.kit_id == kit_id
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def upsert(
        self, user_id: str, kit_id: str, status: CollectionStatus, notes: Optional[str] = None
    ) -> UserKitCollection:
        """Add the kit to the collection or move it to ``status``."""
        entry = await self.get_entry(user_id, kit_id)
        if entry is None:
            return await self.create(UserKitCollection(user_id=user_id, kit_id=kit_id, status=status, notes=notes))
        entry.status = status
        if notes is not None:
            entry.notes = notes
        return await self.update(entry)

    async def list_for_user(self, user_id: str, status: Optional[CollectionStatus] = None) -> List[UserKitCollection]:
        stmt = select(UserKitCollection).where(UserKitCollection.user_id == user_id)
        if status is not None:
            stmt = stmt.where(UserKitCollection.status == status)
        return await self._scalars(stmt.order_by(UserKitCollection.added_at.desc()))

    async def to_read(self, entries: Sequence[UserKitCollection]) -> List[CollectionEntryRead]:
        kit_repo = KitRepository(self.session)
        kits = await kit_repo.get_many(e.kit_id for e in entries)
        summaries = {s.id: s for s in await kit_repo.summarize(list(kits.values()))}
        return [
            CollectionEntryRead.model_validate(e).model_copy(update={"kit": summaries.get(e.kit_id)})
            for e in entries
        ]

    async def stats(self, user_id: str) -> CollectionStats:
        stmt = (
            select(UserKitCollection.status, func.count())
            .where(UserKitCollection.user_id == user_id)
            .group_by(UserKitCollection.status)
        )
        result = await self.session.execute(stmt)
        counts = {CollectionStatus(status): int(count) for status, count in result.all()}
        return CollectionStats(
            wishlist=counts.get(CollectionStatus.WISHLIST, 0),
            preorder=counts.get(CollectionStatus.PREORDER, 0),
            backlog=counts.get(CollectionStatus.BACKLOG, 0),
            in_progress=counts.get(CollectionStatus.IN_PROGRESS, 0),
            built=counts.get(CollectionStatus.BUILT, 0),
            total=sum(counts.values()),
        )
