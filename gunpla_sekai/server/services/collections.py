"""
Collection Service.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from gunpla_sekai.core.database.repositories import CollectionRepository, KitRepository, UserRepository
from gunpla_sekai.core.errors import NotFoundError
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.domain.enums import CollectionStatus
from gunpla_sekai.core.models.io.collections import CollectionEntryRead, KitCollectionStatusRead

logger = get_logger(__name__)


class CollectionService:
    def __init__(self, session: AsyncSession) -> None:
        self.collections = CollectionRepository(session)
        self.kits = KitRepository(session)
        self.users = UserRepository(session)

    async def _read_one(self, entry) -> CollectionEntryRead:
        return (await self.collections.to_read([entry]))[0]

    async def set_status(
        self, user_id: str, kit_id: str, status: CollectionStatus, notes: Optional[str] = None
    ) -> CollectionEntryRead:
        """Add a kit to the collection, or move it to another status."""
        if await self.kits.get_by_id(kit_id) is None:
            raise NotFoundError("Kit")
        entry = await self.collections.upsert(user_id, kit_id, status, notes)
        logger.info(f"User {user_id} set kit {kit_id} to {status.value}")
        return await self._read_one(entry)

    async def update_status(
        self, user_id: str, kit_id: str, status: CollectionStatus, notes: Optional[str] = None
    ) -> CollectionEntryRead:
        entry = await self.collections.get_entry(user_id, kit_id)
        if entry is None:
            raise NotFoundError("Collection entry", "Kit is not in your collection")
        entry.status = status
        if notes is not None:
            entry.notes = notes
        return await self._read_one(await self.collections.update(entry))

    async def remove(self, user_id: str, kit_id: str) -> None:
        entry = await self.collections.get_entry(user_id, kit_id)
        if entry is None:
            raise NotFoundError("Collection entry", "Kit is not in your collection")
        await self.collections.delete(entry.id)

    async def my_collection(self, user_id: str, status: Optional[CollectionStatus] = None) -> List[CollectionEntryRead]:
        return await self.collections.to_read(await self.collections.list_for_user(user_id, status))

    async def kit_status(self, user_id: Optional[str], kit_id: str) -> KitCollectionStatusRead:
        entry = await self.collections.get_entry(user_id, kit_id) if user_id else None
        return KitCollectionStatusRead(kit_id=kit_id, status=entry.status if entry else None)

    async def user_collection(
        self, username: str, status: Optional[CollectionStatus] = None
    ) -> List[CollectionEntryRead]:
        user = await self.users.get_by_username(username)
        if user is None:
            return []
        return await self.my_collection(user.id, status)
