"""
User repository.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gunpla_sekai.core.models.io.users import UserSummary

from ..entities.users import User
from .base import AsyncBaseRepository


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalars().first()

    async def username_taken(self, username: str, exclude_user_id: Optional[str] = None) -> bool:
        stmt = select(User.id).where(User.username == username)
        if exclude_user_id is not None:
            stmt = stmt.where(User.id != exclude_user_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def summaries(self, user_ids: Iterable[str]) -> Dict[str, UserSummary]:
        """Author blocks keyed by user id."""
        users = await self.get_many(user_ids)
        return {user_id: UserSummary.model_validate(user) for user_id, user in users.items()}
