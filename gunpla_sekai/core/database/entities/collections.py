"""
Collection entity model.

A collection entry records a user's relationship to a kit: wanted,
pre-ordered, in the backlog, being built or finished. Each user has at most
one entry per kit.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from gunpla_sekai.core.models.domain.enums import CollectionStatus

from ..base import Base, new_id, utc_now


class UserKitCollection(Base, table=True):
    """Table: user_kit_collections"""

    __tablename__ = "user_kit_collections"
    __table_args__ = (
        UniqueConstraint("user_id", "kit_id", name="uq_user_kit_collection"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="users.id", index=True)
    kit_id: str = Field(foreign_key="kits.id", index=True)
    status: CollectionStatus = Field(index=True)
    notes: Optional[str] = Field(default=None)
    added_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
