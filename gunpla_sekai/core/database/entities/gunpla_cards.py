"""
Gunpla card entity model.

A gunpla card is a composited image a user produces in the card builder.
Only the latest card per (user, kit) is kept.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class GunplaCard(Base, table=True):
    """Table: gunpla_cards"""

    __tablename__ = "gunpla_cards"
    __table_args__ = (
        UniqueConstraint("user_id", "kit_id", name="uq_gunpla_card_user_kit"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="users.id", index=True)
    kit_id: str = Field(foreign_key="kits.id", index=True)
    upload_id: str = Field(foreign_key="uploads.id")
    created_at: datetime = Field(default_factory=utc_now, index=True)
