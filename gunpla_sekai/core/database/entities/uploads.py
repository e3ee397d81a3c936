"""
Upload entity model.

Clients upload straight to Cloudinary with a server-issued signature and then
record the resulting asset here. Builds, milestones, kits and gunpla cards
reference uploads through their own link tables.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class Upload(Base, table=True):
    """A Cloudinary asset owned by a user.

    Table: uploads
    """

    __tablename__ = "uploads"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    cloudinary_asset_id: str
    public_id: str
    url: str
    eager_url: Optional[str] = Field(default=None, description="Optimized (q_auto,f_auto) derivative")
    format: str
    resource_type: str = Field(default="image")
    size: int = Field(default=0, description="Size in bytes")
    original_filename: str = Field(default="")
    uploaded_at: datetime = Field(default_factory=utc_now, index=True)
    uploaded_by_id: str = Field(foreign_key="users.id", index=True)

    @property
    def display_url(self) -> str:
        return self.eager_url or self.url

    def __repr__(self) -> str:
        return f"Upload(id={self.id}, public_id={self.public_id})"
