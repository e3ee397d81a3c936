"""
User entity model.

Users are created and kept in sync by Clerk webhooks, so the primary key is
the Clerk user id rather than a generated value.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class User(Base, table=True):
    """Registered member and their public profile settings.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(primary_key=True, max_length=64, description="Clerk user id")
    email: str = Field(default="", index=True)
    username: Optional[str] = Field(default=None, unique=True, index=True, max_length=64)
    first_name: Optional[str] = Field(default=None)
    last_name: Optional[str] = Field(default=None)
    image_url: Optional[str] = Field(default=None, description="Avatar synced from Clerk")
    avatar_url: Optional[str] = Field(default=None, description="Avatar uploaded on the profile page")

    # Profile
    bio: Optional[str] = Field(default=None)
    instagram_url: Optional[str] = Field(default=None)
    twitter_url: Optional[str] = Field(default=None)
    youtube_url: Optional[str] = Field(default=None)
    portfolio_url: Optional[str] = Field(default=None)
    banner_image_url: Optional[str] = Field(default=None)
    theme_color: Optional[str] = Field(default=None)

    # Privacy and notifications
    is_public: bool = Field(default=True)
    show_collections: bool = Field(default=True)
    show_builds: bool = Field(default=True)
    show_activity: bool = Field(default=True)
    show_badges: bool = Field(default=True)
    email_notifications: bool = Field(default=True)

    is_admin: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def display_name(self) -> str:
        full = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full or self.username or "Anonymous"

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username})"
