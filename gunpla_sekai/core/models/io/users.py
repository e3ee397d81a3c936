"""
User I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for the current user, the
settings page and public profiles.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserSummary(BaseModel):
    """Author block embedded in reviews, builds and comments."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None
    avatar_url: Optional[str] = None


class CurrentUserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None
    is_admin: bool = False


class PublicUserRead(BaseModel):
    """Profile fields visible to other users."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    instagram_url: Optional[str] = None
    twitter_url: Optional[str] = None
    youtube_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    banner_image_url: Optional[str] = None
    theme_color: Optional[str] = None
    is_public: bool = True
    show_collections: bool = True
    show_builds: bool = True
    show_activity: bool = True
    show_badges: bool = True
    created_at: datetime


class UserSettingsRead(PublicUserRead):
    """Everything the profile settings page edits."""

    email: str
    email_notifications: bool = True


class UserProfileUpdate(BaseModel):
    """Partial update of the current user's profile."""

    username: Optional[str] = Field(default=None, min_length=1, max_length=64)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    instagram_url: Optional[str] = None
    twitter_url: Optional[str] = None
    youtube_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    banner_image_url: Optional[str] = None
    theme_color: Optional[str] = None
    is_public: Optional[bool] = None
    show_collections: Optional[bool] = None
    show_builds: Optional[bool] = None
    show_activity: Optional[bool] = None
    show_badges: Optional[bool] = None
    email_notifications: Optional[bool] = None


class CollectionStats(BaseModel):
    wishlist: int = 0
    preorder: int = 0
    backlog: int = 0
    in_progress: int = 0
    built: int = 0
    total: int = 0


class ProfileReviewRead(BaseModel):
    """A recent review as shown on a profile page."""

    id: str
    kit_id: str
    kit_name: str
    kit_slug: Optional[str] = None
    title: Optional[str] = None
    overall_score: float
    created_at: datetime
    helpful: int = 0
    not_helpful: int = 0
    category_scores: dict[str, int] = Field(default_factory=dict)


class ProfileBuildRead(BaseModel):
    id: str
    title: str
    status: str
    kit_name: str
    featured_image_url: Optional[str] = None
    created_at: datetime


class UserProfileRead(PublicUserRead):
    """Public profile with activity summaries."""

    collection_stats: CollectionStats = Field(default_factory=CollectionStats)
    recent_reviews: List[ProfileReviewRead] = Field(default_factory=list)
    recent_builds: List[ProfileBuildRead] = Field(default_factory=list)
