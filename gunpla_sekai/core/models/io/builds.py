"""
Build I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from gunpla_sekai.core.models.domain.enums import BuildStatus

from .catalog import KitSummary
from .milestones import MilestoneRead, UtcDatetime
from .uploads import UploadRead
from .users import UserSummary


class BuildCreate(BaseModel):
    kit_id: str
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    status: BuildStatus = BuildStatus.PLANNING
    started_at: Optional[UtcDatetime] = None
    completed_at: Optional[UtcDatetime] = None


class BuildUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[BuildStatus] = None
    started_at: Optional[UtcDatetime] = None
    completed_at: Optional[UtcDatetime] = None
    featured_image_id: Optional[str] = None


class BuildRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    kit_id: str
    title: str
    description: Optional[str] = None
    status: BuildStatus
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    featured_image_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class BuildListItem(BuildRead):
    kit: Optional[KitSummary] = None
    user: Optional[UserSummary] = None
    featured_image: Optional[UploadRead] = None
    likes_count: int = 0
    comments_count: int = 0
    milestones_count: int = 0


class BuildDetail(BuildListItem):
    milestones: List[MilestoneRead] = Field(default_factory=list)
    liked: bool = False


class BuildPage(BaseModel):
    builds: List[BuildListItem]
    has_more: bool
    total: int


class LikeInput(BaseModel):
    liked: bool


class LikeState(BaseModel):
    likes: int
    liked: bool


class CommentInput(BaseModel):
    content: str = Field(max_length=2000)


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    build_id: str
    user_id: str
    content: str
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None


class ShareKit(BaseModel):
    name: str
    number: str = ""
    slug: Optional[str] = None


class ShareData(BaseModel):
    url: str
    title: str
    description: str
    image: Optional[str] = None
    author: str
    kit: ShareKit
    status: BuildStatus
    likes: int
    comments: int


class BuildUploadCreate(BaseModel):
    upload_id: str
    caption: Optional[str] = None


class BuildUploadRead(BaseModel):
    id: str
    upload_id: str
    caption: Optional[str] = None
    order: int = 0
    upload: UploadRead
