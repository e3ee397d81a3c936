"""
Build milestone I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from gunpla_sekai.core.models.domain.enums import MilestoneType

from .uploads import UploadRead


def _assume_utc(value: datetime) -> datetime:
    """Client timestamps without an offset are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_assume_utc)]


class MilestoneCreate(BaseModel):
    build_id: str
    type: MilestoneType
    title: str
    description: Optional[str] = None
    order: int
    completed_at: Optional[UtcDatetime] = None


class MilestoneUpdate(BaseModel):
    type: Optional[MilestoneType] = None
    title: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = None
    completed_at: Optional[UtcDatetime] = None


class MilestoneImageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    upload_id: str
    caption: Optional[str] = None
    order: int = 0
    upload: Optional[UploadRead] = None


class MilestoneRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    build_id: str
    type: MilestoneType
    title: str
    description: Optional[str] = None
    order: int
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    images: List[MilestoneImageRead] = Field(default_factory=list)


class MilestoneOrder(BaseModel):
    milestone_ids: List[str]


class MilestoneImageCreate(BaseModel):
    upload_id: str
    caption: Optional[str] = None
    order: int = 0


class MilestoneImageUpdate(BaseModel):
    caption: Optional[str] = None
    order: Optional[int] = None


class MilestoneImagesSet(BaseModel):
    upload_ids: List[str]


class MilestoneImagesOrder(BaseModel):
    link_ids: List[str]
