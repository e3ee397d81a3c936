"""
Build log entity models.

A build documents one user's work on one kit. Images are uploaded into the
build's gallery (``BuildUpload``) and then arranged into ordered milestones
(``BuildMilestone`` + ``BuildMilestoneUpload``). Other users like and comment
on builds.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from gunpla_sekai.core.models.domain.enums import BuildStatus, MilestoneType

from ..base import Base, new_id, utc_now


class Build(Base, table=True):
    """Table: builds"""

    __tablename__ = "builds"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="users.id", index=True)
    kit_id: str = Field(foreign_key="kits.id", index=True)
    title: str
    description: Optional[str] = Field(default=None)
    status: BuildStatus = Field(default=BuildStatus.PLANNING, index=True)
    started_at: Optional[datetime] = Field(default=None)
    completed_at: Optional[datetime] = Field(default=None)
    featured_image_id: Optional[str] = Field(default=None, foreign_key="uploads.id")
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Build(id={self.id}, title={self.title}, status={self.status})"


class BuildUpload(Base, table=True):
    """Gallery membership of an upload in a build.

    Table: build_uploads
    """

    __tablename__ = "build_uploads"
    __table_args__ = (
        UniqueConstraint("build_id", "upload_id", name="uq_build_upload"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    build_id: str = Field(foreign_key="builds.id", index=True)
    upload_id: str = Field(foreign_key="uploads.id", index=True)
    caption: Optional[str] = Field(default=None)
    order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)


class BuildMilestone(Base, table=True):
    """Table: build_milestones"""

    __tablename__ = "build_milestones"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    build_id: str = Field(foreign_key="builds.id", index=True)
    type: MilestoneType
    title: str
    description: Optional[str] = Field(default=None)
    order: int = Field(default=0)
    completed_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class BuildMilestoneUpload(Base, table=True):
    """Table: build_milestone_uploads"""

    __tablename__ = "build_milestone_uploads"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    build_milestone_id: str = Field(foreign_key="build_milestones.id", index=True)
    upload_id: str = Field(foreign_key="uploads.id", index=True)
    caption: Optional[str] = Field(default=None)
    order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)


class BuildLike(Base, table=True):
    """Table: build_likes"""

    __tablename__ = "build_likes"
    __table_args__ = (
        UniqueConstraint("build_id", "user_id", name="uq_build_like"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    build_id: str = Field(foreign_key="builds.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)


class BuildComment(Base, table=True):
    """Table: build_comments"""

    __tablename__ = "build_comments"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    build_id: str = Field(foreign_key="builds.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    content: str
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
