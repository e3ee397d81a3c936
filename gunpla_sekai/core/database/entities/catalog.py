"""
Catalog entity models.

The catalog is the read-mostly reference data users build on: timelines group
series, series group mobile suits, grades group product lines, and kits tie
all of them together.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field

from gunpla_sekai.core.models.domain.enums import KitUploadType

from ..base import Base, new_id, utc_now


class Timeline(Base, table=True):
    """A Gundam universe / continuity (e.g. Universal Century).

    Table: timelines
    """

    __tablename__ = "timelines"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str
    slug: str = Field(unique=True, index=True)
    description: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Series(Base, table=True):
    """An anime, OVA or manga within a timeline.

    Table: series
    """

    __tablename__ = "series"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str
    slug: str = Field(unique=True, index=True)
    description: Optional[str] = Field(default=None)
    timeline_id: Optional[str] = Field(default=None, foreign_key="timelines.id", index=True)
    scraped_images: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Grade(Base, table=True):
    """Scale and detail tier (HG, RG, MG, PG, ...).

    Table: grades
    """

    __tablename__ = "grades"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str
    slug: str = Field(unique=True, index=True)
    description: Optional[str] = Field(default=None)


class ProductLine(Base, table=True):
    """Sub-brand within a grade (e.g. HGUC, MG Ver.Ka).

    Table: product_lines
    """

    __tablename__ = "product_lines"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str
    slug: str = Field(unique=True, index=True)
    description: Optional[str] = Field(default=None)
    logo: Optional[str] = Field(default=None)
    scraped_image: Optional[str] = Field(default=None)
    grade_id: str = Field(foreign_key="grades.id", index=True)


class ReleaseType(Base, table=True):
    """Distribution channel (retail, Premium Bandai, event exclusive, ...).

    Table: release_types
    """

    __tablename__ = "release_types"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str
    slug: str = Field(unique=True, index=True)


class MobileSuit(Base, table=True):
    """A mecha design that kits depict.

    Table: mobile_suits
    """

    __tablename__ = "mobile_suits"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str = Field(index=True)
    slug: str = Field(unique=True, index=True)
    description: Optional[str] = Field(default=None)
    series_id: Optional[str] = Field(default=None, foreign_key="series.id", index=True)
    scraped_images: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Kit(Base, table=True):
    """A specific model kit product.

    Variants point at their base kit through ``base_kit_id``.

    Table: kits
    """

    __tablename__ = "kits"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str = Field(index=True)
    slug: Optional[str] = Field(default=None, unique=True, index=True)
    number: str = Field(default="", description="Catalog number printed on the box")
    variant: Optional[str] = Field(default=None)
    release_date: Optional[date] = Field(default=None, index=True)
    price_yen: Optional[int] = Field(default=None)
    region: Optional[str] = Field(default=None)
    box_art: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    manual_links: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    scraped_images: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    grade_id: str = Field(foreign_key="grades.id", index=True)
    product_line_id: Optional[str] = Field(default=None, foreign_key="product_lines.id", index=True)
    series_id: Optional[str] = Field(default=None, foreign_key="series.id", index=True)
    release_type_id: Optional[str] = Field(default=None, foreign_key="release_types.id", index=True)
    base_kit_id: Optional[str] = Field(default=None, foreign_key="kits.id", index=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Kit(id={self.id}, name={self.name}, number={self.number})"


class KitMobileSuit(Base, table=True):
    """Join table between kits and the mobile suits they depict.

    Table: kit_mobile_suits
    """

    __tablename__ = "kit_mobile_suits"
    __table_args__ = (
        UniqueConstraint("kit_id", "mobile_suit_id", name="uq_kit_mobile_suit"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    kit_id: str = Field(foreign_key="kits.id", index=True)
    mobile_suit_id: str = Field(foreign_key="mobile_suits.id", index=True)


class KitUpload(Base, table=True):
    """An uploaded image attached to a kit page.

    Table: kit_uploads
    """

    __tablename__ = "kit_uploads"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    kit_id: str = Field(foreign_key="kits.id", index=True)
    upload_id: str = Field(foreign_key="uploads.id", index=True)
    type: KitUploadType = Field(default=KitUploadType.PRODUCT_SHOTS)
    caption: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
