"""
Catalog I/O models for API requests and responses.

Covers timelines, series, grades, product lines, release types, mobile suits
and kits, plus the filter option lists the kit browser needs.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from gunpla_sekai.core.models.domain.enums import KitUploadType

from .uploads import UploadRead


class NamedRef(BaseModel):
    """Minimal id/name/slug reference, also used for filter options."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: Optional[str] = None


class KitSummary(BaseModel):
    """Flattened kit card used in listings and search results."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: Optional[str] = None
    number: str = ""
    variant: Optional[str] = None
    release_date: Optional[date] = None
    price_yen: Optional[int] = None
    box_art: Optional[str] = None
    base_kit_id: Optional[str] = None
    grade_name: Optional[str] = None
    grade_slug: Optional[str] = None
    product_line_name: Optional[str] = None
    series_name: Optional[str] = None
    release_type_name: Optional[str] = None
    release_type_slug: Optional[str] = None
    mobile_suit_names: List[str] = Field(default_factory=list)


class ProductLineRef(NamedRef):
    logo: Optional[str] = None


class KitUploadRead(BaseModel):
    id: str
    type: KitUploadType
    caption: Optional[str] = None
    upload: UploadRead


class KitDetail(KitSummary):
    """Full kit page."""

    region: Optional[str] = None
    notes: Optional[str] = None
    manual_links: List[str] = Field(default_factory=list)
    scraped_images: List[str] = Field(default_factory=list)
    grade: Optional[NamedRef] = None
    product_line: Optional[ProductLineRef] = None
    series: Optional[NamedRef] = None
    release_type: Optional[NamedRef] = None
    base_kit: Optional[KitSummary] = None
    variants: List[KitSummary] = Field(default_factory=list)
    other_variants: List[KitSummary] = Field(default_factory=list)
    mobile_suits: List[NamedRef] = Field(default_factory=list)
    uploads: List[KitUploadRead] = Field(default_factory=list)


# =====================================================================
# Timelines
# =====================================================================


class TimelineRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    description: Optional[str] = None
    series_count: int = 0
    created_at: datetime
    updated_at: datetime


class SeriesSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    description: Optional[str] = None
    mobile_suits_count: int = 0
    kits_count: int = 0


class TimelineDetail(TimelineRead):
    series: List[SeriesSummary] = Field(default_factory=list)


class TimelineCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, description="Defaults to the name in kebab case")
    description: Optional[str] = None


class TimelineUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = None
    description: Optional[str] = None


# =====================================================================
# Series
# =====================================================================


class SeriesRead(SeriesSummary):
    timeline_id: Optional[str] = None
    timeline_name: Optional[str] = None
    scraped_images: List[str] = Field(default_factory=list)


class MobileSuitRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    description: Optional[str] = None
    series_id: Optional[str] = None
    series_name: Optional[str] = None
    scraped_images: List[str] = Field(default_factory=list)
    kits_count: int = 0


class SeriesDetail(SeriesRead):
    timeline: Optional[NamedRef] = None
    mobile_suits: List[MobileSuitRead] = Field(default_factory=list)
    kits: List[KitSummary] = Field(default_factory=list)


class SeriesTimelineAssign(BaseModel):
    """Attach series to a timeline, or detach them with ``timeline_id=None``."""

    series_ids: List[str] = Field(min_length=1)
    timeline_id: Optional[str] = None


# =====================================================================
# Mobile suits
# =====================================================================


class MobileSuitDetail(MobileSuitRead):
    series: Optional[NamedRef] = None
    kits: List[KitSummary] = Field(default_factory=list)


class MobileSuitSeriesAssign(BaseModel):
    mobile_suit_ids: List[str] = Field(min_length=1)
    series_id: Optional[str] = None


class AssignmentResult(BaseModel):
    updated: int


# =====================================================================
# Grades and product lines
# =====================================================================


class ProductLineRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    description: Optional[str] = None
    logo: Optional[str] = None
    scraped_image: Optional[str] = None
    grade_id: str
    grade_name: Optional[str] = None
    kits_count: int = 0


class GradeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    description: Optional[str] = None
    kits_count: int = 0
    product_lines_count: int = 0


class GradeDetail(GradeRead):
    product_lines: List[ProductLineRead] = Field(default_factory=list)


# =====================================================================
# Release types
# =====================================================================


class ReleaseTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    kits_count: int = 0


class ReleaseTypeAnalytics(BaseModel):
    release_type: ReleaseTypeRead
    total_kits: int = 0
    earliest_release: Optional[date] = None
    latest_release: Optional[date] = None
    average_price_yen: Optional[float] = None
    kits_per_grade: Dict[str, int] = Field(default_factory=dict)


# =====================================================================
# Filters
# =====================================================================


class FilterData(BaseModel):
    product_lines: List[NamedRef] = Field(default_factory=list)
    mobile_suits: List[NamedRef] = Field(default_factory=list)
    series: List[NamedRef] = Field(default_factory=list)
    release_types: List[NamedRef] = Field(default_factory=list)
