"""
Catalog Service.

Read access to the kit catalog plus the admin maintenance operations on
timelines and on series / mobile suit assignments.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from gunpla_sekai.core.database.entities.catalog import Kit, ReleaseType, Timeline
from gunpla_sekai.core.database.repositories import (
    GradeRepository,
    KitRepository,
    MobileSuitRepository,
    ProductLineRepository,
    ReleaseTypeRepository,
    SeriesRepository,
    TimelineRepository,
)
from gunpla_sekai.core.errors import ConflictError, NotFoundError
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.domain.enums import KitSort
from gunpla_sekai.core.models.io.catalog import (
    FilterData,
    GradeDetail,
    GradeRead,
    KitDetail,
    KitSummary,
    MobileSuitDetail,
    MobileSuitRead,
    ProductLineRead,
    ReleaseTypeAnalytics,
    ReleaseTypeRead,
    SeriesDetail,
    SeriesRead,
    TimelineCreate,
    TimelineDetail,
    TimelineRead,
    TimelineUpdate,
)

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def slugify(name: str) -> str:
    """Lowercase ``name`` and replace whitespace runs with ``-``."""
    return _WHITESPACE.sub("-", name.strip().lower())


class CatalogService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.kits = KitRepository(session)
        self.timelines = TimelineRepository(session)
        self.series = SeriesRepository(session)
        self.grades = GradeRepository(session)
        self.product_lines = ProductLineRepository(session)
        self.release_types = ReleaseTypeRepository(session)
        self.mobile_suits = MobileSuitRepository(session)

    # ------------------------------------------------------------------
    # Timelines
    # ------------------------------------------------------------------

    async def list_timelines(self) -> List[TimelineRead]:
        return await self.timelines.list_read()

    async def get_timeline(self, slug: str) -> TimelineDetail:
        timeline = await self.timelines.get_by_slug(slug)
        if timeline is None:
            raise NotFoundError("Timeline")
        return await self.timelines.detail(timeline)

    async def create_timeline(self, data: TimelineCreate) -> TimelineRead:
        slug = data.slug or slugify(data.name)
        if await self.timelines.get_by_slug(slug) is not None:
            raise ConflictError(f"A timeline with slug '{slug}' already exists")
        timeline = await self.timelines.create(Timeline(name=data.name, slug=slug, description=data.description))
        logger.info(f"Created timeline {timeline.slug}")
        return (await self.timelines.to_read([timeline]))[0]

    async def update_timeline(self, timeline_id: str, data: TimelineUpdate) -> TimelineRead:
        timeline = await self.timelines.get_by_id(timeline_id)
        if timeline is None:
            raise NotFoundError("Timeline")
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(timeline, key, value)
        timeline = await self.timelines.update(timeline)
        return (await self.timelines.to_read([timeline]))[0]

    async def delete_timeline(self, timeline_id: str) -> None:
        timeline = await self.timelines.get_by_id(timeline_id)
        if timeline is None:
            raise NotFoundError("Timeline")
        series_count = await self.timelines.series_count(timeline_id)
        if series_count > 0:
            raise ConflictError(
                f"Cannot delete timeline with {series_count} series. "
                "Please reassign or delete the series first."
            )
        await self.timelines.delete(timeline_id)
        logger.info(f"Deleted timeline {timeline.slug}")

    # ------------------------------------------------------------------
    # Series
    # ------------------------------------------------------------------

    async def list_series(self, timeline_id: Optional[str] = None) -> List[SeriesRead]:
        return await self.series.list_read(timeline_id)

    async def get_series(self, slug: str) -> SeriesDetail:
        series = await self.series.get_by_slug(slug)
        if series is None:
            raise NotFoundError("Series")
        return await self.series.detail(series)

    async def assign_series_to_timeline(self, series_ids: Sequence[str], timeline_id: Optional[str]) -> int:
        if timeline_id is not None and await self.timelines.get_by_id(timeline_id) is None:
            raise NotFoundError("Timeline")
        updated = await self.series.assign_timeline(series_ids, timeline_id)
        logger.info(f"Assigned {updated} series to timeline {timeline_id}")
        return updated

    # ------------------------------------------------------------------
    # Grades, product lines, release types
    # ------------------------------------------------------------------

    async def list_grades(self) -> List[GradeRead]:
        return await self.grades.list_read()

    async def get_grade(self, slug: str) -> GradeDetail:
        grade = await self.grades.get_by_slug(slug)
        if grade is None:
            raise NotFoundError("Grade")
        return await self.grades.detail(grade)

    async def kits_for_grade(self, grade_id: str, limit: Optional[int], offset: int) -> List[KitSummary]:
        if await self.grades.get_by_id(grade_id) is None:
            raise NotFoundError("Grade")
        kits, _ = await self.kits.list_where(Kit.grade_id == grade_id, limit, offset)
        return await self.kits.summarize(kits)

    async def list_product_lines(self) -> List[ProductLineRead]:
        return await self.product_lines.list_read()

    async def get_product_line(self, slug: str) -> ProductLineRead:
        line = await self.product_lines.get_by_slug(slug)
        if line is None:
            raise NotFoundError("Product line")
        return (await self.product_lines.to_read([line]))[0]

    async def kits_for_product_line(self, product_line_id: str, limit: Optional[int], offset: int) -> List[KitSummary]:
        if await self.product_lines.get_by_id(product_line_id) is None:
            raise NotFoundError("Product line")
        kits, _ = await self.kits.list_where(Kit.product_line_id == product_line_id, limit, offset)
        return await self.kits.summarize(kits)

    async def list_release_types(self) -> List[ReleaseTypeRead]:
        return await self.release_types.list_read()

    async def get_release_type(self, slug: str) -> ReleaseTypeRead:
        release_type = await self.release_types.get_by_slug(slug)
        if release_type is None:
            raise NotFoundError("Release type")
        return (await self.release_types.to_read([release_type]))[0]

    async def _release_type(self, release_type_id: str) -> ReleaseType:
        release_type = await self.release_types.get_by_id(release_type_id)
        if release_type is None:
            raise NotFoundError("Release type")
        return release_type

    async def kits_for_release_type(self, release_type_id: str, limit: Optional[int], offset: int) -> List[KitSummary]:
        await self._release_type(release_type_id)
        kits, _ = await self.kits.list_where(Kit.release_type_id == release_type_id, limit, offset)
        return await self.kits.summarize(kits)

    async def release_type_analytics(self, release_type_id: str) -> ReleaseTypeAnalytics:
        return await self.release_types.analytics(await self._release_type(release_type_id))

    # ------------------------------------------------------------------
    # Mobile suits
    # ------------------------------------------------------------------

    async def list_mobile_suits(self, series_id: Optional[str] = None) -> List[MobileSuitRead]:
        return await self.mobile_suits.list_read(series_id)

    async def get_mobile_suit(self, slug: str) -> MobileSuitDetail:
        suit = await self.mobile_suits.get_by_slug(slug)
        if suit is None:
            raise NotFoundError("Mobile suit")
        return await self.mobile_suits.detail(suit)

    async def assign_mobile_suits_to_series(self, mobile_suit_ids: Sequence[str], series_id: Optional[str]) -> int:
        if series_id is not None and await self.series.get_by_id(series_id) is None:
            raise NotFoundError("Series")
        updated = await self.mobile_suits.assign_series(mobile_suit_ids, series_id)
        logger.info(f"Assigned {updated} mobile suits to series {series_id}")
        return updated

    # ------------------------------------------------------------------
    # Kits
    # ------------------------------------------------------------------

    async def filtered_kits(
        self,
        product_line_ids: Sequence[str] = (),
        mobile_suit_ids: Sequence[str] = (),
        series_ids: Sequence[str] = (),
        release_type_ids: Sequence[str] = (),
        sort_by: KitSort = KitSort.relevance,
        order: str = "most-relevant",
    ) -> List[KitSummary]:
        return await self.kits.filtered(product_line_ids, mobile_suit_ids, series_ids, release_type_ids, sort_by, order)

    async def get_kit(self, slug: str) -> KitDetail:
        kit = await self.kits.get_by_slug(slug)
        if kit is None:
            raise NotFoundError("Kit")
        return await self.kits.detail(kit)

    async def filter_data(self) -> FilterData:
        return await self.kits.filter_data()

