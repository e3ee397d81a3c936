"""
Catalog repositories.

Timelines, series, grades, product lines, release types and mobile suits.
Listings come back as read models carrying the relation counts the catalog
pages display.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gunpla_sekai.core.models.io.catalog import (
    GradeDetail,
    GradeRead,
    MobileSuitDetail,
    MobileSuitRead,
    NamedRef,
    ProductLineRead,
    ReleaseTypeAnalytics,
    ReleaseTypeRead,
    SeriesDetail,
    SeriesRead,
    SeriesSummary,
    TimelineDetail,
    TimelineRead,
)

from ..base import utc_now
from ..entities.catalog import (
    Grade,
    Kit,
    KitMobileSuit,
    MobileSuit,
    ProductLine,
    ReleaseType,
    Series,
    Timeline,
)
from .base import AsyncBaseRepository
from .kits import KitRepository


class _SlugLookupMixin:
    model: type
    session: AsyncSession

    async def get_by_slug(self, slug: str):
        result = await self.session.execute(select(self.model).where(self.model.slug == slug))
        return result.scalars().first()


class TimelineRepository(_SlugLookupMixin, AsyncBaseRepository[Timeline]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Timeline)

    async def series_count(self, timeline_id: str) -> int:
        return (await self._count_by(Series.timeline_id, [timeline_id]))[timeline_id]

    async def to_read(self, timelines: Sequence[Timeline]) -> List[TimelineRead]:
        counts = await self._count_by(Series.timeline_id, [t.id for t in timelines])
        return [TimelineRead.model_validate(t).model_copy(update={"series_count": counts[t.id]}) for t in timelines]

    async def list_read(self) -> List[TimelineRead]:
        timelines = await self._scalars(select(Timeline).order_by(Timeline.name))
        return await self.to_read(timelines)

    async def detail(self, timeline: Timeline) -> TimelineDetail:
        series = await self._scalars(select(Series).where(Series.timeline_id == timeline.id).order_by(Series.name))
        summaries = await SeriesRepository(self.session).summarize(series)
        base = (await self.to_read([timeline]))[0]
        return TimelineDetail(**base.model_dump(), series=summaries)


class SeriesRepository(_SlugLookupMixin, AsyncBaseRepository[Series]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Series)

    async def _counts(self, series_ids: List[str]) -> Tuple[Dict[str, int], Dict[str, int]]:
        suits = await self._count_by(MobileSuit.series_id, series_ids)
        kits = await self._count_by(Kit.series_id, series_ids)
        return suits, kits

    async def summarize(self, series: Sequence[Series]) -> List[SeriesSummary]:
        suits, kits = await self._counts([s.id for s in series])
        return [
            SeriesSummary.model_validate(s).model_copy(
                update={"mobile_suits_count": suits[s.id], "kits_count": kits[s.id]}
            )
            for s in series
        ]

    async def to_read(self, series: Sequence[Series]) -> List[SeriesRead]:
        suits, kits = await self._counts([s.id for s in series])
        timelines = await TimelineRepository(self.session).get_many(s.timeline_id for s in series)
        return [
            SeriesRead.model_validate(s).model_copy(
                update={
                    "mobile_suits_count": suits[s.id],
                    "kits_count": kits[s.id],
                    "timeline_name": timelines[s.timeline_id].name if s.timeline_id in timelines else None,
                }
            )
            for s in series
        ]

    async def list_read(self, timeline_id: Optional[str] = None) -> List[SeriesRead]:
        stmt = select(Series).order_by(Series.name)
        if timeline_id is not None:
            stmt = stmt.where(Series.timeline_id == timeline_id)
        return await self.to_read(await self._scalars(stmt))

    async def detail(self, series: Series) -> SeriesDetail:
        base = (await self.to_read([series]))[0]
        timeline = await self.session.get(Timeline, series.timeline_id) if series.timeline_id else None
        suits = await self._scalars(select(MobileSuit).where(MobileSuit.series_id == series.id).order_by(MobileSuit.name))
        kit_repo = KitRepository(self.session)
        kits, _ = await kit_repo.list_where(Kit.series_id == series.id)
        return SeriesDetail(
            **base.model_dump(),
            timeline=NamedRef.model_validate(timeline) if timeline else None,
            mobile_suits=await MobileSuitRepository(self.session).to_read(suits),
            kits=await kit_repo.summarize(kits),
        )

    async def assign_timeline(self, series_ids: Sequence[str], timeline_id: Optional[str]) -> int:
        stmt = (
            update(Series)
            .where(Series.id.in_(list(series_ids)))
            .values(timeline_id=timeline_id, updated_at=utc_now())
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return int(result.rowcount or 0)


class GradeRepository(_SlugLookupMixin, AsyncBaseRepository[Grade]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Grade)

    async def to_read(self, grades: Sequence[Grade]) -> List[GradeRead]:
        grade_ids = [g.id for g in grades]
        line_counts = await self._count_by(ProductLine.grade_id, grade_ids)
        kit_counts = {gid: 0 for gid in grade_ids}
        if grade_ids:
            stmt = (
                select(ProductLine.grade_id, func.count(Kit.id))
                .join(Kit, Kit.product_line_id == ProductLine.id)
                .where(ProductLine.grade_id.in_(grade_ids))
                .group_by(ProductLine.grade_id)
            )
            result = await self.session.execute(stmt)
            kit_counts.update({gid: int(count) for gid, count in result.all()})
        return [
            GradeRead.model_validate(g).model_copy(
                update={"kits_count": kit_counts[g.id], "product_lines_count": line_counts[g.id]}
            )
            for g in grades
        ]

    async def list_read(self) -> List[GradeRead]:
        return await self.to_read(await self._scalars(select(Grade).order_by(Grade.name)))

    async def detail(self, grade: Grade) -> GradeDetail:
        base = (await self.to_read([grade]))[0]
        lines = await self._scalars(
            select(ProductLine).where(ProductLine.grade_id == grade.id).order_by(ProductLine.name)
        )
        return GradeDetail(**base.model_dump(), product_lines=await ProductLineRepository(self.session).to_read(lines))


class ProductLineRepository(_SlugLookupMixin, AsyncBaseRepository[ProductLine]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ProductLine)

    async def to_read(self, lines: Sequence[ProductLine]) -> List[ProductLineRead]:
        kit_counts = await self._count_by(Kit.product_line_id, [pl.id for pl in lines])
        grades = await GradeRepository(self.session).get_many(pl.grade_id for pl in lines)
        return [
            ProductLineRead.model_validate(pl).model_copy(
                update={
                    "kits_count": kit_counts[pl.id],
                    "grade_name": grades[pl.grade_id].name if pl.grade_id in grades else None,
                }
            )
            for pl in lines
        ]

    async def list_read(self) -> List[ProductLineRead]:
        return await self.to_read(await self._scalars(select(ProductLine).order_by(ProductLine.name)))


class ReleaseTypeRepository(_SlugLookupMixin, AsyncBaseRepository[ReleaseType]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ReleaseType)

    async def to_read(self, release_types: Sequence[ReleaseType]) -> List[ReleaseTypeRead]:
        counts = await self._count_by(Kit.release_type_id, [rt.id for rt in release_types])
        return [ReleaseTypeRead.model_validate(rt).model_copy(update={"kits_count": counts[rt.id]}) for rt in release_types]

    async def list_read(self) -> List[ReleaseTypeRead]:
        return await self.to_read(await self._scalars(select(ReleaseType).order_by(ReleaseType.name)))

    async def analytics(self, release_type: ReleaseType) -> ReleaseTypeAnalytics:
        """Summary numbers for a release type's kits."""
        stmt = select(
            func.count(Kit.id),
            func.min(Kit.release_date),
            func.max(Kit.release_date),
            func.avg(Kit.price_yen),
        ).where(Kit.release_type_id == release_type.id)
        total, earliest, latest, average_price = (await self.session.execute(stmt)).one()

        per_grade_stmt = (
            select(Grade.name, func.count(Kit.id))
            .join(Kit, Kit.grade_id == Grade.id)
            .where(Kit.release_type_id == release_type.id)
            .group_by(Grade.name)
            .order_by(Grade.name)
        )
        per_grade = {name: int(count) for name, count in (await self.session.execute(per_grade_stmt)).all()}

        return ReleaseTypeAnalytics(
            release_type=(await self.to_read([release_type]))[0],
            total_kits=int(total or 0),
            earliest_release=earliest,
            latest_release=latest,
            average_price_yen=round(float(average_price), 2) if average_price is not None else None,
            kits_per_grade=per_grade,
        )


class MobileSuitRepository(_SlugLookupMixin, AsyncBaseRepository[MobileSuit]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, MobileSuit)

    async def to_read(self, suits: Sequence[MobileSuit]) -> List[MobileSuitRead]:
        kit_counts = await self._count_by(KitMobileSuit.mobile_suit_id, [ms.id for ms in suits])
        series = await SeriesRepository(self.session).get_many(ms.series_id for ms in suits)
        return [
            MobileSuitRead.model_validate(ms).model_copy(
                update={
                    "kits_count": kit_counts[ms.id],
                    "series_name": series[ms.series_id].name if ms.series_id in series else None,
                }
            )
            for ms in suits
        ]

    async def list_read(self, series_id: Optional[str] = None) -> List[MobileSuitRead]:
        stmt = select(MobileSuit).order_by(MobileSuit.name)
        if series_id is not None:
            stmt = stmt.where(MobileSuit.series_id == series_id)
        return await self.to_read(await self._scalars(stmt))

    async def detail(self, suit: MobileSuit) -> MobileSuitDetail:
        base = (await self.to_read([suit]))[0]
        series = await self.session.get(Series, suit.series_id) if suit.series_id else None
        kit_repo = KitRepository(self.session)
        kits = await kit_repo.for_mobile_suit(suit.id)
        return MobileSuitDetail(
            **base.model_dump(),
            series=NamedRef.model_validate(series) if series else None,
            kits=await kit_repo.summarize(kits),
        )

    async def assign_series(self, mobile_suit_ids: Sequence[str], series_id: Optional[str]) -> int:
        stmt = (
            update(MobileSuit)
            .where(MobileSuit.id.in_(list(mobile_suit_ids)))
            .values(series_id=series_id, updated_at=utc_now())
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return int(result.rowcount or 0)

    async def search(
        self, query: str, timeline: Optional[str] = None, limit: int = 8
    ) -> Tuple[List[MobileSuitRead], int]:
        stmt = select(MobileSuit)
        if query:
            stmt = stmt.where(MobileSuit.name.ilike(f"%{query}%"))
        if timeline and timeline != "all":
            stmt = stmt.where(
                MobileSuit.series_id.in_(
                    select(Series.id).join(Timeline, Timeline.id == Series.timeline_id).where(Timeline.slug == timeline)
                )
            )
        total = await self._count(stmt)
        suits = await self._scalars(stmt.order_by(MobileSuit.name).limit(limit))
        return await self.to_read(suits), total

    async def name_suggestions(self, query: str, limit: int) -> List[str]:
        stmt = select(MobileSuit.name).where(MobileSuit.name.ilike(f"%{query}%")).order_by(MobileSuit.name).limit(limit)
        result = await self.session.execute(stmt)
        return [name for (name,) in result.all()]
