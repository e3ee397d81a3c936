"""
Kit repository.

Besides plain lookups this repository flattens kits into ``KitSummary``
read models, batch-loading the grade, product line, series, release type and
mobile suit names for a whole page of kits at once.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gunpla_sekai.core.models.domain.enums import KitSort, SearchSort
from gunpla_sekai.core.models.io.catalog import (
    FilterData,
    KitDetail,
    KitSummary,
    KitUploadRead,
    NamedRef,
    ProductLineRef,
)
from gunpla_sekai.core.models.io.uploads import UploadRead

from ..entities.catalog import (
    Grade,
    Kit,
    KitMobileSuit,
    KitUpload,
    MobileSuit,
    ProductLine,
    ReleaseType,
    Series,
    Timeline,
)
from ..entities.uploads import Upload
from .base import AsyncBaseRepository, QueryBuilder

FILTERED_KITS_LIMIT = 50


def _contains(value: str) -> str:
    return f"%{value}%"


class KitRepository(AsyncBaseRepository[Kit]):
    """Repository for kit data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Kit)

    async def get_by_slug(self, slug: str) -> Optional[Kit]:
        result = await self.session.execute(select(Kit).where(Kit.slug == slug))
        return result.scalars().first()

    # ------------------------------------------------------------------
    # Read models
    # ------------------------------------------------------------------

    async def _names_by_id(self, model, ids: Sequence[Optional[str]]) -> Dict[str, object]:
        wanted = {i for i in ids if i}
        if not wanted:
            return {}
        rows = await self._scalars(select(model).where(model.id.in_(wanted)))
        return {row.id: row for row in rows}

    async def mobile_suit_names(self, kit_ids: Sequence[str]) -> Dict[str, List[str]]:
        names: Dict[str, List[str]] = {kit_id: [] for kit_id in kit_ids}
        if not kit_ids:
            return names
        stmt = (
            select(KitMobileSuit.kit_id, MobileSuit.name)
            .join(MobileSuit, MobileSuit.id == KitMobileSuit.mobile_suit_id)
            .where(KitMobileSuit.kit_id.in_(list(kit_ids)))
            .order_by(MobileSuit.name)
        )
        result = await self.session.execute(stmt)
        for kit_id, name in result.all():
            names.setdefault(kit_id, []).append(name)
        return names

    async def summarize(self, kits: Sequence[Kit]) -> List[KitSummary]:
        """Flatten kits into summaries, preserving their order."""
        if not kits:
            return []
        grades = await self._names_by_id(Grade, [k.grade_id for k in kits])
        product_lines = await self._names_by_id(ProductLine, [k.product_line_id for k in kits])
        series = await self._names_by_id(Series, [k.series_id for k in kits])
        release_types = await self._names_by_id(ReleaseType, [k.release_type_id for k in kits])
        suit_names = await self.mobile_suit_names([k.id for k in kits])

        summaries = []
        for kit in kits:
            grade = grades.get(kit.grade_id)
            product_line = product_lines.get(kit.product_line_id) if kit.product_line_id else None
            kit_series = series.get(kit.series_id) if kit.series_id else None
            release_type = release_types.get(kit.release_type_id) if kit.release_type_id else None
            summaries.append(
                KitSummary.model_validate(kit).model_copy(
                    update={
                        "grade_name": grade.name if grade else None,
                        "grade_slug": grade.slug if grade else None,
                        "product_line_name": product_line.name if product_line else None,
                        "series_name": kit_series.name if kit_series else None,
                        "release_type_name": release_type.name if release_type else None,
                        "release_type_slug": release_type.slug if release_type else None,
                        "mobile_suit_names": suit_names.get(kit.id, []),
                    }
                )
            )
        return summaries

    async def detail(self, kit: Kit) -> KitDetail:
        """Assemble the full kit page."""
        base_kit = await self.get_by_id(kit.base_kit_id) if kit.base_kit_id else None
        variants = await self._scalars(
            select(Kit).where(Kit.base_kit_id == kit.id).order_by(Kit.release_date.asc().nullslast(), Kit.name)
        )
        other_variants: List[Kit] = []
        if kit.base_kit_id:
            other_variants = await self._scalars(
                select(Kit)
                .where(Kit.base_kit_id == kit.base_kit_id, Kit.id != kit.id)
                .order_by(Kit.release_date.asc().nullslast(), Kit.name)
            )

        related = [kit] + ([base_kit] if base_kit else []) + variants + other_variants
        summaries = {s.id: s for s in await self.summarize(related)}

        grade = await self.session.get(Grade, kit.grade_id)
        product_line = await self.session.get(ProductLine, kit.product_line_id) if kit.product_line_id else None
        kit_series = await self.session.get(Series, kit.series_id) if kit.series_id else None
        release_type = await self.session.get(ReleaseType, kit.release_type_id) if kit.release_type_id else None

        mobile_suits = await self._scalars(
            select(MobileSuit)
            .join(KitMobileSuit, KitMobileSuit.mobile_suit_id == MobileSuit.id)
            .where(KitMobileSuit.kit_id == kit.id)
            .order_by(MobileSuit.name)
        )
        upload_rows = await self.session.execute(
            select(KitUpload, Upload)
            .join(Upload, Upload.id == KitUpload.upload_id)
            .where(KitUpload.kit_id == kit.id)
            .order_by(KitUpload.created_at)
        )

        return KitDetail(
            **summaries[kit.id].model_dump(),
            region=kit.region,
            notes=kit.notes,
            manual_links=list(kit.manual_links or []),
            scraped_images=list(kit.scraped_images or []),
            grade=NamedRef.model_validate(grade) if grade else None,
            product_line=ProductLineRef.model_validate(product_line) if product_line else None,
            series=NamedRef.model_validate(kit_series) if kit_series else None,
            release_type=NamedRef.model_validate(release_type) if release_type else None,
            base_kit=summaries[base_kit.id] if base_kit else None,
            variants=[summaries[v.id] for v in variants],
            other_variants=[summaries[v.id] for v in other_variants],
            mobile_suits=[NamedRef.model_validate(ms) for ms in mobile_suits],
            uploads=[
                KitUploadRead(
                    id=link.id,
                    type=link.type,
                    caption=link.caption,
                    upload=UploadRead.model_validate(upload),
                )
                for link, upload in upload_rows.all()
            ],
        )

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def filtered(
        self,
        product_line_ids: Sequence[str] = (),
        mobile_suit_ids: Sequence[str] = (),
        series_ids: Sequence[str] = (),
        release_type_ids: Sequence[str] = (),
        sort_by: KitSort = KitSort.relevance,
        order: str = "most-relevant",
        limit: int = FILTERED_KITS_LIMIT,
    ) -> List[KitSummary]:
        """Browse kits by any combination of catalog filters."""
        stmt = select(Kit)
        if product_line_ids:
            stmt = stmt.where(Kit.product_line_id.in_(list(product_line_ids)))
        if series_ids:
            stmt = stmt.where(Kit.series_id.in_(list(series_ids)))
        if release_type_ids:
            stmt = stmt.where(Kit.release_type_id.in_(list(release_type_ids)))
        if mobile_suit_ids:
            stmt = stmt.where(
                Kit.id.in_(select(KitMobileSuit.kit_id).where(KitMobileSuit.mobile_suit_id.in_(list(mobile_suit_ids))))
            )

        ascending = order == "ascending"
        if sort_by == KitSort.name:
            stmt = stmt.order_by(Kit.name.asc() if ascending else Kit.name.desc())
        elif sort_by == KitSort.release_date:
            column = Kit.release_date.asc() if ascending else Kit.release_date.desc()
            stmt = stmt.order_by(column.nullslast(), Kit.name)
        else:
            stmt = stmt.order_by(Kit.name.asc())

        kits = await self._scalars(stmt.limit(limit))
        return await self.summarize(kits)

    async def list_where(
        self, condition, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> Tuple[List[Kit], int]:
        """Page through kits matching ``condition``, newest release first."""
        stmt = select(Kit).where(condition)
        total = await self._count(stmt)
        stmt = stmt.order_by(Kit.release_date.desc().nullslast(), Kit.name)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        return await self._scalars(stmt), total

    async def for_mobile_suit(self, mobile_suit_id: str) -> List[Kit]:
        return await self._scalars(
            select(Kit)
            .join(KitMobileSuit, KitMobileSuit.kit_id == Kit.id)
            .where(KitMobileSuit.mobile_suit_id == mobile_suit_id)
            .order_by(Kit.release_date.desc().nullslast(), Kit.name)
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _search_statement(self, query: str, timeline: Optional[str], grade: Optional[str]):
        stmt = select(Kit)
        if query:
            pattern = _contains(query)
            suit_match = (
                select(KitMobileSuit.kit_id)
                .join(MobileSuit, MobileSuit.id == KitMobileSuit.mobile_suit_id)
                .where(MobileSuit.name.ilike(pattern))
            )
            series_match = select(Series.id).where(Series.name.ilike(pattern))
            stmt = stmt.where(
                or_(
                    Kit.name.ilike(pattern),
                    Kit.number.ilike(pattern),
                    Kit.variant.ilike(pattern),
                    Kit.id.in_(suit_match),
                    Kit.series_id.in_(series_match),
                )
            )
        if timeline and timeline != "all":
            stmt = stmt.where(
                Kit.series_id.in_(
                    select(Series.id).join(Timeline, Timeline.id == Series.timeline_id).where(Timeline.slug == timeline)
                )
            )
        if grade and grade != "all":
            stmt = stmt.where(Kit.grade_id.in_(select(Grade.id).where(Grade.slug == grade)))
        return stmt

    async def search(
        self,
        query: str,
        timeline: Optional[str] = None,
        grade: Optional[str] = None,
        sort_by: SearchSort = SearchSort.relevance,
        limit: int = 8,
        offset: int = 0,
    ) -> Tuple[List[KitSummary], int]:
        """Case-insensitive kit search over name, number, variant, mobile suit and series names."""
        stmt = self._search_statement(query, timeline, grade)
        total = await self._count(stmt)

        order = {
            SearchSort.name_asc: [Kit.name.asc()],
            SearchSort.name_desc: [Kit.name.desc()],
            SearchSort.release_desc: [Kit.release_date.desc().nullslast(), Kit.name],
            SearchSort.release_asc: [Kit.release_date.asc().nullslast(), Kit.name],
            SearchSort.price_asc: [Kit.price_yen.asc().nullslast(), Kit.name],
            SearchSort.price_desc: [Kit.price_yen.desc().nullslast(), Kit.name],
        }.get(sort_by, [Kit.base_kit_id.is_not(None), Kit.name.asc()])
        stmt = stmt.order_by(*order).offset(offset).limit(limit)

        kits = await self._scalars(stmt)
        return await self.summarize(kits), total

    async def name_suggestions(self, query: str, limit: int) -> List[str]:
        stmt = select(Kit.name).where(Kit.name.ilike(_contains(query))).order_by(Kit.name).limit(limit)
        result = await self.session.execute(stmt)
        return [name for (name,) in result.all()]

    async def all_kits(self) -> List[Kit]:
        return await self._scalars(select(Kit).order_by(Kit.name))

    # ------------------------------------------------------------------
    # Filter options
    # ------------------------------------------------------------------

    async def filter_data(self) -> FilterData:
        async def options(model) -> List[NamedRef]:
            rows = await self._scalars(select(model).order_by(model.name))
            return [NamedRef.model_validate(row) for row in rows]

        return FilterData(
            product_lines=await options(ProductLine),
            mobile_suits=await options(MobileSuit),
            series=await options(Series),
            release_types=await options(ReleaseType),
        )
