"""
Meilisearch index synchronisation.

Pushes every kit and mobile suit into the ``kits`` and ``mobile-suits``
indexes and configures their searchable, filterable and sortable attributes.
Run it with the ``gunpla-sekai-sync-search`` console script after catalog
imports.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, time, timezone
from typing import Any, Dict, List

import meilisearch
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gunpla_sekai.core.database import async_session_maker
from gunpla_sekai.core.database.entities.catalog import Grade, Kit, MobileSuit, ProductLine, Series, Timeline
from gunpla_sekai.core.database.repositories import KitRepository
from gunpla_sekai.core.errors import ConfigurationError
from gunpla_sekai.core.logging_config import get_logger, setup_logging

from .search import KITS_INDEX, MOBILE_SUITS_INDEX, create_meilisearch_client

logger = get_logger(__name__)

BATCH_SIZE = 1000

KIT_INDEX_SETTINGS: Dict[str, Any] = {
    "searchableAttributes": ["name", "number", "variant", "mobile_suit_names", "series_name", "product_line_name"],
    "filterableAttributes": ["timeline_slug", "grade_slug", "base_kit_id"],
    "sortableAttributes": ["name", "release_timestamp", "price_yen"],
}

MOBILE_SUIT_INDEX_SETTINGS: Dict[str, Any] = {
    "searchableAttributes": ["name", "series_name", "description"],
    "filterableAttributes": ["timeline_slug"],
    "sortableAttributes": ["name"],
}


def _timestamp(value) -> int | None:
    if value is None:
        return None
    return int(datetime.combine(value, time.min, tzinfo=timezone.utc).timestamp())


async def _lookup(session: AsyncSession, model) -> Dict[str, Any]:
    result = await session.execute(select(model))
    return {row.id: row for row in result.scalars().all()}


async def build_documents(session: AsyncSession) -> tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Flatten the catalog into Meilisearch documents."""
    grades = await _lookup(session, Grade)
    product_lines = await _lookup(session, ProductLine)
    series = await _lookup(session, Series)
    timelines = await _lookup(session, Timeline)

    def timeline_slug(series_id):
        item = series.get(series_id)
        if item is None or item.timeline_id not in timelines:
            return None
        return timelines[item.timeline_id].slug

    kit_repo = KitRepository(session)
    kits = await kit_repo.all_kits()
    suit_names = await kit_repo.mobile_suit_names([k.id for k in kits])
    kit_documents = []
    for kit in kits:
        grade = grades.get(kit.grade_id)
        line = product_lines.get(kit.product_line_id)
        kit_series = series.get(kit.series_id)
        kit_documents.append(
            {
                "id": kit.id,
                "name": kit.name,
                "slug": kit.slug,
                "number": kit.number,
                "variant": kit.variant,
                "release_timestamp": _timestamp(kit.release_date),
                "price_yen": kit.price_yen,
                "base_kit_id": kit.base_kit_id,
                "grade_slug": grade.slug if grade else None,
                "product_line_name": line.name if line else None,
                "series_name": kit_series.name if kit_series else None,
                "timeline_slug": timeline_slug(kit.series_id),
                "mobile_suit_names": suit_names.get(kit.id, []),
            }
        )

    result = await session.execute(select(MobileSuit))
    suit_documents = []
    for suit in result.scalars().all():
        suit_series = series.get(suit.series_id)
        suit_documents.append(
            {
                "id": suit.id,
                "name": suit.name,
                "slug": suit.slug,
                "description": suit.description,
                "series_name": suit_series.name if suit_series else None,
                "timeline_slug": timeline_slug(suit.series_id),
            }
        )
    return kit_documents, suit_documents


def push_documents(client: meilisearch.Client, index_name: str, documents: List[Dict[str, Any]], index_settings) -> None:
    index = client.index(index_name)
    index.update_settings(index_settings)
    for start in range(0, len(documents), BATCH_SIZE):
        index.add_documents(documents[start : start + BATCH_SIZE], primary_key="id")
    logger.info(f"Queued {len(documents)} documents for index '{index_name}'")


async def sync_search_indexes(client: meilisearch.Client) -> Dict[str, int]:
    async with async_session_maker() as session:
        kit_documents, suit_documents = await build_documents(session)
    push_documents(client, KITS_INDEX, kit_documents, KIT_INDEX_SETTINGS)
    push_documents(client, MOBILE_SUITS_INDEX, suit_documents, MOBILE_SUIT_INDEX_SETTINGS)
    return {KITS_INDEX: len(kit_documents), MOBILE_SUITS_INDEX: len(suit_documents)}


def main() -> None:
    setup_logging()
    client = create_meilisearch_client()
    if client is None:
        raise ConfigurationError("Meilisearch", ["MEILI_HOST_URL", "MEILI_MASTER_KEY"])
    counts = asyncio.run(sync_search_indexes(client))
    logger.info(f"Search sync finished: {counts}")


if __name__ == "__main__":
    main()
