"""
Search Service.

Kit and mobile suit search backed by Meilisearch when ``MEILI_HOST_URL`` and
``MEILI_MASTER_KEY`` are set, and by case-insensitive SQL matching otherwise.
Either way the hits are hydrated from the database so both backends return
the same read models.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import meilisearch
from sqlalchemy.ext.asyncio import AsyncSession

from gunpla_sekai.core.database.repositories import KitRepository, MobileSuitRepository
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.domain.enums import SearchSort
from gunpla_sekai.core.models.domain.search import is_variant_search, rank_kits
from gunpla_sekai.core.models.io.catalog import KitSummary, MobileSuitRead
from gunpla_sekai.core.models.io.search import SearchResults
from gunpla_sekai.server.core.config import MeilisearchConfig, settings

logger = get_logger(__name__)

KITS_INDEX = "kits"
MOBILE_SUITS_INDEX = "mobile-suits"
MOBILE_SUIT_RESULTS = 8
MAX_NAME_SUGGESTIONS = 5
MIN_SUGGESTION_QUERY = 2

_MEILI_SORT: Dict[SearchSort, List[str]] = {
    SearchSort.name_asc: ["name:asc"],
    SearchSort.name_desc: ["name:desc"],
    SearchSort.release_desc: ["release_timestamp:desc"],
    SearchSort.release_asc: ["release_timestamp:asc"],
    SearchSort.price_asc: ["price_yen:asc"],
    SearchSort.price_desc: ["price_yen:desc"],
}


def create_meilisearch_client(config: Optional[MeilisearchConfig] = None) -> Optional[meilisearch.Client]:
    """Build a client from settings, or None when Meilisearch is not configured."""
    config = config or settings.meilisearch
    if not config.enabled:
        return None
    return meilisearch.Client(config.resolved_host_url, config.master_key)


def _meili_filters(timeline: Optional[str], grade: Optional[str]) -> List[str]:
    filters = []
    if timeline and timeline != "all":
        filters.append(f'timeline_slug = "{timeline}"')
    if grade and grade != "all":
        filters.append(f'grade_slug = "{grade}"')
    return filters


class SearchService:
    def __init__(self, session: AsyncSession, client: Optional[meilisearch.Client] = None) -> None:
        self.session = session
        self.kits = KitRepository(session)
        self.mobile_suits = MobileSuitRepository(session)
        self.client = client

    async def search(
        self,
        query: str,
        timeline: Optional[str] = None,
        grade: Optional[str] = None,
        sort_by: SearchSort = SearchSort.relevance,
        limit: int = 20,
        offset: int = 0,
    ) -> SearchResults:
        query = query.strip()
        if self.client is not None:
            results = await self._search_meilisearch(query, timeline, grade, sort_by, limit, offset)
        else:
            results = await self._search_sql(query, timeline, grade, sort_by, limit, offset)

        if sort_by == SearchSort.relevance and results.kits:
            results.kits = rank_kits(results.kits, not is_variant_search(query), limit=len(results.kits))
        return results

    async def _search_sql(
        self,
        query: str,
        timeline: Optional[str],
        grade: Optional[str],
        sort_by: SearchSort,
        limit: int,
        offset: int,
    ) -> SearchResults:
        kits, total_kits = await self.kits.search(query, timeline, grade, sort_by, limit, offset)
        suits, total_suits = await self.mobile_suits.search(query, timeline, MOBILE_SUIT_RESULTS)
        return SearchResults(
            kits=kits,
            mobile_suits=suits,
            total_kits=total_kits,
            total_mobile_suits=total_suits,
            has_more=total_kits > offset + limit or total_suits > MOBILE_SUIT_RESULTS,
        )

    async def _index_search(self, index: str, query: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(self.client.index(index).search, query, params)

    async def _search_meilisearch(
        self,
        query: str,
        timeline: Optional[str],
        grade: Optional[str],
        sort_by: SearchSort,
        limit: int,
        offset: int,
    ) -> SearchResults:
        kit_params: Dict[str, Any] = {"limit": limit, "offset": offset, "attributesToRetrieve": ["id"]}
        filters = _meili_filters(timeline, grade)
        if filters:
            kit_params["filter"] = filters
        if sort_by in _MEILI_SORT:
            kit_params["sort"] = _MEILI_SORT[sort_by]

        suit_params: Dict[str, Any] = {"limit": MOBILE_SUIT_RESULTS, "attributesToRetrieve": ["id"]}
        suit_filters = _meili_filters(timeline, None)
        if suit_filters:
            suit_params["filter"] = suit_filters

        kit_response = await self._index_search(KITS_INDEX, query, kit_params)
        suit_response = await self._index_search(MOBILE_SUITS_INDEX, query, suit_params)

        kits = await self._hydrate_kits([hit["id"] for hit in kit_response.get("hits", [])])
        suits = await self._hydrate_mobile_suits([hit["id"] for hit in suit_response.get("hits", [])])
        total_kits = int(kit_response.get("estimatedTotalHits", len(kits)))
        total_suits = int(suit_response.get("estimatedTotalHits", len(suits)))
        logger.debug(f"Meilisearch '{query}': {total_kits} kits, {total_suits} mobile suits")

        return SearchResults(
            kits=kits,
            mobile_suits=suits,
            total_kits=total_kits,
            total_mobile_suits=total_suits,
            has_more=total_kits > offset + limit or total_suits > MOBILE_SUIT_RESULTS,
        )

    async def _hydrate_kits(self, ids: List[str]) -> List[KitSummary]:
        found = await self.kits.get_many(ids)
        return await self.kits.summarize([found[i] for i in ids if i in found])

    async def _hydrate_mobile_suits(self, ids: List[str]) -> List[MobileSuitRead]:
        found = await self.mobile_suits.get_many(ids)
        return await self.mobile_suits.to_read([found[i] for i in ids if i in found])

    async def suggestions(self, query: str) -> List[str]:
        """Up to five distinct names, kit names before mobile suit names."""
        query = query.strip()
        if len(query) < MIN_SUGGESTION_QUERY:
            return []
        names: List[str] = []
        for name in await self.kits.name_suggestions(query, MAX_NAME_SUGGESTIONS):
            if name not in names:
                names.append(name)
        if len(names) < MAX_NAME_SUGGESTIONS:
            for name in await self.mobile_suits.name_suggestions(query, MAX_NAME_SUGGESTIONS):
                if name not in names:
                    names.append(name)
        return names[:MAX_NAME_SUGGESTIONS]
