"""
Search Endpoints.

Full-text search over kits and mobile suits plus type-ahead suggestions.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.domain.enums import SearchSort
from gunpla_sekai.core.models.io.search import SearchResults
from gunpla_sekai.server.services.deps import SearchServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["search"])

ALL_FILTER = "all"


def _slug_filter(value: Optional[str]) -> Optional[str]:
    if not value or value == ALL_FILTER:
        return None
    return value


@router.get(
    "",
    response_model=SearchResults,
    summary="Search Kits and Mobile Suits",
    description="Search kits and mobile suits by name, optionally narrowed to a timeline and a grade.",
    response_description="Matching kits and mobile suits with totals.",
)
async def search(
    service: SearchServiceDep,
    q: str = "",
    timeline: Optional[str] = None,
    grade: Optional[str] = None,
    sort_by: SearchSort = SearchSort.relevance,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> SearchResults:
    """
    Search the catalog.

    - **q**: Search text. An empty query matches everything.
    - **timeline**: Timeline slug, or ``all``.
    - **grade**: Grade slug, or ``all``.
    - **sort_by**: ``relevance``, ``name-asc``, ``name-desc``, ``release-desc``,
      ``release-asc``, ``price-asc`` or ``price-desc``.

    With relevance sorting, higher grades and recent kits are ranked first, and
    base kits precede their variants unless the query names a variant.
    """
    logger.debug(f"Search q='{q}' timeline={timeline} grade={grade} sort_by={sort_by.value}")
    return await service.search(
        q,
        timeline=_slug_filter(timeline),
        grade=_slug_filter(grade),
        sort_by=sort_by,
        limit=limit,
        offset=offset,
    )


@router.get(
    "/suggestions",
    response_model=List[str],
    summary="Search Suggestions",
    description="Up to five kit and mobile suit names matching the query. Queries shorter than two characters return nothing.",
    response_description="A list of names.",
)
async def search_suggestions(service: SearchServiceDep, q: str = "") -> List[str]:
    return await service.suggestions(q)
