"""
Kit Endpoints.

Browsing the kit catalog by catalog filters, and the kit detail page.
"""

from typing import List, Literal

from fastapi import APIRouter, Query

from gunpla_sekai.core.models.domain.enums import KitSort
from gunpla_sekai.core.models.io.catalog import KitDetail, KitSummary
from gunpla_sekai.server.services.deps import CatalogServiceDep

router = APIRouter(tags=["kits"])

KitOrder = Literal["ascending", "descending", "most-relevant"]


@router.get(
    "",
    response_model=List[KitSummary],
    summary="List Kits",
    description="Browse kits by product line, mobile suit, series and release type. Returns at most 50 kits.",
    response_description="A list of kit summaries.",
)
async def list_kits(
    service: CatalogServiceDep,
    product_line_ids: List[str] = Query(default=[]),
    mobile_suit_ids: List[str] = Query(default=[]),
    series_ids: List[str] = Query(default=[]),
    release_type_ids: List[str] = Query(default=[]),
    sort_by: KitSort = KitSort.relevance,
    order: KitOrder = "most-relevant",
) -> List[KitSummary]:
    """
    List kits matching the given filters.

    Every filter is a repeatable query parameter; kits must match all of the
    filters that are given and any of the values within one filter.

    - **sort_by**: ``relevance``, ``name``, ``release-date`` or ``rating``.
    - **order**: ``ascending``, ``descending`` or ``most-relevant``. Name and
      release date sort descending unless ``ascending`` is requested; rating and
      relevance sort by name.
    """
    return await service.filtered_kits(
        product_line_ids=product_line_ids,
        mobile_suit_ids=mobile_suit_ids,
        series_ids=series_ids,
        release_type_ids=release_type_ids,
        sort_by=sort_by,
        order=order,
    )


@router.get(
    "/{slug}",
    response_model=KitDetail,
    summary="Get Kit",
    description="Retrieve a kit with its catalog references, variants, mobile suits and uploads.",
    response_description="The kit detail.",
    responses={
        200: {"description": "Kit found"},
        404: {"description": "Kit not found"},
    },
)
async def get_kit(slug: str, service: CatalogServiceDep) -> KitDetail:
    """
    Get kit detail.

    ``variants`` are the kits based on this one, sorted by release date.
    ``other_variants`` are the siblings sharing this kit's base kit.
    """
    return await service.get_kit(slug)
