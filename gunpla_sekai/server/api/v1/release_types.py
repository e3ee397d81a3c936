"""
Release Type Endpoints.

Release types describe how a kit was sold: retail, Premium Bandai, event
exclusives and similar channels.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from gunpla_sekai.core.models.io.catalog import KitSummary, ReleaseTypeAnalytics, ReleaseTypeRead
from gunpla_sekai.server.services.deps import CatalogServiceDep

router = APIRouter(tags=["release-types"])


@router.get(
    "",
    response_model=List[ReleaseTypeRead],
    summary="List Release Types",
    description="Retrieve all release types with their kit count.",
    response_description="A list of release types.",
)
async def list_release_types(service: CatalogServiceDep) -> List[ReleaseTypeRead]:
    return await service.list_release_types()


@router.get(
    "/{release_type_id}/kits",
    response_model=List[KitSummary],
    summary="List Kits of a Release Type",
    description="Retrieve the kits sold through a release type.",
    response_description="A page of kits.",
    responses={
        200: {"description": "Kits retrieved"},
        404: {"description": "Release type not found"},
    },
)
async def list_release_type_kits(
    release_type_id: str,
    service: CatalogServiceDep,
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
) -> List[KitSummary]:
    return await service.kits_for_release_type(release_type_id, limit, offset)


@router.get(
    "/{release_type_id}/analytics",
    response_model=ReleaseTypeAnalytics,
    summary="Get Release Type Analytics",
    description="Aggregate figures over the kits of a release type.",
    response_description="Release type analytics.",
    responses={
        200: {"description": "Analytics computed"},
        404: {"description": "Release type not found"},
    },
)
async def get_release_type_analytics(release_type_id: str, service: CatalogServiceDep) -> ReleaseTypeAnalytics:
    """
    Get release type analytics.

    - **total_kits**: Number of kits of the release type.
    - **earliest_release** / **latest_release**: Release date range.
    - **average_price_yen**: Mean price over kits with a known price.
    - **kits_per_grade**: Kit counts keyed by grade name.
    """
    return await service.release_type_analytics(release_type_id)


@router.get(
    "/{slug}",
    response_model=ReleaseTypeRead,
    summary="Get Release Type",
    description="Retrieve a release type by slug.",
    response_description="The release type.",
    responses={
        200: {"description": "Release type found"},
        404: {"description": "Release type not found"},
    },
)
async def get_release_type(slug: str, service: CatalogServiceDep) -> ReleaseTypeRead:
    return await service.get_release_type(slug)
