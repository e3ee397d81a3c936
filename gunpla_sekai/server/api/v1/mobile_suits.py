"""
Mobile Suit Endpoints.

Mobile suits are the in-universe machines that kits depict.
"""

from typing import List

from fastapi import APIRouter

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.io.catalog import (
    AssignmentResult,
    MobileSuitDetail,
    MobileSuitRead,
    MobileSuitSeriesAssign,
)
from gunpla_sekai.server.services.auth import AdminUserId
from gunpla_sekai.server.services.deps import CatalogServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["mobile-suits"])


@router.get(
    "",
    response_model=List[MobileSuitRead],
    summary="List Mobile Suits",
    description="Retrieve all mobile suits with their series and kit count.",
    response_description="A list of mobile suits.",
)
async def list_mobile_suits(service: CatalogServiceDep) -> List[MobileSuitRead]:
    return await service.list_mobile_suits()


@router.get(
    "/series/{series_id}",
    response_model=List[MobileSuitRead],
    summary="List Mobile Suits of a Series",
    description="Retrieve the mobile suits that appear in a series.",
    response_description="A list of mobile suits.",
)
async def list_mobile_suits_for_series(series_id: str, service: CatalogServiceDep) -> List[MobileSuitRead]:
    return await service.list_mobile_suits(series_id)


@router.put(
    "/series",
    response_model=AssignmentResult,
    summary="Assign Mobile Suits to Series",
    description="Bulk-assign mobile suits to a series. A null series detaches them. Admin only.",
    response_description="Number of mobile suits updated.",
    responses={
        200: {"description": "Mobile suits assigned"},
        403: {"description": "Admin access required"},
        404: {"description": "Series not found"},
    },
)
async def assign_mobile_suits_to_series(
    data: MobileSuitSeriesAssign, admin_id: AdminUserId, service: CatalogServiceDep
) -> AssignmentResult:
    logger.info(f"Admin {admin_id} assigning {len(data.mobile_suit_ids)} mobile suits to series {data.series_id}")
    updated = await service.assign_mobile_suits_to_series(data.mobile_suit_ids, data.series_id)
    return AssignmentResult(updated=updated)


@router.get(
    "/{slug}",
    response_model=MobileSuitDetail,
    summary="Get Mobile Suit",
    description="Retrieve a mobile suit with its series and kits.",
    response_description="The mobile suit detail.",
    responses={
        200: {"description": "Mobile suit found"},
        404: {"description": "Mobile suit not found"},
    },
)
async def get_mobile_suit(slug: str, service: CatalogServiceDep) -> MobileSuitDetail:
    return await service.get_mobile_suit(slug)
