"""
Series Endpoints.

Gundam anime series and the timeline each one belongs to.
"""

from typing import List

from fastapi import APIRouter

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.io.catalog import (
    AssignmentResult,
    SeriesDetail,
    SeriesRead,
    SeriesTimelineAssign,
)
from gunpla_sekai.server.services.auth import AdminUserId
from gunpla_sekai.server.services.deps import CatalogServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["series"])


@router.get(
    "",
    response_model=List[SeriesRead],
    summary="List Series",
    description="Retrieve all series with their timeline name, mobile suit count and kit count.",
    response_description="A list of series.",
)
async def list_series(service: CatalogServiceDep) -> List[SeriesRead]:
    return await service.list_series()


@router.get(
    "/timeline/{timeline_id}",
    response_model=List[SeriesRead],
    summary="List Series of a Timeline",
    description="Retrieve the series assigned to a timeline.",
    response_description="A list of series.",
)
async def list_series_for_timeline(timeline_id: str, service: CatalogServiceDep) -> List[SeriesRead]:
    return await service.list_series(timeline_id)


@router.put(
    "/timeline",
    response_model=AssignmentResult,
    summary="Assign Series to Timeline",
    description="Bulk-assign series to a timeline. A null timeline detaches them. Admin only.",
    response_description="Number of series updated.",
    responses={
        200: {"description": "Series assigned"},
        403: {"description": "Admin access required"},
        404: {"description": "Timeline not found"},
    },
)
async def assign_series_to_timeline(
    data: SeriesTimelineAssign, admin_id: AdminUserId, service: CatalogServiceDep
) -> AssignmentResult:
    """
    Assign series to a timeline.

    - **series_ids**: The series to move; at least one.
    - **timeline_id**: Target timeline, or null to detach.
    """
    logger.info(f"Admin {admin_id} assigning {len(data.series_ids)} series to timeline {data.timeline_id}")
    updated = await service.assign_series_to_timeline(data.series_ids, data.timeline_id)
    return AssignmentResult(updated=updated)


@router.get(
    "/{slug}",
    response_model=SeriesDetail,
    summary="Get Series",
    description="Retrieve a series with its timeline, mobile suits and kits.",
    response_description="The series detail.",
    responses={
        200: {"description": "Series found"},
        404: {"description": "Series not found"},
    },
)
async def get_series(slug: str, service: CatalogServiceDep) -> SeriesDetail:
    return await service.get_series(slug)
