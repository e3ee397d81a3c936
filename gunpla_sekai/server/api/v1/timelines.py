"""
Timeline Endpoints.

Timelines group Gundam series by universe (Universal Century, Cosmic Era, ...).
Reads are public; changes require an admin account.
"""

from typing import List

from fastapi import APIRouter, status

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.io.catalog import (
    TimelineCreate,
    TimelineDetail,
    TimelineRead,
    TimelineUpdate,
)
from gunpla_sekai.server.services.auth import AdminUserId
from gunpla_sekai.server.services.deps import CatalogServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["timelines"])


@router.get(
    "",
    response_model=List[TimelineRead],
    summary="List Timelines",
    description="Retrieve all timelines sorted by name, each with its series count.",
    response_description="A list of timelines.",
)
async def list_timelines(service: CatalogServiceDep) -> List[TimelineRead]:
    return await service.list_timelines()


@router.get(
    "/{slug}",
    response_model=TimelineDetail,
    summary="Get Timeline",
    description="Retrieve a timeline with its series and their mobile suit and kit counts.",
    response_description="The timeline with its series.",
    responses={
        200: {"description": "Timeline found"},
        404: {"description": "Timeline not found"},
    },
)
async def get_timeline(slug: str, service: CatalogServiceDep) -> TimelineDetail:
    return await service.get_timeline(slug)


@router.post(
    "",
    response_model=TimelineRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Timeline",
    description="Create a timeline. Admin only.",
    response_description="The created timeline.",
    responses={
        201: {"description": "Timeline created successfully"},
        403: {"description": "Admin access required"},
        409: {"description": "Slug already in use"},
    },
)
async def create_timeline(data: TimelineCreate, admin_id: AdminUserId, service: CatalogServiceDep) -> TimelineRead:
    """
    Create a new timeline.

    - **name**: Display name of the timeline.
    - **slug**: Optional; defaults to the lowercased name with whitespace replaced by dashes.
    - **description**: Optional free text.
    """
    logger.info(f"Admin {admin_id} creating timeline '{data.name}'")
    return await service.create_timeline(data)


@router.patch(
    "/{timeline_id}",
    response_model=TimelineRead,
    summary="Update Timeline",
    description="Update the name, slug or description of a timeline. Admin only.",
    response_description="The updated timeline.",
    responses={
        200: {"description": "Timeline updated"},
        403: {"description": "Admin access required"},
        404: {"description": "Timeline not found"},
    },
)
async def update_timeline(
    timeline_id: str, data: TimelineUpdate, admin_id: AdminUserId, service: CatalogServiceDep
) -> TimelineRead:
    return await service.update_timeline(timeline_id, data)


@router.delete(
    "/{timeline_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Timeline",
    description="Delete a timeline that no series references any more. Admin only.",
    responses={
        204: {"description": "Timeline deleted"},
        403: {"description": "Admin access required"},
        404: {"description": "Timeline not found"},
        409: {"description": "Series still reference the timeline"},
    },
)
async def delete_timeline(timeline_id: str, admin_id: AdminUserId, service: CatalogServiceDep) -> None:
    """
    Delete a timeline.

    Series must be reassigned (see ``PUT /series/timeline``) or deleted first.
    """
    logger.info(f"Admin {admin_id} deleting timeline {timeline_id}")
    await service.delete_timeline(timeline_id)
