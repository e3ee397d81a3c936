"""
Milestone Endpoints.

Steps of a build log (acquisition, painting, decals, ...) and the gallery
images attached to each step. ``build_router`` carries the endpoints nested
under ``/builds/{build_id}``.
"""

from typing import List

from fastapi import APIRouter, status

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.io.milestones import (
    MilestoneCreate,
    MilestoneImageCreate,
    MilestoneImageRead,
    MilestoneImagesOrder,
    MilestoneImagesSet,
    MilestoneImageUpdate,
    MilestoneOrder,
    MilestoneRead,
    MilestoneUpdate,
)
from gunpla_sekai.server.services.auth import CurrentUserId
from gunpla_sekai.server.services.deps import MilestoneServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["milestones"])
build_router = APIRouter(tags=["milestones"])


@build_router.get(
    "/{build_id}/milestones",
    response_model=List[MilestoneRead],
    summary="List Build Milestones",
    description="Retrieve a build's milestones in order, each with its images.",
    response_description="A list of milestones.",
    responses={
        200: {"description": "Milestones retrieved"},
        404: {"description": "Build not found"},
    },
)
async def list_build_milestones(build_id: str, service: MilestoneServiceDep) -> List[MilestoneRead]:
    return await service.for_build(build_id)


@build_router.put(
    "/{build_id}/milestones/order",
    response_model=List[MilestoneRead],
    summary="Reorder Build Milestones",
    description="Renumber a build's milestones in the given order, starting at 1. Owner only.",
    response_description="The reordered milestones.",
    responses={
        200: {"description": "Milestones reordered"},
        404: {"description": "Build not found or unauthorized"},
    },
)
async def reorder_build_milestones(
    build_id: str, data: MilestoneOrder, user_id: CurrentUserId, service: MilestoneServiceDep
) -> List[MilestoneRead]:
    return await service.reorder(build_id, user_id, data.milestone_ids)


@router.post(
    "",
    response_model=MilestoneRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Milestone",
    description="Add a milestone to one of the caller's builds.",
    response_description="The created milestone.",
    responses={
        201: {"description": "Milestone created"},
        404: {"description": "Build not found or unauthorized"},
        422: {"description": "Title is empty"},
    },
)
async def create_milestone(data: MilestoneCreate, user_id: CurrentUserId, service: MilestoneServiceDep) -> MilestoneRead:
    """
    Create a milestone.

    - **build_id**: A build owned by the caller.
    - **type**: Kind of step, e.g. ``PAINTING`` or ``DECALS``.
    - **title**: Trimmed; must not be empty.
    - **order**: Position within the build.
    """
    return await service.create(user_id, data)


@router.patch(
    "/{milestone_id}",
    response_model=MilestoneRead,
    summary="Update Milestone",
    description="Update a milestone of one of the caller's builds.",
    response_description="The updated milestone.",
    responses={
        200: {"description": "Milestone updated"},
        404: {"description": "Milestone not found or unauthorized"},
    },
)
async def update_milestone(
    milestone_id: str, data: MilestoneUpdate, user_id: CurrentUserId, service: MilestoneServiceDep
) -> MilestoneRead:
    return await service.update(milestone_id, user_id, data)


@router.delete(
    "/{milestone_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Milestone",
    description="Delete a milestone and its image links.",
    responses={
        204: {"description": "Milestone deleted"},
        404: {"description": "Milestone not found or unauthorized"},
    },
)
async def delete_milestone(milestone_id: str, user_id: CurrentUserId, service: MilestoneServiceDep) -> None:
    logger.info(f"User {user_id} deleting milestone {milestone_id}")
    await service.delete(milestone_id, user_id)


# ----------------------------------------------------------------------
# Images
# ----------------------------------------------------------------------


@router.post(
    "/{milestone_id}/images",
    response_model=MilestoneImageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Milestone Image",
    description="Attach one of the caller's uploads to a milestone.",
    response_description="The created image link.",
    responses={
        201: {"description": "Image attached"},
        404: {"description": "Milestone or upload not found"},
    },
)
async def add_milestone_image(
    milestone_id: str, data: MilestoneImageCreate, user_id: CurrentUserId, service: MilestoneServiceDep
) -> MilestoneImageRead:
    return await service.add_image(milestone_id, user_id, data)


@router.put(
    "/{milestone_id}/images",
    response_model=MilestoneRead,
    summary="Set Milestone Images",
    description="Replace a milestone's images with gallery images, in the given order.",
    response_description="The milestone with its new images.",
    responses={
        200: {"description": "Images replaced"},
        400: {"description": "Some images are not in the build gallery"},
        404: {"description": "Milestone not found or unauthorized"},
    },
)
async def set_milestone_images(
    milestone_id: str, data: MilestoneImagesSet, user_id: CurrentUserId, service: MilestoneServiceDep
) -> MilestoneRead:
    """
    Replace a milestone's images.

    - **upload_ids**: Uploads already in the build gallery; the list order becomes
      the image order.
    """
    return await service.set_images(milestone_id, user_id, data.upload_ids)


@router.put(
    "/{milestone_id}/images/order",
    response_model=MilestoneRead,
    summary="Reorder Milestone Images",
    description="Renumber a milestone's image links in the given order, starting at 0.",
    response_description="The milestone with reordered images.",
    responses={
        200: {"description": "Images reordered"},
        404: {"description": "Milestone not found or unauthorized"},
    },
)
async def reorder_milestone_images(
    milestone_id: str, data: MilestoneImagesOrder, user_id: CurrentUserId, service: MilestoneServiceDep
) -> MilestoneRead:
    return await service.reorder_images(milestone_id, user_id, data.link_ids)


@router.patch(
    "/{milestone_id}/images/{link_id}",
    response_model=MilestoneImageRead,
    summary="Update Milestone Image",
    description="Change the caption or position of a milestone image.",
    response_description="The updated image link.",
    responses={
        200: {"description": "Image updated"},
        404: {"description": "Milestone or image not found"},
    },
)
async def update_milestone_image(
    milestone_id: str,
    link_id: str,
    data: MilestoneImageUpdate,
    user_id: CurrentUserId,
    service: MilestoneServiceDep,
) -> MilestoneImageRead:
    return await service.update_image(milestone_id, link_id, user_id, data)


@router.delete(
    "/{milestone_id}/images/{link_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Milestone Image",
    description="Detach an image from a milestone. The upload itself stays in the gallery.",
    responses={
        204: {"description": "Image removed"},
        404: {"description": "Milestone or image not found"},
    },
)
async def remove_milestone_image(
    milestone_id: str, link_id: str, user_id: CurrentUserId, service: MilestoneServiceDep
) -> None:
    await service.remove_image(milestone_id, link_id, user_id)
