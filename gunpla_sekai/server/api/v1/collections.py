"""
Collection Endpoints.

Each member keeps one status per kit: wishlist, preorder, backlog, in progress
or built.
"""

from typing import List, Optional

from fastapi import APIRouter, status

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.domain.enums import CollectionStatus
from gunpla_sekai.core.models.io.collections import (
    CollectionEntryRead,
    CollectionStatusInput,
    KitCollectionStatusRead,
)
from gunpla_sekai.server.services.auth import CurrentUserId, OptionalUserId
from gunpla_sekai.server.services.deps import CollectionServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["collections"])


@router.get(
    "/me",
    response_model=List[CollectionEntryRead],
    summary="Get My Collection",
    description="Retrieve the caller's collection, newest first, optionally narrowed to one status.",
    response_description="Collection entries with kit summaries.",
    responses={
        200: {"description": "Collection retrieved"},
        401: {"description": "Not authenticated"},
    },
)
async def get_my_collection(
    user_id: CurrentUserId,
    service: CollectionServiceDep,
    status: Optional[CollectionStatus] = None,
) -> List[CollectionEntryRead]:
    return await service.my_collection(user_id, status)


@router.get(
    "/user/{username}",
    response_model=List[CollectionEntryRead],
    summary="Get User Collection",
    description="Retrieve a member's collection by username. An unknown username yields an empty list.",
    response_description="Collection entries with kit summaries.",
)
async def get_user_collection(
    username: str,
    service: CollectionServiceDep,
    status: Optional[CollectionStatus] = None,
) -> List[CollectionEntryRead]:
    return await service.user_collection(username, status)


@router.get(
    "/{kit_id}/status",
    response_model=KitCollectionStatusRead,
    summary="Get Kit Collection Status",
    description="Retrieve the caller's status for a kit; null when the kit is not collected or the caller is anonymous.",
    response_description="The kit's collection status.",
)
async def get_kit_status(kit_id: str, user_id: OptionalUserId, service: CollectionServiceDep) -> KitCollectionStatusRead:
    return await service.kit_status(user_id, kit_id)


@router.put(
    "/{kit_id}",
    response_model=CollectionEntryRead,
    summary="Set Kit Collection Status",
    description="Add a kit to the caller's collection or move it to another status.",
    response_description="The collection entry.",
    responses={
        200: {"description": "Collection entry saved"},
        401: {"description": "Not authenticated"},
        404: {"description": "Kit not found"},
    },
)
async def set_kit_status(
    kit_id: str, data: CollectionStatusInput, user_id: CurrentUserId, service: CollectionServiceDep
) -> CollectionEntryRead:
    """
    Add or move a kit.

    - **status**: ``WISHLIST``, ``PREORDER``, ``BACKLOG``, ``IN_PROGRESS`` or ``BUILT``.
    - **notes**: Optional personal notes.
    """
    return await service.set_status(user_id, kit_id, data.status, data.notes)


@router.patch(
    "/{kit_id}",
    response_model=CollectionEntryRead,
    summary="Update Kit Collection Status",
    description="Change the status of a kit already in the caller's collection.",
    response_description="The updated collection entry.",
    responses={
        200: {"description": "Collection entry updated"},
        401: {"description": "Not authenticated"},
        404: {"description": "Kit is not in the collection"},
    },
)
async def update_kit_status(
    kit_id: str, data: CollectionStatusInput, user_id: CurrentUserId, service: CollectionServiceDep
) -> CollectionEntryRead:
    return await service.update_status(user_id, kit_id, data.status, data.notes)


@router.delete(
    "/{kit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Kit from Collection",
    description="Remove a kit from the caller's collection.",
    responses={
        204: {"description": "Kit removed"},
        401: {"description": "Not authenticated"},
        404: {"description": "Kit is not in the collection"},
    },
)
async def remove_kit(kit_id: str, user_id: CurrentUserId, service: CollectionServiceDep) -> None:
    logger.info(f"User {user_id} removing kit {kit_id} from collection")
    await service.remove(user_id, kit_id)
