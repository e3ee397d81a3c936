"""
Upload Endpoints.

Images go straight from the browser to Cloudinary. These endpoints sign the
upload and keep track of the resulting assets.
"""

from typing import List

from fastapi import APIRouter, Query, status

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.io.uploads import (
    UploadCreate,
    UploadRead,
    UploadSignatureRead,
    UploadSignatureRequest,
)
from gunpla_sekai.server.services.auth import CurrentUserId
from gunpla_sekai.server.services.deps import UploadServiceDep
from gunpla_sekai.server.services.uploads import sign_upload

logger = get_logger(__name__)

router = APIRouter(tags=["uploads"])


@router.post(
    "/signature",
    response_model=UploadSignatureRead,
    summary="Sign Cloudinary Upload",
    description="Sign the parameters of a direct browser upload to Cloudinary.",
    response_description="Signature, timestamp and the public Cloudinary identifiers.",
    responses={
        200: {"description": "Upload signed"},
        401: {"description": "Not authenticated"},
        500: {"description": "Cloudinary credentials are not configured"},
    },
)
async def sign_cloudinary_upload(data: UploadSignatureRequest, user_id: CurrentUserId) -> UploadSignatureRead:
    """
    Sign an upload.

    The signature covers the timestamp, the folder (``uploads`` by default), the
    ``q_auto,f_auto`` eager transformation and the filename flags.

    - **folder**: Optional Cloudinary folder.
    """
    logger.debug(f"Signing upload for user {user_id} into folder {data.folder or 'uploads'}")
    return sign_upload(data.folder)


@router.post(
    "",
    response_model=UploadRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Upload",
    description="Record an asset the caller uploaded to Cloudinary.",
    response_description="The recorded upload.",
    responses={
        201: {"description": "Upload recorded"},
        401: {"description": "Not authenticated"},
    },
)
async def record_upload(data: UploadCreate, user_id: CurrentUserId, service: UploadServiceDep) -> UploadRead:
    return await service.record(user_id, data)


@router.get(
    "/user/{user_id}",
    response_model=List[UploadRead],
    summary="List User Uploads",
    description="Retrieve a member's uploads, newest first.",
    response_description="A list of uploads.",
)
async def list_user_uploads(
    user_id: str, service: UploadServiceDep, limit: int = Query(default=50, ge=1, le=200)
) -> List[UploadRead]:
    return await service.list_for_user(user_id, limit)


@router.delete(
    "/{upload_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Upload",
    description="Delete one of the caller's uploads and every gallery, milestone, kit or card link to it.",
    responses={
        204: {"description": "Upload deleted"},
        404: {"description": "Upload not found or unauthorized"},
    },
)
async def delete_upload(upload_id: str, user_id: CurrentUserId, service: UploadServiceDep) -> None:
    await service.delete(upload_id, user_id)
