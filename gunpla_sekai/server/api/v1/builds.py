"""
Build Endpoints.

Build logs with likes, comments, a media gallery and share metadata. Reading
is public; changes are reserved to the build's author.
"""

from typing import List, Optional

from fastapi import APIRouter, status

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.domain.enums import BuildSort, BuildStatus
from gunpla_sekai.core.models.io.builds import (
    BuildCreate,
    BuildDetail,
    BuildListItem,
    BuildPage,
    BuildUpdate,
    BuildUploadCreate,
    BuildUploadRead,
    CommentInput,
    CommentRead,
    LikeInput,
    LikeState,
    ShareData,
)
from gunpla_sekai.server.services.auth import CurrentUserId, OptionalUserId
from gunpla_sekai.server.services.deps import BuildServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["builds"])


@router.post(
    "",
    response_model=BuildDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create Build",
    description="Start a build log for a kit.",
    response_description="The created build.",
    responses={
        201: {"description": "Build created successfully"},
        401: {"description": "Not authenticated"},
        404: {"description": "Kit not found"},
    },
)
async def create_build(data: BuildCreate, user_id: CurrentUserId, service: BuildServiceDep) -> BuildDetail:
    """
    Create a build.

    - **kit_id**: The kit being built.
    - **title**: Build title.
    - **description**: Optional notes about the build.
    - **status**: ``PLANNING`` (default), ``IN_PROGRESS``, ``COMPLETED`` or ``ON_HOLD``.
    """
    return await service.create(user_id, data)


@router.get(
    "/all",
    response_model=BuildPage,
    summary="List Builds",
    description="Page through all builds, optionally filtered by status.",
    response_description="A page of builds with the total count.",
    responses={
        200: {"description": "Builds retrieved"},
        400: {"description": "Invalid limit or offset"},
    },
)
async def list_builds(
    service: BuildServiceDep,
    limit: int = 20,
    offset: int = 0,
    status: Optional[BuildStatus] = None,
    sort: BuildSort = BuildSort.newest,
) -> BuildPage:
    """
    List builds.

    - **limit**: Page size between 1 and 50.
    - **offset**: Number of builds to skip; must not be negative.
    - **sort**: ``newest``, ``oldest``, ``completed`` (latest completion first) or ``status``.
    """
    return await service.page(limit=limit, offset=offset, status=status, sort=sort)


@router.get(
    "/recent",
    response_model=List[BuildListItem],
    summary="List Recent Builds",
    description="Retrieve the most recently created builds.",
    response_description="A list of builds.",
)
async def list_recent_builds(service: BuildServiceDep, limit: int = 10) -> List[BuildListItem]:
    return await service.recent(limit)


@router.get(
    "/kit/{kit_id}",
    response_model=List[BuildListItem],
    summary="List Kit Builds",
    description="Retrieve the most recent builds of a kit.",
    response_description="A list of builds.",
)
async def list_kit_builds(kit_id: str, service: BuildServiceDep, limit: int = 10) -> List[BuildListItem]:
    return await service.for_kit(kit_id, limit)


@router.get(
    "/user/{user_id}",
    response_model=BuildPage,
    summary="List User Builds",
    description="Page through a member's builds with the same paging rules as the full listing.",
    response_description="A page of builds with the total count.",
    responses={
        200: {"description": "Builds retrieved"},
        400: {"description": "Invalid limit or offset"},
    },
)
async def list_user_builds(
    user_id: str,
    service: BuildServiceDep,
    limit: int = 20,
    offset: int = 0,
    status: Optional[BuildStatus] = None,
    sort: BuildSort = BuildSort.newest,
) -> BuildPage:
    return await service.page(limit=limit, offset=offset, status=status, sort=sort, user_id=user_id)


@router.get(
    "/{build_id}",
    response_model=BuildDetail,
    summary="Get Build",
    description="Retrieve a build with its kit, author, featured image, milestones, likes and comment count.",
    response_description="The build detail.",
    responses={
        200: {"description": "Build found"},
        404: {"description": "Build not found"},
    },
)
async def get_build(build_id: str, user_id: OptionalUserId, service: BuildServiceDep) -> BuildDetail:
    """
    Get a build.

    ``liked`` reports whether the caller liked the build and is false for
    anonymous callers.
    """
    return await service.detail(build_id, user_id)


@router.patch(
    "/{build_id}",
    response_model=BuildDetail,
    summary="Update Build",
    description="Update a build. The featured image must already be in the build gallery. Owner only.",
    response_description="The updated build.",
    responses={
        200: {"description": "Build updated"},
        400: {"description": "Featured image is not in the gallery"},
        403: {"description": "Caller does not own the build"},
        404: {"description": "Build not found"},
    },
)
async def update_build(
    build_id: str, data: BuildUpdate, user_id: CurrentUserId, service: BuildServiceDep
) -> BuildDetail:
    return await service.update(build_id, user_id, data)


@router.delete(
    "/{build_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Build",
    description="Delete a build with its milestones, gallery links, likes and comments. Owner only.",
    responses={
        204: {"description": "Build deleted"},
        403: {"description": "Caller does not own the build"},
        404: {"description": "Build not found"},
    },
)
async def delete_build(build_id: str, user_id: CurrentUserId, service: BuildServiceDep) -> None:
    logger.info(f"User {user_id} deleting build {build_id}")
    await service.delete(build_id, user_id)


# ----------------------------------------------------------------------
# Likes
# ----------------------------------------------------------------------


@router.get(
    "/{build_id}/likes",
    response_model=LikeState,
    summary="Get Build Likes",
    description="Like count of a build and whether the caller liked it.",
    response_description="Like state.",
)
async def get_build_likes(build_id: str, user_id: OptionalUserId, service: BuildServiceDep) -> LikeState:
    return await service.likes(build_id, user_id)


@router.post(
    "/{build_id}/like",
    response_model=LikeState,
    summary="Like or Unlike Build",
    description="Set whether the caller likes a build. Repeating the same value changes nothing.",
    response_description="Updated like state.",
    responses={
        200: {"description": "Like state updated"},
        401: {"description": "Not authenticated"},
        404: {"description": "Build not found"},
    },
)
async def set_build_like(build_id: str, data: LikeInput, user_id: CurrentUserId, service: BuildServiceDep) -> LikeState:
    return await service.set_like(build_id, user_id, data.liked)


# ----------------------------------------------------------------------
# Comments
# ----------------------------------------------------------------------


@router.get(
    "/{build_id}/comments",
    response_model=List[CommentRead],
    summary="List Build Comments",
    description="Retrieve a build's comments, newest first, with their authors.",
    response_description="A list of comments.",
)
async def list_build_comments(build_id: str, service: BuildServiceDep) -> List[CommentRead]:
    return await service.comments(build_id)


@router.post(
    "/{build_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Build Comment",
    description="Comment on a build. Content is trimmed and must not be empty.",
    response_description="The created comment.",
    responses={
        201: {"description": "Comment created"},
        401: {"description": "Not authenticated"},
        404: {"description": "Build not found"},
        422: {"description": "Comment content is empty"},
    },
)
async def add_build_comment(
    build_id: str, data: CommentInput, user_id: CurrentUserId, service: BuildServiceDep
) -> CommentRead:
    return await service.add_comment(build_id, user_id, data.content)


@router.patch(
    "/{build_id}/comments/{comment_id}",
    response_model=CommentRead,
    summary="Edit Build Comment",
    description="Edit a comment. Author only.",
    response_description="The updated comment.",
    responses={
        200: {"description": "Comment updated"},
        403: {"description": "Caller did not write the comment"},
        404: {"description": "Comment not found"},
        422: {"description": "Comment content is empty"},
    },
)
async def edit_build_comment(
    build_id: str, comment_id: str, data: CommentInput, user_id: CurrentUserId, service: BuildServiceDep
) -> CommentRead:
    return await service.edit_comment(build_id, comment_id, user_id, data.content)


@router.delete(
    "/{build_id}/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Build Comment",
    description="Delete a comment. Author only.",
    responses={
        204: {"description": "Comment deleted"},
        403: {"description": "Caller did not write the comment"},
        404: {"description": "Comment not found"},
    },
)
async def delete_build_comment(
    build_id: str, comment_id: str, user_id: CurrentUserId, service: BuildServiceDep
) -> None:
    await service.delete_comment(build_id, comment_id, user_id)


@router.get(
    "/{build_id}/share",
    response_model=ShareData,
    summary="Get Build Share Data",
    description="Metadata for sharing a build: link, title, description, preview image and counters.",
    response_description="Share metadata.",
    responses={
        200: {"description": "Share data built"},
        404: {"description": "Build not found"},
    },
)
async def get_build_share_data(build_id: str, service: BuildServiceDep) -> ShareData:
    """
    Get share metadata.

    The description falls back to "A Gunpla build by <author>". The image is
    the featured image (optimized url first), else the kit's box art.
    """
    return await service.share_data(build_id)


# ----------------------------------------------------------------------
# Gallery
# ----------------------------------------------------------------------


@router.get(
    "/{build_id}/uploads",
    response_model=List[BuildUploadRead],
    summary="List Build Gallery",
    description="Retrieve the images in a build's gallery, in gallery order.",
    response_description="Gallery images.",
)
async def list_build_uploads(build_id: str, service: BuildServiceDep) -> List[BuildUploadRead]:
    return await service.gallery(build_id)


@router.post(
    "/{build_id}/uploads",
    response_model=List[BuildUploadRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add Image to Build Gallery",
    description="Attach one of the caller's uploads to their build's gallery.",
    response_description="The updated gallery.",
    responses={
        201: {"description": "Image added"},
        403: {"description": "Caller does not own the build"},
        404: {"description": "Build or upload not found"},
    },
)
async def add_build_upload(
    build_id: str, data: BuildUploadCreate, user_id: CurrentUserId, service: BuildServiceDep
) -> List[BuildUploadRead]:
    """
    Add an image to the gallery.

    - **upload_id**: An upload recorded by the caller.
    - **caption**: Optional caption.
    """
    return await service.add_to_gallery(build_id, user_id, data.upload_id, data.caption)


@router.delete(
    "/{build_id}/uploads/{upload_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Image from Build Gallery",
    description="Detach an image from the gallery, from the build's milestones and, if set, as featured image.",
    responses={
        204: {"description": "Image removed"},
        403: {"description": "Caller does not own the build"},
        404: {"description": "Image is not in the gallery"},
    },
)
async def remove_build_upload(build_id: str, upload_id: str, user_id: CurrentUserId, service: BuildServiceDep) -> None:
    await service.remove_from_gallery(build_id, user_id, upload_id)
