"""
User Endpoints.

The signed-in member's account and settings, and the public profile pages.
"""

from fastapi import APIRouter

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.io.users import (
    CurrentUserRead,
    UserProfileRead,
    UserProfileUpdate,
    UserSettingsRead,
)
from gunpla_sekai.server.services.auth import CurrentUserId
from gunpla_sekai.server.services.deps import UserServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


@router.get(
    "/me",
    response_model=CurrentUserRead,
    summary="Get Current User",
    description="Retrieve the account of the authenticated user.",
    response_description="The current user.",
    responses={
        200: {"description": "Current user found"},
        401: {"description": "Not authenticated"},
        404: {"description": "User has not been synced from Clerk yet"},
    },
)
async def get_me(user_id: CurrentUserId, service: UserServiceDep) -> CurrentUserRead:
    return await service.current_user(user_id)


@router.patch(
    "/me",
    response_model=UserSettingsRead,
    summary="Update Profile",
    description="Update profile, social links and privacy settings of the authenticated user.",
    response_description="The updated user settings.",
    responses={
        200: {"description": "Profile updated"},
        401: {"description": "Not authenticated"},
        409: {"description": "Username is already taken"},
    },
)
async def update_me(data: UserProfileUpdate, user_id: CurrentUserId, service: UserServiceDep) -> UserSettingsRead:
    """
    Update the current user's profile.

    Only the fields present in the body are changed.

    - **username**: Must not be used by another member.
    - **bio**: Up to 500 characters.
    - **is_public** / **show_***: Privacy switches for the public profile.
    """
    logger.info(f"Updating profile for user {user_id}")
    return await service.update_profile(user_id, data)


@router.get(
    "/id/{user_id}",
    response_model=UserSettingsRead,
    summary="Get User by ID",
    description="Retrieve the settings projection of a user by Clerk id.",
    response_description="The user's settings.",
    responses={
        200: {"description": "User found"},
        404: {"description": "User not found"},
    },
)
async def get_user_by_id(user_id: str, service: UserServiceDep) -> UserSettingsRead:
    return await service.settings(user_id)


@router.get(
    "/{username}",
    response_model=UserProfileRead,
    summary="Get Public Profile",
    description="Retrieve a member's public profile with collection stats, recent reviews and recent builds.",
    response_description="The public profile.",
    responses={
        200: {"description": "Profile found"},
        404: {"description": "User not found"},
    },
)
async def get_profile(username: str, service: UserServiceDep) -> UserProfileRead:
    """
    Get a public profile.

    Recent builds are only included when the member has ``show_builds`` enabled.

    - **username**: The member's username.
    """
    return await service.profile(username)
