"""
Gunpla Card Endpoints.

Server side of the card builder: the images a kit offers as backgrounds,
saving one card per member and kit, and a CORS-friendly image proxy so the
builder can draw remote images onto its canvas.
"""

from typing import Optional

from fastapi import APIRouter, Response, status

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.io.gunpla_cards import (
    CardCheckRead,
    CardSave,
    CardSummary,
    KitMediaRead,
    UserCardsRead,
)
from gunpla_sekai.server.services.auth import CurrentUserId
from gunpla_sekai.server.services.deps import GunplaCardServiceDep
from gunpla_sekai.server.services.image_proxy import fetch_image

logger = get_logger(__name__)

router = APIRouter(tags=["gunpla-cards"])


@router.get(
    "/check",
    response_model=CardCheckRead,
    summary="Check Existing Card",
    description="Report whether the caller already has a card for a kit.",
    response_description="Whether a card exists, with the card when it does.",
    responses={
        200: {"description": "Check completed"},
        400: {"description": "kit_slug is missing"},
        401: {"description": "Not authenticated"},
        404: {"description": "Kit not found"},
    },
)
async def check_card(
    user_id: CurrentUserId, service: GunplaCardServiceDep, kit_slug: Optional[str] = None
) -> CardCheckRead:
    return await service.check(user_id, kit_slug)


@router.post(
    "",
    response_model=CardSummary,
    status_code=status.HTTP_201_CREATED,
    summary="Save Card",
    description="Save the caller's card for a kit, replacing any earlier card and its image.",
    response_description="The saved card.",
    responses={
        201: {"description": "Card saved"},
        401: {"description": "Not authenticated"},
        404: {"description": "Kit not found"},
    },
)
async def save_card(data: CardSave, user_id: CurrentUserId, service: GunplaCardServiceDep) -> CardSummary:
    """
    Save a gunpla card.

    - **kit_slug**: The kit the card shows.
    - **upload_data**: The rendered card image as uploaded to Cloudinary.
    """
    return await service.save(user_id, data)


@router.get(
    "/user/{username}",
    response_model=UserCardsRead,
    summary="List User Cards",
    description="Retrieve a member's cards, newest first, with kit info.",
    response_description="The member and their cards.",
    responses={
        200: {"description": "Cards retrieved"},
        404: {"description": "User not found"},
    },
)
async def list_user_cards(username: str, service: GunplaCardServiceDep) -> UserCardsRead:
    return await service.user_cards(username)


@router.get(
    "/kit-media",
    response_model=KitMediaRead,
    summary="Get Kit Media",
    description="Distinct image urls usable as card backgrounds for a kit.",
    response_description="Image urls.",
    responses={
        200: {"description": "Media collected; empty for an unknown kit"},
        400: {"description": "Neither kit_id nor kit_slug given"},
    },
)
async def get_kit_media(
    service: GunplaCardServiceDep, kit_id: Optional[str] = None, kit_slug: Optional[str] = None
) -> KitMediaRead:
    """
    Get kit media.

    Urls come in this order: box art, the kit's scraped images, images uploaded
    for the kit, the product line image, then the series images.
    """
    return await service.kit_media(kit_id=kit_id, kit_slug=kit_slug)


@router.get(
    "/proxy-image",
    summary="Proxy Remote Image",
    description="Re-serve a remote image with permissive CORS headers.",
    response_description="The image bytes.",
    responses={
        200: {"description": "Image fetched", "content": {"image/*": {}}},
        400: {"description": "url is missing or not http(s)"},
        502: {"description": "Upstream server answered with an error"},
    },
)
async def proxy_image(url: Optional[str] = None) -> Response:
    content, headers = await fetch_image(url)
    return Response(content=content, headers=headers)
