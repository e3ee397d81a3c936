"""
Webhook Endpoints.

Clerk posts user lifecycle events here. Deliveries are signed by Svix and are
verified before any change reaches the ``users`` table.
"""

from fastapi import APIRouter, Request

from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.server.services.clerk_webhook import verify_webhook
from gunpla_sekai.server.services.deps import ClerkWebhookServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["webhooks"])


@router.post(
    "/clerk",
    summary="Receive Clerk Webhook",
    description="Verify a Svix-signed Clerk event and apply it to the local user table.",
    response_description="Acknowledgement of the delivery.",
    responses={
        200: {"description": "Event verified and processed"},
        400: {"description": "Missing svix headers or invalid signature"},
        500: {"description": "Webhook secret is not configured"},
    },
)
async def clerk_webhook(request: Request, service: ClerkWebhookServiceDep):
    """
    Receive a Clerk webhook delivery.

    The raw body is verified against the ``svix-id``, ``svix-timestamp`` and
    ``svix-signature`` headers. Handled events:

    - **user.created**: inserts the user.
    - **user.updated**: updates the user's profile fields.
    - **user.deleted**: removes the user and everything they own.

    Any other event type is logged and acknowledged.
    """
    payload = await request.body()
    event = verify_webhook(payload, request.headers)
    event_type = event.get("type", "")
    logger.info(f"Received Clerk webhook: {event_type}")
    handled = await service.handle(event)
    return {"message": "Webhook processed successfully", "type": event_type, "handled": handled}


@router.get(
    "/clerk",
    summary="Clerk Webhook Liveness",
    description="Confirm the Clerk webhook endpoint is reachable.",
    response_description="Liveness message.",
)
async def clerk_webhook_liveness():
    return {"message": "Clerk webhook endpoint is active"}
