"""
Clerk Webhook Handling.

Clerk delivers user lifecycle events through Svix. Each delivery is verified
against ``CLERK_WEBHOOK_SECRET`` before the local ``users`` table is updated.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from svix.webhooks import Webhook, WebhookVerificationError

from gunpla_sekai.core.database.base import utc_now
from gunpla_sekai.core.database.entities.users import User
from gunpla_sekai.core.database.repositories import UserRepository
from gunpla_sekai.core.errors import BadRequestError, ConfigurationError
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.monitoring import log_webhook_event
from gunpla_sekai.server.core.config import settings

from .users import UserService

logger = get_logger(__name__)

SVIX_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")


def verify_webhook(payload: bytes, headers: Mapping[str, str], secret: Optional[str] = None) -> Dict[str, Any]:
    """
    Verify a Svix-signed delivery and return the decoded event.

    Raises:
        ConfigurationError: When no webhook secret is configured.
        BadRequestError: When headers are missing or the signature does not match.
    """
    secret = secret if secret is not None else settings.clerk.webhook_secret
    if not secret:
        raise ConfigurationError("Clerk webhooks", ["CLERK_WEBHOOK_SECRET"])

    svix_headers = {name: headers.get(name) for name in SVIX_HEADERS}
    if not all(svix_headers.values()):
        raise BadRequestError("Missing svix headers")

    try:
        Webhook(secret).verify(payload, svix_headers)
    except WebhookVerificationError as e:
        logger.warning(f"Rejected Clerk webhook: {e}")
        raise BadRequestError("Invalid webhook signature")

    try:
        event = json.loads(payload)
    except ValueError:
        raise BadRequestError("Invalid webhook payload")
    if not isinstance(event, dict):
        raise BadRequestError("Invalid webhook payload")
    return event


def _from_epoch_ms(value: Optional[int]) -> datetime:
    if not value:
        return utc_now()
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def _primary_email(data: Mapping[str, Any]) -> str:
    addresses = data.get("email_addresses") or []
    if not addresses:
        return ""
    return addresses[0].get("email_address") or ""


def _clerk_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "email": _primary_email(data),
        "username": data.get("username") or None,
        "first_name": data.get("first_name") or None,
        "last_name": data.get("last_name") or None,
        "image_url": data.get("profile_image_url") or data.get("image_url") or None,
        "updated_at": _from_epoch_ms(data.get("updated_at")),
    }


class ClerkWebhookService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepository(session)

    async def handle(self, event: Mapping[str, Any]) -> bool:
        """Apply an event; returns False for event types that are only acknowledged."""
        event_type = event.get("type", "")
        data = event.get("data") or {}
        user_id = data.get("id")

        if event_type == "user.created":
            await self._created(data)
        elif event_type == "user.updated":
            await self._updated(data)
        elif event_type == "user.deleted":
            if not user_id:
                logger.error("User ID is missing from deletion data")
            else:
                await UserService(self.session).delete_user(user_id)
        else:
            logger.info(f"Unhandled Clerk webhook event: {event_type}")
            log_webhook_event(event_type, user_id, handled=False)
            return False

        log_webhook_event(event_type, user_id, handled=True)
        return True

    async def _created(self, data: Mapping[str, Any]) -> User:
        existing = await self.users.get_by_id(data["id"])
        if existing is not None:
            logger.info(f"User {data['id']} already exists; applying as update")
            return await self._updated(data)
        user = User(id=data["id"], created_at=_from_epoch_ms(data.get("created_at")), **_clerk_fields(data))
        user = await self.users.create(user)
        logger.info(f"User created in database: {user.id}")
        return user

    async def _updated(self, data: Mapping[str, Any]) -> User:
        user = await self.users.get_by_id(data["id"])
        if user is None:
            logger.warning(f"Update for unknown user {data['id']}; creating it")
            return await self._created(data)
        for key, value in _clerk_fields(data).items():
            setattr(user, key, value)
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        logger.info(f"User updated in database: {user.id}")
        return user
