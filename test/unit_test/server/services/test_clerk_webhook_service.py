import base64
import json
from datetime import datetime, timedelta, timezone

import pytest
from svix.webhooks import Webhook

from gunpla_sekai.core.database.entities import User
from gunpla_sekai.core.errors import BadRequestError, ConfigurationError
from gunpla_sekai.server.services.clerk_webhook import ClerkWebhookService, verify_webhook

SECRET = "whsec_" + base64.b64encode(b"clerk-service-test-secret").decode()


def sign(payload: str, when: datetime, msg_id: str = "msg_1") -> dict:
    return {
        "svix-id": msg_id,
        "svix-timestamp": str(int(when.timestamp())),
        "svix-signature": Webhook(SECRET).sign(msg_id, when, payload),
    }


class TestVerifyWebhook:
    def test_returns_event(self):
        payload = json.dumps({"type": "user.created", "data": {"id": "user_1"}})
        event = verify_webhook(payload.encode(), sign(payload, datetime.now(timezone.utc)), secret=SECRET)
        assert event["data"]["id"] == "user_1"

    def test_stale_timestamp_is_rejected(self):
        payload = json.dumps({"type": "user.created"})
        headers = sign(payload, datetime.now(timezone.utc) - timedelta(hours=1))

        with pytest.raises(BadRequestError) as exc_info:
            verify_webhook(payload.encode(), headers, secret=SECRET)
        assert exc_info.value.detail == "Invalid webhook signature"

    def test_partial_headers(self):
        payload = json.dumps({"type": "user.created"})
        headers = sign(payload, datetime.now(timezone.utc))
        del headers["svix-signature"]

        with pytest.raises(BadRequestError) as exc_info:
            verify_webhook(payload.encode(), headers, secret=SECRET)
        assert exc_info.value.detail == "Missing svix headers"

    def test_returns_decoded_payload(self):
        payload = json.dumps({"type": "user.deleted", "data": {"id": "user_2", "deleted": True}})
        event = verify_webhook(payload.encode(), sign(payload, datetime.now(timezone.utc), "msg_2"), secret=SECRET)
        assert event == {"type": "user.deleted", "data": {"id": "user_2", "deleted": True}}

    def test_signed_body_that_is_not_an_object(self):
        payload = "[1, 2]"
        with pytest.raises(BadRequestError) as exc_info:
            verify_webhook(payload.encode(), sign(payload, datetime.now(timezone.utc)), secret=SECRET)
        assert exc_info.value.detail == "Invalid webhook payload"

    def test_signed_body_that_is_not_json(self):
        payload = "not json"
        with pytest.raises(BadRequestError) as exc_info:
            verify_webhook(payload.encode(), sign(payload, datetime.now(timezone.utc)), secret=SECRET)
        assert exc_info.value.detail == "Invalid webhook payload"

    def test_empty_secret(self):
        with pytest.raises(ConfigurationError):
            verify_webhook(b"{}", {}, secret="")


@pytest.mark.asyncio
class TestClerkWebhookService:
    async def test_created_twice_applies_as_update(self, session):
        service = ClerkWebhookService(session)
        data = {"id": "user_char", "email_addresses": [{"email_address": "char@example.com"}], "username": "char"}

        assert await service.handle({"type": "user.created", "data": data}) is True
        assert await service.handle({"type": "user.created", "data": {**data, "username": "quattro"}}) is True

        user = await session.get(User, "user_char")
        assert user.username == "quattro"

    async def test_missing_optional_fields(self, session):
        await ClerkWebhookService(session).handle(
            {"type": "user.created", "data": {"id": "user_bare", "first_name": "", "profile_image_url": "https://img.clerk.com/p.png"}}
        )

        user = await session.get(User, "user_bare")
        assert user.email == ""
        assert user.first_name is None
        assert user.image_url == "https://img.clerk.com/p.png"
        assert user.created_at is not None
        assert user.created_at.tzinfo is not None

    async def test_clerk_timestamps_are_stored_as_utc(self, session):
        data = {"id": "user_ts", "created_at": 1704067200000, "updated_at": 1704153600000}
        await ClerkWebhookService(session).handle({"type": "user.created", "data": data})

        user = await session.get(User, "user_ts")
        assert user.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert user.updated_at == datetime(2024, 1, 2, tzinfo=timezone.utc)

    async def test_deleted_without_id(self, session):
        assert await ClerkWebhookService(session).handle({"type": "user.deleted", "data": {}}) is True

    async def test_deleted_unknown_user(self, session):
        assert await ClerkWebhookService(session).handle({"type": "user.deleted", "data": {"id": "user_ghost"}}) is True

    async def test_other_events_are_not_handled(self, session):
        assert await ClerkWebhookService(session).handle({"type": "email.created", "data": {"id": "em_1"}}) is False
