import base64
import json
from datetime import datetime, timezone
from typing import Any, Dict

import pytest
from httpx import AsyncClient
from sqlmodel import select
from svix.webhooks import Webhook

from gunpla_sekai.core.database.entities import User, UserKitCollection
from gunpla_sekai.server.core.config import settings

pytestmark = pytest.mark.asyncio

API = "/api/v1/webhooks/clerk"

SECRET = "whsec_" + base64.b64encode(b"gunpla-sekai-webhook-test-secret").decode()


@pytest.fixture(autouse=True)
def webhook_secret(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "clerk_webhook_secret", SECRET)


def signed(event: Dict[str, Any], msg_id: str = "msg_2a7Tn0bJ6") -> Dict[str, Any]:
    payload = json.dumps(event)
    now = datetime.now(timezone.utc)
    signature = Webhook(SECRET).sign(msg_id, now, payload)
    return {
        "content": payload,
        "headers": {
            "svix-id": msg_id,
            "svix-timestamp": str(int(now.timestamp())),
            "svix-signature": signature,
            "content-type": "application/json",
        },
    }


def clerk_user(user_id: str, **fields) -> Dict[str, Any]:
    data = {
        "id": user_id,
        "email_addresses": [{"email_address": f"{user_id}@example.com"}],
        "username": "char",
        "first_name": "Char",
        "last_name": "Aznable",
        "image_url": "https://img.clerk.com/char.png",
        "created_at": 1704067200000,
        "updated_at": 1704067200000,
    }
    data.update(fields)
    return data


class TestClerkWebhook:
    async def test_liveness(self, client: AsyncClient):
        response = await client.get(API)
        assert response.status_code == 200
        assert response.json() == {"message": "Clerk webhook endpoint is active"}

    async def test_user_created(self, client: AsyncClient, session):
        response = await client.post(API, **signed({"type": "user.created", "data": clerk_user("user_char")}))
        assert response.status_code == 200
        assert response.json() == {"message": "Webhook processed successfully", "type": "user.created", "handled": True}

        user = (await session.exec(select(User).where(User.id == "user_char"))).one()
        assert user.email == "user_char@example.com"
        assert user.username == "char"
        assert user.image_url == "https://img.clerk.com/char.png"
        assert user.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    async def test_user_updated(self, client: AsyncClient, users, session):
        event = {"type": "user.updated", "data": clerk_user(users.bob.id, username="bright", first_name="Bright")}
        response = await client.post(API, **signed(event))
        assert response.status_code == 200

        await session.refresh(users.bob)
        assert users.bob.username == "bright"
        assert users.bob.first_name == "Bright"

    async def test_update_for_unknown_user_creates_it(self, client: AsyncClient, session):
        response = await client.post(API, **signed({"type": "user.updated", "data": clerk_user("user_late")}))
        assert response.status_code == 200
        assert (await session.exec(select(User).where(User.id == "user_late"))).first() is not None

    async def test_user_deleted_removes_content(self, client: AsyncClient, catalog, users, auth_headers, session):
        await client.put(
            f"/api/v1/collections/{catalog.hg_rx78.id}", json={"status": "BUILT"}, headers=auth_headers(users.bob.id)
        )

        response = await client.post(API, **signed({"type": "user.deleted", "data": {"id": users.bob.id}}))
        assert response.status_code == 200

        assert (await session.exec(select(User).where(User.id == users.bob.id))).first() is None
        entries = await session.exec(select(UserKitCollection).where(UserKitCollection.user_id == users.bob.id))
        assert entries.all() == []

    async def test_unhandled_event_is_acknowledged(self, client: AsyncClient):
        response = await client.post(API, **signed({"type": "session.created", "data": {"id": "sess_1"}}))
        assert response.status_code == 200
        assert response.json()["handled"] is False

    async def test_missing_headers(self, client: AsyncClient):
        response = await client.post(API, content=json.dumps({"type": "user.created"}))
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing svix headers"

    async def test_bad_signature(self, client: AsyncClient):
        request = signed({"type": "user.created", "data": clerk_user("user_char")})
        request["content"] = request["content"].replace("char", "amuro")

        response = await client.post(API, **request)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid webhook signature"

    async def test_secret_not_configured(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "clerk_webhook_secret", None)

        response = await client.post(API, **signed({"type": "user.created", "data": clerk_user("user_char")}))
        assert response.status_code == 500
        assert "CLERK_WEBHOOK_SECRET" in response.json()["detail"]
