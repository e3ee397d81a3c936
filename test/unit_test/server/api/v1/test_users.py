import pytest
from httpx import AsyncClient

from gunpla_sekai.core.models.domain.enums import ReviewCategory

pytestmark = pytest.mark.asyncio

API = "/api/v1/users"


class TestCurrentUser:
    async def test_get_me(self, client: AsyncClient, users, auth_headers):
        response = await client.get(f"{API}/me", headers=auth_headers(users.admin.id))
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == users.admin.id
        assert data["email"] == "admin@example.com"
        assert data["is_admin"] is True

    async def test_get_me_before_sync(self, client: AsyncClient, users, auth_headers):
        response = await client.get(f"{API}/me", headers=auth_headers("user_not_synced"))
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    async def test_get_me_requires_authentication(self, client: AsyncClient):
        response = await client.get(f"{API}/me")
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    async def test_update_profile(self, client: AsyncClient, users, auth_headers):
        response = await client.patch(
            f"{API}/me",
            json={"bio": "Weathering enthusiast", "show_builds": False, "theme_color": "#1e40af"},
            headers=auth_headers(users.alice.id),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["bio"] == "Weathering enthusiast"
        assert data["show_builds"] is False
        assert data["theme_color"] == "#1e40af"
        assert data["username"] == "alice"
        assert data["email"] == "alice@example.com"

    async def test_update_keeps_own_username(self, client: AsyncClient, users, auth_headers):
        response = await client.patch(f"{API}/me", json={"username": "alice"}, headers=auth_headers(users.alice.id))
        assert response.status_code == 200

    async def test_update_to_taken_username(self, client: AsyncClient, users, auth_headers):
        response = await client.patch(f"{API}/me", json={"username": "bob"}, headers=auth_headers(users.alice.id))
        assert response.status_code == 409
        assert response.json()["detail"] == "Username is already taken"

    async def test_update_rejects_long_bio(self, client: AsyncClient, users, auth_headers):
        response = await client.patch(f"{API}/me", json={"bio": "x" * 501}, headers=auth_headers(users.alice.id))
        assert response.status_code == 422


class TestUserLookup:
    async def test_by_id(self, client: AsyncClient, users):
        response = await client.get(f"{API}/id/{users.bob.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["username"] == "bob"
        assert data["email_notifications"] is True

    async def test_by_unknown_id(self, client: AsyncClient, users):
        response = await client.get(f"{API}/id/user_missing")
        assert response.status_code == 404


class TestPublicProfile:
    async def test_profile_with_activity(self, client: AsyncClient, catalog, users, auth_headers):
        headers = auth_headers(users.alice.id)
        await client.put(f"/api/v1/collections/{catalog.hg_rx78.id}", json={"status": "BUILT"}, headers=headers)
        await client.put(f"/api/v1/collections/{catalog.old_zaku.id}", json={"status": "WISHLIST"}, headers=headers)
        await client.put(f"/api/v1/collections/{catalog.mg_rx78.id}", json={"status": "WISHLIST"}, headers=headers)
        await client.post(
            "/api/v1/reviews",
            json={
                "kit_id": catalog.hg_rx78.id,
                "title": "Classic",
                "scores": [{"category": category.value, "score": 8} for category in ReviewCategory],
            },
            headers=headers,
        )
        await client.post("/api/v1/builds", json={"kit_id": catalog.hg_rx78.id, "title": "Straight build"}, headers=headers)

        response = await client.get(f"{API}/alice")
        assert response.status_code == 200
        data = response.json()
        assert "email" not in data
        assert data["collection_stats"] == {
            "wishlist": 2,
            "preorder": 0,
            "backlog": 0,
            "in_progress": 0,
            "built": 1,
            "total": 3,
        }
        (review,) = data["recent_reviews"]
        assert review["kit_name"] == catalog.hg_rx78.name
        assert review["overall_score"] == 8.0
        assert len(review["category_scores"]) == 6
        (build,) = data["recent_builds"]
        assert build["title"] == "Straight build"
        assert build["kit_name"] == catalog.hg_rx78.name

    async def test_hidden_builds(self, client: AsyncClient, catalog, users, auth_headers):
        headers = auth_headers(users.alice.id)
        await client.post("/api/v1/builds", json={"kit_id": catalog.hg_rx78.id, "title": "Secret"}, headers=headers)
        await client.patch(f"{API}/me", json={"show_builds": False}, headers=headers)

        response = await client.get(f"{API}/alice")
        assert response.json()["recent_builds"] == []

    async def test_unknown_username(self, client: AsyncClient, users):
        response = await client.get(f"{API}/char")
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"
