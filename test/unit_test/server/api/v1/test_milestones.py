from typing import Any, Dict

import pytest
import pytest_asyncio
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

API = "/api/v1"


@pytest_asyncio.fixture
async def build(client: AsyncClient, catalog, users, auth_headers) -> Dict[str, Any]:
    response = await client.post(
        f"{API}/builds",
        json={"kit_id": catalog.mg_rx78.id, "title": "Ver.Ka with weathering"},
        headers=auth_headers(users.alice.id),
    )
    return response.json()


async def add_milestone(client: AsyncClient, headers, build_id: str, title: str, order: int, **fields) -> Dict[str, Any]:
    response = await client.post(
        f"{API}/milestones",
        json={"build_id": build_id, "type": fields.pop("type", "BUILD"), "title": title, "order": order, **fields},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestMilestones:
    async def test_create_trims_title(self, client: AsyncClient, build, users, auth_headers):
        data = await add_milestone(client, auth_headers(users.alice.id), build["id"], "  Frame  ", 1, type="ACQUISITION")
        assert data["title"] == "Frame"
        assert data["type"] == "ACQUISITION"
        assert data["images"] == []

    async def test_blank_title_is_rejected(self, client: AsyncClient, build, users, auth_headers):
        response = await client.post(
            f"{API}/milestones",
            json={"build_id": build["id"], "type": "BUILD", "title": "  ", "order": 1},
            headers=auth_headers(users.alice.id),
        )
        assert response.status_code == 422

    async def test_stranger_gets_not_found(self, client: AsyncClient, build, users, auth_headers):
        response = await client.post(
            f"{API}/milestones",
            json={"build_id": build["id"], "type": "BUILD", "title": "Sneaky", "order": 1},
            headers=auth_headers(users.bob.id),
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Build not found or unauthorized"

    async def test_list_in_order(self, client: AsyncClient, build, users, auth_headers):
        headers = auth_headers(users.alice.id)
        await add_milestone(client, headers, build["id"], "Paint", 2, type="PAINTING")
        await add_milestone(client, headers, build["id"], "Build", 1)

        response = await client.get(f"{API}/builds/{build['id']}/milestones")
        assert [m["title"] for m in response.json()] == ["Build", "Paint"]

    async def test_list_for_unknown_build(self, client: AsyncClient, catalog):
        response = await client.get(f"{API}/builds/missing/milestones")
        assert response.status_code == 404

    async def test_update(self, client: AsyncClient, build, users, auth_headers):
        headers = auth_headers(users.alice.id)
        milestone = await add_milestone(client, headers, build["id"], "Decals", 1, type="DECALS")

        response = await client.patch(
            f"{API}/milestones/{milestone['id']}",
            json={"description": "Water slides", "completed_at": "2024-05-01T10:00:00"},
            headers=headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["description"] == "Water slides"
        assert data["completed_at"].startswith("2024-05-01T10:00:00")
        assert data["title"] == "Decals"

    async def test_stranger_cannot_update_or_delete(self, client: AsyncClient, build, users, auth_headers):
        milestone = await add_milestone(client, auth_headers(users.alice.id), build["id"], "Topcoat", 1, type="TOPCOAT")
        bob = auth_headers(users.bob.id)

        response = await client.patch(f"{API}/milestones/{milestone['id']}", json={"title": "x"}, headers=bob)
        assert response.status_code == 404
        assert response.json()["detail"] == "Milestone not found or unauthorized"

        response = await client.delete(f"{API}/milestones/{milestone['id']}", headers=bob)
        assert response.status_code == 404

    async def test_delete(self, client: AsyncClient, build, users, auth_headers):
        headers = auth_headers(users.alice.id)
        milestone = await add_milestone(client, headers, build["id"], "Topcoat", 1, type="TOPCOAT")

        response = await client.delete(f"{API}/milestones/{milestone['id']}", headers=headers)
        assert response.status_code == 204
        assert (await client.get(f"{API}/builds/{build['id']}/milestones")).json() == []

    async def test_reorder_numbers_from_one(self, client: AsyncClient, build, users, auth_headers):
        headers = auth_headers(users.alice.id)
        a = await add_milestone(client, headers, build["id"], "A", 1)
        b = await add_milestone(client, headers, build["id"], "B", 2)
        c = await add_milestone(client, headers, build["id"], "C", 3)

        response = await client.put(
            f"{API}/builds/{build['id']}/milestones/order",
            json={"milestone_ids": [c["id"], a["id"], b["id"]]},
            headers=headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert [m["title"] for m in data] == ["C", "A", "B"]
        assert [m["order"] for m in data] == [1, 2, 3]

    async def test_reorder_by_stranger(self, client: AsyncClient, build, users, auth_headers):
        response = await client.put(
            f"{API}/builds/{build['id']}/milestones/order", json={"milestone_ids": []}, headers=auth_headers(users.bob.id)
        )
        assert response.status_code == 404


class TestMilestoneImages:
    async def test_set_images_from_gallery(self, client: AsyncClient, build, users, auth_headers, make_upload):
        headers = auth_headers(users.alice.id)
        milestone = await add_milestone(client, headers, build["id"], "Paint", 1, type="PAINTING")
        first = await make_upload(users.alice.id)
        second = await make_upload(users.alice.id)
        for upload in (first, second):
            await client.post(f"{API}/builds/{build['id']}/uploads", json={"upload_id": upload.id}, headers=headers)

        response = await client.put(
            f"{API}/milestones/{milestone['id']}/images", json={"upload_ids": [second.id, first.id]}, headers=headers
        )
        assert response.status_code == 200
        images = response.json()["images"]
        assert [i["upload_id"] for i in images] == [second.id, first.id]
        assert [i["order"] for i in images] == [0, 1]
        assert images[0]["upload"]["url"] == second.url

        response = await client.put(
            f"{API}/milestones/{milestone['id']}/images", json={"upload_ids": [first.id]}, headers=headers
        )
        assert [i["upload_id"] for i in response.json()["images"]] == [first.id]

    async def test_set_images_outside_gallery(self, client: AsyncClient, build, users, auth_headers, make_upload):
        headers = auth_headers(users.alice.id)
        milestone = await add_milestone(client, headers, build["id"], "Paint", 1, type="PAINTING")
        upload = await make_upload(users.alice.id)

        response = await client.put(
            f"{API}/milestones/{milestone['id']}/images", json={"upload_ids": [upload.id]}, headers=headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Some images are not available in the build gallery"

    async def test_add_update_and_remove_image(self, client: AsyncClient, build, users, auth_headers, make_upload):
        headers = auth_headers(users.alice.id)
        milestone = await add_milestone(client, headers, build["id"], "Build", 1)
        upload = await make_upload(users.alice.id)
        url = f"{API}/milestones/{milestone['id']}/images"

        response = await client.post(url, json={"upload_id": upload.id, "caption": "Inner frame"}, headers=headers)
        assert response.status_code == 201
        link = response.json()
        assert link["caption"] == "Inner frame"
        assert link["upload"]["id"] == upload.id

        response = await client.patch(f"{url}/{link['id']}", json={"caption": "Frame", "order": 3}, headers=headers)
        assert response.status_code == 200
        assert response.json()["caption"] == "Frame"
        assert response.json()["order"] == 3

        response = await client.delete(f"{url}/{link['id']}", headers=headers)
        assert response.status_code == 204
        response = await client.delete(f"{url}/{link['id']}", headers=headers)
        assert response.status_code == 404

    async def test_add_image_requires_own_upload(self, client: AsyncClient, build, users, auth_headers, make_upload):
        headers = auth_headers(users.alice.id)
        milestone = await add_milestone(client, headers, build["id"], "Build", 1)
        upload = await make_upload(users.bob.id)

        response = await client.post(
            f"{API}/milestones/{milestone['id']}/images", json={"upload_id": upload.id}, headers=headers
        )
        assert response.status_code == 404

    async def test_reorder_images_from_zero(self, client: AsyncClient, build, users, auth_headers, make_upload):
        headers = auth_headers(users.alice.id)
        milestone = await add_milestone(client, headers, build["id"], "Build", 1)
        url = f"{API}/milestones/{milestone['id']}/images"
        links = []
        for _ in range(3):
            upload = await make_upload(users.alice.id)
            links.append((await client.post(url, json={"upload_id": upload.id}, headers=headers)).json())

        new_order = [links[2]["id"], links[0]["id"], links[1]["id"]]
        response = await client.put(f"{url}/order", json={"link_ids": new_order}, headers=headers)
        assert response.status_code == 200
        images = response.json()["images"]
        assert [i["id"] for i in images] == new_order
        assert [i["order"] for i in images] == [0, 1, 2]
