from typing import Any, Dict, List, Sequence

import pytest
from httpx import AsyncClient

from gunpla_sekai.core.models.domain.enums import ReviewCategory

pytestmark = pytest.mark.asyncio

API = "/api/v1"

CATEGORIES = [c.value for c in ReviewCategory]


def make_scores(values: Sequence[Any]) -> List[Dict[str, Any]]:
    return [{"category": category, "score": value} for category, value in zip(CATEGORIES, values)]


async def post_review(client: AsyncClient, headers, kit_id: str, values: Sequence[Any], **fields) -> Dict[str, Any]:
    response = await client.post(
        f"{API}/reviews",
        json={"kit_id": kit_id, "scores": make_scores(values), **fields},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateReview:
    async def test_overall_score_is_rounded_mean(self, client: AsyncClient, catalog, users, auth_headers):
        data = await post_review(
            client,
            auth_headers(users.alice.id),
            catalog.hg_rx78.id,
            [10, 9, 9, 9, 9, 9],
            title="Still the best HGUC",
            content="Snaps together in an evening.",
        )
        assert data["overall_score"] == 9.2
        assert data["user_id"] == users.alice.id
        assert data["kit"]["slug"] == "hguc-rx-78-2-gundam"
        assert len(data["scores"]) == 6
        assert {s["category"] for s in data["scores"]} == set(CATEGORIES)

    async def test_second_review_of_same_kit_conflicts(self, client: AsyncClient, catalog, users, auth_headers):
        headers = auth_headers(users.alice.id)
        await post_review(client, headers, catalog.hg_rx78.id, [8] * 6)

        response = await client.post(
            f"{API}/reviews", json={"kit_id": catalog.hg_rx78.id, "scores": make_scores([5] * 6)}, headers=headers
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "You have already reviewed this kit"

    async def test_missing_categories(self, client: AsyncClient, catalog, users, auth_headers):
        response = await client.post(
            f"{API}/reviews",
            json={"kit_id": catalog.hg_rx78.id, "scores": make_scores([8] * 5)},
            headers=auth_headers(users.alice.id),
        )
        assert response.status_code == 422
        assert response.json()["errors"] == ["Missing required categories: VALUE_EXPERIENCE"]

    async def test_every_score_problem_is_reported(self, client: AsyncClient, catalog, users, auth_headers):
        response = await client.post(
            f"{API}/reviews",
            json={"kit_id": catalog.hg_rx78.id, "scores": make_scores([11, 7.5, 8, 8, 8, 8])},
            headers=auth_headers(users.alice.id),
        )
        assert response.status_code == 422
        assert response.json()["errors"] == [
            "Invalid score for BUILD_QUALITY_ENGINEERING: 11. Must be integer between 1-10",
            "Invalid score for ARTICULATION_POSEABILITY: 7.5. Must be integer between 1-10",
        ]

    async def test_duplicate_category(self, client: AsyncClient, catalog, users, auth_headers):
        scores = make_scores([8] * 6) + [{"category": CATEGORIES[0], "score": 9}]
        response = await client.post(
            f"{API}/reviews",
            json={"kit_id": catalog.hg_rx78.id, "scores": scores},
            headers=auth_headers(users.alice.id),
        )
        assert response.status_code == 422
        assert response.json()["errors"] == ["Duplicate categories found: BUILD_QUALITY_ENGINEERING"]

    async def test_unknown_kit(self, client: AsyncClient, catalog, users, auth_headers):
        response = await client.post(
            f"{API}/reviews", json={"kit_id": "missing", "scores": make_scores([8] * 6)}, headers=auth_headers(users.alice.id)
        )
        assert response.status_code == 404

    async def test_requires_authentication(self, client: AsyncClient, catalog):
        response = await client.post(f"{API}/reviews", json={"kit_id": catalog.hg_rx78.id, "scores": make_scores([8] * 6)})
        assert response.status_code == 401


class TestReadReviews:
    async def test_kit_reviews_newest_first_with_author_and_feedback(
        self, client: AsyncClient, catalog, users, auth_headers
    ):
        first = await post_review(client, auth_headers(users.alice.id), catalog.hg_rx78.id, [8] * 6)
        second = await post_review(client, auth_headers(users.bob.id), catalog.hg_rx78.id, [6] * 6)

        response = await client.get(f"{API}/reviews/kit/{catalog.hg_rx78.id}")
        assert response.status_code == 200
        data = response.json()
        assert [r["id"] for r in data] == [second["id"], first["id"]]
        assert data[1]["user"]["username"] == "alice"
        assert data[1]["feedback"] == {"helpful": 0, "not_helpful": 0}

    async def test_my_review(self, client: AsyncClient, catalog, users, auth_headers):
        created = await post_review(client, auth_headers(users.alice.id), catalog.mg_rx78.id, [9] * 6)

        response = await client.get(f"{API}/reviews/kit/{catalog.mg_rx78.id}/mine", headers=auth_headers(users.alice.id))
        assert response.json()["id"] == created["id"]

        response = await client.get(f"{API}/reviews/kit/{catalog.mg_rx78.id}/mine", headers=auth_headers(users.bob.id))
        assert response.json() is None

    async def test_my_review_anonymous(self, client: AsyncClient, catalog):
        response = await client.get(f"{API}/reviews/kit/{catalog.mg_rx78.id}/mine")
        assert response.status_code == 200
        assert response.json() is None

    async def test_user_reviews_include_kit(self, client: AsyncClient, catalog, users, auth_headers):
        await post_review(client, auth_headers(users.bob.id), catalog.old_zaku.id, [7] * 6)

        response = await client.get(f"{API}/reviews/user/{users.bob.id}")
        (review,) = response.json()
        assert review["kit"]["name"] == "MS-06 Zaku II"

    async def test_stats(self, client: AsyncClient, catalog, users, auth_headers):
        await post_review(client, auth_headers(users.alice.id), catalog.hg_rx78.id, [8] * 6)
        await post_review(client, auth_headers(users.bob.id), catalog.hg_rx78.id, [10, 9, 9, 9, 9, 9])

        response = await client.get(f"{API}/reviews/kit/{catalog.hg_rx78.id}/stats")
        data = response.json()
        assert data["total_reviews"] == 2
        assert data["average_score"] == pytest.approx(8.6)
        averages = {c["category"]: c for c in data["category_averages"]}
        assert averages["BUILD_QUALITY_ENGINEERING"]["average_score"] == 9.0
        assert averages["VALUE_EXPERIENCE"]["average_score"] == 8.5
        assert averages["VALUE_EXPERIENCE"]["review_count"] == 2

    async def test_stats_without_reviews(self, client: AsyncClient, catalog):
        response = await client.get(f"{API}/reviews/kit/{catalog.exia_kit.id}/stats")
        assert response.json() == {"total_reviews": 0, "average_score": 0.0, "category_averages": []}

    async def test_categories(self, client: AsyncClient):
        response = await client.get(f"{API}/reviews/categories")
        data = response.json()
        assert [c["category"] for c in data] == CATEGORIES
        assert data[0]["label"] == "Build Quality & Engineering"


class TestChangeReview:
    async def test_update_replaces_scores(self, client: AsyncClient, catalog, users, auth_headers):
        headers = auth_headers(users.alice.id)
        created = await post_review(client, headers, catalog.hg_rx78.id, [8] * 6)

        response = await client.patch(
            f"{API}/reviews/{created['id']}",
            json={"title": "Revisited", "scores": make_scores([6] * 6)},
            headers=headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Revisited"
        assert data["overall_score"] == 6.0
        assert {s["score"] for s in data["scores"]} == {6}
        assert len(data["scores"]) == 6

    async def test_update_text_keeps_scores(self, client: AsyncClient, catalog, users, auth_headers):
        headers = auth_headers(users.alice.id)
        created = await post_review(client, headers, catalog.hg_rx78.id, [8] * 6)

        response = await client.patch(f"{API}/reviews/{created['id']}", json={"content": "Updated"}, headers=headers)
        data = response.json()
        assert data["content"] == "Updated"
        assert data["overall_score"] == 8.0

    async def test_update_by_other_user(self, client: AsyncClient, catalog, users, auth_headers):
        created = await post_review(client, auth_headers(users.alice.id), catalog.hg_rx78.id, [8] * 6)

        response = await client.patch(
            f"{API}/reviews/{created['id']}", json={"title": "Hijacked"}, headers=auth_headers(users.bob.id)
        )
        assert response.status_code == 403

    async def test_delete_removes_review_and_votes(self, client: AsyncClient, catalog, users, auth_headers):
        created = await post_review(client, auth_headers(users.alice.id), catalog.hg_rx78.id, [8] * 6)
        await client.post(
            f"{API}/reviews/{created['id']}/feedback", json={"is_helpful": True}, headers=auth_headers(users.bob.id)
        )

        response = await client.delete(f"{API}/reviews/{created['id']}", headers=auth_headers(users.alice.id))
        assert response.status_code == 204

        response = await client.get(f"{API}/reviews/kit/{catalog.hg_rx78.id}/stats")
        assert response.json()["total_reviews"] == 0
        response = await client.get(f"{API}/reviews/{created['id']}/feedback")
        assert response.status_code == 404

    async def test_delete_by_other_user(self, client: AsyncClient, catalog, users, auth_headers):
        created = await post_review(client, auth_headers(users.alice.id), catalog.hg_rx78.id, [8] * 6)

        response = await client.delete(f"{API}/reviews/{created['id']}", headers=auth_headers(users.bob.id))
        assert response.status_code == 403


class TestFeedback:
    async def test_vote_and_change_vote(self, client: AsyncClient, catalog, users, auth_headers):
        review = await post_review(client, auth_headers(users.alice.id), catalog.hg_rx78.id, [8] * 6)
        url = f"{API}/reviews/{review['id']}/feedback"
        bob = auth_headers(users.bob.id)

        response = await client.post(url, json={"is_helpful": True}, headers=bob)
        assert response.json() == {"review_id": review["id"], "helpful": 1, "not_helpful": 0, "user_feedback": True}

        response = await client.post(url, json={"is_helpful": False}, headers=bob)
        assert response.json()["helpful"] == 0
        assert response.json()["not_helpful"] == 1
        assert response.json()["user_feedback"] is False

    async def test_anonymous_read_has_no_own_vote(self, client: AsyncClient, catalog, users, auth_headers):
        review = await post_review(client, auth_headers(users.alice.id), catalog.hg_rx78.id, [8] * 6)
        url = f"{API}/reviews/{review['id']}/feedback"
        await client.post(url, json={"is_helpful": True}, headers=auth_headers(users.bob.id))

        response = await client.get(url)
        assert response.json()["helpful"] == 1
        assert response.json()["user_feedback"] is None

    async def test_remove_vote(self, client: AsyncClient, catalog, users, auth_headers):
        review = await post_review(client, auth_headers(users.alice.id), catalog.hg_rx78.id, [8] * 6)
        url = f"{API}/reviews/{review['id']}/feedback"
        bob = auth_headers(users.bob.id)
        await client.post(url, json={"is_helpful": True}, headers=bob)

        response = await client.delete(url, headers=bob)
        assert response.status_code == 200
        assert response.json()["helpful"] == 0
        assert response.json()["user_feedback"] is None

    async def test_vote_must_be_boolean(self, client: AsyncClient, catalog, users, auth_headers):
        review = await post_review(client, auth_headers(users.alice.id), catalog.hg_rx78.id, [8] * 6)
        response = await client.post(
            f"{API}/reviews/{review['id']}/feedback", json={"is_helpful": "yes"}, headers=auth_headers(users.bob.id)
        )
        assert response.status_code == 422

    async def test_vote_on_unknown_review(self, client: AsyncClient, catalog, users, auth_headers):
        response = await client.post(
            f"{API}/reviews/missing/feedback", json={"is_helpful": True}, headers=auth_headers(users.bob.id)
        )
        assert response.status_code == 404

    async def test_counts_for_several_reviews(self, client: AsyncClient, catalog, users, auth_headers):
        review = await post_review(client, auth_headers(users.alice.id), catalog.hg_rx78.id, [8] * 6)
        await client.post(
            f"{API}/reviews/{review['id']}/feedback", json={"is_helpful": True}, headers=auth_headers(users.bob.id)
        )

        response = await client.post(f"{API}/reviews/feedback/counts", json={"review_ids": [review["id"], "missing"]})
        assert response.json() == {
            review["id"]: {"helpful": 1, "not_helpful": 0},
            "missing": {"helpful": 0, "not_helpful": 0},
        }
