import pytest
from httpx import AsyncClient

from gunpla_sekai.server.core import constant

# Mark all tests in this module as async
pytestmark = pytest.mark.asyncio


async def test_health_check(client: AsyncClient):
    response = await client.get("http://localhost/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_version(client: AsyncClient):
    response = await client.get("http://localhost/version")
    assert response.status_code == 200
    data = response.json()
    assert data["version"] == constant.VERSION
    assert data["schema_version"] == constant.SCHEMA_VERSION


async def test_openapi_is_served_under_api_prefix(client: AsyncClient):
    response = await client.get(f"{constant.API_V1_STR}/openapi.json")
    assert response.status_code == 200
    paths = response.json()["paths"]
    assert f"{constant.API_V1_STR}/kits" in paths
    assert f"{constant.API_V1_STR}/builds/{{build_id}}/milestones" in paths


async def test_responses_carry_process_time_header(client: AsyncClient):
    response = await client.get("/health")
    assert "x-process-time" in response.headers
