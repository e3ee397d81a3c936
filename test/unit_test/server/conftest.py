from typing import AsyncGenerator, Callable, Dict
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

INVALID_TOKEN = "invalid-token"


@pytest.fixture(name="auth_headers")
def auth_headers_fixture() -> Callable[[str], Dict[str, str]]:
    """Build a bearer header; the test token is the Clerk user id itself."""

    def _headers(user_id: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {user_id}"}

    return _headers


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan, token check and database session."""
    from gunpla_sekai.core.database import get_session
    from gunpla_sekai.server.main import app
    from gunpla_sekai.server.services import auth

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    async def verify_token_override(token: str) -> str:
        if token == INVALID_TOKEN:
            raise auth._unauthorized("Invalid token")
        return token

    app.dependency_overrides[get_session] = get_session_override
    monkeypatch.setattr(auth, "verify_token", verify_token_override)

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("gunpla_sekai.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()
