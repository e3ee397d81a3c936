"""
Unit tests for FastAPI application lifespan management.

Tests verify that the application startup and shutdown events are properly
handled, including database initialization and its failure path.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from sqlalchemy import inspect

pytestmark = pytest.mark.asyncio


class TestLifespanStartup:
    """Test application startup lifespan events."""

    async def test_lifespan_startup_initializes_database(self):
        from gunpla_sekai.server.main import lifespan

        with patch("gunpla_sekai.server.main.init_db", new_callable=AsyncMock) as mock_init_db:
            async with lifespan(FastAPI()):
                mock_init_db.assert_awaited_once()

    async def test_lifespan_survives_database_failure(self):
        from gunpla_sekai.server.main import lifespan

        with patch("gunpla_sekai.server.main.init_db", new_callable=AsyncMock) as mock_init_db:
            mock_init_db.side_effect = ConnectionError("postgres is down")
            with patch("gunpla_sekai.server.main.logger") as mock_logger:
                async with lifespan(FastAPI()):
                    pass

        mock_logger.error.assert_called_once()
        assert "Database initialization failed" in mock_logger.error.call_args.args[0]

    async def test_lifespan_logs_shutdown(self):
        from gunpla_sekai.server.main import lifespan

        with patch("gunpla_sekai.server.main.init_db", new_callable=AsyncMock):
            with patch("gunpla_sekai.server.main.logger") as mock_logger:
                async with lifespan(FastAPI()):
                    pass

        messages = [c.args[0] for c in mock_logger.info.call_args_list]
        assert messages[-1] == "Shutting down Gunpla Sekai Server..."


class TestInitDb:
    async def test_sqlite_schema_is_created(self, engine, monkeypatch):
        from gunpla_sekai.core.database import session as session_module

        monkeypatch.setattr(session_module, "engine", engine)

        await session_module.init_db()

        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        assert {"kits", "users", "reviews", "builds", "uploads"} <= set(tables)

    async def test_other_backends_are_left_to_alembic(self, monkeypatch):
        from gunpla_sekai.core.database import session as session_module

        fake_engine = MagicMock()
        fake_engine.url.get_backend_name.return_value = "postgresql"
        monkeypatch.setattr(session_module, "engine", fake_engine)

        with patch.object(session_module, "create_all", new_callable=AsyncMock) as mock_create_all:
            await session_module.init_db()

        mock_create_all.assert_not_awaited()


class TestApplicationSetup:
    async def test_routers_are_mounted(self):
        from gunpla_sekai.server.main import app

        paths = set(app.openapi()["paths"])
        assert "/health" in paths
        assert "/api/v1/kits" in paths
        assert "/api/v1/builds/{build_id}/milestones" in paths
        assert "/api/v1/gunpla-cards/proxy-image" in paths
        assert "/api/v1/webhooks/clerk" in paths

    async def test_run_uses_settings(self):
        from gunpla_sekai.server import main

        with patch.object(main.uvicorn, "run") as mock_run:
            main.run()

        kwargs = mock_run.call_args.kwargs
        assert mock_run.call_args.args == ("gunpla_sekai.server.main:app",)
        assert kwargs["host"] == main.settings.server_host
        assert kwargs["port"] == main.settings.server_port
