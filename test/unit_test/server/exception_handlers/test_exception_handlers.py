"""
Unit tests for server exception handlers.

Tests cover the domain error mapping, integrity conflicts and the global
handler for unexpected failures.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from gunpla_sekai.core.errors import (
    BadRequestError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from gunpla_sekai.server.exception_handlers import setup_exception_handlers
from gunpla_sekai.server.exception_handlers.global_handler import (
    domain_exception_handler,
    global_exception_handler,
    integrity_error_handler,
)

MODULE = "gunpla_sekai.server.exception_handlers.global_handler"


@pytest.fixture
def mock_request():
    """Create a mock request object."""
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/kits/k1"
    request.query_params = {"sort": "name"}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


def body(response: JSONResponse) -> dict:
    return json.loads(response.body.decode())


class TestDomainExceptionHandler:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc, status_code, detail",
        [
            (NotFoundError("Kit"), 404, "Kit not found"),
            (NotFoundError("Build", "Build not found or unauthorized"), 404, "Build not found or unauthorized"),
            (PermissionDeniedError(), 403, "Unauthorized"),
            (BadRequestError("Limit must be between 1 and 50"), 400, "Limit must be between 1 and 50"),
            (ConflictError("You have already reviewed this kit"), 409, "You have already reviewed this kit"),
        ],
    )
    async def test_maps_status_and_detail(self, mock_request, exc, status_code, detail):
        response = await domain_exception_handler(mock_request, exc)

        assert response.status_code == status_code
        assert body(response) == {"detail": detail}

    @pytest.mark.asyncio
    async def test_validation_errors_are_listed(self, mock_request):
        exc = ValidationFailedError(["Missing scores for: DETAIL_ACCURACY", "Scores must be integers"])

        response = await domain_exception_handler(mock_request, exc)

        assert response.status_code == 422
        data = body(response)
        assert data["errors"] == ["Missing scores for: DETAIL_ACCURACY", "Scores must be integers"]
        assert data["detail"].startswith("Validation failed: ")

    @pytest.mark.asyncio
    async def test_server_side_errors_are_logged_as_errors(self, mock_request):
        exc = ConfigurationError("Cloudinary", ["CLOUDINARY_API_SECRET"])

        with patch(f"{MODULE}.logger") as mock_logger, patch(f"{MODULE}.log_error") as mock_log_error:
            response = await domain_exception_handler(mock_request, exc)

        assert response.status_code == 500
        mock_logger.error.assert_called_once()
        mock_log_error.assert_called_once()
        assert mock_log_error.call_args.args[0] == "ConfigurationError"

    @pytest.mark.asyncio
    async def test_client_errors_are_logged_as_info(self, mock_request):
        with patch(f"{MODULE}.logger") as mock_logger:
            await domain_exception_handler(mock_request, NotFoundError("Kit"))

        mock_logger.info.assert_called_once()
        mock_logger.error.assert_not_called()


class TestIntegrityErrorHandler:
    @pytest.mark.asyncio
    async def test_returns_conflict(self, mock_request):
        exc = IntegrityError("INSERT INTO reviews", {}, Exception("UNIQUE constraint failed"))

        response = await integrity_error_handler(mock_request, exc)

        assert response.status_code == 409
        assert body(response) == {"detail": "Resource already exists"}


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    @pytest.mark.asyncio
    async def test_exception_handler_logs_error(self, mock_request):
        """Test that exception handler logs errors."""
        exc = ValueError("Test error")

        with patch(f"{MODULE}.logger") as mock_logger:
            await global_exception_handler(mock_request, exc)

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        assert call_args[1]["extra"]["error_type"] == "ValueError"
        assert call_args[1]["extra"]["query_params"] == {"sort": "name"}

    @pytest.mark.asyncio
    async def test_exception_handler_returns_500_with_error_id(self, mock_request):
        exc = RuntimeError("Test error")

        with patch(f"{MODULE}.logger"):
            response = await global_exception_handler(mock_request, exc)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 500
        data = body(response)
        assert data["detail"] == "Internal server error"
        assert data["error_id"] == id(exc)
        assert data["error_type"] == "RuntimeError"

    @pytest.mark.asyncio
    async def test_exception_handler_without_client(self, mock_request):
        mock_request.client = None

        with patch(f"{MODULE}.logger") as mock_logger:
            await global_exception_handler(mock_request, KeyError("x"))

        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"


class TestSetupExceptionHandlers:
    def test_registers_handlers(self):
        app = FastAPI()

        setup_exception_handlers(app)

        from gunpla_sekai.core.errors import GunplaSekaiError

        assert app.exception_handlers[GunplaSekaiError] is domain_exception_handler
        assert app.exception_handlers[IntegrityError] is integrity_error_handler
        assert app.exception_handlers[Exception] is global_exception_handler
