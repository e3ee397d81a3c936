"""
Unit tests for the Logfire monitoring helpers.

Logfire itself is mocked; the tests check which instrumentations are switched
on and that events are only emitted once Logfire has been initialized.
"""

from unittest.mock import MagicMock, patch

import pytest

from gunpla_sekai.core import monitoring


@pytest.fixture
def mock_logfire():
    with patch.object(monitoring, "logfire") as mock:
        yield mock


@pytest.fixture(autouse=True)
def reset_initialized():
    with patch.object(monitoring, "_initialized", False):
        yield


def enabled(**overrides):
    values = {"LOGFIRE_ENABLED": True, "LOGFIRE_TOKEN": "pylf_test_token"}
    values.update(overrides)
    return patch.multiple(monitoring, **values)


class TestLogfireEnvironmentConfiguration:
    @pytest.mark.parametrize("value, expected", [("true", True), ("1", True), ("YES", True), ("false", False), ("", False)])
    def test_flag_parsing(self, monkeypatch, value, expected):
        monkeypatch.setenv("LOGFIRE_SOME_FLAG", value)
        assert monitoring._flag("LOGFIRE_SOME_FLAG", "false") is expected

    def test_flag_default(self, monkeypatch):
        monkeypatch.delenv("LOGFIRE_SOME_FLAG", raising=False)
        assert monitoring._flag("LOGFIRE_SOME_FLAG", "true") is True

    def test_disabled_in_tests(self):
        assert monitoring.LOGFIRE_ENABLED is False


class TestInitializeLogfire:
    def test_disabled(self, mock_logfire):
        with patch.object(monitoring, "LOGFIRE_ENABLED", False):
            assert monitoring.initialize_logfire() is False
        mock_logfire.configure.assert_not_called()

    def test_enabled_without_token(self, mock_logfire):
        with enabled(LOGFIRE_TOKEN=""):
            assert monitoring.initialize_logfire() is False
        mock_logfire.configure.assert_not_called()

    def test_configures_and_instruments(self, mock_logfire):
        app = MagicMock()
        with enabled(LOGFIRE_SERVICE_NAME="gunpla-sekai-test", LOGFIRE_ENVIRONMENT="ci"):
            assert monitoring.initialize_logfire(app) is True
            assert monitoring._initialized is True

        kwargs = mock_logfire.configure.call_args.kwargs
        assert kwargs["token"] == "pylf_test_token"
        assert kwargs["service_name"] == "gunpla-sekai-test"
        assert kwargs["environment"] == "ci"
        mock_logfire.instrument_sqlalchemy.assert_called_once()
        mock_logfire.instrument_httpx.assert_called_once()
        mock_logfire.instrument_fastapi.assert_called_once_with(app=app)

    def test_fastapi_needs_app(self, mock_logfire):
        with enabled():
            monitoring.initialize_logfire()
        mock_logfire.instrument_fastapi.assert_not_called()

    def test_instrumentation_switches(self, mock_logfire):
        with enabled(LOGFIRE_TRACE_SQLALCHEMY=False, LOGFIRE_TRACE_HTTPX=False, LOGFIRE_TRACE_FASTAPI=False):
            monitoring.initialize_logfire(MagicMock())

        mock_logfire.instrument_sqlalchemy.assert_not_called()
        mock_logfire.instrument_httpx.assert_not_called()
        mock_logfire.instrument_fastapi.assert_not_called()

    def test_configure_failure(self, mock_logfire):
        mock_logfire.configure.side_effect = RuntimeError("bad token")
        with enabled():
            assert monitoring.initialize_logfire() is False
            assert monitoring._initialized is False

    def test_instrumentation_failure_is_not_fatal(self, mock_logfire):
        mock_logfire.instrument_sqlalchemy.side_effect = RuntimeError("missing extra")
        with enabled():
            assert monitoring.initialize_logfire() is True
        mock_logfire.instrument_httpx.assert_called_once()


class TestEventHelpers:
    def test_nothing_is_sent_before_initialization(self, mock_logfire):
        monitoring.log_api_request("GET", "/api/v1/kits", 200, 12.5)
        mock_logfire.info.assert_not_called()

    def test_api_request(self, mock_logfire):
        with patch.object(monitoring, "_initialized", True):
            monitoring.log_api_request("GET", "/api/v1/kits", 200, 12.5)

        mock_logfire.info.assert_called_once_with(
            "API request completed", method="GET", path="/api/v1/kits", status_code=200, duration_ms=12.5
        )

    def test_review_event(self, mock_logfire):
        with patch.object(monitoring, "_initialized", True):
            monitoring.log_review_event("created", "r1", "k1", overall_score=9.2)

        args, kwargs = mock_logfire.info.call_args
        assert args == ("Review {action}",)
        assert kwargs == {"action": "created", "review_id": "r1", "kit_id": "k1", "overall_score": 9.2}

    def test_webhook_event(self, mock_logfire):
        with patch.object(monitoring, "_initialized", True):
            monitoring.log_webhook_event("user.deleted", "user_1", handled=True)

        assert mock_logfire.info.call_args.kwargs["handled"] is True

    def test_error(self, mock_logfire):
        with patch.object(monitoring, "_initialized", True):
            monitoring.log_error("ConfigurationError", "Cloudinary is not configured", {"path": "/api/v1/uploads"})

        mock_logfire.error.assert_called_once_with(
            "ConfigurationError: Cloudinary is not configured", path="/api/v1/uploads"
        )

    def test_send_failure_is_contained(self, mock_logfire):
        mock_logfire.info.side_effect = RuntimeError("exporter down")
        with patch.object(monitoring, "_initialized", True):
            monitoring.log_api_request("GET", "/health", 200, 1.0)
