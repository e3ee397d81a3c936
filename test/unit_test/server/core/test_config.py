"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds environment variables named in
the .env.example file and that the grouped configuration models resolve
derived values as expected.
"""

from pathlib import Path

import pytest

from gunpla_sekai.server.core.config import (
    ClerkConfig,
    CloudinaryConfig,
    CORSConfig,
    MeilisearchConfig,
    Settings,
)


@pytest.fixture
def env_example_path() -> Path:
    """Get path to .env.example file."""
    return Path(__file__).resolve().parents[4] / ".env.example"


@pytest.fixture
def env_example_vars(env_example_path: Path) -> dict[str, str]:
    """Parse .env.example file and return environment variables."""
    env_vars = {}
    with open(env_example_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, value = line.split("=", 1)
                env_vars[key.strip()] = value.strip()
    return env_vars


def load(**env) -> Settings:
    return Settings(_env_file=None, **env)


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_server_binding(self, env_example_vars: dict[str, str], monkeypatch):
        monkeypatch.setenv("GUNPLA_SEKAI_SERVER_HOST", env_example_vars["GUNPLA_SEKAI_SERVER_HOST"])
        monkeypatch.setenv("GUNPLA_SEKAI_SERVER_PORT", env_example_vars["GUNPLA_SEKAI_SERVER_PORT"])
        monkeypatch.setenv("GUNPLA_SEKAI_LOG_LEVEL", "DEBUG")

        settings = load()
        assert settings.server_host == env_example_vars["GUNPLA_SEKAI_SERVER_HOST"]
        assert settings.server_port == int(env_example_vars["GUNPLA_SEKAI_SERVER_PORT"])
        assert settings.log_level == "DEBUG"

    def test_every_example_variable_is_known(self, env_example_vars: dict[str, str]):
        aliases = {field.alias for field in Settings.model_fields.values()}
        unknown = [name for name in env_example_vars if name not in aliases and not name.startswith("LOGFIRE_")]
        assert unknown == []

    def test_database_url_binding(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/gunpla")
        assert load().database.url == "postgresql+asyncpg://u:p@db:5432/gunpla"

    def test_app_url_binding(self, monkeypatch):
        monkeypatch.setenv("APP_URL", "https://gunpla-sekai.example")
        assert load().app_url == "https://gunpla-sekai.example"


class TestClerkConfigBinding:
    def test_clerk_binding(self, monkeypatch):
        monkeypatch.setenv("CLERK_ISSUER", "https://mock.clerk.accounts.dev")
        monkeypatch.setenv("CLERK_AUTHORIZED_PARTIES", '["http://localhost:3000", "https://gunpla-sekai.example"]')
        monkeypatch.setenv("CLERK_WEBHOOK_SECRET", "whsec_abc")

        clerk = load().clerk
        assert clerk.issuer == "https://mock.clerk.accounts.dev"
        assert clerk.authorized_parties == ["http://localhost:3000", "https://gunpla-sekai.example"]
        assert clerk.webhook_secret == "whsec_abc"

    def test_jwks_url_derived_from_issuer(self):
        config = ClerkConfig(issuer="https://mock.clerk.accounts.dev/")
        assert config.resolved_jwks_url == "https://mock.clerk.accounts.dev/.well-known/jwks.json"

    def test_explicit_jwks_url(self):
        config = ClerkConfig(issuer="https://mock.clerk.accounts.dev", jwks_url="https://mock.clerk/jwks")
        assert config.resolved_jwks_url == "https://mock.clerk/jwks"

    def test_no_jwks_url_without_issuer(self):
        assert ClerkConfig().resolved_jwks_url is None


class TestCloudinaryConfigBinding:
    def test_cloudinary_binding(self, monkeypatch):
        monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "gunpla-sekai")
        monkeypatch.setenv("CLOUDINARY_API_KEY", "123")
        monkeypatch.setenv("CLOUDINARY_API_SECRET", "secret")

        assert load().cloudinary == CloudinaryConfig(cloud_name="gunpla-sekai", api_key="123", api_secret="secret")


class TestMeilisearchConfigBinding:
    def test_enabled_needs_host_and_key(self):
        assert MeilisearchConfig(host_url="search.mock").enabled is False
        assert MeilisearchConfig(master_key="key").enabled is False
        assert MeilisearchConfig(host_url="search.mock", master_key="key").enabled is True

    @pytest.mark.parametrize(
        "host, expected",
        [
            ("search.mock", "https://search.mock"),
            ("http://localhost:7700", "http://localhost:7700"),
            ("https://search.mock", "https://search.mock"),
            (None, None),
        ],
    )
    def test_resolved_host_url(self, host, expected):
        assert MeilisearchConfig(host_url=host).resolved_host_url == expected

    def test_meilisearch_binding(self, monkeypatch):
        monkeypatch.setenv("MEILI_HOST_URL", "search.mock")
        monkeypatch.setenv("MEILI_MASTER_KEY", "key")
        assert load().meilisearch.enabled is True


class TestCORSConfigBinding:
    def test_cors_origins_binding(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["https://gunpla-sekai.example"]')
        monkeypatch.setenv("CORS_ALLOW_CREDENTIALS", "false")

        cors = load().cors
        assert cors.origins == ["https://gunpla-sekai.example"]
        assert cors.allow_credentials is False


class TestSettingsDefaults:
    def test_server_defaults(self, monkeypatch):
        for name in ("GUNPLA_SEKAI_SERVER_HOST", "GUNPLA_SEKAI_SERVER_PORT", "GUNPLA_SEKAI_LOG_LEVEL", "APP_URL"):
            monkeypatch.delenv(name, raising=False)

        settings = load()
        assert settings.server_host == "0.0.0.0"
        assert settings.server_port == 8000
        assert settings.log_level == "INFO"
        assert settings.app_url == "http://localhost:3000"

    def test_provider_defaults(self, monkeypatch):
        for name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET", "CLERK_AUTHORIZED_PARTIES"):
            monkeypatch.delenv(name, raising=False)

        settings = load()
        assert settings.cloudinary == CloudinaryConfig()
        assert settings.clerk.authorized_parties == []
        assert settings.meilisearch.enabled is False

    def test_cors_defaults(self, monkeypatch):
        for name in ("CORS_ORIGINS", "CORS_ALLOW_CREDENTIALS", "CORS_ALLOW_METHODS", "CORS_ALLOW_HEADERS"):
            monkeypatch.delenv(name, raising=False)

        assert load().cors == CORSConfig()
