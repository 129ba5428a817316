"""
Tests for environment-driven settings and the client factory.
"""

import asyncio
import logging

import pytest

from silverbox import ConfigurationError, create_silverbox
from silverbox.config import Settings, get_settings
from silverbox.infrastructure.http import HttpxTransport
from silverbox.infrastructure.memory import InMemoryTransport


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's environment and any local .env file."""
    for name in (
        "SILVERBOX_HOST",
        "SILVERBOX_CLIENT",
        "SILVERBOX_KEY",
        "SILVERBOX_MOCK_MODE",
        "SILVERBOX_TIMEOUT_SECONDS",
        "SILVERBOX_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def package_logger():
    """The silverbox logger; create_silverbox sets its level, so restore it."""
    logger = logging.getLogger("silverbox")
    level = logger.level
    yield logger
    logger.setLevel(level)


class TestSettings:
    """Settings load from SILVERBOX_* variables."""

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("SILVERBOX_HOST", "https://cdn.example")
        monkeypatch.setenv("SILVERBOX_CLIENT", "acme")
        monkeypatch.setenv("SILVERBOX_KEY", "secret")
        monkeypatch.setenv("SILVERBOX_MOCK_MODE", "true")

        settings = Settings()

        assert settings.host == "https://cdn.example"
        assert settings.client == "acme"
        assert settings.key == "secret"
        assert settings.mock_mode is True

    def test_defaults(self):
        settings = Settings()
        assert settings.key is None
        assert settings.timeout_seconds == 30.0
        assert settings.mock_mode is False

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("SILVERBOX_HOST=https://env.example\nSILVERBOX_CLIENT=acme\n")

        settings = Settings()

        assert settings.host == "https://env.example"
        assert settings.validate_required_fields() == []

    def test_validate_required_fields_lists_missing(self):
        assert Settings().validate_required_fields() == ["SILVERBOX_HOST", "SILVERBOX_CLIENT"]

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestFactory:
    """create_silverbox picks the transport from settings."""

    def test_mock_mode_uses_memory_transport(self):
        settings = Settings(host="https://cdn.example", client="acme", mock_mode=True)

        cdn = create_silverbox(settings)

        assert isinstance(cdn._transport, InMemoryTransport)
        stored = asyncio.run(cdn.upload(b"hello"))
        assert asyncio.run(cdn.get_binary(stored.name)) == b"hello"

    def test_real_mode_uses_httpx_with_timeout(self):
        settings = Settings(host="https://cdn.example", client="acme", timeout_seconds=5)

        cdn = create_silverbox(settings)

        assert isinstance(cdn._transport, HttpxTransport)
        assert cdn._transport._timeout == 5

    def test_explicit_transport_wins(self):
        memory = InMemoryTransport()
        settings = Settings(host="https://cdn.example", client="acme")

        cdn = create_silverbox(settings, transport=memory)

        assert cdn._transport is memory

    def test_key_is_passed_through(self):
        settings = Settings(host="https://cdn.example", client="acme", key="k", mock_mode=True)
        assert create_silverbox(settings).config.key == "k"

    def test_missing_configuration_raises(self):
        with pytest.raises(ConfigurationError, match="SILVERBOX_HOST"):
            create_silverbox(Settings(client="acme"))

    def test_defaults_to_environment(self, monkeypatch):
        monkeypatch.setenv("SILVERBOX_HOST", "https://cdn.example")
        monkeypatch.setenv("SILVERBOX_CLIENT", "acme")
        monkeypatch.setenv("SILVERBOX_MOCK_MODE", "1")

        cdn = create_silverbox()

        assert cdn.get("a.png") == "https://cdn.example/acme/a.png"

    def test_log_level_applied_to_package_logger(self, package_logger):
        settings = Settings(
            host="https://cdn.example", client="acme", mock_mode=True, log_level="debug"
        )

        create_silverbox(settings)

        assert package_logger.level == logging.DEBUG
