"""
Where a Silverbox handle gets its host, client and key from.

Each field reads SILVERBOX_<FIELD> from the environment or a .env file
in the working directory. Only host and client are needed to build a
handle; set SILVERBOX_MOCK_MODE=true to serve files from memory
instead of a real CDN.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Silverbox settings loaded from environment variables.

    Every field maps to SILVERBOX_<FIELD>, e.g. SILVERBOX_HOST.
    """

    # CDN Configuration
    host: str = Field(
        default="",
        description="CDN server URL, used verbatim (e.g. https://cdn.example)"
    )
    client: str = Field(
        default="",
        description="Client namespace files are stored under"
    )
    key: Optional[str] = Field(
        default=None,
        description="Access key sent with every request. Optional for public namespaces."
    )

    # Transport
    timeout_seconds: float = Field(
        default=30.0,
        description="Per-request timeout for the httpx transport"
    )
    mock_mode: bool = Field(
        default=False,
        description="Use the in-memory CDN instead of HTTP. Enables local dev without a server."
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Level for the silverbox logger (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_prefix="SILVERBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def validate_required_fields(self) -> list[str]:
        """
        Return the environment variables that still need to be set.

        host and client are needed even in mock mode, since the
        in-memory CDN resolves URLs the same way.
        """
        missing = []

        if not self.host:
            missing.append("SILVERBOX_HOST")
        if not self.client:
            missing.append("SILVERBOX_CLIENT")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Return the Settings read from the environment on first call.

    Later environment changes are not picked up until
    get_settings.cache_clear() is called.
    """
    return Settings()
