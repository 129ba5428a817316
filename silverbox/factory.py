"""
Factory for building a configured Silverbox handle.

Centralizes the mock vs real decision so callers only need:

    cdn = create_silverbox()
"""

import logging
from typing import Optional

from .config.settings import Settings, get_settings
from .core.client import Silverbox, Transport
from .core.errors import ConfigurationError
from .infrastructure.http import HttpxTransport
from .infrastructure.memory import InMemoryTransport

logger = logging.getLogger(__name__)


def create_silverbox(
    settings: Optional[Settings] = None,
    transport: Optional[Transport] = None,
) -> Silverbox:
    """
    Create a Silverbox handle from settings.

    Args:
        settings: Settings to use (defaults to get_settings())
        transport: Explicit transport; overrides mock_mode

    Returns:
        Silverbox handle backed by HttpxTransport, or by
        InMemoryTransport when mock_mode is on

    Raises:
        ConfigurationError: If host or client are not configured
    """
    settings = settings or get_settings()

    logging.getLogger("silverbox").setLevel(settings.log_level.upper())

    missing = settings.validate_required_fields()
    if missing:
        raise ConfigurationError(
            f"[Silverbox] Missing configuration: {', '.join(missing)}"
        )

    if transport is None:
        if settings.mock_mode:
            transport = InMemoryTransport()
        else:
            transport = HttpxTransport(timeout=settings.timeout_seconds)

    logger.info(
        "Created Silverbox client",
        extra={
            "host": settings.host,
            "client": settings.client,
            "mock_mode": settings.mock_mode,
        },
    )

    return Silverbox(settings.host, settings.client, settings.key, transport=transport)
