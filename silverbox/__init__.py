"""
Silverbox - a client library for the Silverbox CDN.

This package contains:
- core: client handle, URL resolution, errors and models
- infrastructure: transports (httpx, in-memory)
- config: settings loaded from the environment
"""

from .core import (
    ConfigurationError,
    QueryParams,
    Silverbox,
    SilverboxConfig,
    SilverboxError,
    SilverboxFile,
    Transport,
    TransportError,
)
from .factory import create_silverbox

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "QueryParams",
    "Silverbox",
    "SilverboxConfig",
    "SilverboxError",
    "SilverboxFile",
    "Transport",
    "TransportError",
    "create_silverbox",
]
