"""
Core client logic for the Silverbox CDN.

This module is transport-agnostic - it resolves URLs and delegates
every request to an injected Transport. Concrete transports live in
silverbox.infrastructure.
"""

from .client import Silverbox, Transport
from .errors import ConfigurationError, SilverboxError, TransportError
from .models import QueryParams, SilverboxConfig, SilverboxFile

__all__ = [
    "ConfigurationError",
    "QueryParams",
    "Silverbox",
    "SilverboxConfig",
    "SilverboxError",
    "SilverboxFile",
    "Transport",
    "TransportError",
]
