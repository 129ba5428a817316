"""
HTTP transport backed by httpx.

Implements the Transport protocol from silverbox.core.client.
"""

from .transport import HttpxTransport

__all__ = ["HttpxTransport"]
