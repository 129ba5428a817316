"""
In-memory CDN transport for mock mode.
"""

from .transport import InMemoryTransport, RecordedCall

__all__ = ["InMemoryTransport", "RecordedCall"]
