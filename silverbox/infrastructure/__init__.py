"""
Infrastructure layer - transports for the Silverbox client.

Each subdirectory implements the Transport protocol:
- http: httpx-backed transport for the real CDN
- memory: in-memory CDN for local development and tests
"""
