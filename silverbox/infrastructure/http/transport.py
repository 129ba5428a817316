"""
httpx-backed transport for the Silverbox client.

This is the default collaborator a Silverbox handle talks through.
It knows about HTTP (headers, status codes, body encoding) but
nothing about CDN paths; the handle hands it fully-resolved URLs.

Connection lifetime:
- If an httpx.AsyncClient is injected, it's reused and the caller
  owns it (closing, pooling, proxies, TLS settings).
- Otherwise a client is opened for the single request and closed
  before the call returns, so no socket outlives an operation.
"""

import asyncio
import logging
from typing import Any, AsyncIterator, Optional

import httpx

from ...core.client import Expect, Payload
from ...core.errors import TransportError

logger = logging.getLogger(__name__)


DEFAULT_CHUNK_SIZE = 64 * 1024


async def _iter_chunks(source: Any, chunk_size: int) -> AsyncIterator[bytes]:
    """
    Stream a sync file-like object or iterable of bytes as an async iterator.

    Each read runs in a worker thread so slow files don't stall the event loop.
    """
    if hasattr(source, "read"):
        while True:
            chunk = await asyncio.to_thread(source.read, chunk_size)
            if not chunk:
                break
            yield chunk
    else:
        chunks = iter(source)
        while True:
            chunk = await asyncio.to_thread(next, chunks, None)
            if chunk is None:
                break
            yield chunk


class HttpxTransport:
    """
    Transport implementation using httpx.AsyncClient.

    The access key, when present, goes out as a bearer token.
    Every failure (connection errors, timeouts, non-2xx) is raised
    as TransportError with the original httpx exception chained.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._chunk_size = chunk_size

    async def request(
        self,
        url: str,
        method: str = "GET",
        payload: Optional[Payload] = None,
        key: Optional[str] = None,
        *,
        expect: Expect = "json",
    ) -> Any:
        """Send one request and return the body in the requested form."""
        headers = self._build_headers(key, has_body=payload is not None)
        content = self._prepare_content(payload)

        logger.debug("Sending request", extra={"method": method, "url": url})

        try:
            if self._client is not None:
                response = await self._client.request(
                    method, url, content=content, headers=headers
                )
                return self._read_response(response, expect)

            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method, url, content=content, headers=headers
                )
                return self._read_response(response, expect)

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(
                "Request rejected",
                extra={"method": method, "url": url, "status": status},
            )
            raise TransportError(
                f"{method} {url} failed with status {status}",
                status_code=status,
                method=method,
                url=url,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(
                "Request failed",
                extra={"method": method, "url": url, "error": str(e)},
            )
            raise TransportError(
                f"{method} {url} failed: {e}",
                method=method,
                url=url,
            ) from e

    def _build_headers(self, key: Optional[str], has_body: bool) -> dict[str, str]:
        headers: dict[str, str] = {}
        if key:
            headers["Authorization"] = f"Bearer {key}"
        if has_body:
            headers["Content-Type"] = "application/octet-stream"
        return headers

    def _prepare_content(self, payload: Optional[Payload]) -> Any:
        """
        Turn a payload into something AsyncClient can send.

        bytes/str and async iterables go through as-is. Sync file
        objects and iterables are wrapped so they stream in chunks
        instead of being read into memory up front.
        """
        if payload is None or isinstance(payload, (bytes, str)):
            return payload
        if hasattr(payload, "__aiter__"):
            return payload
        return _iter_chunks(payload, self._chunk_size)

    def _read_response(self, response: httpx.Response, expect: Expect) -> Any:
        response.raise_for_status()

        if expect == "bytes":
            return response.content
        if expect == "none":
            return None

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"{response.request.method} {response.request.url} returned invalid JSON",
                status_code=response.status_code,
                method=response.request.method,
                url=str(response.request.url),
            ) from e
