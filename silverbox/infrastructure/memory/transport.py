"""
In-memory CDN for local development and tests.

Behaves like the real service closely enough to exercise a Silverbox
handle end to end without network access:

    POST {host}/{client}/           store a file, return its metadata
    GET  {host}/{client}/{name}      return the stored bytes
    GET  {host}/{client}/{name}/info return the metadata
    DELETE {host}/{client}/{name}    remove the file

Files are keyed by their full URL (query string ignored), so two
namespaces on the same host never see each other's files.

Not suitable for production, but perfect for development and testing.
"""

import logging
import mimetypes
import os
from dataclasses import dataclass
from typing import Any, Optional
from uuid import uuid4

from ...core.client import Expect, Payload
from ...core.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordedCall:
    """One request seen by the in-memory transport."""
    method: str
    url: str
    key: Optional[str]


class InMemoryTransport:
    """
    Transport that stores files in a dictionary.

    If required_key is set, requests with any other key fail with
    a 401 TransportError, which lets tests check that credentials
    are passed through.
    """

    def __init__(self, required_key: Optional[str] = None) -> None:
        # {file url: (content, metadata)}
        self._files: dict[str, tuple[bytes, dict[str, Any]]] = {}
        self.calls: list[RecordedCall] = []
        self._required_key = required_key
        logger.info("Initialized in-memory CDN transport")

    async def request(
        self,
        url: str,
        method: str = "GET",
        payload: Optional[Payload] = None,
        key: Optional[str] = None,
        *,
        expect: Expect = "json",
    ) -> Any:
        """Serve one request from memory."""
        method = method.upper()
        self.calls.append(RecordedCall(method=method, url=url, key=key))

        if self._required_key is not None and key != self._required_key:
            raise TransportError(
                f"{method} {url} unauthorized", status_code=401, method=method, url=url
            )

        path = url.split("?", 1)[0]

        if method == "POST":
            result: Any = await self._store(path, payload, method, url)
        elif method == "GET":
            result = self._fetch(path, expect, method, url)
        elif method == "DELETE":
            self._remove(path, method, url)
            result = None
        else:
            raise TransportError(
                f"{method} not allowed", status_code=405, method=method, url=url
            )

        if expect == "none":
            return None
        return result

    def __contains__(self, url: str) -> bool:
        return url in self._files

    async def _store(
        self, path: str, payload: Optional[Payload], method: str, url: str
    ) -> dict[str, Any]:
        if not path.endswith("/"):
            raise TransportError(
                "Uploads must target the namespace root",
                status_code=405,
                method=method,
                url=url,
            )
        if payload is None:
            raise TransportError(
                "Upload without a body", status_code=400, method=method, url=url
            )

        content = await _read_payload(payload)

        source_name = getattr(payload, "name", None)
        if isinstance(source_name, str) and source_name:
            name = os.path.basename(source_name)
        else:
            name = uuid4().hex

        mimetype, _ = mimetypes.guess_type(name)
        metadata = {
            "name": name,
            "size": len(content),
            "mimetype": mimetype or "application/octet-stream",
            "url": f"{path}{name}",
        }
        self._files[f"{path}{name}"] = (content, metadata)

        logger.debug(
            "Stored file in memory",
            extra={"url": metadata["url"], "size_bytes": len(content)},
        )
        return dict(metadata)

    def _fetch(self, path: str, expect: Expect, method: str, url: str) -> Any:
        if path.endswith("/info"):
            base = path[: -len("/info")]
            if base in self._files:
                return dict(self._files[base][1])

        if path not in self._files:
            raise TransportError(
                f"File not found: {path}", status_code=404, method=method, url=url
            )

        content, metadata = self._files[path]
        if expect == "bytes":
            return content
        return dict(metadata)

    def _remove(self, path: str, method: str, url: str) -> None:
        if path not in self._files:
            raise TransportError(
                f"File not found: {path}", status_code=404, method=method, url=url
            )
        del self._files[path]


async def _read_payload(payload: Payload) -> bytes:
    """Drain any supported payload type into bytes."""
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, str):
        return payload.encode("utf-8")
    if hasattr(payload, "read"):
        data = payload.read()
        return data.encode("utf-8") if isinstance(data, str) else data
    if hasattr(payload, "__aiter__"):
        return b"".join([chunk async for chunk in payload])
    return b"".join(payload)
