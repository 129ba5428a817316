"""
The Silverbox client handle.

A handle knows three things: the CDN host, the client namespace and
(optionally) an access key. From those it resolves resource URLs and
hands each request to a Transport. It never talks to the network
itself.

Handles are meant to be passed around like capability tokens. Use
clone() or as_() to get a handle scoped to another namespace or key;
the original is never touched.

Usage:
    cdn = Silverbox("https://cdn.example", "acme", key="secret")
    url = cdn.get("logo.png", {"width": 200})
    info = await cdn.upload(open("logo.png", "rb"))
    tenant = cdn.as_("other-client", "other-key")
"""

import logging
from dataclasses import replace
from typing import Any, AsyncIterable, BinaryIO, Iterable, Literal, Optional, Protocol, Union

from pydantic import ValidationError

from .errors import TransportError
from .models import QueryParams, SilverboxConfig, SilverboxFile
from .paths import resolve_url

logger = logging.getLogger(__name__)


Payload = Union[bytes, str, BinaryIO, Iterable[bytes], AsyncIterable[bytes]]
Expect = Literal["json", "bytes", "none"]


# ---------------------------------------------------------------------------
# Protocols (interfaces)
# ---------------------------------------------------------------------------

class Transport(Protocol):
    """
    Interface for the HTTP collaborator.

    The handle doesn't know whether it's talking to httpx, an in-memory
    mock or something else. It only needs one call that takes a URL,
    a verb, a body and a credential.

    Implementations raise TransportError for every failure.
    """

    async def request(
        self,
        url: str,
        method: str = "GET",
        payload: Optional[Payload] = None,
        key: Optional[str] = None,
        *,
        expect: Expect = "json",
    ) -> Any:
        """
        Perform one request.

        expect selects the result: "json" for the parsed body,
        "bytes" for the raw body, "none" to discard it.
        """
        ...


# ---------------------------------------------------------------------------
# Client handle
# ---------------------------------------------------------------------------

class Silverbox:
    """
    Client handle for one CDN namespace.

    The configuration lives in an immutable SilverboxConfig. Setters
    swap in a new record rather than editing the current one, so a
    handle's config can be shared with clones safely.
    """

    def __init__(
        self,
        host: str,
        client: str,
        key: Optional[str] = None,
        *,
        transport: Optional[Transport] = None,
    ) -> None:
        self._config = SilverboxConfig(host=host, client=client, key=key)

        if transport is None:
            # core never imports infrastructure at module level
            from ..infrastructure.http import HttpxTransport
            transport = HttpxTransport()

        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: SilverboxConfig,
        transport: Optional[Transport] = None,
    ) -> "Silverbox":
        """Create a handle from an existing configuration record."""
        return cls(config.host, config.client, config.key, transport=transport)

    def __repr__(self) -> str:
        # never include the key
        return f"Silverbox(host={self._config.host!r}, client={self._config.client!r})"

    @property
    def config(self) -> SilverboxConfig:
        return self._config

    # -----------------------------------------------------------------------
    # Accessors
    # -----------------------------------------------------------------------

    def set_host(self, host: str) -> None:
        """Point the handle at another CDN host."""
        self._config = replace(self._config, host=host)

    def get_host(self) -> str:
        return self._config.host

    def set_client(self, client: str) -> None:
        """Switch the handle to another client namespace."""
        self._config = replace(self._config, client=client)

    def get_client(self) -> str:
        return self._config.client

    def set_key(self, key: Optional[str]) -> None:
        """Set or clear (None) the access key."""
        self._config = replace(self._config, key=key)

    # -----------------------------------------------------------------------
    # Derivation
    # -----------------------------------------------------------------------

    def clone(self) -> "Silverbox":
        """Return an independent handle with the same host, client and key."""
        return Silverbox.from_config(self._config, transport=self._transport)

    def as_(self, client: str, key: Optional[str] = None) -> "Silverbox":
        """
        Return a clone scoped to another client and key.

        The key is replaced too, so as_("other") yields a handle with
        no key rather than one carrying this handle's credential.
        """
        scoped = self.clone()
        scoped._config = replace(self._config, client=client, key=key)
        return scoped

    # -----------------------------------------------------------------------
    # Operations
    # -----------------------------------------------------------------------

    def resolve_path(
        self,
        file_name: Optional[str] = None,
        params: Optional[QueryParams] = None,
    ) -> str:
        """Resolve the URL for file_name (namespace root when omitted)."""
        return resolve_url(self._config, file_name, params)

    def get(self, file_name: str, params: Optional[QueryParams] = None) -> str:
        """Return the full URL for file_name. No request is made."""
        return self.resolve_path(file_name, params)

    async def get_binary(
        self,
        file_name: str,
        params: Optional[QueryParams] = None,
    ) -> bytes:
        """Download the raw content of file_name."""
        url = self.resolve_path(file_name, params)
        logger.debug("Fetching file", extra={"url": url})
        return await self._transport.request(
            url, "GET", key=self._config.key, expect="bytes"
        )

    async def get_info(self, file_name: str) -> SilverboxFile:
        """Fetch the metadata the CDN keeps for file_name."""
        url = self.resolve_path(f"{file_name}/info")
        logger.debug("Fetching file info", extra={"url": url})
        body = await self._transport.request(
            url, "GET", key=self._config.key, expect="json"
        )
        return _to_file(body, "GET", url)

    async def upload(self, payload: Payload) -> SilverboxFile:
        """
        Upload a file to the namespace root.

        The payload is streamed by the transport and not kept by the
        handle. Returns the metadata of the stored file.
        """
        url = self.resolve_path()
        logger.debug("Uploading file", extra={"url": url})
        body = await self._transport.request(
            url, "POST", payload, key=self._config.key, expect="json"
        )
        stored = _to_file(body, "POST", url)

        logger.info(
            "Uploaded file",
            extra={"client": self._config.client, "file_name": stored.name},
        )
        return stored

    async def delete(self, file_name: str) -> None:
        """Delete file_name from the CDN."""
        url = self.resolve_path(file_name)
        await self._transport.request(
            url, "DELETE", key=self._config.key, expect="none"
        )

        logger.info(
            "Deleted file",
            extra={"client": self._config.client, "file_name": file_name},
        )


def _to_file(body: Any, method: str, url: str) -> SilverboxFile:
    """Wrap a metadata body; anything but a JSON object is a bad response."""
    try:
        return SilverboxFile.model_validate(body)
    except ValidationError as e:
        raise TransportError(
            f"{method} {url} returned a non-object metadata body",
            method=method,
            url=url,
        ) from e
