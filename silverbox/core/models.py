"""
Value types for the Silverbox client.

SilverboxConfig is the configuration record a client handle wraps.
It is frozen: changing a field means building a new record, so two
handles can never end up aliasing the same mutable configuration.

SilverboxFile is what the CDN tells us about a stored file. It comes
straight from a JSON body, so it's a pydantic model that keeps any
fields we don't know about.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from .errors import ConfigurationError


Scalar = Union[str, int, float, bool]

# Query values may be a scalar, a sequence of scalars (repeated key),
# or None (skipped).
QueryValue = Union[Scalar, Sequence[Scalar], None]
QueryParams = Mapping[str, QueryValue]


@dataclass(frozen=True)
class SilverboxConfig:
    """
    Connection settings for one CDN client namespace.

    host is used verbatim (no trailing slash stripping), so
    "https://cdn.example/" and "https://cdn.example" resolve to
    different URLs.
    """
    host: str
    client: str
    key: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.host:
            raise ConfigurationError("[Silverbox] You need to provide a Host URL")
        if not self.client:
            raise ConfigurationError("[Silverbox] You need to provide a Client name")


class SilverboxFile(BaseModel):
    """
    Metadata for a file stored on the CDN.

    Returned by get_info and upload. All fields are optional because
    the server decides what it reports; anything extra is preserved.
    Values are stored exactly as sent, with no type coercion.
    """
    model_config = ConfigDict(extra="allow")

    name: Optional[Any] = None
    size: Optional[Any] = None
    mimetype: Optional[Any] = None
    url: Optional[Any] = None
    created_at: Optional[Any] = None
