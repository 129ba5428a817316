"""
URL resolution for CDN resources.

Every request the client makes goes through resolve_url, so the
shape of a resource address lives in exactly one place:

    {host}/{client}/{file_name}?{query}

Nothing here touches the network. These are pure functions of their
arguments, which makes them the easiest part of the library to test.
"""

from typing import Optional
from urllib.parse import quote

from .models import QueryParams, Scalar, SilverboxConfig


def _encode(value: Scalar) -> str:
    # Booleans must be checked before str(): str(True) is "True"
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return quote(text, safe="")


def build_query(params: Optional[QueryParams]) -> str:
    """
    Serialize query parameters into a query string (without the "?").

    Keys keep the order they were given in. None values are dropped,
    lists and tuples repeat the key once per item.
    """
    if not params:
        return ""

    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        name = quote(str(key), safe="")
        if isinstance(value, (list, tuple)):
            pairs.extend(f"{name}={_encode(item)}" for item in value if item is not None)
        else:
            pairs.append(f"{name}={_encode(value)}")

    return "&".join(pairs)


def resolve_url(
    config: SilverboxConfig,
    file_name: Optional[str] = None,
    params: Optional[QueryParams] = None,
) -> str:
    """
    Build the fully-qualified URL for a file in the configured namespace.

    Omitting file_name gives the namespace root (trailing slash), which
    is where uploads are posted.
    """
    path = f"{config.host}/{config.client}/{file_name or ''}"
    query = build_query(params)
    return f"{path}?{query}" if query else path
