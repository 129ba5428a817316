"""
Error types raised by the Silverbox client.

Only two kinds of failure exist:
- ConfigurationError: the handle was given an empty host or client name
- TransportError: the HTTP collaborator failed (network error, non-2xx)

Neither is retried by the client. Configuration errors need a fixed
configuration; transport errors are handed back to the caller untouched.
"""

from typing import Optional


class SilverboxError(Exception):
    """Base class for all Silverbox errors."""
    pass


class ConfigurationError(SilverboxError, ValueError):
    """Raised when host or client name is missing or empty."""
    pass


class TransportError(SilverboxError):
    """
    Raised when a transport call fails.
    
    Carries enough context to tell which request failed without
    having to inspect the chained exception.
    """
    
    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url
