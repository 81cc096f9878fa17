"""Error taxonomy for the Flightradar24 client and its callers.

Every failure raised by the client is a subclass of
``FlightradarError`` so callers can map the whole family onto a single
user-facing envelope.  Only the two "search" style operations ever
return an empty result instead of raising.
"""

from __future__ import annotations

from typing import Any, Optional


class FlightradarError(Exception):
    """Base class for all Flightradar24 client errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(FlightradarError):
    """The client could not be constructed (e.g. missing API key)."""


class AuthenticationError(FlightradarError):
    """Upstream rejected the credential (HTTP 401)."""


class RateLimitExceededError(FlightradarError):
    """Upstream kept answering 429 after every retry was spent."""

    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class UpstreamError(FlightradarError):
    """Upstream answered with a non-2xx status other than 401/429."""

    def __init__(self, message: str, status_code: int, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NetworkError(FlightradarError):
    """No response was received (DNS, connection refused, timeout)."""


class NotFoundError(FlightradarError):
    """A single-entity lookup found no entity in the envelope."""

    def __init__(self, message: str, kind: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.key = key


class InvalidParamsError(FlightradarError):
    """Tool or resource input failed validation before any network call."""


class UnsupportedResourceError(InvalidParamsError):
    """A resource URI has an unknown scheme or does not match its grammar."""
