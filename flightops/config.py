"""Configuration for the Flightradar24 client.

Settings are read from environment variables once, at process start,
and frozen into a ``ClientConfig`` that is handed to the client.
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from flightops.errors import ConfigurationError


DEFAULT_BASE_URL = "https://api.flightradar24.com/v1"
MISSING_API_KEY = "Flightradar24 API key is required"


class ClientConfig(BaseModel):
    """Immutable transport configuration.

    ``retry_delay`` is in seconds; the n-th retry (0-based) waits
    ``retry_delay * retry_multiplier ** n`` seconds.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    retry_delay: float = 1.0
    retry_multiplier: float = 2.0
    max_retries: int = 3

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: str) -> str:
        if not value or not value.strip():
            raise ConfigurationError(MISSING_API_KEY)
        return value

    @classmethod
    def from_env(cls, api_key: Optional[str] = None) -> "ClientConfig":
        """Build a config from ``FLIGHTRADAR24_*`` environment variables."""
        api_key = api_key or os.getenv("FLIGHTRADAR24_API_KEY")
        if not api_key:
            raise ConfigurationError(
                "FLIGHTRADAR24_API_KEY environment variable is required"
            )
        return cls(
            api_key=api_key,
            base_url=os.getenv("FLIGHTRADAR24_API_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.getenv("FLIGHTRADAR24_TIMEOUT", "10")),
            max_retries=int(os.getenv("FLIGHTRADAR24_MAX_RETRIES", "3")),
        )

    def backoff(self, attempt: int) -> float:
        """Return the delay before retry number ``attempt`` (0-based)."""
        return self.retry_delay * self.retry_multiplier**attempt
