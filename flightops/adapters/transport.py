"""Authenticated HTTP transport for the Flightradar24 API.

One ``httpx.AsyncClient`` is owned per transport.  ``request`` issues a
GET and classifies failures into the ``flightops.errors`` family.  Only
HTTP 429 is retried, with exponential backoff; everything else is
terminal on the first attempt.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from flightops.config import ClientConfig
from flightops.errors import (
    AuthenticationError,
    NetworkError,
    RateLimitExceededError,
    UpstreamError,
)
from flightops.middleware.logging import (
    log_error,
    log_info,
    log_warning,
    redact_headers,
)


RATE_LIMIT_EXCEEDED = "Rate limit exceeded for Flightradar24 API"
INVALID_API_KEY = "Invalid Flightradar24 API key"
API_ERROR = "Flightradar24 API error"
NETWORK_ERROR = "Network error while connecting to Flightradar24 API"

Sleep = Callable[[float], Awaitable[Any]]


def _response_body(response: httpx.Response) -> Any:
    """Return the decoded JSON body, falling back to raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text


class Flightradar24Transport:
    """GET-with-retry over a shared, authenticated HTTP connection.

    ``sleep`` is injectable so tests can observe backoff delays without
    waiting; ``transport`` lets tests swap in an ``httpx.MockTransport``.
    The transport holds no per-call state, so concurrent requests from
    different callers are independent.
    """

    def __init__(
        self,
        config: ClientConfig,
        sleep: Sleep = asyncio.sleep,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Accept": "application/json",
            },
            transport=transport,
        )

    async def request(
        self, endpoint: str, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """GET ``endpoint`` and return the parsed JSON body.

        Raises:
            RateLimitExceededError: 429 persisted past ``max_retries``.
            AuthenticationError: upstream answered 401.
            UpstreamError: any other non-2xx status, redirects included.
            NetworkError: no response was received.
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        attempt = 0
        while True:
            log_info(
                "fr24_api_request",
                endpoint=endpoint,
                params=query,
                attempt=attempt,
                headers=redact_headers(self._client.headers),
            )
            try:
                response = await self._client.get(endpoint, params=query)
            except httpx.RequestError as e:
                log_error("fr24_network_error", endpoint=endpoint, error=str(e))
                raise NetworkError(NETWORK_ERROR) from e

            status = response.status_code
            if status == 429:
                if attempt < self.config.max_retries:
                    delay = self.config.backoff(attempt)
                    log_warning(
                        "fr24_rate_limited",
                        endpoint=endpoint,
                        attempt=attempt,
                        delay=delay,
                    )
                    await self._sleep(delay)
                    attempt += 1
                    continue
                log_error(
                    "fr24_rate_limit_exhausted", endpoint=endpoint, attempts=attempt + 1
                )
                raise RateLimitExceededError(RATE_LIMIT_EXCEEDED, attempts=attempt + 1)

            if status == 401:
                log_warning("fr24_api_unauthorized", endpoint=endpoint)
                raise AuthenticationError(INVALID_API_KEY)

            if not response.is_success:
                body = _response_body(response)
                log_warning(
                    "fr24_api_response_status",
                    endpoint=endpoint,
                    status_code=status,
                    text=response.text,
                )
                raise UpstreamError(
                    f"{API_ERROR}: {status} - {response.text}",
                    status_code=status,
                    body=body,
                )

            return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "Flightradar24Transport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
