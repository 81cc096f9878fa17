"""Structured JSON event logging for the client and the HTTP service.

Every event is a single JSON object on the ``flightops`` logger.  Header
maps are passed through ``redact_headers`` before logging, both for
inbound REST requests and for the outbound Flightradar24 bearer token.
"""

import json
import logging
import time
import uuid
from typing import Callable, Mapping

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


LOG = logging.getLogger("flightops")
if not LOG.hasHandlers():
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    LOG.addHandler(handler)
LOG.setLevel(logging.INFO)

REDACTED = "<redacted>"
SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key", "proxy-authorization"})


def _emit(level: int, event: str, fields: dict) -> None:
    payload = {"level": logging.getLevelName(level).lower(), "event": event, **fields}
    LOG.log(level, json.dumps(payload, default=str))


def log_info(event: str, **kwargs: object) -> None:
    """Log an informational event as structured JSON."""
    _emit(logging.INFO, event, kwargs)


def log_warning(event: str, **kwargs: object) -> None:
    _emit(logging.WARNING, event, kwargs)


def log_error(event: str, **kwargs: object) -> None:
    _emit(logging.ERROR, event, kwargs)


def redact_headers(headers: Mapping[str, str]) -> dict:
    """Copy ``headers`` with credentials replaced by a placeholder.

    Accepts plain dicts as well as ``httpx.Headers`` and starlette's
    ``Headers``.
    """
    return {
        k: REDACTED if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()
    }


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs one ``http_request`` event per REST call and echoes ``x-request-id``."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get("x-request-id") or str(uuid.uuid4())
        start = time.perf_counter()
        response = await call_next(request)
        log_info(
            "http_request",
            request_id=rid,
            method=request.method,
            path=request.url.path,
            query=dict(request.query_params),
            headers=redact_headers(request.headers),
            status=response.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )
        response.headers["x-request-id"] = rid
        return response
