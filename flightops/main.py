"""Main application module for Flight Ops.

This module defines the FastAPI application, registers middleware,
defines REST endpoints mirroring the MCP tools, and mounts the MCP
server's streamable HTTP app under ``/mcp``.  Run it with::

    uvicorn flightops.main:create_app --factory
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader

from flightops import tools
from flightops.adapters import Flightradar24Client
from flightops.config import ClientConfig
from flightops.errors import (
    AuthenticationError,
    ConfigurationError,
    FlightradarError,
    InvalidParamsError,
    NetworkError,
    NotFoundError,
    RateLimitExceededError,
    UpstreamError,
)
from flightops.mcp_server import create_mcp
from flightops.middleware import RequestLogMiddleware, log_warning
from flightops.resources import RESOURCE_TEMPLATES, read_resource


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------
# Ordered most specific first; the first matching class wins.
ERROR_STATUS = (
    (InvalidParamsError, 400),
    (NotFoundError, 404),
    (RateLimitExceededError, 429),
    (AuthenticationError, 502),
    (UpstreamError, 502),
    (NetworkError, 503),
    (ConfigurationError, 500),
)


def error_status(exc: FlightradarError) -> int:
    """Map an error to the HTTP status reported to REST callers."""
    for cls, status in ERROR_STATUS:
        if isinstance(exc, cls):
            return status
    return 500


def create_app(client: Optional[Flightradar24Client] = None) -> FastAPI:
    """Factory function for constructing the FastAPI application.

    If ``client`` is not given, one is built from ``FLIGHTRADAR24_*``
    environment variables; a missing API key fails here, at startup,
    rather than on the first request.
    """
    if client is None:
        client = Flightradar24Client(ClientConfig.from_env())
    api_key = os.getenv("API_KEY")

    mcp_app = create_mcp(client).http_app(path="/mcp")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            async with mcp_app.lifespan(app):
                yield
        finally:
            await client.aclose()

    app = FastAPI(title="Flight Ops", lifespan=lifespan)
    app.state.client = client

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(FlightradarError)
    async def flightradar_error_handler(
        request: Request, exc: FlightradarError
    ) -> JSONResponse:
        status = error_status(exc)
        log_warning(
            "api_error",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=exc.message,
            status=status,
        )
        return JSONResponse(
            status_code=status,
            content={"error": {"type": type(exc).__name__, "message": exc.message}},
        )

    # -----------------------------------------------------------------------
    # API key dependency
    # -----------------------------------------------------------------------
    api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)

    def require_api_key(x_api_key: Optional[str] = Depends(api_key_header)) -> None:
        """Validate the ``x-api-key`` header against ``API_KEY`` when set."""
        if api_key and x_api_key != api_key:
            raise HTTPException(status_code=401, detail="Missing or invalid API key")

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    @app.get("/")
    def api_root():
        """Return a simple service descriptor for programmatic clients."""
        return {
            "ok": True,
            "service": "Flight Ops",
            "docs": "/docs",
            "health": "/health",
            "mcp": "/mcp",
        }

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"ok": True}

    @app.get(
        "/api/flights/{flight_id}",
        tags=["Flights"],
        dependencies=[Depends(require_api_key)],
    )
    async def rest_flight(flight_id: str) -> JSONResponse:
        """Real-time details for one flight by IATA or ICAO flight code."""
        return JSONResponse({"record": await tools.get_flight_data(client, flight_id)})

    @app.get("/api/flights", tags=["Flights"], dependencies=[Depends(require_api_key)])
    async def rest_search_flights(
        airline_iata: Optional[str] = Query(None),
        airline_icao: Optional[str] = Query(None),
        flight_number: Optional[str] = Query(None),
        flight_iata: Optional[str] = Query(None),
        flight_icao: Optional[str] = Query(None),
        registration: Optional[str] = Query(None),
        north: Optional[float] = Query(None),
        south: Optional[float] = Query(None),
        west: Optional[float] = Query(None),
        east: Optional[float] = Query(None),
        limit: Optional[int] = Query(None, description="1-100, default 10"),
    ) -> JSONResponse:
        """Search live flights.

        Geographic bounds are given as four separate query parameters and
        must be supplied together.
        """
        corners = {"north": north, "south": south, "west": west, "east": east}
        supplied = {k: v for k, v in corners.items() if v is not None}
        if supplied and len(supplied) != len(corners):
            raise InvalidParamsError("Bounds require all of north, south, west and east.")
        result = await tools.search_flights(
            client,
            airline_iata=airline_iata,
            airline_icao=airline_icao,
            flight_number=flight_number,
            flight_iata=flight_iata,
            flight_icao=flight_icao,
            registration=registration,
            bounds=supplied or None,
            limit=limit,
        )
        return JSONResponse(result)

    @app.get(
        "/api/airports/{code}",
        tags=["Airports"],
        dependencies=[Depends(require_api_key)],
    )
    async def rest_airport(code: str) -> JSONResponse:
        """Airport details by IATA (3-letter) or ICAO (4-letter) code."""
        return JSONResponse({"record": await tools.get_airport_data(client, code)})

    @app.get("/api/airports", tags=["Airports"], dependencies=[Depends(require_api_key)])
    async def rest_search_airports(
        name: Optional[str] = Query(None),
        country: Optional[str] = Query(None),
        iata: Optional[str] = Query(None),
        icao: Optional[str] = Query(None),
        limit: Optional[int] = Query(None, description="1-100, default 10"),
    ) -> JSONResponse:
        result = await tools.search_airports(
            client, name=name, country=country, iata=iata, icao=icao, limit=limit
        )
        return JSONResponse(result)

    @app.get(
        "/api/airlines/{code}",
        tags=["Airlines"],
        dependencies=[Depends(require_api_key)],
    )
    async def rest_airline(code: str) -> JSONResponse:
        """Airline details by IATA (2-letter) or ICAO (3-letter) code."""
        return JSONResponse({"record": await tools.get_airline_data(client, code)})

    @app.get(
        "/api/aircraft/{registration}",
        tags=["Aircraft"],
        dependencies=[Depends(require_api_key)],
    )
    async def rest_aircraft(registration: str) -> JSONResponse:
        return JSONResponse(
            {"record": await tools.get_aircraft_data(client, registration)}
        )

    @app.get("/api/zones", tags=["Zones"], dependencies=[Depends(require_api_key)])
    async def rest_zone(
        north: float = Query(..., ge=-90, le=90),
        south: float = Query(..., ge=-90, le=90),
        west: float = Query(..., ge=-180, le=180),
        east: float = Query(..., ge=-180, le=180),
    ) -> JSONResponse:
        """All flights currently inside a bounding box."""
        result = await tools.get_flights_in_zone(client, north, south, west, east)
        return JSONResponse(result)

    @app.get("/api/resources/templates", tags=["Resources"])
    def rest_resource_templates() -> JSONResponse:
        return JSONResponse({"resourceTemplates": RESOURCE_TEMPLATES})

    @app.get("/api/resources", tags=["Resources"], dependencies=[Depends(require_api_key)])
    async def rest_resource(uri: str = Query(..., description="e.g. airport://LHR")):
        """Read a resource by URI and return its JSON content."""
        content = await read_resource(client, uri)
        return JSONResponse(
            {"contents": [{"uri": uri, "mimeType": "application/json", "text": content}]}
        )

    # -----------------------------------------------------------------------
    # MCP server mount
    # -----------------------------------------------------------------------
    # Mounted last so the REST routes above take precedence; serves /mcp.
    app.mount("/", mcp_app)

    return app
