"""FastMCP server exposing Flightradar24 tools and resources.

``create_mcp`` binds every tool and resource template to one client
instance.  ``run`` is the console entry point: it builds that client
from the environment and serves over stdio.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Type

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError, ToolError

from flightops import tools
from flightops.adapters import Flightradar24Client
from flightops.config import ClientConfig
from flightops.errors import FlightradarError
from flightops.middleware.logging import log_info, log_warning
from flightops.resources import read_resource


@contextmanager
def _reraise_as(error_cls: Type[Exception], name: str) -> Iterator[None]:
    """Translate client and validation errors into an MCP-visible error."""
    try:
        yield
    except FlightradarError as e:
        log_warning(
            "mcp_call_failed",
            name=name,
            error_type=type(e).__name__,
            error=e.message,
        )
        raise error_cls(e.message) from e


def create_mcp(client: Flightradar24Client) -> FastMCP:
    """Build the MCP server around an already-constructed client."""
    mcp = FastMCP("Flightradar24")

    @mcp.tool
    async def get_flight_data(
        flight_iata: Optional[str] = None, flight_icao: Optional[str] = None
    ) -> dict:
        """Get real-time data for a specific flight by IATA (e.g. 'BA123') or ICAO (e.g. 'BAW123') flight code."""
        with _reraise_as(ToolError, "get_flight_data"):
            return await tools.get_flight_data(client, flight_iata, flight_icao)

    @mcp.tool
    async def search_flights(
        airline_iata: Optional[str] = None,
        airline_icao: Optional[str] = None,
        flight_number: Optional[str] = None,
        flight_iata: Optional[str] = None,
        flight_icao: Optional[str] = None,
        registration: Optional[str] = None,
        bounds: Optional[Dict[str, float]] = None,
        limit: Optional[int] = None,
    ) -> dict:
        """Search for flights by airline, flight code, registration or geographic bounds.

        ``bounds`` takes north/south/west/east in degrees; ``limit``
        defaults to 10 and may not exceed 100.
        """
        with _reraise_as(ToolError, "search_flights"):
            return await tools.search_flights(
                client,
                airline_iata=airline_iata,
                airline_icao=airline_icao,
                flight_number=flight_number,
                flight_iata=flight_iata,
                flight_icao=flight_icao,
                registration=registration,
                bounds=bounds,
                limit=limit,
            )

    @mcp.tool
    async def get_airport_data(code: str) -> dict:
        """Get detailed information about an airport by IATA (3-letter) or ICAO (4-letter) code."""
        with _reraise_as(ToolError, "get_airport_data"):
            return await tools.get_airport_data(client, code)

    @mcp.tool
    async def search_airports(
        name: Optional[str] = None,
        country: Optional[str] = None,
        iata: Optional[str] = None,
        icao: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> dict:
        """Search for airports by name, country, or code."""
        with _reraise_as(ToolError, "search_airports"):
            return await tools.search_airports(
                client, name=name, country=country, iata=iata, icao=icao, limit=limit
            )

    @mcp.tool
    async def get_airline_data(code: str) -> dict:
        """Get detailed information about an airline by IATA (2-letter) or ICAO (3-letter) code."""
        with _reraise_as(ToolError, "get_airline_data"):
            return await tools.get_airline_data(client, code)

    @mcp.tool
    async def get_aircraft_data(registration: str) -> dict:
        """Get detailed information about an aircraft by registration (e.g. 'G-EUPT')."""
        with _reraise_as(ToolError, "get_aircraft_data"):
            return await tools.get_aircraft_data(client, registration)

    @mcp.tool
    async def get_flights_in_zone(
        north: float, south: float, west: float, east: float
    ) -> dict:
        """Get all flights currently in a geographic zone given in degrees."""
        with _reraise_as(ToolError, "get_flights_in_zone"):
            return await tools.get_flights_in_zone(client, north, south, west, east)

    # -----------------------------------------------------------------------
    # Resource templates
    # -----------------------------------------------------------------------
    async def _read(uri: str) -> str:
        with _reraise_as(ResourceError, uri):
            return await read_resource(client, uri)

    @mcp.resource("flight://{flight_id}", mime_type="application/json")
    async def flight_resource(flight_id: str) -> str:
        """Information about a flight by IATA or ICAO flight code."""
        return await _read(f"flight://{flight_id}")

    @mcp.resource("airport://{code}", mime_type="application/json")
    async def airport_resource(code: str) -> str:
        """Information about an airport by IATA or ICAO code."""
        return await _read(f"airport://{code}")

    @mcp.resource("airline://{code}", mime_type="application/json")
    async def airline_resource(code: str) -> str:
        """Information about an airline by IATA or ICAO code."""
        return await _read(f"airline://{code}")

    @mcp.resource("aircraft://{registration}", mime_type="application/json")
    async def aircraft_resource(registration: str) -> str:
        """Information about an aircraft by registration number."""
        return await _read(f"aircraft://{registration}")

    @mcp.resource("zone://{north}/{south}/{west}/{east}", mime_type="application/json")
    async def zone_resource(north: str, south: str, west: str, east: str) -> str:
        """Flights in a specified geographic zone."""
        return await _read(f"zone://{north}/{south}/{west}/{east}")

    return mcp


def run() -> None:
    """Serve the MCP server over stdio."""
    client = Flightradar24Client(ClientConfig.from_env())
    mcp = create_mcp(client)
    log_info("mcp_server_starting", transport="stdio")
    mcp.run()


if __name__ == "__main__":
    run()
