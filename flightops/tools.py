"""Tool handlers exposed to agents.

Each handler validates the raw arguments an agent supplied, calls the
client, and returns a JSON-serializable dict.  Validation failures raise
``InvalidParamsError`` before any request is made.  Client errors are
passed through unchanged; the MCP and REST layers map them to their own
error envelopes.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import ValidationError

from flightops.adapters import Flightradar24Client
from flightops.errors import InvalidParamsError
from flightops.formatting import (
    format_aircraft,
    format_airline,
    format_airport,
    format_flight,
    format_flight_detail,
    utc_now,
)
from flightops.models import AirportSearchParams, FlightSearchParams, GeoBounds


DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def check_bounds(bounds: GeoBounds) -> None:
    """Reject inverted or out-of-range bounds."""
    if bounds.north < bounds.south:
        raise InvalidParamsError(
            "Northern latitude must be greater than or equal to southern latitude."
        )
    if bounds.east < bounds.west:
        raise InvalidParamsError(
            "Eastern longitude must be greater than or equal to western longitude."
        )
    if not (-90 <= bounds.south and bounds.north <= 90):
        raise InvalidParamsError("Latitude must be between -90 and 90 degrees.")
    if not (-180 <= bounds.west and bounds.east <= 180):
        raise InvalidParamsError("Longitude must be between -180 and 180 degrees.")


def check_airport_code(code: Optional[str]) -> str:
    if not code or len(code) not in (3, 4):
        raise InvalidParamsError(
            "Invalid airport code. Must be a 3-letter IATA code or 4-letter ICAO code."
        )
    return code


def check_airline_code(code: Optional[str]) -> str:
    if not code or len(code) not in (2, 3):
        raise InvalidParamsError(
            "Invalid airline code. Must be a 2-letter IATA code or 3-letter ICAO code."
        )
    return code


def check_registration(registration: Optional[str]) -> str:
    if not registration or len(registration) < 2:
        raise InvalidParamsError("Invalid aircraft registration number.")
    return registration


def _parse_bounds(bounds: Optional[Dict[str, float]]) -> Optional[GeoBounds]:
    if not bounds:
        return None
    try:
        return GeoBounds.model_validate(bounds)
    except ValidationError as e:
        raise InvalidParamsError(
            "Bounds must provide numeric north, south, west and east values."
        ) from e


def _check_limit(limit: Optional[int]) -> int:
    if not limit:
        return DEFAULT_LIMIT
    if not 1 <= limit <= MAX_LIMIT:
        raise InvalidParamsError(f"Limit must be between 1 and {MAX_LIMIT}.")
    return int(limit)


async def get_flight_data(
    client: Flightradar24Client,
    flight_iata: Optional[str] = None,
    flight_icao: Optional[str] = None,
) -> Dict[str, Any]:
    """Real-time data for one flight; the ICAO code wins when both are given."""
    flight_id = flight_icao or flight_iata
    if not flight_id:
        raise InvalidParamsError("Either flight_iata or flight_icao must be provided.")
    detail = await client.get_flight_detail(flight_id)
    return format_flight_detail(detail)


async def search_flights(
    client: Flightradar24Client,
    airline_iata: Optional[str] = None,
    airline_icao: Optional[str] = None,
    flight_number: Optional[str] = None,
    flight_iata: Optional[str] = None,
    flight_icao: Optional[str] = None,
    registration: Optional[str] = None,
    bounds: Optional[Dict[str, float]] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    params = FlightSearchParams(
        airline_iata=airline_iata,
        airline_icao=airline_icao,
        flight_number=flight_number,
        flight_iata=flight_iata,
        flight_icao=flight_icao,
        registration=registration,
        bounds=_parse_bounds(bounds),
        limit=_check_limit(limit),
    )
    if not params.has_filter():
        raise InvalidParamsError("At least one search parameter must be provided.")
    if params.bounds is not None:
        check_bounds(params.bounds)

    flights = await client.search_flights(params)
    result: Dict[str, Any] = {
        "search_params": params.model_dump(exclude_none=True),
        "flights": [format_flight(f) for f in flights],
        "count": len(flights),
    }
    if not flights:
        result["message"] = "No flights found matching the search criteria."
    result["timestamp"] = utc_now()
    return result


async def get_airport_data(client: Flightradar24Client, code: str) -> Dict[str, Any]:
    airport = await client.get_airport(check_airport_code(code))
    return format_airport(airport)


async def search_airports(
    client: Flightradar24Client,
    name: Optional[str] = None,
    country: Optional[str] = None,
    iata: Optional[str] = None,
    icao: Optional[str] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    if not (name or country or iata or icao):
        raise InvalidParamsError("At least one search parameter must be provided.")
    params = AirportSearchParams(
        name=name, country=country, iata=iata, icao=icao, limit=_check_limit(limit)
    )

    airports = await client.search_airports(params)
    result: Dict[str, Any] = {
        "search_params": params.model_dump(exclude_none=True),
        "airports": [format_airport(a) for a in airports],
        "count": len(airports),
    }
    if not airports:
        result["message"] = "No airports found matching the search criteria."
    result["timestamp"] = utc_now()
    return result


async def get_airline_data(client: Flightradar24Client, code: str) -> Dict[str, Any]:
    airline = await client.get_airline(check_airline_code(code))
    return format_airline(airline)


async def get_aircraft_data(
    client: Flightradar24Client, registration: str
) -> Dict[str, Any]:
    aircraft = await client.get_aircraft(check_registration(registration))
    return format_aircraft(aircraft)


async def get_flights_in_zone(
    client: Flightradar24Client,
    north: float,
    south: float,
    west: float,
    east: float,
) -> Dict[str, Any]:
    """All flights currently inside a bounding box."""
    bounds = GeoBounds(north=north, south=south, west=west, east=east)
    check_bounds(bounds)

    flights = await client.get_flights_in_zone(bounds)
    result: Dict[str, Any] = {
        "zone": bounds.model_dump(),
        "flights": [format_flight(f) for f in flights],
        "count": len(flights),
    }
    if not flights:
        result["message"] = "No flights found in the specified zone."
    result["timestamp"] = utc_now()
    return result
