"""Resource addressing for ``flight://``, ``airport://`` and friends.

A URI is parsed into one of five reference types (a tagged union keyed
on ``kind``), then dispatched to the reader registered for that kind.
Readers return pretty-printed JSON text.
"""

from __future__ import annotations

import json
import math
import re
from typing import Awaitable, Callable, Dict, Literal, Union
from urllib.parse import unquote

from pydantic import BaseModel

from flightops.adapters import Flightradar24Client
from flightops.errors import InvalidParamsError, UnsupportedResourceError
from flightops.formatting import (
    format_aircraft,
    format_airline,
    format_airport,
    format_flight,
    format_flight_detail,
    utc_now,
)
from flightops.models import GeoBounds
from flightops.tools import (
    check_airline_code,
    check_airport_code,
    check_bounds,
    check_registration,
)


INVALID_ZONE_BOUNDS = "Invalid zone bounds. All bounds must be valid numbers."

RESOURCE_TEMPLATES = [
    {
        "uriTemplate": "flight://{flight_id}",
        "name": "Flight Information",
        "description": "Information about a flight by IATA or ICAO flight code",
        "mimeType": "application/json",
    },
    {
        "uriTemplate": "airport://{code}",
        "name": "Airport Information",
        "description": "Information about an airport by IATA or ICAO code",
        "mimeType": "application/json",
    },
    {
        "uriTemplate": "airline://{code}",
        "name": "Airline Information",
        "description": "Information about an airline by IATA or ICAO code",
        "mimeType": "application/json",
    },
    {
        "uriTemplate": "aircraft://{registration}",
        "name": "Aircraft Information",
        "description": "Information about an aircraft by registration number",
        "mimeType": "application/json",
    },
    {
        "uriTemplate": "zone://{north}/{south}/{west}/{east}",
        "name": "Zone Flights",
        "description": "Flights in a specified geographic zone",
        "mimeType": "application/json",
    },
]


class FlightRef(BaseModel):
    kind: Literal["flight"] = "flight"
    flight_id: str


class AirportRef(BaseModel):
    kind: Literal["airport"] = "airport"
    code: str


class AirlineRef(BaseModel):
    kind: Literal["airline"] = "airline"
    code: str


class AircraftRef(BaseModel):
    kind: Literal["aircraft"] = "aircraft"
    registration: str


class ZoneRef(BaseModel):
    kind: Literal["zone"] = "zone"
    bounds: GeoBounds


ResourceRef = Union[FlightRef, AirportRef, AirlineRef, AircraftRef, ZoneRef]


def _match(pattern: str, uri: str, kind: str) -> re.Match:
    m = re.fullmatch(pattern, uri)
    if not m:
        raise UnsupportedResourceError(f"Invalid {kind} resource URI: {uri}")
    return m


def _parse_flight(uri: str) -> FlightRef:
    flight_id = _match(r"flight://([A-Za-z0-9]+)", uri, "flight").group(1)
    if len(flight_id) < 2:
        raise InvalidParamsError("Invalid flight ID.")
    return FlightRef(flight_id=flight_id)


def _parse_airport(uri: str) -> AirportRef:
    code = _match(r"airport://([A-Za-z0-9]+)", uri, "airport").group(1)
    return AirportRef(code=check_airport_code(code))


def _parse_airline(uri: str) -> AirlineRef:
    code = _match(r"airline://([A-Za-z0-9]+)", uri, "airline").group(1)
    return AirlineRef(code=check_airline_code(code))


def _parse_aircraft(uri: str) -> AircraftRef:
    registration = _match(r"aircraft://([A-Za-z0-9-]+)", uri, "aircraft").group(1)
    return AircraftRef(registration=check_registration(registration))


def _parse_zone(uri: str) -> ZoneRef:
    m = _match(r"zone://([^/]+)/([^/]+)/([^/]+)/([^/]+)", uri, "zone")
    try:
        north, south, west, east = (float(unquote(part)) for part in m.groups())
    except ValueError as e:
        raise InvalidParamsError(INVALID_ZONE_BOUNDS) from e
    if any(math.isnan(v) for v in (north, south, west, east)):
        raise InvalidParamsError(INVALID_ZONE_BOUNDS)
    bounds = GeoBounds(north=north, south=south, west=west, east=east)
    check_bounds(bounds)
    return ZoneRef(bounds=bounds)


PARSERS: Dict[str, Callable[[str], ResourceRef]] = {
    "flight": _parse_flight,
    "airport": _parse_airport,
    "airline": _parse_airline,
    "aircraft": _parse_aircraft,
    "zone": _parse_zone,
}


def parse_resource_uri(uri: str) -> ResourceRef:
    """Parse ``uri`` into a typed reference, validating its arguments."""
    scheme, sep, _ = uri.partition("://")
    parser = PARSERS.get(scheme) if sep else None
    if parser is None:
        raise UnsupportedResourceError(f"Unsupported resource URI: {uri}")
    return parser(uri)


async def _read_flight(client: Flightradar24Client, ref: FlightRef) -> dict:
    return format_flight_detail(await client.get_flight_detail(ref.flight_id))


async def _read_airport(client: Flightradar24Client, ref: AirportRef) -> dict:
    airport = format_airport(await client.get_airport(ref.code))
    airport["updated"] = utc_now()
    return airport


async def _read_airline(client: Flightradar24Client, ref: AirlineRef) -> dict:
    return format_airline(await client.get_airline(ref.code))


async def _read_aircraft(client: Flightradar24Client, ref: AircraftRef) -> dict:
    return format_aircraft(await client.get_aircraft(ref.registration))


async def _read_zone(client: Flightradar24Client, ref: ZoneRef) -> dict:
    flights = await client.get_flights_in_zone(ref.bounds)
    return {
        "zone": ref.bounds.model_dump(),
        "flights": [format_flight(f) for f in flights],
        "count": len(flights),
        "timestamp": utc_now(),
    }


READERS: Dict[str, Callable[[Flightradar24Client, ResourceRef], Awaitable[dict]]] = {
    "flight": _read_flight,
    "airport": _read_airport,
    "airline": _read_airline,
    "aircraft": _read_aircraft,
    "zone": _read_zone,
}


async def read_resource(client: Flightradar24Client, uri: str) -> str:
    """Resolve a resource URI to JSON text."""
    ref = parse_resource_uri(uri)
    reader = READERS.get(ref.kind)
    if reader is None:
        raise UnsupportedResourceError(f"Unsupported resource URI: {uri}")
    content = await reader(client, ref)
    return json.dumps(content, indent=2)
