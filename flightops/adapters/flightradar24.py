"""Flightradar24 adapter for flights, airports, airlines, aircraft and zones.

Each operation issues one logical request through
``Flightradar24Transport`` and unwraps the provider's nested envelope.
Single-entity lookups raise ``NotFoundError`` when the entity is missing
from the envelope; searches and zone queries return an empty list.
"""

from __future__ import annotations

from typing import Any, List, Optional
from urllib.parse import quote

import httpx

from flightops.adapters.transport import Flightradar24Transport, Sleep
from flightops.config import ClientConfig
from flightops.errors import NotFoundError
from flightops.middleware.logging import log_info
from flightops.models import (
    AircraftRecord,
    AirlineRecord,
    AirportRecord,
    AirportSearchParams,
    FlightDetail,
    FlightSearchParams,
    FlightSummary,
    GeoBounds,
)


ENDPOINTS = {
    "flight_data": "/flights",
    "flight_info": "/flight/info",
    "airport_data": "/airports",
    "airline_data": "/airlines",
    "aircraft_data": "/aircraft",
    "zones": "/zones",
}


def _segment(value: str) -> str:
    """Percent-encode ``value`` as a single path segment, dots included."""
    return quote(value, safe="").replace(".", "%2E")


def _unwrap(body: Any, *path: str) -> Optional[Any]:
    """Follow ``path`` into nested dicts, returning ``None`` if any level is absent."""
    node = body
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


class Flightradar24Client:
    """Typed access to the Flightradar24 REST API.

    Construct once at process start and pass the instance to whatever
    needs it; the client keeps no state between calls beyond its
    immutable configuration.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self.config = config
        kwargs = {"transport": transport}
        if sleep is not None:
            kwargs["sleep"] = sleep
        self.transport = Flightradar24Transport(config, **kwargs)

    async def get_flight_detail(self, flight_id: str) -> FlightDetail:
        """Return full details (with optional trail) for one flight."""
        body = await self.transport.request(
            f"{ENDPOINTS['flight_info']}/{_segment(flight_id)}"
        )
        result = _unwrap(body, "result")
        if result is None:
            raise NotFoundError(
                f"No flight data found for flight ID: {flight_id}",
                kind="flight",
                key=flight_id,
            )
        return FlightDetail.model_validate(result)

    async def search_flights(self, params: FlightSearchParams) -> List[FlightSummary]:
        """Search live flights; no matches yields an empty list."""
        body = await self.transport.request(ENDPOINTS["flight_data"], params.to_params())
        flights = _unwrap(body, "result", "response", "flights") or []
        log_info("fr24_search_flights", count=len(flights))
        return [FlightSummary.model_validate(f) for f in flights]

    async def get_airport(self, code: str) -> AirportRecord:
        """Look up an airport; a 3-character code is IATA, anything else ICAO."""
        params = {"iata": code} if len(code) == 3 else {"icao": code}
        body = await self.transport.request(ENDPOINTS["airport_data"], params)
        airport = _unwrap(body, "result", "response", "airport")
        if airport is None:
            raise NotFoundError(
                f"No airport data found for airport code: {code}",
                kind="airport",
                key=code,
            )
        return AirportRecord.model_validate(airport)

    async def search_airports(self, params: AirportSearchParams) -> List[AirportRecord]:
        """Search airports; no matches yields an empty list."""
        body = await self.transport.request(ENDPOINTS["airport_data"], params.to_params())
        airports = _unwrap(body, "result", "response", "airports") or []
        log_info("fr24_search_airports", count=len(airports))
        return [AirportRecord.model_validate(a) for a in airports]

    async def get_airline(self, code: str) -> AirlineRecord:
        """Look up an airline; a 2-character code is IATA, anything else ICAO."""
        params = {"iata": code} if len(code) == 2 else {"icao": code}
        body = await self.transport.request(ENDPOINTS["airline_data"], params)
        airline = _unwrap(body, "result", "response", "airline")
        if airline is None:
            raise NotFoundError(
                f"No airline data found for airline code: {code}",
                kind="airline",
                key=code,
            )
        return AirlineRecord.model_validate(airline)

    async def get_aircraft(self, registration: str) -> AircraftRecord:
        body = await self.transport.request(
            f"{ENDPOINTS['aircraft_data']}/{_segment(registration)}"
        )
        aircraft = _unwrap(body, "result", "response", "aircraft")
        if aircraft is None:
            raise NotFoundError(
                f"No aircraft data found for registration: {registration}",
                kind="aircraft",
                key=registration,
            )
        return AircraftRecord.model_validate(aircraft)

    async def get_flights_in_zone(self, bounds: GeoBounds) -> List[FlightSummary]:
        """Return flights inside ``bounds``; values are forwarded unchecked."""
        body = await self.transport.request(
            ENDPOINTS["zones"], {"bounds": bounds.to_param()}
        )
        flights = _unwrap(body, "result", "response", "flights") or []
        log_info("fr24_zone_flights", bounds=bounds.to_param(), count=len(flights))
        return [FlightSummary.model_validate(f) for f in flights]

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "Flightradar24Client":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
