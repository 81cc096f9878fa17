"""Presentation shapes for records returned to tool and resource callers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from flightops.models import (
    AircraftRecord,
    AirlineRecord,
    AirportInfo,
    AirportRecord,
    FlightDetail,
    FlightSummary,
    TimePair,
)


def iso_timestamp(ts: Optional[float]) -> Optional[str]:
    """Convert Unix seconds to ISO-8601 UTC with millisecond precision.

    Missing or zero timestamps become ``None``, as do values outside the
    range ``datetime`` can represent (e.g. milliseconds sent as seconds).
    """
    if not ts:
        return None
    try:
        dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now() -> str:
    return iso_timestamp(datetime.now(timezone.utc).timestamp())


def format_flight(flight: FlightSummary) -> Dict[str, Any]:
    return {
        "flight_id": flight.flight,
        "callsign": flight.callsign,
        "airline": flight.airline,
        "position": {
            "latitude": flight.lat,
            "longitude": flight.lng,
            "altitude": flight.alt,
        },
        "speed": flight.speed,
        "heading": flight.heading,
        "aircraft": {
            "type": flight.aircraft,
            "registration": flight.registration,
        },
        "route": {
            "origin": flight.origin,
            "destination": flight.destination,
        },
        "status": flight.status,
        "timestamp": iso_timestamp(flight.time),
    }


def _format_endpoint(airport: AirportInfo) -> Dict[str, Any]:
    return {
        "name": airport.name,
        "iata": airport.code.iata,
        "icao": airport.code.icao,
        "city": airport.position.region.city,
        "country": airport.position.country.name,
        "coordinates": {
            "latitude": airport.position.latitude,
            "longitude": airport.position.longitude,
        },
    }


def _format_times(pair: TimePair) -> Dict[str, Optional[str]]:
    return {
        "departure": iso_timestamp(pair.departure),
        "arrival": iso_timestamp(pair.arrival),
    }


def format_flight_detail(detail: FlightDetail) -> Dict[str, Any]:
    """Flatten a ``FlightDetail`` into the shape shown to agents.

    Upstream's ``time.real`` is presented as ``time.actual``; a missing
    trail is presented as an empty list.
    """
    ident = detail.identification
    return {
        "flight": {
            "id": ident.id,
            "callsign": ident.callsign,
            "number": ident.number.default,
            "alternative_number": ident.number.alternative,
        },
        "status": {
            "live": detail.status.live,
            "text": detail.status.text,
        },
        "aircraft": {
            "model": detail.aircraft.model.text,
            "code": detail.aircraft.model.code,
            "registration": detail.aircraft.registration,
        },
        "airline": {
            "name": detail.airline.name,
            "iata": detail.airline.code.iata,
            "icao": detail.airline.code.icao,
        },
        "origin": _format_endpoint(detail.airport.origin),
        "destination": _format_endpoint(detail.airport.destination),
        "time": {
            "scheduled": _format_times(detail.time.scheduled),
            "actual": _format_times(detail.time.real),
            "estimated": _format_times(detail.time.estimated),
        },
        "trail": [
            {
                "latitude": point.lat,
                "longitude": point.lng,
                "altitude": point.alt,
                "speed": point.spd,
                "heading": point.hd,
                "timestamp": iso_timestamp(point.ts),
            }
            for point in detail.trail or []
        ],
        "updated": utc_now(),
    }


def format_airport(airport: AirportRecord) -> Dict[str, Any]:
    return {
        "name": airport.name,
        "codes": {"iata": airport.iata, "icao": airport.icao},
        "location": {
            "latitude": airport.lat,
            "longitude": airport.lng,
            "altitude": airport.alt,
            "country": airport.country,
        },
    }


def format_airline(airline: AirlineRecord) -> Dict[str, Any]:
    return {
        "name": airline.name,
        "codes": {"iata": airline.iata, "icao": airline.icao},
        "country": airline.country,
        "updated": utc_now(),
    }


def format_aircraft(aircraft: AircraftRecord) -> Dict[str, Any]:
    return {
        "registration": aircraft.registration,
        "aircraft_type": {
            "code": aircraft.type,
            "model": aircraft.model,
            "manufacturer": aircraft.manufacturer,
        },
        "operator": aircraft.operator,
        "owner": aircraft.owner,
        "age_years": aircraft.age,
        "msn": aircraft.msn,
        "updated": utc_now(),
    }
