"""Pydantic models for Flightradar24 flight data.

``FlightSummary`` is the flat record returned by flight searches and
zone queries.  ``FlightDetail`` mirrors the nested object returned by
the single-flight info endpoint.  Field names follow the upstream JSON
so that records can be dumped back out unchanged.  Nearly every field
is optional because the provider omits keys freely.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .base import Record


class FlightSummary(Record):
    """A live flight position as returned by searches and zone queries."""

    flight: Optional[str] = None
    callsign: Optional[str] = None
    airline: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    alt: Optional[float] = None
    speed: Optional[float] = None
    heading: Optional[float] = None
    aircraft: Optional[str] = None  # ICAO type code, e.g. "A320"
    registration: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    status: Optional[str] = None
    time: Optional[int] = None  # Unix seconds


class FlightNumber(Record):
    default: Optional[str] = None
    alternative: Optional[str] = None


class FlightIdentification(Record):
    id: Optional[str] = None
    callsign: Optional[str] = None
    number: FlightNumber = Field(default_factory=FlightNumber)


class FlightStatus(Record):
    live: Optional[bool] = None
    text: Optional[str] = None
    icon: Optional[str] = None
    estimated: Optional[bool] = None
    ambiguous: Optional[bool] = None


class AircraftModel(Record):
    code: Optional[str] = None
    text: Optional[str] = None


class FlightAircraft(Record):
    model: AircraftModel = Field(default_factory=AircraftModel)
    registration: Optional[str] = None


class CodePair(Record):
    iata: Optional[str] = None
    icao: Optional[str] = None


class FlightAirline(Record):
    name: Optional[str] = None
    code: CodePair = Field(default_factory=CodePair)


class Country(Record):
    name: Optional[str] = None
    code: Optional[str] = None


class Region(Record):
    city: Optional[str] = None


class AirportPosition(Record):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    altitude: Optional[float] = None
    country: Country = Field(default_factory=Country)
    region: Region = Field(default_factory=Region)


class AirportInfo(Record):
    """Origin or destination airport embedded in a flight detail."""

    name: Optional[str] = None
    code: CodePair = Field(default_factory=CodePair)
    position: AirportPosition = Field(default_factory=AirportPosition)


class FlightAirports(Record):
    origin: AirportInfo = Field(default_factory=AirportInfo)
    destination: AirportInfo = Field(default_factory=AirportInfo)


class TimePair(Record):
    """Departure/arrival Unix timestamps; either may be missing."""

    departure: Optional[int] = None
    arrival: Optional[int] = None


class FlightTimes(Record):
    scheduled: TimePair = Field(default_factory=TimePair)
    real: TimePair = Field(default_factory=TimePair)
    estimated: TimePair = Field(default_factory=TimePair)


class TrailPoint(Record):
    """A historical trackpoint; ``ts`` is Unix seconds."""

    lat: Optional[float] = None
    lng: Optional[float] = None
    alt: Optional[float] = None
    spd: Optional[float] = None
    hd: Optional[float] = None
    ts: Optional[int] = None


class FlightDetail(Record):
    """Full information about a single flight."""

    identification: FlightIdentification = Field(
        default_factory=FlightIdentification
    )
    status: FlightStatus = Field(default_factory=FlightStatus)
    aircraft: FlightAircraft = Field(default_factory=FlightAircraft)
    airline: FlightAirline = Field(default_factory=FlightAirline)
    airport: FlightAirports = Field(default_factory=FlightAirports)
    time: FlightTimes = Field(default_factory=FlightTimes)
    trail: Optional[List[TrailPoint]] = None
