"""Model exports."""

from .aircraft import AircraftRecord
from .airline import AirlineRecord
from .airport import AirportRecord, AirportSearchParams
from .flight import (
    AirportInfo,
    FlightDetail,
    FlightSummary,
    FlightTimes,
    TimePair,
    TrailPoint,
)
from .zone import FlightSearchParams, GeoBounds

__all__ = [
    "FlightSummary",
    "FlightDetail",
    "AirportInfo",
    "FlightTimes",
    "TimePair",
    "TrailPoint",
    "AirportRecord",
    "AirportSearchParams",
    "AirlineRecord",
    "AircraftRecord",
    "GeoBounds",
    "FlightSearchParams",
]
