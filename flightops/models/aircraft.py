"""Pydantic model for aircraft data."""

from __future__ import annotations

from typing import Optional

from .base import Record


class AircraftRecord(Record):
    """Registration-level aircraft metadata."""

    registration: Optional[str] = None
    type: Optional[str] = None  # ICAO type code
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    owner: Optional[str] = None
    operator: Optional[str] = None
    age: Optional[float] = None  # years
    msn: Optional[str] = None  # manufacturer serial number
