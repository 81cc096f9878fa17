"""Pydantic models for airport data."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel

from .base import Record


class AirportRecord(Record):
    """Airport metadata as returned by the ``/airports`` endpoint."""

    name: Optional[str] = None
    iata: Optional[str] = None
    icao: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    alt: Optional[float] = None
    country: Optional[str] = None


class AirportSearchParams(BaseModel):
    """Filters accepted by the airport search."""

    iata: Optional[str] = None
    icao: Optional[str] = None
    name: Optional[str] = None
    country: Optional[str] = None
    limit: Optional[int] = None

    def to_params(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
