"""Geographic bounds and flight search filters.

``GeoBounds`` only carries values; ordering and range checks belong to
the tool and resource layers, which reject bad input before the client
is ever called.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel


def _fmt_degrees(value: float) -> str:
    """Render a coordinate without a trailing ``.0`` for integral values."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class GeoBounds(BaseModel):
    """Rectangular latitude/longitude box in degrees."""

    north: float
    south: float
    west: float
    east: float

    def to_param(self) -> str:
        """Return the ``"N,S,W,E"`` form used by the zones endpoint."""
        return ",".join(
            _fmt_degrees(v) for v in (self.north, self.south, self.west, self.east)
        )


class FlightSearchParams(BaseModel):
    """Filters accepted by the flight search."""

    airline_iata: Optional[str] = None
    airline_icao: Optional[str] = None
    flight_number: Optional[str] = None
    flight_iata: Optional[str] = None
    flight_icao: Optional[str] = None
    registration: Optional[str] = None
    bounds: Optional[GeoBounds] = None
    limit: Optional[int] = None

    def has_filter(self) -> bool:
        """True when at least one filter besides ``limit`` is set."""
        return any(
            v for k, v in self.model_dump(exclude={"limit"}).items() if v is not None
        )

    def to_params(self) -> Dict[str, Any]:
        params = self.model_dump(exclude_none=True, exclude={"bounds"})
        if self.bounds is not None:
            params["bounds"] = self.bounds.to_param()
        return params
