"""Pydantic model for airline data."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from .base import Record
from .flight import CodePair


class AirlineRecord(Record):
    """Airline metadata; codes are nested under ``code`` upstream."""

    name: Optional[str] = None
    code: CodePair = Field(default_factory=CodePair)
    country: Optional[str] = None

    @property
    def iata(self) -> Optional[str]:
        return self.code.iata

    @property
    def icao(self) -> Optional[str]:
        return self.code.icao
