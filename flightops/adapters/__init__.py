"""Adapter exports."""

from .flightradar24 import ENDPOINTS, Flightradar24Client
from .transport import Flightradar24Transport

__all__ = [
    "ENDPOINTS",
    "Flightradar24Client",
    "Flightradar24Transport",
]
