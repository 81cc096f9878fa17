"""Flight Ops: Flightradar24 data exposed to tool-calling agents."""

__version__ = "0.1.0"
