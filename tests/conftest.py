import asyncio
from typing import Callable, List

import httpx
import pytest

from flightops.adapters import Flightradar24Client
from flightops.config import ClientConfig


class RecordingSleep:
    """Stand-in for ``asyncio.sleep`` that records delays instead of waiting."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class Upstream:
    """Scripted fake of the Flightradar24 API.

    ``responses`` is consumed one per request; the last entry repeats.
    Every request is kept in ``requests`` for assertions.
    """

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        template = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        # Fresh response per call; httpx binds a response to one request.
        return httpx.Response(
            template.status_code, headers=template.headers, content=template.content
        )

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def envelope(**response) -> dict:
    """Wrap a payload in the ``result.response`` envelope."""
    return {"result": {"response": response}}


def ok(body) -> httpx.Response:
    return httpx.Response(200, json=body)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_key="test-key")


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_client(config, sleep) -> Callable[..., Flightradar24Client]:
    """Return a factory building a client wired to an ``Upstream`` fake."""

    def factory(upstream: Upstream, cfg: ClientConfig = None) -> Flightradar24Client:
        return Flightradar24Client(
            cfg or config,
            transport=httpx.MockTransport(upstream),
            sleep=sleep,
        )

    return factory


@pytest.fixture
def flight_summary() -> dict:
    return {
        "flight": "2f3a1b9c",
        "callsign": "BAW123",
        "airline": "BA",
        "lat": 51.47,
        "lng": -0.4543,
        "alt": 35000,
        "speed": 450,
        "heading": 270,
        "aircraft": "A320",
        "registration": "G-EUPT",
        "origin": "LHR",
        "destination": "JFK",
        "status": "airborne",
        "time": 1700000000,
    }


@pytest.fixture
def flight_detail() -> dict:
    return {
        "identification": {
            "id": "2f3a1b9c",
            "callsign": "BAW123",
            "number": {"default": "BA123"},
        },
        "status": {"live": True, "text": "Estimated- 14:05", "icon": "green"},
        "aircraft": {
            "model": {"code": "A320", "text": "Airbus A320-232"},
            "registration": "G-EUPT",
        },
        "airline": {"name": "British Airways", "code": {"iata": "BA", "icao": "BAW"}},
        "airport": {
            "origin": {
                "name": "London Heathrow Airport",
                "code": {"iata": "LHR", "icao": "EGLL"},
                "position": {
                    "latitude": 51.4706,
                    "longitude": -0.461941,
                    "altitude": 83,
                    "country": {"name": "United Kingdom", "code": "GB"},
                    "region": {"city": "London"},
                },
            },
            "destination": {
                "name": "John F. Kennedy International Airport",
                "code": {"iata": "JFK", "icao": "KJFK"},
                "position": {
                    "latitude": 40.6398,
                    "longitude": -73.7789,
                    "altitude": 13,
                    "country": {"name": "United States", "code": "US"},
                    "region": {"city": "New York"},
                },
            },
        },
        "time": {
            "scheduled": {"departure": 1700000000, "arrival": 1700028000},
            "real": {"departure": 1700000600},
            "estimated": {"arrival": 1700027400},
        },
        "trail": [
            {"lat": 51.47, "lng": -0.45, "alt": 1200, "spd": 160, "ts": 1700000700, "hd": 270},
            {"lat": 51.48, "lng": -0.60, "alt": 5000, "spd": 250, "ts": 1700000760, "hd": 275},
        ],
    }
