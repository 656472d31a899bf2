"""Shared fixtures for API tests."""

from __future__ import annotations

import httpx
import pytest

from vfrplan.api.app import app
from vfrplan.api.deps import (
    get_airport_client,
    get_elevation_lookup,
    get_geocoder,
    get_weather_client,
)
from vfrplan.contracts.common import GeoPoint
from vfrplan.services.airports import AirportDatabase
from vfrplan.services.aviation_weather import parse_metar
from vfrplan.services.errors import AirportDataError, GeocodingError, NotFoundError
from vfrplan.services.geocoding import PlaceCandidate

PLACES = {
    "Roma": GeoPoint(latitude=41.8, longitude=12.5),
    "Firenze": GeoPoint(latitude=43.77, longitude=11.25),
    "Milano": GeoPoint(latitude=45.5, longitude=9.2),
    "Bergamo": GeoPoint(latitude=45.67, longitude=9.7),
}


class FakeGeocoder:
    """In-memory stand-in for NominatimClient."""

    offline = False

    async def geocode(self, query: str) -> GeoPoint:
        if self.offline:
            raise GeocodingError(query, "HTTP 503")
        if query not in PLACES:
            raise NotFoundError(query)
        return PLACES[query]

    async def search(self, query, limit=5, country_code=None):
        if self.offline:
            raise GeocodingError(query, "HTTP 503")
        return [
            PlaceCandidate(name=name, short_name=name, latitude=p.latitude, longitude=p.longitude)
            for name, p in PLACES.items()
            if name.lower().startswith(query.lower())
        ][:limit]

    async def reverse_geocode(self, latitude, longitude):
        if latitude == PLACES["Milano"].latitude:
            return "Milano"
        return None


class FakeWeatherClient:
    def __init__(self):
        self.calls: list[tuple[str, str]] = []
        self.error: Exception | None = None
        self.reports: dict[str, dict] = {}

    async def fetch(self, product, ids):
        self.calls.append((str(getattr(product, "value", product)), ids))
        if self.error is not None:
            raise self.error
        return [{"icaoId": station, "rawOb": f"METAR {station} 150850Z"} for station in ids.split(",")]

    async def get_current_metar(self, icao):
        self.calls.append(("metar", icao))
        if self.error is not None:
            raise self.error
        if icao not in self.reports:
            return None
        return parse_metar(self.reports[icao])


class FakeAirportClient:
    """Serves a two-airport table instead of the OurAirports download."""

    unavailable = False

    def __init__(self):
        self.database = AirportDatabase(
            [
                {"id": "1", "ident": "LIRU", "type": "small_airport", "name": "Roma-Urbe",
                 "latitude_deg": "41.9519", "longitude_deg": "12.4989", "elevation_ft": "55"},
                {"id": "2", "ident": "LIRA", "type": "medium_airport", "name": "Ciampino",
                 "latitude_deg": "41.7994", "longitude_deg": "12.5949", "elevation_ft": "427"},
            ],
            [
                {"airport_ref": "1", "le_ident": "16", "he_ident": "34", "length_ft": "3609"},
            ],
            [
                {"airport_ref": "1", "type": "TWR", "description": "URBE TWR", "frequency_mhz": "120.65"},
            ],
        )

    async def get_airport_info(self, icao):
        if self.unavailable:
            raise AirportDataError("airports.csv: HTTP 503")
        return self.database.get_airport_info(icao)

    async def find_nearby_airports(self, latitude, longitude, radius_nm, limit):
        if self.unavailable:
            raise AirportDataError("airports.csv: HTTP 503")
        return self.database.find_nearby_airports(latitude, longitude, radius_nm, limit)


async def flat_terrain(coordinates):
    return [0.0] * len(coordinates)


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def weather_client():
    return FakeWeatherClient()


@pytest.fixture
def airport_client():
    return FakeAirportClient()


@pytest.fixture
def test_app(geocoder, weather_client, airport_client):
    """FastAPI app with external services replaced by fakes."""
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_elevation_lookup] = lambda: flat_terrain
    app.dependency_overrides[get_weather_client] = lambda: weather_client
    app.dependency_overrides[get_airport_client] = lambda: airport_client
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app):
    """httpx AsyncClient wired to the test app."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
