"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import partial

import httpx
from fastapi import Depends, Request

from vfrplan.services.airports import OurAirportsClient
from vfrplan.services.aviation_weather import AviationWeatherClient
from vfrplan.services.elevation import get_ground_elevations
from vfrplan.services.geocoding import NominatimClient
from vfrplan.services.planner import ElevationLookup


# ------------------------------------------------------------------
# Shared HTTP client (singleton from app.state, created in lifespan)
# ------------------------------------------------------------------


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    return getattr(request.app.state, "http_client", None)


# ------------------------------------------------------------------
# External collaborators (new instance per request, shared HTTP client)
# ------------------------------------------------------------------


def get_geocoder(
    http_client: httpx.AsyncClient | None = Depends(get_http_client),
) -> NominatimClient:
    return NominatimClient(http_client)


def get_elevation_lookup(
    http_client: httpx.AsyncClient | None = Depends(get_http_client),
) -> ElevationLookup:
    return partial(get_ground_elevations, http_client=http_client)


def get_weather_client(
    http_client: httpx.AsyncClient | None = Depends(get_http_client),
) -> AviationWeatherClient:
    return AviationWeatherClient(http_client)


def get_airport_client(
    request: Request,
    http_client: httpx.AsyncClient | None = Depends(get_http_client),
) -> OurAirportsClient:
    """One client per app: it holds the downloaded airport tables."""
    client = getattr(request.app.state, "airport_client", None)
    if client is None:
        client = OurAirportsClient(http_client)
        request.app.state.airport_client = client
    return client
