"""Airport information endpoints (OurAirports)."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from vfrplan.api.deps import get_airport_client
from vfrplan.contracts.airport import AirportInfo
from vfrplan.services.airports import (
    DEFAULT_NEARBY_RADIUS_NM,
    MAX_NEARBY,
    OurAirportsClient,
    best_runway,
    runway_winds,
)
from vfrplan.services.errors import AirportDataError

router = APIRouter(prefix="/airports", tags=["airports"])


async def _airport(client: OurAirportsClient, icao: str) -> AirportInfo:
    try:
        info = await client.get_airport_info(icao)
    except AirportDataError as e:
        raise HTTPException(status_code=502, detail=f"Airport data unavailable: {e}")
    if info is None:
        raise HTTPException(status_code=404, detail=f"Airport {icao.upper()} not found")
    return info


@router.get("/nearby")
async def nearby_airports(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    radius_nm: float = Query(DEFAULT_NEARBY_RADIUS_NM, gt=0, le=250),
    limit: int = Query(MAX_NEARBY, ge=1, le=50),
    client: OurAirportsClient = Depends(get_airport_client),
) -> list[dict[str, Any]]:
    try:
        airports = await client.find_nearby_airports(lat, lon, radius_nm, limit)
    except AirportDataError as e:
        raise HTTPException(status_code=502, detail=f"Airport data unavailable: {e}")
    return [a.to_json() for a in airports]


@router.get("/{icao}")
async def get_airport(
    icao: str,
    client: OurAirportsClient = Depends(get_airport_client),
) -> dict[str, Any]:
    """Airport record with runways, frequencies and airports within 50 km."""
    return (await _airport(client, icao)).to_json()


@router.get("/{icao}/runway-wind")
async def get_runway_wind(
    icao: str,
    direction: float = Query(..., ge=0, le=360, description="Wind direction [deg]"),
    speed: float = Query(..., ge=0, description="Wind speed [kt]"),
    client: OurAirportsClient = Depends(get_airport_client),
) -> dict[str, Any]:
    """Head- and crosswind per runway and the runway the wind favours."""
    info = await _airport(client, icao)
    best = best_runway(info.runways, direction, speed)
    return {
        "runways": [w.to_json() for w in runway_winds(info.runways, direction, speed)],
        "best": best.to_json() if best else None,
    }
