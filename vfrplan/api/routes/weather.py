"""METAR / TAF proxy endpoint (aviationweather.gov)."""

from __future__ import annotations

from typing import Any

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from vfrplan.api.deps import get_weather_client
from vfrplan.contracts.enums import WeatherProduct
from vfrplan.services.aviation_weather import AviationWeatherClient, normalize_station_ids

router = APIRouter(prefix="/weather", tags=["weather"])

CACHE_CONTROL = "s-maxage=300, stale-while-revalidate"


@router.get("")
async def get_weather(
    response: Response,
    type: WeatherProduct = Query(..., description="metar or taf"),
    ids: str = Query(..., min_length=1, description="Comma-separated ICAO codes"),
    client: AviationWeatherClient = Depends(get_weather_client),
) -> list[dict[str, Any]]:
    """Raw reports for the requested stations, cached for five minutes."""
    try:
        stations = normalize_station_ids(ids)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        data = await client.fetch(type, stations)
    except (httpx.HTTPError, ValueError) as e:
        raise HTTPException(status_code=502, detail=f"Weather API error: {e}")
    response.headers["Cache-Control"] = CACHE_CONTROL
    return data


@router.get("/metar/{icao}")
async def get_decoded_metar(
    icao: str,
    response: Response,
    client: AviationWeatherClient = Depends(get_weather_client),
) -> dict[str, Any]:
    """Latest METAR for one station, decoded for the weather panel."""
    try:
        station = normalize_station_ids(icao)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if "," in station:
        raise HTTPException(status_code=400, detail="one station id at a time")

    try:
        report = await client.get_current_metar(station)
    except (httpx.HTTPError, ValueError) as e:
        raise HTTPException(status_code=502, detail=f"Weather API error: {e}")
    if report is None:
        raise HTTPException(status_code=404, detail=f"No METAR for {station}")
    response.headers["Cache-Control"] = CACHE_CONTROL
    return report.to_json()
