"""Geocoding endpoints: place search (autocomplete) and reverse lookup."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from vfrplan.api.deps import get_geocoder
from vfrplan.services.errors import GeocodingError
from vfrplan.services.geocoding import NominatimClient

router = APIRouter(prefix="/geocode", tags=["geocode"])


@router.get("/search")
async def search_places(
    q: str = Query(..., min_length=1),
    limit: int = Query(default=5, ge=1, le=20),
    country: str | None = Query(default=None, min_length=2, max_length=2),
    geocoder: NominatimClient = Depends(get_geocoder),
) -> list[dict]:
    try:
        candidates = await geocoder.search(q, limit=limit, country_code=country)
    except GeocodingError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return [c.model_dump() for c in candidates]


@router.get("/reverse")
async def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    geocoder: NominatimClient = Depends(get_geocoder),
) -> dict:
    """Name of the feature at a map click; ``name`` is null when nothing fits."""
    name = await geocoder.reverse_geocode(lat, lon)
    return {"name": name, "latitude": lat, "longitude": lon}
