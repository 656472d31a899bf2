"""Elevation API client for ground-level lookups.

Uses the Open-Meteo elevation API (free, no key). Lookups that fail
come back as ``None``; ``planned_altitude_ft`` turns them into the base
altitude so a route can always be computed.
"""

from __future__ import annotations

import logging
import math

import httpx

from vfrplan.services.navigation import BASE_ALTITUDE_FT

logger = logging.getLogger(__name__)

OPEN_METEO_ELEVATION_URL = "https://api.open-meteo.com/v1/elevation"
METERS_TO_FEET = 3.28084
BATCH_SIZE = 100

# Planned altitude = ground + margin, rounded up to the next hundred feet
TERRAIN_CLEARANCE_FT = 1500


async def get_ground_elevations(
    coordinates: list[tuple[float, float]],
    http_client: httpx.AsyncClient | None = None,
) -> list[float | None]:
    """Query Open-Meteo for ground elevations.

    Parameters
    ----------
    coordinates:
        List of (latitude, longitude) tuples.
    http_client:
        Client to use; a short-lived one is created when omitted.

    Returns
    -------
    List of elevations in feet, or None for failed lookups.
    """
    if not coordinates:
        return []

    if http_client is not None:
        return await _open_meteo_elevation(http_client, coordinates)
    async with httpx.AsyncClient(timeout=15) as client:
        return await _open_meteo_elevation(client, coordinates)


async def _open_meteo_elevation(
    client: httpx.AsyncClient,
    coordinates: list[tuple[float, float]],
) -> list[float | None]:
    """Query Open-Meteo, up to ``BATCH_SIZE`` locations per request."""
    all_results: list[float | None] = []

    for start in range(0, len(coordinates), BATCH_SIZE):
        batch = coordinates[start : start + BATCH_SIZE]
        try:
            resp = await client.get(
                OPEN_METEO_ELEVATION_URL,
                params={
                    "latitude": ",".join(f"{lat:.6f}" for lat, _lon in batch),
                    "longitude": ",".join(f"{lon:.6f}" for _lat, lon in batch),
                },
            )
            resp.raise_for_status()
            body = resp.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Open-Meteo elevation request failed")
            all_results.extend([None] * len(batch))
            continue

        elevations = body.get("elevation") if isinstance(body, dict) else None
        if not isinstance(elevations, list):
            logger.warning("Open-Meteo response has no elevation list: %.200r", body)
            all_results.extend([None] * len(batch))
            continue

        for i in range(len(batch)):
            elev = elevations[i] if i < len(elevations) else None
            if not isinstance(elev, (int, float)):
                all_results.append(None)
            else:
                all_results.append(round(elev * METERS_TO_FEET))

    return all_results


def planned_altitude_ft(ground_ft: float | None) -> float:
    """Ground elevation plus terrain clearance, rounded up to 100 ft.

    Falls back to ``BASE_ALTITUDE_FT`` when the elevation is unknown.
    """
    if ground_ft is None:
        return BASE_ALTITUDE_FT
    return math.ceil((ground_ft + TERRAIN_CLEARANCE_FT) / 100) * 100
