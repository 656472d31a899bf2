"""OpenStreetMap Nominatim geocoding client.

Resolves free-text place names to coordinates (route entry), lists
candidates (autocomplete) and names a map click (reverse geocoding).
"""

from __future__ import annotations

import logging
import os

import httpx
from pydantic import BaseModel

from vfrplan.contracts.common import GeoPoint
from vfrplan.services.errors import GeocodingError, NotFoundError

logger = logging.getLogger(__name__)

BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_USER_AGENT = "VFR Flight Planner App"

# Reverse geocoding: natural features worth naming a waypoint after
_NATURAL_TYPES = {
    "peak", "water", "lake", "dam", "mountain", "hill",
    "bay", "beach", "forest", "valley", "river",
}


class PlaceCandidate(BaseModel):
    """One search hit, as shown in the waypoint autocomplete."""

    name: str
    short_name: str
    latitude: float
    longitude: float


class NominatimClient:
    """Async HTTP client for the Nominatim search and reverse APIs."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        *,
        country_hint: str | None = None,
        user_agent: str | None = None,
    ):
        self._client = http_client or httpx.AsyncClient(timeout=15.0)
        self._country_hint = country_hint or os.environ.get("VFRPLAN_GEOCODE_COUNTRY_HINT")
        self._headers = {
            "User-Agent": user_agent or os.environ.get("VFRPLAN_USER_AGENT", DEFAULT_USER_AGENT)
        }

    async def geocode(self, query: str) -> GeoPoint:
        """Resolve a place name to its best match.

        Raises ``NotFoundError`` when nothing matches and
        ``GeocodingError`` when the service cannot be reached.
        """
        full_query = f"{query}, {self._country_hint}" if self._country_hint else query
        data = await self._get(
            "/search",
            {"format": "json", "q": full_query, "limit": 1, "addressdetails": 1},
            query,
        )
        if not data:
            raise NotFoundError(query)
        try:
            return GeoPoint(latitude=float(data[0]["lat"]), longitude=float(data[0]["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodingError(query, f"malformed response: {exc}") from exc

    async def search(
        self,
        query: str,
        limit: int = 5,
        country_code: str | None = None,
    ) -> list[PlaceCandidate]:
        """List candidates for ``query``, optionally restricted to one country."""
        data = await self._get(
            "/search",
            {"format": "json", "q": query, "limit": limit, "addressdetails": 1},
            query,
        )
        if not isinstance(data, list):
            raise GeocodingError(query, "malformed response: expected a list")
        candidates: list[PlaceCandidate] = []
        for item in data:
            try:
                address = item.get("address") or {}
                if country_code and address.get("country_code") != country_code.lower():
                    continue
                candidates.append(
                    PlaceCandidate(
                        name=item.get("display_name", ""),
                        short_name=_short_name(item),
                        latitude=float(item["lat"]),
                        longitude=float(item["lon"]),
                    )
                )
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise GeocodingError(query, f"malformed response: {exc!r}") from exc
        return candidates

    async def reverse_geocode(self, latitude: float, longitude: float) -> str | None:
        """Name the feature at a map click, or None if nothing suitable is near.

        Priority: city/town, then suburb/village, then hamlet, then a
        point of interest (tourism, aeroway, amenity), then a natural feature.
        """
        query = f"{latitude},{longitude}"
        try:
            data = await self._get(
                "/reverse",
                {
                    "format": "json",
                    "lat": latitude,
                    "lon": longitude,
                    "addressdetails": 1,
                    "extratags": 1,
                    "namedetails": 1,
                    "zoom": 18,
                },
                query,
            )
        except GeocodingError:
            logger.warning("Reverse geocoding failed for %s", query)
            return None

        if not isinstance(data, dict):
            logger.warning("Unexpected reverse geocoding payload for %s", query)
            return None
        address = data.get("address") or {}
        for keys in (("city", "town"), ("suburb", "village"), ("hamlet",)):
            for key in keys:
                if address.get(key):
                    return address[key]

        name = data.get("name")
        extratags = data.get("extratags") or {}
        if name and any(extratags.get(k) for k in ("tourism", "aeroway", "amenity")):
            return name
        if name and data.get("type") in _NATURAL_TYPES:
            return name

        logger.debug("No feature found near %s", query)
        return None

    async def _get(self, path: str, params: dict, query: str):
        try:
            resp = await self._client.get(f"{BASE_URL}{path}", params=params, headers=self._headers)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Nominatim %s returned %s for %r", path, exc.response.status_code, query)
            raise GeocodingError(query, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Nominatim %s request failed for %r: %s", path, query, exc)
            raise GeocodingError(query, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise GeocodingError(query, "invalid JSON response") from exc


def _short_name(item: dict) -> str:
    """'City, Province' from address details, else the first two display-name parts."""
    address = item.get("address") or {}
    parts: list[str] = []
    for key in ("city", "town", "village", "municipality"):
        if address.get(key):
            parts.append(address[key])
            break
    for key in ("province", "state"):
        if address.get(key):
            parts.append(address[key])
            break
    if parts:
        return ", ".join(parts)
    return ",".join((item.get("display_name") or "").split(",")[:2])
