"""NOAA Aviation Weather Center client (METAR / TAF proxy)."""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any

import httpx

from vfrplan.contracts.enums import CloudCover, WeatherProduct
from vfrplan.contracts.weather import CEILING_COVERS, CloudLayer, MetarReport, SurfaceWind

BASE_URL = "https://aviationweather.gov/api/data"

_STATION_RE = re.compile(r"^[A-Z0-9]{3,4}$")
# 9999, four-digit meters, or statute miles (10SM, 1/2SM)
_VISIBILITY_RE = re.compile(r"\s(9999|\d{4}|\d{1,2}SM|\d/\dSM)\s")
_KNOWN_COVERS = {c.value for c in CloudCover}

METERS_PER_SM = 1609.34
CAVOK_VISIBILITY_M = 10000


def normalize_station_ids(ids: str) -> str:
    """Upper-case, comma-separated station list; rejects anything else."""
    stations = [s.strip().upper() for s in ids.split(",") if s.strip()]
    if not stations:
        raise ValueError("at least one station id is required")
    for station in stations:
        if not _STATION_RE.match(station):
            raise ValueError(f"invalid station id: {station!r}")
    return ",".join(stations)


class AviationWeatherClient:
    """Async HTTP client for METAR and TAF data."""

    def __init__(self, http_client: httpx.AsyncClient | None = None):
        self._client = http_client or httpx.AsyncClient(timeout=15.0)

    async def fetch(self, product: WeatherProduct | str, ids: str) -> list[dict[str, Any]]:
        """Raw JSON reports for one or more stations (``"LIRF,LIML"``)."""
        kind = WeatherProduct(product).value
        resp = await self._client.get(
            f"{BASE_URL}/{kind}",
            params={"ids": normalize_station_ids(ids), "format": "json"},
        )
        resp.raise_for_status()
        return resp.json() or []


    async def get_current_metar(self, icao: str) -> MetarReport | None:
        """Most recent METAR for one station, decoded; None when it has none."""
        data = await self.fetch(WeatherProduct.METAR, icao)
        if not data:
            return None
        return parse_metar(data[0])


def parse_metar(entry: dict[str, Any]) -> MetarReport:
    """Decode one aviationweather.gov METAR JSON entry."""
    raw = entry.get("rawOb") or ""
    clouds = [
        CloudLayer(cover=layer["cover"], base_ft=layer.get("base"))
        for layer in entry.get("clouds") or []
        if layer.get("cover") in _KNOWN_COVERS
    ]
    cavok = "CAVOK" in raw.split() or any(c.cover == CloudCover.CAVOK for c in clouds)
    bases = [c.base_ft for c in clouds if c.cover in CEILING_COVERS and c.base_ft is not None]

    wdir = entry.get("wdir")
    temperature = entry.get("temp")
    dewpoint = entry.get("dewp")
    return MetarReport(
        station=(entry.get("icaoId") or "").upper(),
        report_time=_report_time(entry.get("reportTime") or entry.get("obsTime")),
        flight_category=entry.get("fltCat") or entry.get("fltcat"),
        wind=SurfaceWind(
            direction_deg=wdir if isinstance(wdir, int) else None,
            speed_kt=entry.get("wspd"),
            gust_kt=entry.get("wgst") or None,
            variable=wdir == "VRB",
        ),
        visibility_m=CAVOK_VISIBILITY_M if cavok else visibility_meters(raw, entry.get("visib")),
        cavok=cavok,
        clouds=clouds,
        ceiling_ft=min(bases) if bases else None,
        temperature_c=temperature,
        dewpoint_c=dewpoint,
        relative_humidity_pct=relative_humidity(temperature, dewpoint),
        qnh_hpa=entry.get("altim"),
        raw=raw,
    )


def visibility_meters(raw: str, visib: Any = None) -> int | None:
    """Prevailing visibility in meters.

    The report text wins over the ``visib`` field, which carries statute
    miles and turns 9999 into "6+".
    """
    match = _VISIBILITY_RE.search(f" {raw} ")
    if match:
        group = match.group(1)
        if group == "9999":
            return CAVOK_VISIBILITY_M
        if group.endswith("SM"):
            miles = group[:-2]
            if "/" in miles:
                num, den = miles.split("/")
                return int(int(num) / int(den) * METERS_PER_SM)
            return int(int(miles) * METERS_PER_SM)
        return int(group)
    if visib is None:
        return None
    try:
        return int(float(str(visib).rstrip("+")) * METERS_PER_SM)
    except ValueError:
        return None


def relative_humidity(temperature: float | None, dewpoint: float | None) -> int | None:
    """Magnus approximation, clamped to 0-100 %."""
    if temperature is None or dewpoint is None:
        return None
    a, b = 17.27, 237.7
    alpha = (a * dewpoint) / (b + dewpoint) - (a * temperature) / (b + temperature)
    return min(100, max(0, round(100 * math.exp(alpha))))


def _report_time(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
