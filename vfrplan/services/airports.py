"""Airport lookups on the OurAirports open data tables.

The three CSV tables (airports, runways, frequencies) are downloaded
once per client and indexed in memory. No API key is needed.
"""

from __future__ import annotations

import asyncio
import csv
import io
import logging
import math
import re
from collections import defaultdict
from typing import Iterable

import httpx

from vfrplan.contracts.airport import (
    AirportInfo,
    NearbyAirport,
    RadioFrequency,
    Runway,
    RunwayWind,
)
from vfrplan.services.errors import AirportDataError
from vfrplan.services.navigation import great_circle_distance_nm, round1

logger = logging.getLogger(__name__)

BASE_URL = "https://raw.githubusercontent.com/davidmegginson/ourairports-data/main"
AIRPORTS_CSV = "airports.csv"
RUNWAYS_CSV = "runways.csv"
FREQUENCIES_CSV = "airport-frequencies.csv"

NEARBY_TYPES = {"small_airport", "medium_airport", "large_airport"}
DEFAULT_NEARBY_RADIUS_NM = 27.0  # ~50 km
MAX_NEARBY = 10

# Below this the wind favours no runway
CALM_WIND_KT = 3

_RUNWAY_NUMBER_RE = re.compile(r"^(\d{1,2})")


def _float_or_none(value: str | None) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _int_or_none(value: str | None) -> int | None:
    number = _float_or_none(value)
    return None if number is None else int(number)


def _read_csv(text: str) -> list[dict[str, str]]:
    return list(csv.DictReader(io.StringIO(text)))


class AirportDatabase:
    """In-memory airport tables, indexed by ident and airport reference."""

    def __init__(
        self,
        airports: Iterable[dict[str, str]],
        runways: Iterable[dict[str, str]] = (),
        frequencies: Iterable[dict[str, str]] = (),
    ):
        self._airports: dict[str, dict[str, str]] = {}
        for row in airports:
            self._airports[row["ident"].upper()] = row
        self._runways: dict[str, list[dict[str, str]]] = defaultdict(list)
        for row in runways:
            self._runways[row["airport_ref"]].append(row)
        self._frequencies: dict[str, list[dict[str, str]]] = defaultdict(list)
        for row in frequencies:
            self._frequencies[row["airport_ref"]].append(row)

    @classmethod
    def from_csv(cls, airports_csv: str, runways_csv: str, frequencies_csv: str) -> AirportDatabase:
        return cls(_read_csv(airports_csv), _read_csv(runways_csv), _read_csv(frequencies_csv))

    def __len__(self) -> int:
        return len(self._airports)

    def get_airport_info(self, icao: str) -> AirportInfo | None:
        """Airport record with runways, frequencies and airports within 50 km."""
        row = self._airports.get(icao.strip().upper())
        if row is None:
            return None
        latitude, longitude = float(row["latitude_deg"]), float(row["longitude_deg"])
        return AirportInfo(
            ident=row["ident"],
            name=row.get("name", ""),
            type=row.get("type", ""),
            latitude=latitude,
            longitude=longitude,
            elevation_ft=_int_or_none(row.get("elevation_ft")),
            municipality=row.get("municipality") or "",
            iso_country=row.get("iso_country") or "",
            runways=[
                Runway(
                    le_ident=r.get("le_ident", ""),
                    he_ident=r.get("he_ident", ""),
                    length_ft=_int_or_none(r.get("length_ft")),
                    width_ft=_int_or_none(r.get("width_ft")),
                    surface=r.get("surface") or "",
                    lighted=r.get("lighted") == "1",
                    closed=r.get("closed") == "1",
                )
                for r in self._runways.get(row["id"], [])
            ],
            frequencies=[
                RadioFrequency(
                    type=f.get("type", ""),
                    description=f.get("description") or "",
                    frequency_mhz=_float_or_none(f.get("frequency_mhz")),
                )
                for f in self._frequencies.get(row["id"], [])
                if _float_or_none(f.get("frequency_mhz")) is not None
            ],
            nearby=self.find_nearby_airports(latitude, longitude),
        )

    def find_nearby_airports(
        self,
        latitude: float,
        longitude: float,
        radius_nm: float = DEFAULT_NEARBY_RADIUS_NM,
        limit: int = MAX_NEARBY,
    ) -> list[NearbyAirport]:
        """Airports within ``radius_nm``, closest first.

        Heliports, seaplane bases and closed fields are left out, as is
        anything at distance 0 (the airport the search started from).
        """
        hits: list[NearbyAirport] = []
        for row in self._airports.values():
            if row.get("type") not in NEARBY_TYPES:
                continue
            try:
                lat, lon = float(row["latitude_deg"]), float(row["longitude_deg"])
            except (KeyError, ValueError):
                continue
            distance = great_circle_distance_nm(latitude, longitude, lat, lon)
            if 0 < distance <= radius_nm:
                hits.append(
                    NearbyAirport(
                        ident=row["ident"],
                        name=row.get("name", ""),
                        type=row["type"],
                        latitude=lat,
                        longitude=lon,
                        distance_nm=round1(distance),
                    )
                )
        hits.sort(key=lambda a: a.distance_nm)
        return hits[:limit]


class OurAirportsClient:
    """Downloads the OurAirports tables on first use and answers lookups."""

    def __init__(self, http_client: httpx.AsyncClient | None = None, base_url: str = BASE_URL):
        self._client = http_client or httpx.AsyncClient(timeout=60.0)
        self._base_url = base_url.rstrip("/")
        self._database: AirportDatabase | None = None
        self._lock = asyncio.Lock()

    async def database(self) -> AirportDatabase:
        """The loaded tables; concurrent first callers share one download."""
        async with self._lock:
            if self._database is None:
                airports, runways, frequencies = await asyncio.gather(
                    self._fetch_csv(AIRPORTS_CSV),
                    self._fetch_csv(RUNWAYS_CSV),
                    self._fetch_csv(FREQUENCIES_CSV),
                )
                self._database = AirportDatabase.from_csv(airports, runways, frequencies)
                logger.info("Loaded %d airports from OurAirports", len(self._database))
        return self._database

    async def _fetch_csv(self, name: str) -> str:
        url = f"{self._base_url}/{name}"
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AirportDataError(f"{name}: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise AirportDataError(f"{name}: {e}") from e
        return resp.text

    async def get_airport_info(self, icao: str) -> AirportInfo | None:
        return (await self.database()).get_airport_info(icao)

    async def find_nearby_airports(
        self,
        latitude: float,
        longitude: float,
        radius_nm: float = DEFAULT_NEARBY_RADIUS_NM,
        limit: int = MAX_NEARBY,
    ) -> list[NearbyAirport]:
        return (await self.database()).find_nearby_airports(latitude, longitude, radius_nm, limit)


def runway_heading(ident: str | None) -> int | None:
    """Heading from a runway designator: ``"12L"`` -> 120. None if not 01-36."""
    match = _RUNWAY_NUMBER_RE.match(ident or "")
    if not match:
        return None
    number = int(match.group(1))
    if not 1 <= number <= 36:
        return None
    return number * 10


def runway_wind(ident: str, heading_deg: int, wind_direction_deg: float, wind_speed_kt: float) -> RunwayWind:
    """Head- and crosswind components of the wind on one runway end."""
    diff = math.radians(wind_direction_deg - heading_deg)
    headwind = wind_speed_kt * math.cos(diff)
    crosswind = wind_speed_kt * math.sin(diff)
    pct = abs(crosswind) / wind_speed_kt * 100 if wind_speed_kt > 0 else 0.0
    return RunwayWind(
        ident=ident,
        heading_deg=heading_deg,
        headwind_kt=round1(headwind),
        crosswind_kt=round1(crosswind),
        crosswind_pct=min(100.0, round1(pct)),
    )


def runway_winds(
    runways: Iterable[Runway], wind_direction_deg: float, wind_speed_kt: float
) -> list[RunwayWind]:
    """The more into-wind end of every open runway with readable designators."""
    winds: list[RunwayWind] = []
    for rw in runways:
        if rw.closed:
            continue
        le, he = runway_heading(rw.le_ident), runway_heading(rw.he_ident)
        if le is None or he is None:
            continue
        ends = (
            runway_wind(rw.le_ident, le, wind_direction_deg, wind_speed_kt),
            runway_wind(rw.he_ident, he, wind_direction_deg, wind_speed_kt),
        )
        winds.append(max(ends, key=lambda w: w.headwind_kt))
    return winds


def best_runway(
    runways: Iterable[Runway],
    wind_direction_deg: float | None,
    wind_speed_kt: float | None,
) -> RunwayWind | None:
    """Runway end with the most headwind; None for variable or calm wind."""
    if wind_direction_deg is None or not wind_speed_kt or wind_speed_kt < CALM_WIND_KT:
        return None
    winds = runway_winds(runways, wind_direction_deg, wind_speed_kt)
    if not winds:
        return None
    return max(winds, key=lambda w: w.headwind_kt)
