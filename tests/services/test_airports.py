"""Tests for the OurAirports tables, nearby search and runway wind."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from vfrplan.contracts.airport import Runway
from vfrplan.services.airports import (
    AirportDatabase,
    OurAirportsClient,
    best_runway,
    runway_heading,
    runway_wind,
    runway_winds,
)
from vfrplan.services.errors import AirportDataError

AIRPORTS_CSV = """\
"id","ident","type","name","latitude_deg","longitude_deg","elevation_ft","iso_country","municipality"
4383,"LIRU","small_airport","Roma-Urbe Airport",41.9519,12.4989,55,"IT","Rome"
4381,"LIRA","medium_airport","Ciampino–G. B. Pastine International Airport",41.7994,12.5949,427,"IT","Rome"
4382,"LIRF","large_airport","Rome–Fiumicino Leonardo da Vinci International Airport",41.8045,12.2508,13,"IT","Rome"
9001,"IT-0001","heliport","Ospedale Gemelli Heliport",41.9310,12.4290,,"IT","Rome"
4400,"LIML","large_airport","Milano Linate Airport",45.4451,9.2767,353,"IT","Milan"
"""

RUNWAYS_CSV = """\
"id","airport_ref","airport_ident","length_ft","width_ft","surface","lighted","closed","le_ident","he_ident"
1,4383,"LIRU",3609,98,"ASP",1,0,"16","34"
2,4381,"LIRA",7241,148,"ASP",1,0,"15","33"
3,4382,"LIRF",12795,197,"ASP",1,0,"16R","34L"
"""

FREQUENCIES_CSV = """\
"id","airport_ref","airport_ident","type","description","frequency_mhz"
1,4383,"LIRU","TWR","URBE TWR",120.65
2,4383,"LIRU","ATIS","URBE ATIS",
"""

CSV_BY_NAME = {
    "airports.csv": AIRPORTS_CSV,
    "runways.csv": RUNWAYS_CSV,
    "airport-frequencies.csv": FREQUENCIES_CSV,
}


@pytest.fixture
def database():
    return AirportDatabase.from_csv(AIRPORTS_CSV, RUNWAYS_CSV, FREQUENCIES_CSV)


class TestAirportInfo:
    def test_record(self, database):
        info = database.get_airport_info("liru")
        assert info.ident == "LIRU"
        assert info.elevation_ft == 55
        assert info.municipality == "Rome"

    def test_runways_and_frequencies(self, database):
        info = database.get_airport_info("LIRU")
        assert [(r.le_ident, r.he_ident) for r in info.runways] == [("16", "34")]
        assert info.runways[0].length_ft == 3609
        assert info.runways[0].lighted is True
        # The ATIS row has no frequency
        assert [(f.type, f.frequency_mhz) for f in info.frequencies] == [("TWR", 120.65)]

    def test_nearby_included(self, database):
        info = database.get_airport_info("LIRU")
        assert [a.ident for a in info.nearby] == ["LIRA", "LIRF"]

    def test_unknown(self, database):
        assert database.get_airport_info("ZZZZ") is None


class TestFindNearbyAirports:
    def test_closest_first(self, database):
        nearby = database.find_nearby_airports(41.9519, 12.4989)
        assert [a.ident for a in nearby] == ["LIRA", "LIRF"]
        assert nearby[0].distance_nm == pytest.approx(10.1, abs=0.3)
        assert nearby[0].distance_nm < nearby[1].distance_nm

    def test_heliports_excluded(self, database):
        nearby = database.find_nearby_airports(41.93, 12.43, radius_nm=5)
        assert "IT-0001" not in [a.ident for a in nearby]

    def test_radius(self, database):
        nearby = database.find_nearby_airports(41.9519, 12.4989, radius_nm=12)
        assert [a.ident for a in nearby] == ["LIRA"]

    def test_limit(self, database):
        assert len(database.find_nearby_airports(41.9519, 12.4989, limit=1)) == 1


class TestOurAirportsClient:
    async def test_tables_downloaded_once(self):
        requested = []

        def handler(req: httpx.Request) -> httpx.Response:
            name = req.url.path.rsplit("/", 1)[-1]
            requested.append(name)
            return httpx.Response(200, text=CSV_BY_NAME[name])

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            client = OurAirportsClient(http)
            info, nearby = await asyncio.gather(
                client.get_airport_info("LIRU"),
                client.find_nearby_airports(41.8, 12.5),
            )

        assert info.ident == "LIRU"
        assert nearby
        assert sorted(requested) == ["airport-frequencies.csv", "airports.csv", "runways.csv"]

    async def test_download_failure(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(404))
        async with httpx.AsyncClient(transport=transport) as http:
            client = OurAirportsClient(http)
            with pytest.raises(AirportDataError, match="HTTP 404"):
                await client.get_airport_info("LIRU")


class TestRunwayWind:
    @pytest.mark.parametrize(
        "ident, heading",
        [("16", 160), ("34L", 340), ("09C", 90), ("36", 360), ("00", None), ("H1", None), ("", None)],
    )
    def test_runway_heading(self, ident, heading):
        assert runway_heading(ident) == heading

    def test_components(self):
        wind = runway_wind("34", 340, 300, 10)
        assert wind.headwind_kt == 7.7
        # Wind from the left of the landing direction
        assert wind.crosswind_kt == -6.4
        assert wind.crosswind_pct == 64.3

    def test_into_wind_end_per_runway(self):
        runways = [Runway(le_ident="16", he_ident="34"), Runway(le_ident="07", he_ident="25")]
        winds = runway_winds(runways, 300, 10)
        assert [w.ident for w in winds] == ["34", "25"]

    def test_best_runway(self):
        runways = [Runway(le_ident="16", he_ident="34"), Runway(le_ident="07", he_ident="25")]
        best = best_runway(runways, 330, 15)
        assert best.ident == "34"
        assert best.headwind_kt == pytest.approx(14.8, abs=0.1)

    def test_closed_runway_skipped(self):
        runways = [Runway(le_ident="16", he_ident="34", closed=True)]
        assert best_runway(runways, 340, 10) is None

    def test_calm_or_variable_wind(self):
        runways = [Runway(le_ident="16", he_ident="34")]
        assert best_runway(runways, 340, 2) is None
        assert best_runway(runways, None, 10) is None
