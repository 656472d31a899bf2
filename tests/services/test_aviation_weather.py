"""Tests for the aviationweather.gov client with mocked HTTP responses."""

from __future__ import annotations

import httpx
import pytest

from vfrplan.contracts.enums import CloudCover, WeatherProduct
from vfrplan.services.aviation_weather import (
    AviationWeatherClient,
    normalize_station_ids,
    parse_metar,
    relative_humidity,
    visibility_meters,
)

SAMPLE_METAR = {
    "icaoId": "LIRF",
    "reportTime": "2025-06-15T08:50:00Z",
    "temp": 24.0,
    "dewp": 14.0,
    "wdir": 250,
    "wspd": 12,
    "wgst": None,
    "visib": "6+",
    "altim": 1016.0,
    "fltCat": "VFR",
    "clouds": [
        {"cover": "FEW", "base": 3000},
        {"cover": "BKN", "base": 6000},
    ],
    "rawOb": "METAR LIRF 150850Z 25012KT 9999 FEW030 BKN060 24/14 Q1016",
}


class TestNormalizeStationIds:
    def test_upper_and_strip(self):
        assert normalize_station_ids(" lirf, liml ,") == "LIRF,LIML"

    def test_empty(self):
        with pytest.raises(ValueError):
            normalize_station_ids(" , ")

    def test_invalid(self):
        with pytest.raises(ValueError, match="invalid station"):
            normalize_station_ids("LIRF,ROME-1")


class TestAviationWeatherClient:
    async def test_fetch_raw(self):
        seen = {}

        def handler(req: httpx.Request) -> httpx.Response:
            seen["url"] = req.url
            return httpx.Response(200, json=[SAMPLE_METAR])

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            client = AviationWeatherClient(http_client=http)
            data = await client.fetch(WeatherProduct.TAF, "lirf,liml")

        assert data == [SAMPLE_METAR]
        assert seen["url"].path == "/api/data/taf"
        assert seen["url"].params["ids"] == "LIRF,LIML"
        assert seen["url"].params["format"] == "json"

    async def test_fetch_upstream_error(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(502))
        async with httpx.AsyncClient(transport=transport) as http:
            client = AviationWeatherClient(http_client=http)
            with pytest.raises(httpx.HTTPStatusError):
                await client.fetch("metar", "LIRF")

    async def test_get_current_metar(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(200, json=[SAMPLE_METAR]))
        async with httpx.AsyncClient(transport=transport) as http:
            client = AviationWeatherClient(http_client=http)
            report = await client.get_current_metar("LIRF")

        assert report is not None
        assert report.station == "LIRF"
        assert report.raw.startswith("METAR LIRF")

    async def test_no_metar_returns_none(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(200, json=[]))
        async with httpx.AsyncClient(transport=transport) as http:
            client = AviationWeatherClient(http_client=http)
            assert await client.get_current_metar("LIRF") is None


class TestParseMetar:
    def test_decoded_fields(self):
        report = parse_metar(SAMPLE_METAR)
        assert report.wind.direction_deg == 250
        assert report.wind.speed_kt == 12
        assert report.wind.gust_kt is None
        assert report.flight_category == "VFR"
        assert report.qnh_hpa == 1016.0
        assert report.report_time.hour == 8
        assert report.relative_humidity_pct == 54

    def test_clouds_and_ceiling(self):
        report = parse_metar(SAMPLE_METAR)
        assert [c.code for c in report.clouds] == ["FEW030", "BKN060"]
        assert report.clouds[0].cover == CloudCover.FEW
        assert report.ceiling_ft == 6000

    def test_no_ceiling_with_scattered_layers(self):
        report = parse_metar({**SAMPLE_METAR, "clouds": [{"cover": "SCT", "base": 4000}]})
        assert report.ceiling_ft is None

    def test_visibility_from_report_text(self):
        # The visib field says "6+" but the report text carries 9999
        assert parse_metar(SAMPLE_METAR).visibility_m == 10000

    def test_variable_wind_has_no_direction(self):
        report = parse_metar({**SAMPLE_METAR, "wdir": "VRB", "wspd": 2})
        assert report.wind.direction_deg is None
        assert report.wind.variable is True

    def test_cavok(self):
        metar = {
            **SAMPLE_METAR,
            "clouds": [{"cover": "CAVOK"}],
            "rawOb": "METAR LIRF 150850Z 25012KT CAVOK 24/14 Q1016",
        }
        report = parse_metar(metar)
        assert report.cavok is True
        assert report.visibility_m == 10000
        assert report.ceiling_ft is None

    def test_unknown_cover_skipped(self):
        report = parse_metar({**SAMPLE_METAR, "clouds": [{"cover": "XYZ", "base": 100}]})
        assert report.clouds == []

    def test_to_json_uses_panel_names(self):
        data = parse_metar(SAMPLE_METAR).to_json()
        assert data["visibility"] == 10000
        assert data["wind"]["direction"] == 250
        assert data["flightCategory"] == "VFR"
        assert data["altimeter"] == 1016.0


class TestVisibilityMeters:
    def test_four_digit_meters(self):
        assert visibility_meters("METAR LIRF 150850Z 25012KT 4000 BR") == 4000

    def test_statute_miles(self):
        assert visibility_meters("METAR KJFK 151251Z 25012KT 10SM FEW250") == 16093

    def test_fraction_of_a_mile(self):
        assert visibility_meters("METAR KJFK 151251Z 00000KT 1/2SM FG") == 804

    def test_falls_back_to_visib_field(self):
        assert visibility_meters("", "6+") == 9656

    def test_nothing_reported(self):
        assert visibility_meters("") is None


class TestRelativeHumidity:
    def test_saturated(self):
        assert relative_humidity(15.0, 15.0) == 100

    def test_missing_dewpoint(self):
        assert relative_humidity(15.0, None) is None
