"""Tests for route and fuel endpoints."""

from __future__ import annotations

import pytest

ROMA = {"name": "Roma", "latitude": 41.8, "longitude": 12.5}
MILANO = {"name": "Milano", "latitude": 45.5, "longitude": 9.2}


class TestRouteAPI:
    async def test_route(self, client):
        resp = await client.post(
            "/api/navigation/route",
            json={"waypoints": [ROMA, MILANO], "cruise_speed_kt": 90, "fuel_consumption_lph": 30},
        )
        assert resp.status_code == 200
        data = resp.json()
        leg = data["route"]["legs"][0]
        assert 260 < leg["distance"] < 268
        assert 320 < leg["route"] < 335
        assert leg["from"]["name"] == "Roma"
        assert data["fuel"]["reserveFuel"] == 22.5

    async def test_radial_mode(self, client):
        resp = await client.post(
            "/api/navigation/route",
            json={"waypoints": [ROMA, MILANO], "radial_mode": "to_origin"},
        )
        assert resp.status_code == 200

    async def test_single_waypoint(self, client):
        resp = await client.post("/api/navigation/route", json={"waypoints": [ROMA]})
        assert resp.status_code == 422
        assert "at least 2" in resp.json()["detail"]

    async def test_zero_speed(self, client):
        resp = await client.post(
            "/api/navigation/route", json={"waypoints": [ROMA, MILANO], "cruise_speed_kt": 0}
        )
        assert resp.status_code == 422


class TestFuelAPI:
    async def test_fuel(self, client):
        resp = await client.post(
            "/api/navigation/fuel", json={"total_time_min": 120, "fuel_consumption_lph": 30}
        )
        assert resp.status_code == 200
        assert resp.json() == {
            "tripFuel": 60.0,
            "contingencyFuel": 5.0,
            "reserveFuel": 22.5,
            "totalFuel": 87.5,
        }

    async def test_negative_time(self, client):
        resp = await client.post("/api/navigation/fuel", json={"total_time_min": -5})
        assert resp.status_code == 422
