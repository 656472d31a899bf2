"""Navigation endpoints: route legs and fuel policy from resolved waypoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from vfrplan.contracts.enums import RadialMode
from vfrplan.contracts.flight_plan import default_consumption_lph, default_cruise_speed_kt
from vfrplan.contracts.waypoint import Waypoint
from vfrplan.services.errors import InvalidInputError
from vfrplan.services.navigation import compute_fuel_policy, compute_route

router = APIRouter(prefix="/navigation", tags=["navigation"])


class RouteRequest(BaseModel):
    """Waypoints with coordinates, departure first."""

    waypoints: list[Waypoint]
    cruise_speed_kt: float = Field(default_factory=default_cruise_speed_kt)
    fuel_consumption_lph: float = Field(default_factory=default_consumption_lph)
    radial_mode: RadialMode = RadialMode.RECIPROCAL


class FuelRequest(BaseModel):
    total_time_min: float
    fuel_consumption_lph: float = Field(default_factory=default_consumption_lph)


@router.post("/route")
async def calculate_route(request: RouteRequest) -> dict:
    """Legs, totals and fuel policy for an already-resolved route."""
    try:
        route = compute_route(
            request.waypoints, request.cruise_speed_kt, radial_mode=request.radial_mode
        )
        fuel = compute_fuel_policy(route.total_time_min, request.fuel_consumption_lph)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"route": route.to_json(), "fuel": fuel.to_json()}


@router.post("/fuel")
async def calculate_fuel(request: FuelRequest) -> dict:
    try:
        fuel = compute_fuel_policy(request.total_time_min, request.fuel_consumption_lph)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return fuel.to_json()
