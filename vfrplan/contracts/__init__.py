"""Planner data contracts — Pydantic v2 models for VFR flight planning.

Reference data (static, loaded once)
------------------------------------
- ``AircraftProfile`` / ``EnvelopePoint`` — the aircraft catalog

Inputs
------
- ``WaypointEntry`` — a place name or a map click, before geocoding
- ``FlightPlanSession`` — one planning request (routes, speed, fuel flow)

Calculated (never persisted)
----------------------------
- ``Waypoint`` — resolved location, immutable once part of a route
- ``RouteLeg`` / ``RouteResult`` — distance, bearing, radial, ETE per leg
- ``FuelPolicy`` — trip, contingency, reserve and total fuel
- ``FlightPlan`` — main route + fuel + optional alternate
- ``WeightBalanceState`` / ``WeightBalanceResult`` — W&B working copy and verdict
- ``MetarReport`` — decoded METAR from the weather proxy
- ``AirportInfo`` / ``Runway`` / ``RadioFrequency`` — OurAirports reference data
"""

from vfrplan.contracts.enums import (
    CloudCover,
    EnvelopeBasis,
    RadialMode,
    UnitSystem,
    WeatherProduct,
)
from vfrplan.contracts.common import GeoPoint, PlannerModel
from vfrplan.contracts.waypoint import Waypoint, WaypointEntry
from vfrplan.contracts.route import FuelPolicy, RouteLeg, RouteResult
from vfrplan.contracts.aircraft import AircraftProfile, EnvelopePoint
from vfrplan.contracts.weight_balance import WeightBalanceResult, WeightBalanceState
from vfrplan.contracts.flight_plan import FlightPlan, FlightPlanSession
from vfrplan.contracts.weather import CloudLayer, MetarReport, SurfaceWind
from vfrplan.contracts.airport import AirportInfo, NearbyAirport, RadioFrequency, Runway, RunwayWind

__all__ = [
    # Enums
    "CloudCover",
    "EnvelopeBasis",
    "RadialMode",
    "UnitSystem",
    "WeatherProduct",
    # Common
    "GeoPoint",
    "PlannerModel",
    # Domain models
    "Waypoint",
    "WaypointEntry",
    "FuelPolicy",
    "RouteLeg",
    "RouteResult",
    "AircraftProfile",
    "EnvelopePoint",
    "WeightBalanceResult",
    "WeightBalanceState",
    "FlightPlan",
    "FlightPlanSession",
    "CloudLayer",
    "MetarReport",
    "SurfaceWind",
    "AirportInfo",
    "NearbyAirport",
    "RadioFrequency",
    "Runway",
    "RunwayWind",
]
