"""Flight planning: resolve waypoint entries, then compute routes and fuel.

All geocoding and elevation lookups complete before any route is
computed. A failure on the main route aborts the plan; a failure on the
alternate is reported in ``FlightPlan.alternate_error`` and leaves the
main route intact.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

from vfrplan.contracts.common import GeoPoint
from vfrplan.contracts.enums import RadialMode
from vfrplan.contracts.flight_plan import FlightPlan, FlightPlanSession
from vfrplan.contracts.route import RouteResult
from vfrplan.contracts.waypoint import Waypoint, WaypointEntry
from vfrplan.services.elevation import get_ground_elevations, planned_altitude_ft
from vfrplan.services.errors import InvalidInputError, PlannerError
from vfrplan.services.navigation import (
    compute_alternate_fuel,
    compute_fuel_policy,
    compute_route,
)

logger = logging.getLogger(__name__)

ElevationLookup = Callable[[list[tuple[float, float]]], Awaitable[list[float | None]]]


class Geocoder(Protocol):
    async def geocode(self, query: str) -> GeoPoint: ...


async def resolve_waypoints(
    entries: Sequence[WaypointEntry],
    geocoder: Geocoder,
    elevation_lookup: ElevationLookup | None = get_ground_elevations,
) -> list[Waypoint]:
    """Turn entries into waypoints, in order.

    Entries with coordinates are used as-is; the others are geocoded one
    by one and the first failure propagates. When ``elevation_lookup`` is
    given, each waypoint gets a planned altitude derived from the ground
    elevation below it.
    """
    resolved: list[tuple[str, float, float]] = []
    for i, entry in enumerate(entries):
        if entry.has_coordinates:
            name = entry.name or f"WPT{i + 1}"
            resolved.append((name, entry.latitude, entry.longitude))
        else:
            point = await geocoder.geocode(entry.name)
            resolved.append((entry.name, point.latitude, point.longitude))

    altitudes: list[float | None] = [None] * len(resolved)
    if elevation_lookup is not None and resolved:
        grounds = await elevation_lookup([(lat, lon) for _name, lat, lon in resolved])
        altitudes = [planned_altitude_ft(g) for g in grounds]

    return [
        Waypoint(name=name, latitude=lat, longitude=lon, elevation_ft=alt)
        for (name, lat, lon), alt in zip(resolved, altitudes, strict=True)
    ]


def build_flight_plan(
    main: Sequence[Waypoint],
    alternate: Sequence[Waypoint] = (),
    *,
    cruise_speed_kt: float,
    consumption_lph: float,
    radial_mode: RadialMode = RadialMode.RECIPROCAL,
) -> FlightPlan:
    """Compute main route, fuel policy and, if given, the alternate route."""
    route = compute_route(main, cruise_speed_kt, radial_mode=radial_mode)
    fuel = compute_fuel_policy(route.total_time_min, consumption_lph)

    alt_route: RouteResult | None = None
    alt_fuel: float | None = None
    alt_error: str | None = None
    if alternate:
        try:
            alt_route = compute_route(alternate, cruise_speed_kt, radial_mode=radial_mode)
            alt_fuel = compute_alternate_fuel(alt_route.total_time_min, consumption_lph)
        except InvalidInputError as exc:
            logger.warning("Alternate route not computed: %s", exc)
            alt_error = str(exc)

    return FlightPlan(
        main=route,
        fuel=fuel,
        alternate=alt_route,
        alternate_fuel_liters=alt_fuel,
        alternate_error=alt_error,
    )


async def plan_flight(
    session: FlightPlanSession,
    geocoder: Geocoder,
    elevation_lookup: ElevationLookup | None = get_ground_elevations,
) -> FlightPlan:
    """Resolve every entry of ``session`` and build the flight plan."""
    if len(session.waypoints) < 2:
        raise InvalidInputError(
            f"A route needs at least 2 waypoints, got {len(session.waypoints)}",
            field="waypoints",
        )
    main = await resolve_waypoints(session.waypoints, geocoder, elevation_lookup)

    alternate: list[Waypoint] = []
    alt_error: str | None = None
    if session.include_alternate:
        try:
            alternate = await resolve_waypoints(
                session.alternate_waypoints, geocoder, elevation_lookup
            )
        except PlannerError as exc:
            logger.warning("Alternate waypoints not resolved: %s", exc)
            alt_error = str(exc)

    plan = build_flight_plan(
        main,
        alternate,
        cruise_speed_kt=session.cruise_speed_kt,
        consumption_lph=session.fuel_consumption_lph,
        radial_mode=session.radial_mode,
    )
    if alt_error is not None:
        plan.alternate_error = alt_error
    return plan
