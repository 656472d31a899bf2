"""Route calculation: great-circle legs and VFR fuel policy.

Pure functions only — no I/O, no logging, no shared state. All
waypoints must be resolved before ``compute_route`` is called.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from vfrplan.contracts.enums import RadialMode
from vfrplan.contracts.route import FuelPolicy, RouteLeg, RouteResult
from vfrplan.contracts.waypoint import Waypoint
from vfrplan.services.errors import InvalidInputError

EARTH_RADIUS_NM = 3440.065

# Placeholder altitude progression when no elevation data is supplied
BASE_ALTITUDE_FT = 3000
ALTITUDE_STEP_FT = 500

# Fuel policy
HOURS_PER_MINUTE = 0.01666  # truncated 1/60, as on the printed logs
CONTINGENCY_RATIO = 0.05
MIN_CONTINGENCY_LITERS = 5.0
FINAL_RESERVE_MIN = 45


def round1(value: float) -> float:
    """Round half-up to one decimal (``floor(x * 10 + 0.5) / 10``)."""
    return math.floor(value * 10 + 0.5) / 10


def great_circle_distance_nm(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in nautical miles."""
    la1, la2 = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = math.sin(dlat / 2) ** 2 + math.cos(la1) * math.cos(la2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_NM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def initial_bearing_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial great-circle bearing from point 1 to point 2, in [0, 360)."""
    la1, la2 = math.radians(lat1), math.radians(lat2)
    dlon = math.radians(lon2 - lon1)
    y = math.sin(dlon) * math.cos(la2)
    x = math.cos(la1) * math.sin(la2) - math.sin(la1) * math.cos(la2) * math.cos(dlon)
    bearing = (math.degrees(math.atan2(y, x)) + 360) % 360
    # -1e-15 + 360 rounds to exactly 360.0 in floating point
    return 0.0 if bearing >= 360 else bearing


def reciprocal_deg(bearing: float) -> float:
    """Back bearing: ``(bearing + 180) % 360``."""
    return (bearing + 180) % 360


def compute_route(
    waypoints: Sequence[Waypoint],
    cruise_speed_kt: float,
    *,
    radial_mode: RadialMode = RadialMode.RECIPROCAL,
) -> RouteResult:
    """Compute bearing, distance, radial and time for every leg.

    Parameters
    ----------
    waypoints:
        Resolved waypoints, departure first. At least two.
    cruise_speed_kt:
        True airspeed in knots, no wind. Must be > 0.
    radial_mode:
        ``RECIPROCAL`` gives the back bearing of each leg;
        ``TO_ORIGIN`` gives the bearing from the leg destination to the
        route's first waypoint.

    Returns
    -------
    RouteResult with one leg per consecutive pair and summed totals.
    """
    if len(waypoints) < 2:
        raise InvalidInputError(
            f"A route needs at least 2 waypoints, got {len(waypoints)}",
            field="waypoints",
        )
    if not cruise_speed_kt > 0:
        raise InvalidInputError(
            f"Cruise speed must be positive, got {cruise_speed_kt}",
            field="cruise_speed_kt",
        )

    origin = waypoints[0]
    legs: list[RouteLeg] = []
    for i in range(len(waypoints) - 1):
        start, end = waypoints[i], waypoints[i + 1]
        distance = great_circle_distance_nm(
            start.latitude, start.longitude, end.latitude, end.longitude
        )
        bearing = initial_bearing_deg(
            start.latitude, start.longitude, end.latitude, end.longitude
        )
        if radial_mode == RadialMode.TO_ORIGIN:
            radial = initial_bearing_deg(
                end.latitude, end.longitude, origin.latitude, origin.longitude
            )
        else:
            radial = reciprocal_deg(bearing)

        legs.append(
            RouteLeg(
                from_waypoint=start,
                to_waypoint=end,
                distance_nm=distance,
                bearing_deg=bearing,
                radial_deg=radial,
                flight_time_min=distance / cruise_speed_kt * 60,
                altitude_ft=_leg_altitude(end, i),
            )
        )

    return RouteResult(
        legs=legs,
        total_distance_nm=sum(leg.distance_nm for leg in legs),
        total_time_min=sum(leg.flight_time_min for leg in legs),
    )


def _leg_altitude(destination: Waypoint, index: int) -> float:
    """Destination elevation when supplied, else the placeholder progression."""
    if destination.elevation_ft is not None:
        return destination.elevation_ft
    return BASE_ALTITUDE_FT + index * ALTITUDE_STEP_FT


def compute_fuel_policy(
    total_time_min: float,
    consumption_lph: float = 30.0,
) -> FuelPolicy:
    """Trip, contingency (5 %, min 5 L), 45-minute final reserve and total.

    Every figure is rounded half-up to 0.1 L.
    """
    _check_fuel_inputs(total_time_min, consumption_lph)

    trip = round1(total_time_min * HOURS_PER_MINUTE * consumption_lph)
    contingency = round1(max(trip * CONTINGENCY_RATIO, MIN_CONTINGENCY_LITERS))
    reserve = round1(FINAL_RESERVE_MIN / 60 * consumption_lph)
    return FuelPolicy(
        trip_fuel=trip,
        contingency_fuel=contingency,
        reserve_fuel=reserve,
        total_fuel=round1(trip + contingency + reserve),
    )


def compute_alternate_fuel(total_time_min: float, consumption_lph: float = 30.0) -> float:
    """Trip fuel needed to fly the alternate route, rounded to 0.1 L."""
    _check_fuel_inputs(total_time_min, consumption_lph)
    return round1(total_time_min * HOURS_PER_MINUTE * consumption_lph)


def _check_fuel_inputs(total_time_min: float, consumption_lph: float) -> None:
    if not consumption_lph > 0:
        raise InvalidInputError(
            f"Fuel consumption must be positive, got {consumption_lph}",
            field="fuel_consumption_lph",
        )
    if not total_time_min >= 0:
        raise InvalidInputError(
            f"Flight time cannot be negative, got {total_time_min}",
            field="total_time_min",
        )
