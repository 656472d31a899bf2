"""Command-line planner.

Usage:
    python -m vfrplan.cli route --waypoint Roma --waypoint 45.5,9.2 --speed 95 --pdf plan.pdf
    python -m vfrplan.cli wb --aircraft PA28 --weight 170 --weight 0 --weight 100 --weight 20
    python -m vfrplan.cli serve --port 8000
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import re
from functools import partial
from pathlib import Path

import httpx
from pydantic import ValidationError

from vfrplan.contracts import (
    FlightPlan,
    FlightPlanSession,
    RadialMode,
    RouteResult,
    WaypointEntry,
)
from vfrplan.contracts.flight_plan import default_consumption_lph, default_cruise_speed_kt
from vfrplan.services.aircraft_catalog import DEFAULT_AIRCRAFT, get_profile
from vfrplan.services.elevation import get_ground_elevations
from vfrplan.services.errors import PlannerError
from vfrplan.services.flight_log import render_flight_log_pdf
from vfrplan.services.geocoding import NominatimClient
from vfrplan.services.navigation import round1
from vfrplan.services.planner import plan_flight
from vfrplan.services.weight_balance import (
    apply_custom_arms,
    compute_weight_balance,
    load_profile,
)

logger = logging.getLogger(__name__)

_COORDS_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


def parse_waypoint(text: str) -> WaypointEntry:
    """``"41.8,12.5"`` is a coordinate pair, anything else a place name."""
    match = _COORDS_RE.match(text)
    if match:
        return WaypointEntry(latitude=float(match.group(1)), longitude=float(match.group(2)))
    return WaypointEntry(name=text)


def _print_route(title: str, route: RouteResult) -> None:
    print(title)
    print(f"  {'FIX':<24}{'Route':>7}{'Alt':>7}{'Dist':>7}{'Radial':>8}{'Time':>7}")
    print(f"  {route.legs[0].from_waypoint.short_name:<24}")
    for leg in route.legs:
        print(
            f"  {leg.to_waypoint.short_name:<24}"
            f"{round(leg.bearing_deg):>7}{round(leg.altitude_ft):>7}"
            f"{round1(leg.distance_nm):>7}{round(leg.radial_deg):>8}"
            f"{round1(leg.flight_time_min):>7}"
        )
    print(
        f"  Total: {round1(route.total_distance_nm)} NM, "
        f"{round1(route.total_time_min)} min"
    )


def _print_plan(plan: FlightPlan) -> None:
    _print_route("Main route", plan.main)
    if plan.alternate is not None:
        _print_route("Alternate", plan.alternate)
    elif plan.alternate_error:
        print(f"Alternate not computed: {plan.alternate_error}")

    print("Fuel [L]")
    print(f"  Trip         {plan.fuel.trip_fuel:>7}")
    if plan.alternate_fuel_liters is not None:
        print(f"  Alternate    {plan.alternate_fuel_liters:>7}")
    print(f"  Contingency  {plan.fuel.contingency_fuel:>7}")
    print(f"  Reserve      {plan.fuel.reserve_fuel:>7}")
    print(f"  Total        {plan.fuel.total_fuel:>7}")


async def _run_route(args: argparse.Namespace) -> None:
    session = FlightPlanSession(
        waypoints=[parse_waypoint(w) for w in args.waypoint],
        alternate_waypoints=[parse_waypoint(w) for w in args.alternate or []],
        cruise_speed_kt=args.speed,
        fuel_consumption_lph=args.consumption,
        radial_mode=args.radial_mode,
    )
    async with httpx.AsyncClient(timeout=15.0) as http:
        elevation_lookup = None
        if not args.no_elevation:
            elevation_lookup = partial(get_ground_elevations, http_client=http)
        plan = await plan_flight(session, NominatimClient(http), elevation_lookup)
    _print_plan(plan)

    if args.pdf:
        args.pdf.write_bytes(render_flight_log_pdf(plan))
        logger.info("Flight log written to %s", args.pdf)


def _run_weight_balance(args: argparse.Namespace) -> None:
    profile = get_profile(args.aircraft)
    state = load_profile(profile)
    if args.arm:
        apply_custom_arms(state, args.arm)
    weights = list(args.weight or [])
    # Profiles with a known empty weight take --weight from the second category on
    if profile.empty_weight > 0:
        weights.insert(0, profile.empty_weight)
    result = compute_weight_balance(state, weights, profile)

    print(f"{profile.name} ({profile.code})")
    for category, weight, moment in zip(state.categories, state.weights, state.moments):
        print(f"  {category:<32}{weight:>10.2f}{moment:>12.2f}")
    print(f"  Total weight       {result.total_weight:.2f} {profile.weight_unit}")
    print(f"  Total moment       {result.total_moment:.2f}")
    print(f"  Centre of gravity  {result.center_of_gravity:.3f} {profile.arm_unit}")
    print(f"  Verdict            {'SAFE' if result.within_envelope else 'NOT SAFE'}")


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    uvicorn.run("vfrplan.api.app:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="VFR flight planner")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    route = sub.add_parser("route", help="Compute a navigation log and fuel plan")
    route.add_argument(
        "--waypoint", action="append", required=True,
        help="Place name or 'lat,lon'; repeat in route order",
    )
    route.add_argument("--alternate", action="append", help="Alternate route waypoint")
    route.add_argument("--speed", type=float, default=default_cruise_speed_kt(), help="Cruise speed [kt]")
    route.add_argument(
        "--consumption", type=float, default=default_consumption_lph(), help="Fuel flow [L/h]"
    )
    route.add_argument(
        "--radial-mode",
        choices=[m.value for m in RadialMode],
        default=RadialMode.RECIPROCAL.value,
    )
    route.add_argument("--no-elevation", action="store_true", help="Skip ground elevation lookup")
    route.add_argument("--pdf", type=Path, help="Write the flight log PDF here")

    wb = sub.add_parser("wb", help="Weight & balance check")
    wb.add_argument("--aircraft", default=DEFAULT_AIRCRAFT, help="Catalog code (TB9, TB10, PA28, P68B)")
    wb.add_argument(
        "--weight", action="append",
        help="Category weight in order, fuel in liters; repeat per category. "
        "The empty weight is filled in from the profile when it has one",
    )
    wb.add_argument("--arm", action="append", help="Custom lever arm per category")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true", help="Restart on code changes")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "route":
            asyncio.run(_run_route(args))
        elif args.command == "serve":
            _run_server(args)
        else:
            _run_weight_balance(args)
    except (PlannerError, ValidationError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
