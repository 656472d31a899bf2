"""Flight plan endpoints: resolve waypoints, plan, and export the flight log."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from vfrplan.api.deps import get_elevation_lookup, get_geocoder
from vfrplan.contracts.flight_plan import FlightPlan, FlightPlanSession
from vfrplan.services.errors import GeocodingError, InvalidInputError, NotFoundError
from vfrplan.services.flight_log import build_flight_log, render_flight_log_pdf
from vfrplan.services.geocoding import NominatimClient
from vfrplan.services.planner import ElevationLookup, plan_flight

router = APIRouter(prefix="/flight-plan", tags=["flight-plan"])


async def _plan(
    session: FlightPlanSession,
    geocoder: NominatimClient,
    elevation_lookup: ElevationLookup,
) -> FlightPlan:
    try:
        return await plan_flight(session, geocoder, elevation_lookup)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except GeocodingError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("")
async def create_flight_plan(
    session: FlightPlanSession,
    geocoder: NominatimClient = Depends(get_geocoder),
    elevation_lookup: ElevationLookup = Depends(get_elevation_lookup),
) -> dict:
    """Plan the flight and return it with the flight-log template cells."""
    plan = await _plan(session, geocoder, elevation_lookup)
    try:
        log = build_flight_log(plan)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if log.alternate_error and plan.alternate_error is None:
        plan.alternate_error = log.alternate_error
    return {
        "plan": plan.to_json(),
        "flightLog": log.model_dump(mode="json", by_alias=True),
    }


@router.post("/pdf")
async def export_flight_plan_pdf(
    session: FlightPlanSession,
    geocoder: NominatimClient = Depends(get_geocoder),
    elevation_lookup: ElevationLookup = Depends(get_elevation_lookup),
) -> Response:
    plan = await _plan(session, geocoder, elevation_lookup)
    try:
        pdf = render_flight_log_pdf(plan)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="FlightPlan.pdf"'},
    )
