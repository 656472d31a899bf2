"""Aircraft catalog and weight & balance endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from vfrplan.contracts.aircraft import AircraftProfile, EnvelopePoint
from vfrplan.services.aircraft_catalog import get_profile, list_profiles
from vfrplan.services.errors import InvalidInputError, ProfileNotFoundError
from vfrplan.services.weight_balance import (
    apply_custom_arms,
    apply_custom_envelope,
    compute_weight_balance,
    is_within_envelope,
    load_profile,
)

router = APIRouter(tags=["aircraft"])

# Form fields arrive as numbers or raw strings ("" = not filled in)
FormNumber = float | str | None


class WeightBalanceRequest(BaseModel):
    weights: list[FormNumber]
    custom_arms: list[FormNumber] | None = None
    custom_envelope: list[list[FormNumber]] | None = None


class EnvelopeCheckRequest(BaseModel):
    point: EnvelopePoint
    polygon: list[EnvelopePoint]


def _profile_to_dict(profile: AircraftProfile) -> dict:
    data = profile.to_json()
    data["weightUnit"] = profile.weight_unit
    data["armUnit"] = profile.arm_unit
    data["xLabel"] = profile.x_label
    data["yLabel"] = profile.y_label
    return data


def _get_profile_or_404(code: str) -> AircraftProfile:
    try:
        return get_profile(code)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/aircraft")
async def list_aircraft() -> list[dict]:
    return [_profile_to_dict(p) for p in list_profiles()]


@router.get("/aircraft/{code}")
async def get_aircraft(code: str) -> dict:
    return _profile_to_dict(_get_profile_or_404(code))


@router.post("/aircraft/{code}/weight-balance")
async def calculate_weight_balance(code: str, request: WeightBalanceRequest) -> dict:
    """Compute totals, CG and envelope containment.

    ``custom_arms`` / ``custom_envelope`` override the catalog values for
    this calculation only.
    """
    profile = _get_profile_or_404(code)
    state = load_profile(profile)
    try:
        if request.custom_arms is not None:
            apply_custom_arms(state, request.custom_arms)
        if request.custom_envelope is not None:
            apply_custom_envelope(state, request.custom_envelope)
        result = compute_weight_balance(state, request.weights, profile)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"result": result.to_json(), "state": state.to_json()}


@router.post("/envelope/check")
async def check_envelope(request: EnvelopeCheckRequest) -> dict:
    if len(request.polygon) < 3:
        raise HTTPException(status_code=422, detail="An envelope needs at least 3 points")
    return {"within_envelope": is_within_envelope(request.point.as_tuple(), request.polygon)}
