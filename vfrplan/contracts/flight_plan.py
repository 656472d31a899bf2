"""FlightPlanSession and FlightPlan — one planning request and its result.

A ``FlightPlanSession`` gathers everything a planning run needs (waypoint
entries for the main and alternate routes, cruise speed, fuel flow) so no
component reaches for ambient state. A ``FlightPlan`` is the calculated
answer and is never stored.
"""

import os

from pydantic import Field

from vfrplan.contracts.common import PlannerModel
from vfrplan.contracts.enums import RadialMode
from vfrplan.contracts.route import FuelPolicy, RouteResult
from vfrplan.contracts.waypoint import WaypointEntry

DEFAULT_CRUISE_SPEED_KT = 90.0
DEFAULT_CONSUMPTION_LPH = 30.0


def default_cruise_speed_kt() -> float:
    return float(os.environ.get("VFRPLAN_DEFAULT_CRUISE_SPEED_KT", DEFAULT_CRUISE_SPEED_KT))


def default_consumption_lph() -> float:
    return float(os.environ.get("VFRPLAN_DEFAULT_CONSUMPTION_LPH", DEFAULT_CONSUMPTION_LPH))


class FlightPlanSession(PlannerModel):
    """Inputs of one planning run."""

    waypoints: list[WaypointEntry] = Field(..., description="Main route, departure first")
    alternate_waypoints: list[WaypointEntry] = Field(
        default_factory=list, description="Alternate route, empty when not planned"
    )
    cruise_speed_kt: float = Field(default_factory=default_cruise_speed_kt, gt=0)
    fuel_consumption_lph: float = Field(default_factory=default_consumption_lph, gt=0)
    radial_mode: RadialMode = RadialMode.RECIPROCAL

    @property
    def include_alternate(self) -> bool:
        return bool(self.alternate_waypoints)


class FlightPlan(PlannerModel):
    """Calculated main route, fuel policy and optional alternate."""

    main: RouteResult
    fuel: FuelPolicy
    alternate: RouteResult | None = None
    alternate_fuel_liters: float | None = Field(
        default=None, ge=0, alias="alternateFuel", description="Trip fuel of the alternate route"
    )
    alternate_error: str | None = Field(
        default=None, description="Why the alternate could not be computed or printed"
    )
