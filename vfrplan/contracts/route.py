"""RouteLeg, RouteResult, FuelPolicy — computed navigation results.

All models here are **calculated**: they are derived from waypoints and
flight parameters and recomputed whenever an input changes.

The export layer binds to the aliases (``distance``, ``route``,
``radial``, ``flightTime``, ``tripFuel``, ...), so they must stay stable.
"""

from typing import Self

from pydantic import Field, model_validator

from vfrplan.contracts.common import PlannerModel
from vfrplan.contracts.waypoint import Waypoint

_SUM_TOLERANCE = 1e-6


class RouteLeg(PlannerModel):
    """A leg between two consecutive waypoints."""

    from_waypoint: Waypoint = Field(..., alias="from")
    to_waypoint: Waypoint = Field(..., alias="to")
    distance_nm: float = Field(..., ge=0, alias="distance", description="Great-circle distance in NM")
    bearing_deg: float = Field(
        ..., ge=0, lt=360, alias="route", description="Initial true bearing in degrees"
    )
    radial_deg: float = Field(..., ge=0, lt=360, alias="radial")
    flight_time_min: float = Field(..., ge=0, alias="flightTime", description="Estimated time enroute")
    altitude_ft: float = Field(..., alias="altitude")


class RouteResult(PlannerModel):
    """Ordered legs of one route (main or alternate) with totals."""

    legs: list[RouteLeg] = Field(..., min_length=1)
    total_distance_nm: float = Field(..., ge=0, alias="totalDistance")
    total_time_min: float = Field(..., ge=0, alias="totalTime")

    @model_validator(mode="after")
    def validate_totals(self) -> Self:
        distance = sum(leg.distance_nm for leg in self.legs)
        if abs(distance - self.total_distance_nm) > _SUM_TOLERANCE:
            raise ValueError(
                f"total_distance_nm ({self.total_distance_nm}) must equal "
                f"the sum of leg distances ({distance})"
            )
        time_min = sum(leg.flight_time_min for leg in self.legs)
        if abs(time_min - self.total_time_min) > _SUM_TOLERANCE:
            raise ValueError(
                f"total_time_min ({self.total_time_min}) must equal "
                f"the sum of leg times ({time_min})"
            )
        return self

    @property
    def waypoints(self) -> list[Waypoint]:
        """Waypoints in route order, origin first."""
        return [self.legs[0].from_waypoint] + [leg.to_waypoint for leg in self.legs]


class FuelPolicy(PlannerModel):
    """Fuel required for a route, in liters.

    Each figure is rounded to 0.1 L, so ``total_fuel`` may differ from the
    raw sum of the three components by at most half a tenth.
    """

    trip_fuel: float = Field(..., ge=0, alias="tripFuel")
    contingency_fuel: float = Field(..., ge=0, alias="contingencyFuel")
    reserve_fuel: float = Field(..., ge=0, alias="reserveFuel")
    total_fuel: float = Field(..., ge=0, alias="totalFuel")

    @model_validator(mode="after")
    def validate_total(self) -> Self:
        components = self.trip_fuel + self.contingency_fuel + self.reserve_fuel
        if abs(components - self.total_fuel) > 0.05 + _SUM_TOLERANCE:
            raise ValueError(
                f"total_fuel ({self.total_fuel}) must equal trip + contingency "
                f"+ reserve ({components})"
            )
        return self
