"""Waypoint and WaypointEntry — geographic locations for navigation.

A ``Waypoint`` is a resolved location: it always has coordinates and is
immutable once it is part of a computed route.

A ``WaypointEntry`` is what a pilot types or clicks before resolution:
either a free-text place name (geocoded later) or explicit coordinates.
"""

from typing import Self

from pydantic import ConfigDict, Field, field_validator, model_validator

from vfrplan.contracts.common import PlannerModel


class Waypoint(PlannerModel):
    """A resolved geographic location used within a single route."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, max_length=200)
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    elevation_ft: float | None = Field(
        default=None,
        description="Planned altitude / elevation in ft, None when no data was supplied",
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @property
    def short_name(self) -> str:
        """First comma-separated part of the name (geocoder display names are long)."""
        return self.name.split(",")[0].strip()


class WaypointEntry(PlannerModel):
    """An unresolved waypoint as entered by the pilot.

    Either ``name`` alone (free text to geocode) or ``latitude`` and
    ``longitude`` together (map click). A name given with coordinates is
    used as the label and is not geocoded.
    """

    name: str | None = Field(default=None, max_length=200)
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)

    @field_validator("name", mode="before")
    @classmethod
    def blank_name_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @model_validator(mode="after")
    def validate_resolvable(self) -> Self:
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        if self.latitude is None and self.name is None:
            raise ValueError("a waypoint entry needs a name or coordinates")
        return self

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
