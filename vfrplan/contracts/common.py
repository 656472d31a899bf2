"""Base classes and shared types for planner contracts.

Unit conventions (all contracts and API responses):
- **Distances**: nautical miles (NM) — suffix ``_nm``
- **Speeds**: knots (kt) — suffix ``_kt``
- **Altitudes / elevations**: feet AMSL — suffix ``_ft``
- **Flight times**: minutes — suffix ``_min``
- **Fuel volumes**: liters — suffix ``_liters`` (fuel policy fields are liters)
- **Fuel flow**: liters/hour — suffix ``_lph``
- **Headings/angles**: degrees — suffix ``_deg``
- **Coordinates**: WGS84 decimal degrees

Weight & balance values are expressed in the aircraft's own unit system
(kg / m for metric profiles, lbs / inch for imperial ones).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class PlannerModel(BaseModel):
    """Base model with JSON-friendly serialization.

    - Enums serialize as string values.
    - ``to_json()`` produces a JSON-safe dict using field aliases.
    - ``from_json()`` hydrates from such a dict.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_json(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "PlannerModel":
        """Create model instance from a dict produced by ``to_json()``."""
        return cls.model_validate(data)


class GeoPoint(BaseModel):
    """WGS84 geographic coordinate."""

    latitude: float
    longitude: float

    model_config = ConfigDict(frozen=True)
