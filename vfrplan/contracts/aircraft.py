"""Aircraft profile: weight & balance reference data.

Includes the safe-operating envelope (centrogram) and the per-category
lever arms. Profiles are static reference data, loaded once; the
weight & balance engine works on a copy so custom edits never leak back.
"""

from typing import Any, Self

from pydantic import ConfigDict, Field, model_validator

from vfrplan.contracts.common import PlannerModel
from vfrplan.contracts.enums import EnvelopeBasis, UnitSystem


class EnvelopePoint(PlannerModel):
    """A vertex of the W&B envelope polygon.

    ``x`` is total moment or CG position depending on the profile's
    ``envelope_basis``; ``y`` is total weight. Accepts ``[x, y]`` pairs.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    @model_validator(mode="before")
    @classmethod
    def from_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"envelope point needs exactly 2 values, got {len(data)}")
            return {"x": data[0], "y": data[1]}
        return data

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class AircraftProfile(PlannerModel):
    """Weight & balance data for one aircraft type."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=1, description="Catalog key, e.g. TB9, PA28")
    name: str = Field(..., min_length=1)
    envelope: list[EnvelopePoint] = Field(
        ..., min_length=3, description="Ordered vertices of a closed polygon"
    )
    empty_weight: float = Field(default=0.0, ge=0)
    arms: list[float] = Field(..., min_length=1, description="One lever arm per category")
    categories: list[str] = Field(..., min_length=1)
    fuel_category: int = Field(..., ge=0, description="Index of the fuel-on-board category")
    units: UnitSystem
    fuel_density: float = Field(..., gt=0, description="Weight units per liter of fuel")
    landing_gear_moment: float = Field(
        default=0.0, description="Constant moment added to the last category"
    )
    envelope_basis: EnvelopeBasis

    @model_validator(mode="after")
    def validate_categories(self) -> Self:
        if len(self.arms) != len(self.categories):
            raise ValueError(
                f"Expected {len(self.categories)} arms for "
                f"{len(self.categories)} categories, got {len(self.arms)}"
            )
        if self.fuel_category >= len(self.categories):
            raise ValueError(
                f"fuel_category {self.fuel_category} is beyond the "
                f"{len(self.categories)} categories"
            )
        return self

    @property
    def weight_unit(self) -> str:
        return "kg" if self.units == UnitSystem.METRIC else "lbs"

    @property
    def arm_unit(self) -> str:
        return "m" if self.units == UnitSystem.METRIC else "inch"

    @property
    def x_label(self) -> str:
        if self.envelope_basis == EnvelopeBasis.MOMENT:
            return f"Moment [{self.weight_unit} x {self.arm_unit}]"
        return f"CG position [{self.arm_unit}]"

    @property
    def y_label(self) -> str:
        return f"Mass [{self.weight_unit}]"
