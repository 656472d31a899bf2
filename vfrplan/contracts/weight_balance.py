"""Weight & balance working state and computation result.

``WeightBalanceState`` is the per-session mutable copy of a profile's
arms and envelope plus the latest per-category weights and moments. It is
recomputed in full on every calculation.
"""

from pydantic import Field

from vfrplan.contracts.aircraft import EnvelopePoint
from vfrplan.contracts.common import PlannerModel


class WeightBalanceState(PlannerModel):
    """Working copy of a profile plus the latest computed values."""

    profile_code: str
    categories: list[str]
    arms: list[float]
    envelope: list[EnvelopePoint]
    weights: list[float] = Field(..., description="One slot per category, index 0 = empty weight")
    moments: list[float] = Field(..., description="Parallel to weights")
    total_weight: float = 0.0
    total_moment: float = 0.0
    center_of_gravity: float = 0.0


class WeightBalanceResult(PlannerModel):
    """Outcome of one weight & balance computation."""

    total_weight: float = Field(..., alias="totalWeight")
    total_moment: float = Field(..., alias="totalMoment")
    center_of_gravity: float = Field(..., alias="centerOfGravity")
    envelope_point: EnvelopePoint = Field(
        ..., alias="envelopePoint", description="Point tested against the envelope"
    )
    within_envelope: bool = Field(..., alias="withinEnvelope")
