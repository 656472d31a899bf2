"""Weight & balance: moments, centre of gravity and envelope containment.

``load_profile`` builds a working ``WeightBalanceState`` from a static
``AircraftProfile``; ``compute_weight_balance`` recomputes it in full from
the entered weights. No I/O, no logging.

Fuel contract: the fuel category is always entered in liters and
converted with ``profile.fuel_density`` (kg/L for metric aircraft, lbs/L
for imperial ones), whatever the unit system.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from vfrplan.contracts.aircraft import AircraftProfile, EnvelopePoint
from vfrplan.contracts.enums import EnvelopeBasis
from vfrplan.contracts.weight_balance import WeightBalanceResult, WeightBalanceState
from vfrplan.services.errors import InvalidInputError

NumberInput = float | int | str | None


def parse_number(value: NumberInput, field: str, default: float | None = None) -> float:
    """Parse a user-entered number.

    ``None`` and blank strings are *absent* and yield ``default``; anything
    present but not a finite number raises ``InvalidInputError``.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise InvalidInputError(f"{field} is required", field=field)
        return default
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a number, got {value!r}", field=field)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be a number, got {value!r}", field=field) from None
    if not math.isfinite(number):
        raise InvalidInputError(f"{field} must be finite, got {value!r}", field=field)
    return number


def parse_weight(value: NumberInput, field: str = "weight") -> float:
    """Parse a weight entry: absent means 0, negative is rejected."""
    weight = parse_number(value, field, default=0.0)
    if weight < 0:
        raise InvalidInputError(f"{field} cannot be negative, got {weight}", field=field)
    return weight


def load_profile(profile: AircraftProfile) -> WeightBalanceState:
    """Create a fresh working state for ``profile``.

    Arms and envelope are copied so custom edits on the state never touch
    the shared catalog entry.
    """
    size = len(profile.categories)
    weights = [0.0] * size
    if profile.empty_weight > 0:
        weights[0] = profile.empty_weight

    return WeightBalanceState(
        profile_code=profile.code,
        categories=list(profile.categories),
        arms=list(profile.arms),
        envelope=[EnvelopePoint(x=p.x, y=p.y) for p in profile.envelope],
        weights=weights,
        moments=[0.0] * size,
    )


def apply_custom_arms(state: WeightBalanceState, values: Sequence[NumberInput]) -> None:
    """Replace the state's arms with user-edited values.

    Absent entries keep the current arm; non-numeric entries raise.
    """
    if len(values) > len(state.arms):
        raise InvalidInputError(
            f"Expected at most {len(state.arms)} arms, got {len(values)}", field="arms"
        )
    state.arms = [
        parse_number(values[i], f"arms[{i}]", default=arm) if i < len(values) else arm
        for i, arm in enumerate(state.arms)
    ]


def apply_custom_envelope(
    state: WeightBalanceState,
    points: Sequence[EnvelopePoint | Sequence[NumberInput]],
) -> None:
    """Replace the state's envelope polygon with user-edited vertices."""
    if len(points) < 3:
        raise InvalidInputError(
            f"An envelope needs at least 3 points, got {len(points)}", field="envelope"
        )
    envelope: list[EnvelopePoint] = []
    for i, point in enumerate(points):
        if isinstance(point, EnvelopePoint):
            envelope.append(point)
            continue
        if len(point) != 2:
            raise InvalidInputError(
                f"envelope[{i}] needs exactly 2 values, got {len(point)}", field="envelope"
            )
        envelope.append(
            EnvelopePoint(
                x=parse_number(point[0], f"envelope[{i}].x"),
                y=parse_number(point[1], f"envelope[{i}].y"),
            )
        )
    state.envelope = envelope


def compute_weight_balance(
    state: WeightBalanceState,
    input_weights: Sequence[NumberInput],
    profile: AircraftProfile,
) -> WeightBalanceResult:
    """Recompute weights, moments, totals and CG, then test the envelope.

    ``input_weights`` is parallel to the profile categories; missing or
    blank entries count as 0. The fuel entry is in liters. ``state`` is
    updated in place; ``profile`` and ``input_weights`` are not modified.
    """
    size = len(state.categories)
    if len(input_weights) > size:
        raise InvalidInputError(
            f"Expected at most {size} weights for {profile.code}, got {len(input_weights)}",
            field="weights",
        )

    weights: list[float] = []
    for i in range(size):
        raw = input_weights[i] if i < len(input_weights) else None
        weight = parse_weight(raw, f"weights[{i}]")
        if i == profile.fuel_category:
            weight *= profile.fuel_density
        weights.append(weight)
    total_weight = sum(weights)

    moments = [weight * arm for weight, arm in zip(weights, state.arms)]
    # Gear moment rides on the last category, and only on a loaded aircraft
    if total_weight > 0:
        moments[-1] += profile.landing_gear_moment

    total_moment = sum(moments)
    cg = total_moment / total_weight if total_weight > 0 else 0.0

    state.weights = weights
    state.moments = moments
    state.total_weight = total_weight
    state.total_moment = total_moment
    state.center_of_gravity = cg

    point = envelope_point(state, profile)
    return WeightBalanceResult(
        total_weight=total_weight,
        total_moment=total_moment,
        center_of_gravity=cg,
        envelope_point=point,
        within_envelope=is_within_envelope(point.as_tuple(), state.envelope),
    )


def envelope_point(state: WeightBalanceState, profile: AircraftProfile) -> EnvelopePoint:
    """Point to plot/test, in the coordinate basis the profile declares."""
    if profile.envelope_basis == EnvelopeBasis.CG_POSITION:
        return EnvelopePoint(x=state.center_of_gravity, y=state.total_weight)
    return EnvelopePoint(x=state.total_moment, y=state.total_weight)


def is_within_envelope(
    point: tuple[float, float],
    polygon: Sequence[EnvelopePoint | tuple[float, float]],
) -> bool:
    """Ray-casting point-in-polygon test; the polygon is implicitly closed."""
    x, y = point
    vertices = [p.as_tuple() if isinstance(p, EnvelopePoint) else p for p in polygon]
    n = len(vertices)
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = vertices[i]
        xj, yj = vertices[j]
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside
