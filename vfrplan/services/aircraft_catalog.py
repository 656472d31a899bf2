"""Built-in aircraft catalog.

Envelope vertices, lever arms and empty weights come from the flight
manuals of the club aircraft. TB9/TB10 envelopes are plotted as
(moment [kg x m], mass [kg]); PA28/P68B as (CG position [inch], mass [lbs]).
"""

from __future__ import annotations

from vfrplan.contracts.aircraft import AircraftProfile
from vfrplan.contracts.enums import EnvelopeBasis, UnitSystem
from vfrplan.services.errors import ProfileNotFoundError

AVGAS_KG_PER_LITER = 0.72
AVGAS_LBS_PER_LITER = 1.59

_SOCATA_ENVELOPE = [[600, 500], [1280, 1060], [1100, 1060], [910, 980], [500, 550]]
_SOCATA_CATEGORIES = [
    "AC Empty Weight",
    "Pilot+Copilot",
    "Rear seats",
    "Fuel on Board [AvGas liters]",
    "Luggage rack",
]

_CATALOG: dict[str, AircraftProfile] = {
    profile.code: profile
    for profile in (
        AircraftProfile(
            code="TB9",
            name="Socata TB9 Tampico",
            envelope=_SOCATA_ENVELOPE,
            empty_weight=0,
            arms=[1.006, 1.155, 2.035, 1.075, 2.6],
            categories=_SOCATA_CATEGORIES,
            fuel_category=3,
            units=UnitSystem.METRIC,
            fuel_density=AVGAS_KG_PER_LITER,
            envelope_basis=EnvelopeBasis.MOMENT,
        ),
        AircraftProfile(
            code="TB10",
            name="Socata TB10 Tobago",
            envelope=_SOCATA_ENVELOPE,
            empty_weight=727.37,
            arms=[1.0, 1.155, 2.035, 1.075, 2.6],
            categories=_SOCATA_CATEGORIES,
            fuel_category=3,
            units=UnitSystem.METRIC,
            fuel_density=AVGAS_KG_PER_LITER,
            envelope_basis=EnvelopeBasis.MOMENT,
        ),
        AircraftProfile(
            code="PA28",
            name="Piper PA-28 Warrior",
            envelope=[[85.5, 1400], [85.5, 2250], [90, 2780], [93, 2780], [93, 1400]],
            empty_weight=1824.44,
            arms=[89.48, 80.5, 118.1, 95, 142.9],
            categories=[
                "AC Empty Weight",
                "Pilot+Copilot",
                "Rear seats",
                "Fuel on Board [liters]",
                "Luggage rack",
            ],
            fuel_category=3,
            units=UnitSystem.IMPERIAL,
            fuel_density=AVGAS_LBS_PER_LITER,
            landing_gear_moment=819,
            envelope_basis=EnvelopeBasis.CG_POSITION,
        ),
        AircraftProfile(
            code="P68B",
            name="Partenavia P68B",
            envelope=[[10.2, 2650], [10.2, 3550], [12.8, 4350], [20.6, 4350], [20.6, 2650]],
            empty_weight=2957.57,
            arms=[16.492, -37.4, -5.7, 34.2, 30.3, 60.7],
            categories=[
                "AC Empty Weight",
                "Pilot+Copilot",
                "Passengers Row 1",
                "Passengers Row 2",
                "Fuel on Board [liters]",
                "Luggage",
            ],
            fuel_category=4,
            units=UnitSystem.IMPERIAL,
            fuel_density=AVGAS_LBS_PER_LITER,
            envelope_basis=EnvelopeBasis.CG_POSITION,
        ),
    )
}

DEFAULT_AIRCRAFT = "TB9"


def get_profile(code: str) -> AircraftProfile:
    """Look up a profile by catalog code (case-insensitive)."""
    profile = _CATALOG.get(code.strip().upper())
    if profile is None:
        raise ProfileNotFoundError(code)
    return profile


def list_profiles() -> list[AircraftProfile]:
    """All catalog profiles in catalog order."""
    return list(_CATALOG.values())
