"""Enumerations shared across all planner contracts."""

from enum import Enum


class UnitSystem(str, Enum):
    """Unit system an aircraft's weight & balance data is expressed in."""
    METRIC = "metric"
    IMPERIAL = "imperial"


class EnvelopeBasis(str, Enum):
    """X axis of the W&B envelope polygon.

    The Y axis is always total weight.
    """
    MOMENT = "moment"
    CG_POSITION = "cg_position"


class RadialMode(str, Enum):
    """How the radial column of a leg is derived."""
    RECIPROCAL = "reciprocal"  # (bearing + 180) % 360 of the forward leg
    TO_ORIGIN = "to_origin"  # bearing from the leg destination back to the route origin


class WeatherProduct(str, Enum):
    METAR = "metar"
    TAF = "taf"


class CloudCover(str, Enum):
    CLR = "CLR"
    SKC = "SKC"
    NSC = "NSC"
    CAVOK = "CAVOK"
    FEW = "FEW"
    SCT = "SCT"
    BKN = "BKN"
    OVC = "OVC"
    OVX = "OVX"  # sky obscured, vertical visibility reported
