"""Tests for AircraftProfile and EnvelopePoint contracts."""

import pytest

from vfrplan.contracts.aircraft import AircraftProfile, EnvelopePoint
from vfrplan.contracts.enums import EnvelopeBasis, UnitSystem


def _profile(**overrides) -> AircraftProfile:
    data = {
        "code": "TEST",
        "name": "Test aircraft",
        "envelope": [[0, 0], [10, 0], [10, 10], [0, 10]],
        "arms": [1.0, 2.0, 3.0],
        "categories": ["Empty", "Pilot", "Fuel"],
        "fuel_category": 2,
        "units": UnitSystem.METRIC,
        "fuel_density": 0.72,
        "envelope_basis": EnvelopeBasis.MOMENT,
    }
    data.update(overrides)
    return AircraftProfile(**data)


class TestEnvelopePoint:
    def test_from_pair(self):
        point = EnvelopePoint.model_validate([600, 500])
        assert point.as_tuple() == (600, 500)

    def test_from_dict(self):
        point = EnvelopePoint.model_validate({"x": 1.5, "y": 2.5})
        assert point.x == 1.5

    def test_wrong_pair_length(self):
        with pytest.raises(Exception):
            EnvelopePoint.model_validate([1, 2, 3])


class TestAircraftProfile:
    def test_valid(self):
        profile = _profile()
        assert len(profile.envelope) == 4
        assert profile.envelope[1] == EnvelopePoint(x=10, y=0)

    def test_arms_must_match_categories(self):
        with pytest.raises(Exception, match="arms"):
            _profile(arms=[1.0, 2.0])

    def test_fuel_category_in_range(self):
        with pytest.raises(Exception, match="fuel_category"):
            _profile(fuel_category=3)

    def test_envelope_needs_three_points(self):
        with pytest.raises(Exception):
            _profile(envelope=[[0, 0], [1, 1]])

    def test_fuel_density_positive(self):
        with pytest.raises(Exception):
            _profile(fuel_density=0)

    def test_metric_labels(self):
        profile = _profile()
        assert profile.weight_unit == "kg"
        assert profile.x_label == "Moment [kg x m]"
        assert profile.y_label == "Mass [kg]"

    def test_imperial_cg_labels(self):
        profile = _profile(units=UnitSystem.IMPERIAL, envelope_basis=EnvelopeBasis.CG_POSITION)
        assert profile.weight_unit == "lbs"
        assert profile.x_label == "CG position [inch]"

    def test_enum_as_string(self):
        data = _profile().to_json()
        assert data["units"] == "metric"
        assert data["envelope_basis"] == "moment"
