"""Tests for set schemes."""

import pytest

from app.core.exceptions import ValidationFailedError
from app.training.set_scheme import FixedSets, RampSets, parse_set_scheme


def _percent_of(base: float):
    """weight_for stub: a plain percentage of ``base``."""
    return lambda percentage: base * percentage / 100


# ======================================================================
# Fixed
# ======================================================================


class TestFixedSets:
    def test_identical_work_sets(self):
        sets = parse_set_scheme({"type": "FIXED", "sets": 5, "reps": 5}).generate(_percent_of(225))
        assert [s.set_number for s in sets] == [1, 2, 3, 4, 5]
        assert {s.weight for s in sets} == {225.0}
        assert all(s.target_reps == 5 and s.is_work_set for s in sets)

    def test_requests_full_load_only(self):
        seen = []
        FixedSets(sets=3, reps=3).generate(lambda pct: seen.append(pct) or 100.0)
        assert seen == [100.0]

    @pytest.mark.parametrize("data", [
        {"type": "FIXED", "sets": 0, "reps": 5},
        {"type": "FIXED", "sets": 3, "reps": 0},
        {"type": "FIXED", "sets": 3},
    ])
    def test_invalid(self, data):
        with pytest.raises(ValidationFailedError):
            parse_set_scheme(data)


# ======================================================================
# Ramp
# ======================================================================


class TestRampSets:
    def _ramp(self, **overrides) -> RampSets:
        data = {"type": "RAMP", "steps": [{"percentage": 50, "reps": 5}, {"percentage": 70, "reps": 5},
                                          {"percentage": 80, "reps": 3}, {"percentage": 100, "reps": 1}]}
        data.update(overrides)
        return parse_set_scheme(data)

    def test_weight_per_step(self):
        sets = self._ramp().generate(_percent_of(300))
        assert [s.weight for s in sets] == [150.0, 210.0, 240.0, 300.0]
        assert [s.target_reps for s in sets] == [5, 5, 3, 1]

    def test_default_threshold_is_80_inclusive(self):
        sets = self._ramp().generate(_percent_of(300))
        assert [s.is_work_set for s in sets] == [False, False, True, True]

    def test_custom_threshold(self):
        sets = self._ramp(workSetThreshold=60).generate(_percent_of(300))
        assert [s.is_work_set for s in sets] == [False, True, True, True]

    def test_zero_threshold_makes_every_set_work(self):
        assert all(s.is_work_set for s in self._ramp(workSetThreshold=0).generate(_percent_of(100)))

    @pytest.mark.parametrize("overrides", [
        {"steps": []},
        {"steps": [{"percentage": 0, "reps": 5}]},
        {"steps": [{"percentage": 50, "reps": 0}]},
        {"workSetThreshold": 101},
        {"workSetThreshold": -1},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ValidationFailedError):
            self._ramp(**overrides)

    def test_unknown_type(self):
        with pytest.raises(ValidationFailedError):
            parse_set_scheme({"type": "PYRAMID", "steps": []})
