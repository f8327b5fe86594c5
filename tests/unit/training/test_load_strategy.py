"""Tests for load strategies and weight rounding."""

import datetime

import pytest

from app.core.exceptions import MaxNotFoundError, ValidationFailedError
from app.training.load_strategy import FixedWeight, PercentOf, RoundingDirection, parse_load_strategy, round_weight
from app.training.max_lookup import MaxType, MaxValue

USER = 1
LIFT = 7


class FakeLookup:
    def __init__(self, maxes: dict[tuple[int, int, MaxType], float]):
        self.maxes = maxes
        self.calls: list[tuple[int, int, MaxType]] = []

    def get_current_max(self, user_id, lift_id, max_type):
        self.calls.append((user_id, lift_id, max_type))
        value = self.maxes.get((user_id, lift_id, max_type))
        return None if value is None else MaxValue(value, datetime.date(2026, 1, 1))


def _percent(**overrides) -> PercentOf:
    data = {"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 75}
    data.update(overrides)
    return parse_load_strategy(data)


# ======================================================================
# round_weight
# ======================================================================


class TestRoundWeight:
    @pytest.mark.parametrize("direction, expected", [
        (RoundingDirection.NEAREST, 305.0),
        (RoundingDirection.UP, 310.0),
        (RoundingDirection.DOWN, 305.0),
    ])
    def test_directions_on_307_4(self, direction, expected):
        assert round_weight(307.4, 5, direction) == expected

    def test_no_increment_means_no_rounding(self):
        assert round_weight(307.4, None) == 307.4

    def test_nearest_rounds_half_away_from_zero(self):
        assert round_weight(302.5, 5) == 305.0
        assert round_weight(297.5, 5) == 300.0

    def test_exact_multiple_unchanged_in_every_direction(self):
        for direction in RoundingDirection:
            assert round_weight(225.0, 5, direction) == 225.0

    def test_float_noise_does_not_bump_up(self):
        # 100 * 0.7 == 70.00000000000001
        assert round_weight(100 * 0.7, 5, RoundingDirection.UP) == 70.0

    def test_fractional_increment(self):
        assert round_weight(151.1, 2.5) == 150.0
        assert round_weight(151.3, 2.5) == 152.5

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationFailedError):
            round_weight(-1.0, 5)

    def test_non_positive_increment_rejected(self):
        with pytest.raises(ValidationFailedError):
            round_weight(100.0, 0)


# ======================================================================
# PercentOf
# ======================================================================


class TestPercentOf:
    def test_plain_percentage(self):
        lookup = FakeLookup({(USER, LIFT, MaxType.TRAINING_MAX): 300})
        assert _percent().weight(lookup, USER, LIFT) == 225.0

    def test_rounding_applied(self):
        lookup = FakeLookup({(USER, LIFT, MaxType.ONE_RM): 307.4})
        strategy = _percent(referenceType="ONE_RM", percentage=100, roundingIncrement=5, roundingDirection="UP")
        assert strategy.weight(lookup, USER, LIFT) == 310.0

    def test_default_direction_is_nearest(self):
        assert _percent(roundingIncrement=5).rounding_direction == RoundingDirection.NEAREST

    def test_step_percentage_scales_strategy_output(self):
        lookup = FakeLookup({(USER, LIFT, MaxType.TRAINING_MAX): 300})
        strategy = _percent(percentage=100, roundingIncrement=5)
        assert strategy.weight(lookup, USER, LIFT, 75) == 225.0
        assert strategy.weight(lookup, USER, LIFT, 50) == 150.0

    def test_reads_the_referenced_max_type(self):
        lookup = FakeLookup({(USER, LIFT, MaxType.ONE_RM): 400, (USER, LIFT, MaxType.TRAINING_MAX): 360})
        assert _percent(referenceType="ONE_RM", percentage=50).weight(lookup, USER, LIFT) == 200.0
        assert lookup.calls == [(USER, LIFT, MaxType.ONE_RM)]

    def test_missing_max_raises_max_not_found(self):
        with pytest.raises(MaxNotFoundError) as info:
            _percent().weight(FakeLookup({}), USER, LIFT)
        assert info.value.status_code == 422
        assert info.value.lift_id == LIFT


# ======================================================================
# FixedWeight
# ======================================================================


class TestFixedWeight:
    def test_ignores_maxes(self):
        strategy = parse_load_strategy({"type": "FIXED_WEIGHT", "weight": 60})
        assert isinstance(strategy, FixedWeight)
        assert strategy.weight(FakeLookup({}), USER, LIFT) == 60.0

    def test_step_percentage_and_rounding(self):
        strategy = parse_load_strategy({"type": "FIXED_WEIGHT", "weight": 61, "roundingIncrement": 2.5})
        assert strategy.weight(FakeLookup({}), USER, LIFT, 50) == 30.0


# ======================================================================
# Parsing
# ======================================================================


class TestParseLoadStrategy:
    def test_snake_case_accepted(self):
        strategy = parse_load_strategy({"type": "PERCENT_OF", "reference_type": "ONE_RM", "percentage": 90})
        assert strategy.reference_type == MaxType.ONE_RM

    @pytest.mark.parametrize("data", [
        {"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 0},
        {"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": -5},
        {"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 80, "roundingIncrement": 0},
        {"type": "PERCENT_OF", "referenceType": "THREE_RM", "percentage": 80},
        {"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 80, "roundingDirection": "SIDEWAYS"},
        {"type": "RPE_TARGET", "rpe": 8},
        {"referenceType": "TRAINING_MAX", "percentage": 80},
    ])
    def test_invalid_rejected(self, data):
        with pytest.raises(ValidationFailedError):
            parse_load_strategy(data)

    def test_errors_name_the_field(self):
        with pytest.raises(ValidationFailedError) as info:
            parse_load_strategy({"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 0})
        fields = [e.field for e in info.value.errors()]
        assert any(f.startswith("loadStrategy") and "percentage" in f for f in fields)

    def test_already_parsed_passthrough(self):
        strategy = _percent()
        assert parse_load_strategy(strategy) is strategy
