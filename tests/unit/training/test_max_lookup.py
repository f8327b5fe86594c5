"""Tests for the memoized max lookup."""

import datetime

from app.training.max_lookup import MaxType, MaxValue, MemoizedMaxLookup


class CountingLookup:
    def __init__(self):
        self.calls = 0

    def get_current_max(self, user_id, lift_id, max_type):
        self.calls += 1
        if lift_id == 99:
            return None
        return MaxValue(100.0 * lift_id, datetime.date(2026, 1, 1))


def test_repeated_key_fetched_once():
    inner = CountingLookup()
    lookup = MemoizedMaxLookup(inner)
    for _ in range(3):
        assert lookup.get_current_max(1, 2, MaxType.TRAINING_MAX).value == 200.0
    assert inner.calls == 1
    assert lookup.fetch_count == 1


def test_distinct_keys_fetched_separately():
    lookup = MemoizedMaxLookup(CountingLookup())
    lookup.get_current_max(1, 2, MaxType.TRAINING_MAX)
    lookup.get_current_max(1, 2, MaxType.ONE_RM)
    lookup.get_current_max(1, 3, MaxType.TRAINING_MAX)
    lookup.get_current_max(2, 2, MaxType.TRAINING_MAX)
    assert lookup.fetch_count == 4


def test_misses_are_cached():
    inner = CountingLookup()
    lookup = MemoizedMaxLookup(inner)
    assert lookup.get_current_max(1, 99, MaxType.TRAINING_MAX) is None
    assert lookup.get_current_max(1, 99, MaxType.TRAINING_MAX) is None
    assert inner.calls == 1


def test_string_and_enum_keys_share_an_entry():
    lookup = MemoizedMaxLookup(CountingLookup())
    lookup.get_current_max(1, 2, "TRAINING_MAX")
    lookup.get_current_max(1, 2, MaxType.TRAINING_MAX)
    assert lookup.fetch_count == 1
