"""
Current-max lookup.

A load strategy never queries the database itself: it asks a
:class:`MaxLookup` for the user's current max.  Resolution code wraps the
repository-backed lookup in a :class:`MemoizedMaxLookup` scoped to one
call, so a batch touching the same lift many times fetches it once.
"""

import datetime
import enum
from dataclasses import dataclass
from typing import Optional, Protocol


class MaxType(str, enum.Enum):
    ONE_RM = "ONE_RM"
    TRAINING_MAX = "TRAINING_MAX"


@dataclass(frozen=True)
class MaxValue:
    value: float
    effective_date: datetime.date


class MaxLookup(Protocol):
    def get_current_max(self, user_id: int, lift_id: int, max_type: MaxType) -> Optional[MaxValue]:
        ...


class MemoizedMaxLookup:
    """Per-call cache keyed by ``(user_id, lift_id, max_type)``.

    Misses are cached too, so a lift without history is queried once per
    batch.  Instances must not outlive the call that created them: a
    shared instance would serve stale maxes after a progression writes a
    new one.
    """

    def __init__(self, inner: MaxLookup):
        self._inner = inner
        self._cache: dict[tuple[int, int, MaxType], Optional[MaxValue]] = {}
        self.fetch_count = 0

    def get_current_max(self, user_id: int, lift_id: int, max_type: MaxType) -> Optional[MaxValue]:
        key = (user_id, lift_id, MaxType(max_type))
        if key not in self._cache:
            self.fetch_count += 1
            self._cache[key] = self._inner.get_current_max(user_id, lift_id, key[2])
        return self._cache[key]
