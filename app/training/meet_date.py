"""
Meet-date phase calculator.

Maps the number of days left before a competition to a training phase
and a taper multiplier applied to every generated weight.

======================  ===========  ==========
days out (<=)           phase        multiplier
======================  ===========  ==========
7                       meet_week    0.40
14                      peak         0.60
21                      taper        0.75
28                      taper        0.85
56                      prep_2       1.00
84                      prep_1       1.00
beyond                  base         1.00
no meet date            off_season   1.00
======================  ===========  ==========
"""

import datetime
from dataclasses import dataclass
from typing import Optional

OFF_SEASON = "off_season"

# (max days out, phase), checked in order
_PHASES: list[tuple[int, str]] = [(7, "meet_week"), (14, "peak"), (28, "taper"), (56, "prep_2"), (84, "prep_1"), ]

_TAPER: list[tuple[int, float]] = [(7, 0.4), (14, 0.6), (21, 0.75), (28, 0.85), ]


@dataclass(frozen=True)
class MeetPhase:
    meet_date: Optional[datetime.date]
    days_out: int
    phase: str
    taper_multiplier: float

    @property
    def weeks_to_meet(self) -> int:
        return self.days_out // 7


def phase_for_days_out(days_out: int) -> str:
    for limit, phase in _PHASES:
        if days_out <= limit:
            return phase
    return "base"


def taper_multiplier(days_out: int) -> float:
    for limit, multiplier in _TAPER:
        if days_out <= limit:
            return multiplier
    return 1.0


def compute_phase(meet_date: Optional[datetime.date], today: datetime.date) -> MeetPhase:
    """Phase and taper for ``today``.  A past meet date counts as 0 days out."""
    if meet_date is None:
        return MeetPhase(meet_date=None, days_out=0, phase=OFF_SEASON, taper_multiplier=1.0)
    days_out = max((meet_date - today).days, 0)
    return MeetPhase(meet_date=meet_date, days_out=days_out, phase=phase_for_days_out(days_out),
                     taper_multiplier=taper_multiplier(days_out))
