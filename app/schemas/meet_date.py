"""
Meet date and countdown schemas.
"""

import datetime
from typing import Optional

from app.schemas.base import CamelModel


class MeetDateUpdate(CamelModel):
    """``meetDate: null`` clears the meet date."""

    meet_date: Optional[datetime.date] = None


class MeetDateResponse(CamelModel):
    meet_date: Optional[datetime.date]
    days_out: int
    current_phase: str
    weeks_to_meet: int


class CountdownResponse(CamelModel):
    meet_date: Optional[datetime.date]
    days_out: int
    current_phase: str
    phase_week: int
    taper_multiplier: float
