"""
Enrollment API schemas.
"""

import datetime
from typing import Optional

from app.schemas.base import CamelModel


class EnrollRequest(CamelModel):
    program_id: int


class EnrollmentResponse(CamelModel):
    """A user's position in their program."""

    user_id: int
    program_id: int
    cycle_iteration: int
    current_week: int
    current_day_index: Optional[int]
    enrollment_status: str
    cycle_status: str
    week_status: str
    meet_date: Optional[datetime.date]
    cycle_length_weeks: int
    enrolled_at: datetime.datetime
    updated_at: datetime.datetime


class UnenrollResponse(CamelModel):
    cycles_completed: int
    weeks_completed: int
