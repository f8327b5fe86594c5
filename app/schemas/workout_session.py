"""
Workout session and set logging schemas.
"""

import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel


class WorkoutSessionResponse(CamelModel):
    id: int
    user_id: int
    program_id: int
    cycle_iteration: int
    week_number: int
    day_index: int
    day_slug: Optional[str]
    status: str
    started_at: datetime.datetime
    finished_at: Optional[datetime.datetime]


class LoggedSetCreate(CamelModel):
    lift_id: int
    prescription_id: Optional[int] = None
    set_number: int = Field(..., ge=1)
    weight: float = Field(..., ge=0)
    target_reps: int = Field(..., ge=0)
    reps_performed: int = Field(..., ge=0)
    is_amrap: bool = False


class LogSetsRequest(CamelModel):
    sets: list[LoggedSetCreate] = Field(..., min_length=1)


class LoggedSetResponse(CamelModel):
    id: int
    session_id: int
    lift_id: int
    prescription_id: Optional[int]
    set_number: int
    weight: float
    target_reps: int
    reps_performed: int
    is_amrap: bool
