"""
Generated workout schema.

Never persisted: built on request from the program and the user's maxes.
"""

import datetime

from app.schemas.base import CamelModel
from app.schemas.prescription import ResolvedPrescription


class GeneratedWorkout(CamelModel):
    user_id: int
    program_id: int
    cycle_iteration: int
    week_number: int
    day_slug: str
    date: datetime.date
    exercises: list[ResolvedPrescription]
