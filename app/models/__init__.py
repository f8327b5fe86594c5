"""SQLModel database models."""

from app.models.lift import Lift
from app.models.program import Cycle, Day, Program, Week, WeekDay
from app.models.prescription import Prescription
from app.models.lift_max import LiftMax
from app.models.user_program_state import UserProgramState
from app.models.progression import ProgramProgression, Progression, ProgressionLog
from app.models.failure_counter import FailureCounter
from app.models.workout_session import LoggedSet, WorkoutSession

__all__ = [
    "Lift",
    "Cycle",
    "Day",
    "Program",
    "Week",
    "WeekDay",
    "Prescription",
    "LiftMax",
    "UserProgramState",
    "Progression",
    "ProgramProgression",
    "ProgressionLog",
    "FailureCounter",
    "WorkoutSession",
    "LoggedSet",
]
