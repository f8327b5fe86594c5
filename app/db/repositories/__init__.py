"""Database repositories."""

from app.db.repositories.failure_counter import FailureCounterRepository
from app.db.repositories.lift import LiftRepository
from app.db.repositories.lift_max import LiftMaxRepository
from app.db.repositories.prescription import PrescriptionRepository
from app.db.repositories.program import ProgramRepository
from app.db.repositories.progression import (
    ProgramProgressionRepository,
    ProgressionLogRepository,
    ProgressionRepository,
)
from app.db.repositories.user_program_state import UserProgramStateRepository
from app.db.repositories.workout_session import WorkoutSessionRepository

__all__ = [
    "FailureCounterRepository",
    "LiftRepository",
    "LiftMaxRepository",
    "PrescriptionRepository",
    "ProgramRepository",
    "ProgressionRepository",
    "ProgramProgressionRepository",
    "ProgressionLogRepository",
    "UserProgramStateRepository",
    "WorkoutSessionRepository",
]
