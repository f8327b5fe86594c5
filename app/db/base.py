"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.lift import Lift  # noqa: F401
from app.models.program import Cycle, Day, Program, Week, WeekDay  # noqa: F401
from app.models.prescription import Prescription  # noqa: F401
from app.models.lift_max import LiftMax  # noqa: F401
from app.models.user_program_state import UserProgramState  # noqa: F401
from app.models.progression import ProgramProgression, Progression, ProgressionLog  # noqa: F401
from app.models.failure_counter import FailureCounter  # noqa: F401
from app.models.workout_session import LoggedSet, WorkoutSession  # noqa: F401
