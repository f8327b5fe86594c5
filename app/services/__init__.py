"""Business logic services."""

from app.services.enrollment_service import EnrollmentService
from app.services.lift_max_service import LiftMaxService
from app.services.meet_date_service import MeetDateService
from app.services.prescription_resolver import PrescriptionResolver
from app.services.progression_service import ProgressionService
from app.services.workout_generator import WorkoutGenerator
from app.services.workout_session_service import WorkoutSessionService

__all__ = [
    "EnrollmentService",
    "LiftMaxService",
    "MeetDateService",
    "PrescriptionResolver",
    "ProgressionService",
    "WorkoutGenerator",
    "WorkoutSessionService",
]
