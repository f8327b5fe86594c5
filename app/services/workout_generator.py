"""
Workout generator.

Builds the full workout for a day of the user's program: pick the day
(explicit week + slug, or the user's current scheduled day), check it is
scheduled in that week, resolve its prescriptions in order and apply the
meet-date taper to every set.
"""

import datetime
from typing import Optional

from sqlmodel import Session

from app.core.exceptions import NotFoundError, ValidationFailedError
from app.db.repositories.prescription import PrescriptionRepository
from app.db.repositories.program import ProgramRepository
from app.db.repositories.user_program_state import UserProgramStateRepository
from app.models.program import Day
from app.models.user_program_state import UserProgramState
from app.schemas.prescription import ResolvedPrescription
from app.schemas.workout import GeneratedWorkout
from app.services.prescription_resolver import PrescriptionResolver
from app.training.meet_date import compute_phase


class WorkoutGenerator:
    """Service generating (never persisting) workouts."""

    def __init__(self, session: Session):
        self.states = UserProgramStateRepository(session)
        self.programs = ProgramRepository(session)
        self.prescriptions = PrescriptionRepository(session)
        self.resolver = PrescriptionResolver(session)

    def generate(self, user_id: int, week_number: Optional[int] = None, day_slug: Optional[str] = None,
                 on_date: Optional[datetime.date] = None, ) -> GeneratedWorkout:
        """Workout at the user's position; ``week_number``/``day_slug`` override it."""
        state = self._enrollment(user_id)
        week = week_number if week_number is not None else state.current_week
        day_index = None if day_slug is not None else (state.current_day_index or 0)
        return self._build(state, week, day_slug, day_index, on_date or datetime.date.today())

    def preview(self, user_id: int, week_number: int, day_slug: str,
                on_date: Optional[datetime.date] = None, ) -> GeneratedWorkout:
        """Any week/day of the enrolled program, for planning ahead."""
        state = self._enrollment(user_id)
        return self._build(state, week_number, day_slug, None, on_date or datetime.date.today())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _enrollment(self, user_id: int) -> UserProgramState:
        state = self.states.get_by_user(user_id)
        if state is None:
            raise NotFoundError("Enrollment", user_id, message="user not enrolled in a program")
        return state

    def _build(self, state: UserProgramState, week_number: int, day_slug: Optional[str], day_index: Optional[int],
               on_date: datetime.date, ) -> GeneratedWorkout:
        program = self.programs.get_by_id(state.program_id)
        if program is None:
            raise NotFoundError("Program", state.program_id)

        week = self.programs.get_week(program.cycle_id, week_number)
        if week is None:
            raise ValidationFailedError("Week not found in cycle", field="weekNumber")

        day = self._pick_day(self.programs.get_scheduled_days(week.id), day_slug, day_index)
        prescriptions = self.prescriptions.list_for_day(day.id)
        if not prescriptions:
            raise NotFoundError("Day", day.id, message="Day has no prescriptions")

        multiplier = compute_phase(state.meet_date, on_date).taper_multiplier
        lookup = self.resolver.new_lookup()
        exercises = [_tapered(self.resolver.resolve_prescription(p, state.user_id, lookup), multiplier)
                     for p in prescriptions]

        return GeneratedWorkout(user_id=state.user_id, program_id=state.program_id,
                                cycle_iteration=state.cycle_iteration, week_number=week_number, day_slug=day.slug,
                                date=on_date, exercises=exercises, )

    @staticmethod
    def _pick_day(days: list[Day], day_slug: Optional[str], day_index: Optional[int]) -> Day:
        if day_slug is not None:
            for day in days:
                if day.slug == day_slug:
                    return day
            raise ValidationFailedError(f"Day '{day_slug}' is not scheduled in this week", field="daySlug")
        index = day_index or 0
        if index >= len(days):
            raise ValidationFailedError("No scheduled day at the current position in this week", field="daySlug")
        return days[index]


def _tapered(exercise: ResolvedPrescription, multiplier: float) -> ResolvedPrescription:
    if multiplier == 1.0:
        return exercise
    for generated in exercise.sets:
        generated.weight = round(generated.weight * multiplier, 4)
    return exercise
