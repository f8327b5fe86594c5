"""
Workout session service.

Starts, finishes and abandons the user's workout at their current
program position and records performed sets.  Every logged set is
published as SET_LOGGED, which feeds after-session, AMRAP and
deload-on-failure progressions.
"""

import datetime
import logging
from typing import Optional

from sqlmodel import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.db.repositories.program import ProgramRepository
from app.db.repositories.user_program_state import UserProgramStateRepository
from app.db.repositories.workout_session import WorkoutSessionRepository
from app.models.workout_session import LoggedSet, SessionStatus, WorkoutSession
from app.schemas.workout_session import LoggedSetResponse, LogSetsRequest, WorkoutSessionResponse
from app.training.events import EventBus, EventType, StateEvent

logger = logging.getLogger(__name__)


class WorkoutSessionService:
    def __init__(self, session: Session, bus: EventBus):
        self.repository = WorkoutSessionRepository(session)
        self.states = UserProgramStateRepository(session)
        self.programs = ProgramRepository(session)
        self.bus = bus

    def start(self, user_id: int) -> WorkoutSessionResponse:
        state = self.states.get_by_user(user_id)
        if state is None:
            raise NotFoundError("Enrollment", user_id, message="user not enrolled in a program")
        if self.repository.get_in_progress(user_id) is not None:
            raise ConflictError("workout session already in progress")

        day_index = state.current_day_index or 0
        entry = WorkoutSession(user_id=user_id, program_id=state.program_id, cycle_iteration=state.cycle_iteration,
                               week_number=state.current_week, day_index=day_index,
                               day_slug=self._day_slug(state.program_id, state.current_week, day_index), )
        entry = self.repository.create(entry)
        logger.info("User %s started session %s (week %s, day %s)", user_id, entry.id, entry.week_number,
                    entry.day_slug)

        self._publish(entry, EventType.WORKOUT_STARTED)
        return WorkoutSessionResponse.model_validate(entry)

    def get_current(self, user_id: int) -> WorkoutSessionResponse:
        entry = self.repository.get_in_progress(user_id)
        if entry is None:
            raise NotFoundError("Workout session", message="no workout session in progress")
        return WorkoutSessionResponse.model_validate(entry)

    def finish(self, user_id: int, session_id: int) -> WorkoutSessionResponse:
        entry = self._get_in_progress(user_id, session_id, "finish")
        entry.status = SessionStatus.COMPLETED.value
        entry.finished_at = datetime.datetime.utcnow()

        state = self.states.get_by_user(user_id)
        if state is not None and state.program_id == entry.program_id \
                and state.cycle_iteration == entry.cycle_iteration and state.current_week == entry.week_number:
            state.current_day_index = entry.day_index + 1
            state.updated_at = entry.finished_at
            self.states.session.add(state)
        entry = self.repository.update(entry)

        lifts = sorted({s.lift_id for s in self.repository.list_sets(entry.id)})
        self._publish(entry, EventType.WORKOUT_COMPLETED, liftsPerformed=lifts)
        return WorkoutSessionResponse.model_validate(entry)

    def abandon(self, user_id: int, session_id: int) -> WorkoutSessionResponse:
        entry = self._get_in_progress(user_id, session_id, "abandon")
        entry.status = SessionStatus.ABANDONED.value
        entry.finished_at = datetime.datetime.utcnow()
        entry = self.repository.update(entry)

        self._publish(entry, EventType.WORKOUT_ABANDONED)
        return WorkoutSessionResponse.model_validate(entry)

    def log_sets(self, user_id: int, session_id: int, data: LogSetsRequest) -> list[LoggedSetResponse]:
        entry = self._get_in_progress(user_id, session_id, "log sets to")
        sets = [LoggedSet(session_id=entry.id, user_id=user_id, lift_id=s.lift_id,
                          prescription_id=s.prescription_id, set_number=s.set_number, weight=s.weight,
                          target_reps=s.target_reps, reps_performed=s.reps_performed, is_amrap=s.is_amrap, )
                for s in data.sets]
        sets = self.repository.add_sets(sets)

        for logged in sets:
            self._publish(entry, EventType.SET_LOGGED, loggedSetId=logged.id, liftId=logged.lift_id,
                          setNumber=logged.set_number, weight=logged.weight, targetReps=logged.target_reps,
                          repsPerformed=logged.reps_performed, isAmrap=logged.is_amrap, )
        return [LoggedSetResponse.model_validate(s) for s in sets]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_in_progress(self, user_id: int, session_id: int, action: str) -> WorkoutSession:
        entry = self.repository.get_by_id(session_id)
        if entry is None or entry.user_id != user_id:
            raise NotFoundError("Workout session", session_id)
        if entry.status != SessionStatus.IN_PROGRESS.value:
            raise ConflictError(f"cannot {action} a session that is {entry.status.lower()}")
        return entry

    def _day_slug(self, program_id: int, week_number: int, day_index: int) -> Optional[str]:
        program = self.programs.get_by_id(program_id)
        if program is None:
            return None
        week = self.programs.get_week(program.cycle_id, week_number)
        if week is None:
            return None
        days = self.programs.get_scheduled_days(week.id)
        return days[day_index].slug if day_index < len(days) else None

    def _publish(self, entry: WorkoutSession, event_type: EventType, **extra) -> None:
        payload = {
            "sessionId": entry.id,
            "cycleIteration": entry.cycle_iteration,
            "weekNumber": entry.week_number,
            "daySlug": entry.day_slug,
            **extra,
        }
        self.bus.publish_async(StateEvent(type=event_type, user_id=entry.user_id, program_id=entry.program_id,
                                          payload=payload))
