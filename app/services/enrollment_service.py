"""
Enrollment service.

Drives the enrollment state machine against the database and publishes
the resulting events once each change is committed.
"""

import datetime
import logging
from sqlmodel import Session

from app.core.exceptions import NotFoundError
from app.db.repositories.program import ProgramRepository
from app.db.repositories.user_program_state import UserProgramStateRepository
from app.models.program import Cycle, Program
from app.models.user_program_state import UserProgramState
from app.schemas.enrollment import EnrollmentResponse, UnenrollResponse
from app.training import state_machine
from app.training.events import EventBus, EventType, StateEvent
from app.training.state_machine import PendingEvent

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Service for enrollment transitions."""

    def __init__(self, session: Session, bus: EventBus):
        self.states = UserProgramStateRepository(session)
        self.programs = ProgramRepository(session)
        self.bus = bus

    def enroll(self, user_id: int, program_id: int) -> EnrollmentResponse:
        """Enroll in ``program_id``, replacing any current enrollment."""
        program = self.programs.get_by_id(program_id)
        if program is None:
            raise NotFoundError("Program", program_id)
        cycle = self._cycle(program)

        state = UserProgramState(user_id=user_id, program_id=program_id)
        state_machine.reset_position(state)
        state = self.states.replace(state)
        logger.info("User %s enrolled in program %s", user_id, program_id)

        self._publish(state, [(EventType.ENROLLED, {"enrolledAt": state.enrolled_at.isoformat()})])
        return self._to_response(state, cycle)

    def get(self, user_id: int) -> EnrollmentResponse:
        state, cycle = self._load(user_id)
        return self._to_response(state, cycle)

    def advance_week(self, user_id: int) -> EnrollmentResponse:
        state, cycle = self._load(user_id)
        events = state_machine.advance_week(state, cycle.length_weeks)
        state = self._save(state)
        logger.info("User %s advanced to week %s (cycle %s, %s)", user_id, state.current_week,
                    state.cycle_iteration, state.enrollment_status)

        self._publish(state, events)
        return self._to_response(state, cycle)

    def next_cycle(self, user_id: int) -> EnrollmentResponse:
        state, cycle = self._load(user_id)
        events = state_machine.next_cycle(state)
        state = self._save(state)
        logger.info("User %s started cycle %s", user_id, state.cycle_iteration)

        self._publish(state, events)
        return self._to_response(state, cycle)

    def unenroll(self, user_id: int) -> UnenrollResponse:
        state, cycle = self._load(user_id)
        snapshot = state_machine.completion_snapshot(state, cycle.length_weeks)
        user_id, program_id = state.user_id, state.program_id

        self.states.delete(state)
        logger.info("User %s left program %s after %s cycles", user_id, program_id, snapshot.cycles_completed)

        self.bus.publish_async(StateEvent(type=EventType.QUIT, user_id=user_id, program_id=program_id, payload={
            "cyclesCompleted": snapshot.cycles_completed,
            "weeksCompleted": snapshot.weeks_completed,
        }))
        return UnenrollResponse(cycles_completed=snapshot.cycles_completed,
                                weeks_completed=snapshot.weeks_completed)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load(self, user_id: int) -> tuple[UserProgramState, Cycle]:
        state = self.states.get_by_user(user_id)
        if state is None:
            raise NotFoundError("Enrollment", user_id, message="user not enrolled in a program")
        program = self.programs.get_by_id(state.program_id)
        if program is None:
            raise NotFoundError("Program", state.program_id)
        return state, self._cycle(program)

    def _cycle(self, program: Program) -> Cycle:
        cycle = self.programs.get_cycle(program.cycle_id)
        if cycle is None:
            raise NotFoundError("Cycle", program.cycle_id)
        return cycle

    def _save(self, state: UserProgramState) -> UserProgramState:
        state.updated_at = datetime.datetime.utcnow()
        return self.states.update(state)

    def _publish(self, state: UserProgramState, events: list[PendingEvent]) -> None:
        for event_type, payload in events:
            self.bus.publish_async(StateEvent(type=event_type, user_id=state.user_id, program_id=state.program_id,
                                              payload=payload))

    @staticmethod
    def _to_response(state: UserProgramState, cycle: Cycle) -> EnrollmentResponse:
        return EnrollmentResponse(user_id=state.user_id, program_id=state.program_id,
                                  cycle_iteration=state.cycle_iteration, current_week=state.current_week,
                                  current_day_index=state.current_day_index,
                                  enrollment_status=state.enrollment_status,
                                  cycle_status=state.cycle_status, week_status=state.week_status,
                                  meet_date=state.meet_date, cycle_length_weeks=cycle.length_weeks,
                                  enrolled_at=state.enrolled_at, updated_at=state.updated_at, )
