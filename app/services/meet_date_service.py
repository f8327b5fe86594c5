"""
Meet date service.

Stores the user's competition date and reports the countdown phase.
"""

import datetime
import logging
from typing import Optional

from sqlmodel import Session

from app.core.exceptions import NotFoundError, ValidationFailedError
from app.db.repositories.user_program_state import UserProgramStateRepository
from app.models.user_program_state import UserProgramState
from app.schemas.meet_date import CountdownResponse, MeetDateResponse
from app.training.meet_date import compute_phase

logger = logging.getLogger(__name__)


class MeetDateService:
    def __init__(self, session: Session):
        self.states = UserProgramStateRepository(session)

    def set_meet_date(self, user_id: int, meet_date: Optional[datetime.date],
                      today: Optional[datetime.date] = None, ) -> MeetDateResponse:
        today = today or datetime.date.today()
        if meet_date is not None and meet_date < today:
            raise ValidationFailedError("meet date cannot be in the past", field="meetDate")

        state = self._enrollment(user_id)
        state.meet_date = meet_date
        state.updated_at = datetime.datetime.utcnow()
        state = self.states.update(state)
        logger.info("User %s meet date set to %s", user_id, meet_date)

        phase = compute_phase(state.meet_date, today)
        return MeetDateResponse(meet_date=state.meet_date, days_out=phase.days_out, current_phase=phase.phase,
                                weeks_to_meet=phase.weeks_to_meet, )

    def countdown(self, user_id: int, today: Optional[datetime.date] = None) -> CountdownResponse:
        state = self._enrollment(user_id)
        phase = compute_phase(state.meet_date, today or datetime.date.today())
        return CountdownResponse(meet_date=state.meet_date, days_out=phase.days_out, current_phase=phase.phase,
                                 phase_week=state.current_week, taper_multiplier=phase.taper_multiplier, )

    def _enrollment(self, user_id: int) -> UserProgramState:
        state = self.states.get_by_user(user_id)
        if state is None:
            raise NotFoundError("Enrollment", user_id, message="user not enrolled in a program")
        return state
