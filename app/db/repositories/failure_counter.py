"""Failure counter repository."""

import datetime
from typing import Optional

from sqlmodel import Session, select

from app.models.failure_counter import FailureCounter


class FailureCounterRepository:
    """Repository for consecutive-failure counters."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int, lift_id: int, progression_id: int) -> Optional[FailureCounter]:
        statement = select(FailureCounter).where(FailureCounter.user_id == user_id,
                                                 FailureCounter.lift_id == lift_id,
                                                 FailureCounter.progression_id == progression_id, )
        return self.session.exec(statement).first()

    def record_failure(self, user_id: int, lift_id: int, progression_id: int) -> FailureCounter:
        """Bump the streak, creating the counter on first failure."""
        now = datetime.datetime.utcnow()
        counter = self.get(user_id, lift_id, progression_id)
        if counter is None:
            counter = FailureCounter(user_id=user_id, lift_id=lift_id, progression_id=progression_id)
        counter.consecutive_failures += 1
        counter.last_failure_at = now
        counter.updated_at = now
        return self._save(counter)

    def record_success(self, user_id: int, lift_id: int, progression_id: int) -> Optional[FailureCounter]:
        """Reset the streak; nothing to do for a lift that never failed."""
        counter = self.get(user_id, lift_id, progression_id)
        if counter is None:
            return None
        now = datetime.datetime.utcnow()
        counter.consecutive_failures = 0
        counter.last_success_at = now
        counter.updated_at = now
        return self._save(counter)

    def reset(self, counter: FailureCounter) -> FailureCounter:
        counter.consecutive_failures = 0
        counter.updated_at = datetime.datetime.utcnow()
        return self._save(counter)

    def list_for_user(self, user_id: int, lift_id: Optional[int] = None) -> list[FailureCounter]:
        statement = select(FailureCounter).where(FailureCounter.user_id == user_id)
        if lift_id is not None:
            statement = statement.where(FailureCounter.lift_id == lift_id)
        statement = statement.order_by(FailureCounter.lift_id, FailureCounter.progression_id)
        return list(self.session.exec(statement).all())

    def _save(self, counter: FailureCounter) -> FailureCounter:
        self.session.add(counter)
        self.session.commit()
        self.session.refresh(counter)
        return counter
