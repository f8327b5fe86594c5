"""
Lift max repository.

Also serves as the database-backed ``MaxLookup`` used by load
strategies.

Maxes are ranked by the calendar day they take effect, then by
insertion: a max entered for today supersedes one a progression wrote
earlier today, whatever time of day each was stamped with.
"""

import datetime
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from app.models.lift_max import LiftMax
from app.training.max_lookup import MaxType, MaxValue

_NEWEST_FIRST = (func.date(LiftMax.effective_date).desc(), LiftMax.id.desc())  # type: ignore[union-attr]


class LiftMaxRepository:
    """Repository for LiftMax database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: LiftMax) -> LiftMax:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def get_current(self, user_id: int, lift_id: int, max_type: MaxType,
                    as_of: Optional[datetime.datetime] = None, ) -> Optional[LiftMax]:
        """Latest max effective at ``as_of`` (now by default); the newest row wins within a day."""
        as_of = as_of or datetime.datetime.utcnow()
        statement = (select(LiftMax).where(LiftMax.user_id == user_id, LiftMax.lift_id == lift_id,
                                           LiftMax.type == MaxType(max_type).value,
                                           LiftMax.effective_date <= as_of, ).order_by(*_NEWEST_FIRST))
        return self.session.exec(statement).first()

    def get_current_max(self, user_id: int, lift_id: int, max_type: MaxType) -> Optional[MaxValue]:
        entry = self.get_current(user_id, lift_id, max_type)
        if entry is None:
            return None
        return MaxValue(value=entry.value, effective_date=entry.effective_date.date())

    def lifts_with_max(self, user_id: int, max_type: MaxType) -> set[int]:
        statement = select(LiftMax.lift_id).where(LiftMax.user_id == user_id,
                                                  LiftMax.type == MaxType(max_type).value).distinct()
        return set(self.session.exec(statement).all())

    def list_for_user(self, user_id: int, lift_id: Optional[int] = None) -> list[LiftMax]:
        statement = select(LiftMax).where(LiftMax.user_id == user_id)
        if lift_id is not None:
            statement = statement.where(LiftMax.lift_id == lift_id)
        statement = statement.order_by(*_NEWEST_FIRST)
        return list(self.session.exec(statement).all())
