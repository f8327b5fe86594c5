"""
Lift max service.

Records new maxes (append-only) and reports the current one.
"""

import datetime
from typing import Optional

from sqlmodel import Session

from app.core.exceptions import NotFoundError
from app.db.repositories.lift import LiftRepository
from app.db.repositories.lift_max import LiftMaxRepository
from app.models.lift_max import LiftMax
from app.schemas.lift_max import LiftMaxCreate, LiftMaxResponse
from app.training.max_lookup import MaxType


class LiftMaxService:
    def __init__(self, session: Session):
        self.repository = LiftMaxRepository(session)
        self.lifts = LiftRepository(session)

    def create(self, user_id: int, data: LiftMaxCreate) -> LiftMaxResponse:
        if self.lifts.get_by_id(data.lift_id) is None:
            raise NotFoundError("Lift", data.lift_id)

        effective = datetime.datetime.utcnow()
        if data.effective_date is not None:
            effective = datetime.datetime.combine(data.effective_date, datetime.time.min)

        entry = LiftMax(user_id=user_id, lift_id=data.lift_id, type=data.type.value, value=data.value,
                        effective_date=effective, )
        return LiftMaxResponse.model_validate(self.repository.create(entry))

    def get_current(self, user_id: int, lift_id: int, max_type: MaxType) -> LiftMaxResponse:
        entry = self.repository.get_current(user_id, lift_id, max_type)
        if entry is None:
            raise NotFoundError("Lift max", message=f"no current {max_type.value} max for lift {lift_id}")
        return LiftMaxResponse.model_validate(entry)

    def list_for_user(self, user_id: int, lift_id: Optional[int] = None) -> list[LiftMaxResponse]:
        return [LiftMaxResponse.model_validate(e) for e in self.repository.list_for_user(user_id, lift_id)]
