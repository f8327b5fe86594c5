"""
Lift repository.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.lift import Lift


class LiftRepository:
    """Repository for Lift lookups."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, lift: Lift) -> Lift:
        self.session.add(lift)
        self.session.commit()
        self.session.refresh(lift)
        return lift

    def get_by_id(self, lift_id: int) -> Optional[Lift]:
        return self.session.get(Lift, lift_id)

    def get_many(self, lift_ids: set[int]) -> dict[int, Lift]:
        if not lift_ids:
            return {}
        statement = select(Lift).where(Lift.id.in_(lift_ids))  # type: ignore[union-attr]
        return {lift.id: lift for lift in self.session.exec(statement).all()}
