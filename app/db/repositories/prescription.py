"""
Prescription repository.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.prescription import Prescription
from app.models.program import Week, WeekDay


class PrescriptionRepository:
    """Repository for Prescription lookups."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, prescription_id: int) -> Optional[Prescription]:
        return self.session.get(Prescription, prescription_id)

    def get_many(self, prescription_ids: list[int]) -> dict[int, Prescription]:
        if not prescription_ids:
            return {}
        statement = select(Prescription).where(Prescription.id.in_(prescription_ids))  # type: ignore[union-attr]
        return {p.id: p for p in self.session.exec(statement).all()}

    def list_for_day(self, day_id: int) -> list[Prescription]:
        statement = (select(Prescription).where(Prescription.day_id == day_id).order_by(Prescription.position,
                                                                                          Prescription.id))
        return list(self.session.exec(statement).all())

    def lift_ids_for_cycle(self, cycle_id: int) -> set[int]:
        """Every lift prescribed on any day scheduled in the cycle."""
        statement = (select(Prescription.lift_id).join(WeekDay, WeekDay.day_id == Prescription.day_id).join(
            Week, Week.id == WeekDay.week_id).where(Week.cycle_id == cycle_id).distinct())
        return set(self.session.exec(statement).all())
