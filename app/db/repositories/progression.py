"""
Progression repositories.

:meth:`ProgressionLogRepository.record_application` is the only place a
progression writes: the new max and its log row share one commit.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.lift_max import LiftMax
from app.models.progression import ProgramProgression, Progression, ProgressionLog


class ProgressionRepository:
    """Repository for Progression rules."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, progression: Progression) -> Progression:
        self.session.add(progression)
        self.session.commit()
        self.session.refresh(progression)
        return progression

    def get_by_id(self, progression_id: int) -> Optional[Progression]:
        return self.session.get(Progression, progression_id)

    def get_many(self, progression_ids: set[int]) -> dict[int, Progression]:
        if not progression_ids:
            return {}
        statement = select(Progression).where(Progression.id.in_(progression_ids))  # type: ignore[union-attr]
        return {p.id: p for p in self.session.exec(statement).all()}


class ProgramProgressionRepository:
    """Repository for program-level progression bindings."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, config: ProgramProgression) -> ProgramProgression:
        self.session.add(config)
        self.session.commit()
        self.session.refresh(config)
        return config

    def list_enabled(self, program_id: int, progression_id: Optional[int] = None) -> list[ProgramProgression]:
        """Enabled configs of a program, ascending priority."""
        statement = select(ProgramProgression).where(ProgramProgression.program_id == program_id,
                                                     ProgramProgression.enabled == True,  # noqa: E712
                                                     )
        if progression_id is not None:
            statement = statement.where(ProgramProgression.progression_id == progression_id)
        statement = statement.order_by(ProgramProgression.priority, ProgramProgression.id)
        return list(self.session.exec(statement).all())


class ProgressionLogRepository:
    """Repository for the progression audit log."""

    def __init__(self, session: Session):
        self.session = session

    def exists(self, user_id: int, progression_id: int, lift_id: int, idempotency_key: str) -> bool:
        statement = select(ProgressionLog.id).where(ProgressionLog.user_id == user_id,
                                                    ProgressionLog.progression_id == progression_id,
                                                    ProgressionLog.lift_id == lift_id,
                                                    ProgressionLog.idempotency_key == idempotency_key, )
        return self.session.exec(statement).first() is not None

    def record_application(self, lift_max: LiftMax, log: ProgressionLog) -> ProgressionLog:
        """Persist the new max and its log entry atomically."""
        try:
            self.session.add(lift_max)
            self.session.add(log)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(log)
        return log

    def list_for_user(self, user_id: int, lift_id: Optional[int] = None) -> list[ProgressionLog]:
        statement = select(ProgressionLog).where(ProgressionLog.user_id == user_id)
        if lift_id is not None:
            statement = statement.where(ProgressionLog.lift_id == lift_id)
        statement = statement.order_by(ProgressionLog.applied_at.desc(),  # type: ignore[attr-defined]
                                       ProgressionLog.id.desc())  # type: ignore[union-attr]
        return list(self.session.exec(statement).all())
