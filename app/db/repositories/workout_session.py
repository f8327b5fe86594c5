"""
Workout session repository.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.workout_session import LoggedSet, SessionStatus, WorkoutSession


class WorkoutSessionRepository:
    """Repository for WorkoutSession and LoggedSet operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: WorkoutSession) -> WorkoutSession:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def get_by_id(self, session_id: int) -> Optional[WorkoutSession]:
        return self.session.get(WorkoutSession, session_id)

    def get_in_progress(self, user_id: int) -> Optional[WorkoutSession]:
        statement = select(WorkoutSession).where(WorkoutSession.user_id == user_id,
                                                 WorkoutSession.status == SessionStatus.IN_PROGRESS.value, )
        return self.session.exec(statement).first()

    def update(self, entry: WorkoutSession) -> WorkoutSession:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def add_sets(self, sets: list[LoggedSet]) -> list[LoggedSet]:
        try:
            self.session.add_all(sets)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        for logged in sets:
            self.session.refresh(logged)
        return sets

    def list_sets(self, session_id: int) -> list[LoggedSet]:
        statement = select(LoggedSet).where(LoggedSet.session_id == session_id).order_by(LoggedSet.id)
        return list(self.session.exec(statement).all())
