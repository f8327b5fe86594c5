"""
Enrollment repository.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.user_program_state import UserProgramState


class UserProgramStateRepository:
    """Repository for UserProgramState database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_user(self, user_id: int) -> Optional[UserProgramState]:
        statement = select(UserProgramState).where(UserProgramState.user_id == user_id)
        return self.session.exec(statement).first()

    def replace(self, state: UserProgramState) -> UserProgramState:
        """Delete any enrollment of the same user and insert ``state``, in one commit."""
        existing = self.get_by_user(state.user_id)
        try:
            if existing:
                self.session.delete(existing)
                self.session.flush()
            self.session.add(state)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(state)
        return state

    def update(self, state: UserProgramState) -> UserProgramState:
        self.session.add(state)
        self.session.commit()
        self.session.refresh(state)
        return state

    def delete(self, state: UserProgramState) -> None:
        self.session.delete(state)
        self.session.commit()
