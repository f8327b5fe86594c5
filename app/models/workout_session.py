"""
Workout session and logged set models.
"""

import datetime
import enum
from typing import Optional

from sqlmodel import Field, SQLModel


class SessionStatus(str, enum.Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ABANDONED = "ABANDONED"


class WorkoutSession(SQLModel, table=True):
    """One performed workout at a program position."""

    __tablename__ = "workout_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    program_id: int = Field(foreign_key="programs.id", nullable=False)

    cycle_iteration: int = Field(nullable=False)
    week_number: int = Field(nullable=False)
    day_index: int = Field(default=0, nullable=False)
    day_slug: Optional[str] = Field(default=None, max_length=100)

    status: str = Field(default=SessionStatus.IN_PROGRESS.value, max_length=20, nullable=False)

    started_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    finished_at: Optional[datetime.datetime] = Field(default=None)


class LoggedSet(SQLModel, table=True):
    __tablename__ = "logged_sets"

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: int = Field(foreign_key="workout_sessions.id", nullable=False, index=True)
    user_id: int = Field(nullable=False, index=True)
    lift_id: int = Field(foreign_key="lifts.id", nullable=False)
    prescription_id: Optional[int] = Field(default=None, foreign_key="prescriptions.id")

    set_number: int = Field(nullable=False, ge=1)
    weight: float = Field(nullable=False, ge=0)
    target_reps: int = Field(nullable=False, ge=0)
    reps_performed: int = Field(nullable=False, ge=0)
    is_amrap: bool = Field(default=False, nullable=False)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
