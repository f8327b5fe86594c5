"""
Failure counter model.

One row per (user, lift, progression) that reacts to failed sets.  A
failed set (fewer reps than targeted) bumps ``consecutive_failures``; a
successful one resets it to zero.
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class FailureCounter(SQLModel, table=True):
    __tablename__ = "failure_counters"
    __table_args__ = (
        UniqueConstraint("user_id", "lift_id", "progression_id", name="uq_failure_counters_user_lift_progression"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    lift_id: int = Field(foreign_key="lifts.id", nullable=False)
    progression_id: int = Field(foreign_key="progressions.id", nullable=False)

    consecutive_failures: int = Field(default=0, nullable=False, ge=0)
    last_failure_at: Optional[datetime.datetime] = None
    last_success_at: Optional[datetime.datetime] = None

    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
