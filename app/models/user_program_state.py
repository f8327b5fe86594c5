"""
Enrollment (user program state) model.

One row per enrolled user: where they are in the program and whether
the current week/cycle is done.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class UserProgramState(SQLModel, table=True):
    __tablename__ = "user_program_states"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, unique=True, index=True)
    program_id: int = Field(foreign_key="programs.id", nullable=False)

    cycle_iteration: int = Field(default=1, nullable=False)
    current_week: int = Field(default=1, nullable=False)
    current_day_index: Optional[int] = Field(default=None)

    enrollment_status: str = Field(default="ACTIVE", max_length=20, nullable=False)
    cycle_status: str = Field(default="PENDING", max_length=20, nullable=False)
    week_status: str = Field(default="PENDING", max_length=20, nullable=False)

    meet_date: Optional[datetime.date] = Field(default=None)

    enrolled_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
