"""
Progression models.

- :class:`Progression` is a reusable rule (type + JSON parameters).
- :class:`ProgramProgression` binds a rule to a program and optionally
  one lift; ``lift_id`` NULL applies it to every lift.
- :class:`ProgressionLog` is the immutable audit trail, written in the
  same transaction as the new :class:`~app.models.lift_max.LiftMax`.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel


class Progression(SQLModel, table=True):
    __tablename__ = "progressions"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=100)
    type: str = Field(nullable=False, max_length=40)  # ProgressionType
    parameters: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False), )


class ProgramProgression(SQLModel, table=True):
    __tablename__ = "program_progressions"
    __table_args__ = (
        UniqueConstraint("program_id", "progression_id", "lift_id", name="uq_program_progression_lift", ),)

    id: Optional[int] = Field(default=None, primary_key=True)
    program_id: int = Field(foreign_key="programs.id", nullable=False, index=True)
    progression_id: int = Field(foreign_key="progressions.id", nullable=False)
    lift_id: Optional[int] = Field(default=None, foreign_key="lifts.id")

    priority: int = Field(default=0, nullable=False)
    enabled: bool = Field(default=True, nullable=False)
    override_increment: Optional[float] = Field(default=None, gt=0)


class ProgressionLog(SQLModel, table=True):
    __tablename__ = "progression_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "progression_id", "lift_id", "idempotency_key",
                         name="uq_progression_logs_idempotency", ),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    progression_id: int = Field(foreign_key="progressions.id", nullable=False)
    lift_id: int = Field(foreign_key="lifts.id", nullable=False)

    previous_value: float = Field(nullable=False)
    new_value: float = Field(nullable=False)
    delta: float = Field(nullable=False)

    trigger_type: str = Field(nullable=False, max_length=20)  # TriggerType
    trigger_context: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False), )

    # NULL for forced manual applications, which are never deduplicated
    idempotency_key: Optional[str] = Field(default=None, max_length=100)

    applied_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow, nullable=False)
