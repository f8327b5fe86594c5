"""
Program catalog models.

A program runs one cycle; the cycle is split into numbered weeks and
each week schedules an ordered list of days.  These tables are owned by
the catalog and read-only for the training engine.
"""

from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class Cycle(SQLModel, table=True):
    __tablename__ = "cycles"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=100)
    length_weeks: int = Field(nullable=False, ge=1)


class Program(SQLModel, table=True):
    __tablename__ = "programs"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=100)
    slug: str = Field(nullable=False, max_length=100, unique=True, index=True)
    cycle_id: int = Field(foreign_key="cycles.id", nullable=False)


class Week(SQLModel, table=True):
    __tablename__ = "weeks"
    __table_args__ = (UniqueConstraint("cycle_id", "week_number", name="uq_weeks_cycle_number"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    cycle_id: int = Field(foreign_key="cycles.id", nullable=False, index=True)
    week_number: int = Field(nullable=False, ge=1)


class Day(SQLModel, table=True):
    """A workout template (e.g. "Heavy Day") holding ordered prescriptions."""

    __tablename__ = "days"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=100)
    slug: str = Field(nullable=False, max_length=100, index=True)
    program_id: Optional[int] = Field(default=None, foreign_key="programs.id")


class WeekDay(SQLModel, table=True):
    """Schedules a day within a week; ``position`` orders the week."""

    __tablename__ = "week_days"
    __table_args__ = (UniqueConstraint("week_id", "day_id", name="uq_week_days_week_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    week_id: int = Field(foreign_key="weeks.id", nullable=False, index=True)
    day_id: int = Field(foreign_key="days.id", nullable=False)
    position: int = Field(default=0, nullable=False)
