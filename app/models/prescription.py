"""
Prescription model.

Load strategy and set scheme are stored as tagged JSON and parsed by
``app.training`` at resolution time.
"""

from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Prescription(SQLModel, table=True):
    __tablename__ = "prescriptions"

    id: Optional[int] = Field(default=None, primary_key=True)
    day_id: int = Field(foreign_key="days.id", nullable=False, index=True)
    lift_id: int = Field(foreign_key="lifts.id", nullable=False)

    load_strategy: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False), )
    set_scheme: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False), )

    position: int = Field(default=0, nullable=False)
    notes: Optional[str] = Field(default=None, max_length=1000)
    rest_seconds: Optional[int] = Field(default=None, ge=0)
