"""
Lift max model.

Append-only history: a new max is always a new row.  The current max
is the row with the latest ``effective_date`` not after the reference
date.
"""

import datetime
from typing import Optional

from sqlalchemy import Index
from sqlmodel import Field, SQLModel


class LiftMax(SQLModel, table=True):
    __tablename__ = "lift_maxes"
    __table_args__ = (Index("ix_lift_maxes_lookup", "user_id", "lift_id", "type", "effective_date"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    lift_id: int = Field(foreign_key="lifts.id", nullable=False)
    type: str = Field(nullable=False, max_length=20)  # MaxType
    value: float = Field(nullable=False)
    effective_date: datetime.datetime = Field(default_factory=datetime.datetime.utcnow, nullable=False)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
