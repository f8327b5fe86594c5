"""
Lift catalog model.
"""

from typing import Optional

from sqlmodel import Field, SQLModel


class Lift(SQLModel, table=True):
    """A movement that maxes and prescriptions refer to (squat, bench, ...)."""

    __tablename__ = "lifts"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=100)
    slug: str = Field(nullable=False, max_length=100, unique=True, index=True)
