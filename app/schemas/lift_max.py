"""
Lift max schemas.
"""

import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel
from app.training.max_lookup import MaxType


class LiftMaxCreate(CamelModel):
    lift_id: int
    type: MaxType
    value: float = Field(..., gt=0)
    effective_date: Optional[datetime.date] = Field(None, description="Defaults to now")


class LiftMaxResponse(CamelModel):
    id: int
    user_id: int
    lift_id: int
    type: str
    value: float
    effective_date: datetime.datetime
