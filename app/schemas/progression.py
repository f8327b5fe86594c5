"""
Progression trigger and history schemas.
"""

import datetime
from typing import Any, Optional

from pydantic import Field

from app.schemas.base import CamelModel


class TriggerRequest(CamelModel):
    progression_id: int
    lift_id: Optional[int] = None
    force: bool = False


class AppliedProgression(CamelModel):
    previous_value: float
    new_value: float
    delta: float
    max_type: str
    applied_at: datetime.datetime


class TriggerResult(CamelModel):
    """Outcome of one (progression, lift) pair: applied, skipped or error."""

    progression_id: int
    lift_id: int
    applied: bool = False
    skipped: bool = False
    skip_reason: Optional[str] = None
    result: Optional[AppliedProgression] = None
    error: Optional[str] = None


class TriggerResponse(CamelModel):
    results: list[TriggerResult] = Field(default_factory=list)
    total_applied: int = 0
    total_skipped: int = 0
    total_errors: int = 0

    def add(self, item: TriggerResult) -> None:
        self.results.append(item)
        if item.error is not None:
            self.total_errors += 1
        elif item.applied:
            self.total_applied += 1
        else:
            self.total_skipped += 1


class ProgressionLogResponse(CamelModel):
    id: int
    progression_id: int
    lift_id: int
    previous_value: float
    new_value: float
    delta: float
    trigger_type: str
    trigger_context: dict[str, Any]
    applied_at: datetime.datetime


class FailureCounterResponse(CamelModel):
    lift_id: int
    progression_id: int
    consecutive_failures: int
    last_failure_at: Optional[datetime.datetime] = None
    last_success_at: Optional[datetime.datetime] = None
