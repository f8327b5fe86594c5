"""
Progression rules.

A rule decides whether a trigger changes a lift's max and by how much.
Rules are pure: they receive the current value and return an outcome;
persisting the new max and the audit log is the progression service's
job.

- ``LINEAR_PROGRESSION`` fires after a session or after a week.
- ``CYCLE_PROGRESSION`` fires when a cycle boundary is reached.
- ``AMRAP_PROGRESSION`` fires after an AMRAP set and picks its increment
  from a reps threshold table.
- ``DELOAD_ON_FAILURE`` fires when a lift has failed enough times in a
  row and lowers the max.
"""

import enum
from dataclasses import dataclass
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, TypeAdapter, ValidationError, field_validator, model_validator

from app.core.exceptions import ValidationFailedError, field_errors
from app.schemas.base import CamelModel
from app.training.max_lookup import MaxType


class ProgressionType(str, enum.Enum):
    LINEAR = "LINEAR_PROGRESSION"
    CYCLE = "CYCLE_PROGRESSION"
    AMRAP = "AMRAP_PROGRESSION"
    DELOAD_ON_FAILURE = "DELOAD_ON_FAILURE"


class TriggerType(str, enum.Enum):
    AFTER_SET = "AFTER_SET"
    AFTER_SESSION = "AFTER_SESSION"
    AFTER_WEEK = "AFTER_WEEK"
    AFTER_CYCLE = "AFTER_CYCLE"
    ON_FAILURE = "ON_FAILURE"


@dataclass(frozen=True)
class TriggerEvent:
    """What happened.

    ``lifts_performed`` only matters for AFTER_SESSION; ``reps_performed``
    and ``is_amrap`` for AFTER_SET; ``consecutive_failures`` for
    ON_FAILURE.
    """

    trigger_type: TriggerType
    lifts_performed: tuple[int, ...] = ()
    reps_performed: Optional[int] = None
    is_amrap: bool = False
    consecutive_failures: Optional[int] = None


@dataclass(frozen=True)
class ProgressionOutcome:
    applied: bool
    previous_value: float
    new_value: float
    delta: float
    reason: Optional[str] = None


def _skip(current_value: float, reason: str) -> ProgressionOutcome:
    return ProgressionOutcome(applied=False, previous_value=current_value, new_value=current_value, delta=0.0,
                              reason=reason)


def _change(current_value: float, delta: float) -> ProgressionOutcome:
    return ProgressionOutcome(applied=True, previous_value=current_value, new_value=current_value + delta,
                              delta=delta)


class _Rule(CamelModel):
    max_type: MaxType

    @property
    def trigger(self) -> TriggerType:
        raise NotImplementedError

    def evaluate(self, event: TriggerEvent, lift_id: int, max_type: MaxType, current_value: float,
                 override_increment: Optional[float] = None, ) -> ProgressionOutcome:
        if event.trigger_type != self.trigger:
            return _skip(current_value, f"trigger type mismatch: expected {self.trigger.value}, "
                                        f"got {event.trigger_type.value}")
        if max_type != self.max_type:
            return _skip(current_value, f"max type mismatch: expected {self.max_type.value}, got {max_type.value}")
        return self._outcome(event, lift_id, current_value, override_increment)

    def _outcome(self, event: TriggerEvent, lift_id: int, current_value: float,
                 override_increment: Optional[float]) -> ProgressionOutcome:
        raise NotImplementedError


class _IncrementRule(_Rule):
    increment: float = Field(..., gt=0)

    def _outcome(self, event: TriggerEvent, lift_id: int, current_value: float,
                 override_increment: Optional[float]) -> ProgressionOutcome:
        if (self.trigger == TriggerType.AFTER_SESSION and event.lifts_performed
                and lift_id not in event.lifts_performed):
            return _skip(current_value, f"lift {lift_id} was not performed in this session")

        if override_increment is not None and override_increment <= 0:
            raise ValidationFailedError("override increment must be positive", field="overrideIncrement")
        return _change(current_value, override_increment if override_increment is not None else self.increment)


class LinearProgression(_IncrementRule):
    """Add ``increment`` after every session or every week."""

    type: Literal["LINEAR_PROGRESSION"] = "LINEAR_PROGRESSION"
    trigger_type: TriggerType = TriggerType.AFTER_SESSION

    @field_validator("trigger_type")
    @classmethod
    def _session_or_week(cls, value: TriggerType) -> TriggerType:
        if value not in (TriggerType.AFTER_SESSION, TriggerType.AFTER_WEEK):
            raise ValueError("linear progression only supports AFTER_SESSION and AFTER_WEEK triggers")
        return value

    @property
    def trigger(self) -> TriggerType:
        return self.trigger_type


class CycleProgression(_IncrementRule):
    """Add ``increment`` once per completed cycle."""

    type: Literal["CYCLE_PROGRESSION"] = "CYCLE_PROGRESSION"

    @property
    def trigger(self) -> TriggerType:
        return TriggerType.AFTER_CYCLE


class RepsThreshold(CamelModel):
    min_reps: int = Field(..., ge=0)
    increment: float = Field(..., gt=0)


class AmrapProgression(_Rule):
    """Add the increment of the highest threshold the AMRAP set reached.

    Thresholds are kept sorted by ``min_reps``; duplicates are rejected.
    Config overrides do not apply, the table decides the increment.
    """

    type: Literal["AMRAP_PROGRESSION"] = "AMRAP_PROGRESSION"
    thresholds: list[RepsThreshold] = Field(..., min_length=1)

    @field_validator("thresholds")
    @classmethod
    def _ascending(cls, value: list[RepsThreshold]) -> list[RepsThreshold]:
        ordered = sorted(value, key=lambda t: t.min_reps)
        for lower, upper in zip(ordered, ordered[1:]):
            if lower.min_reps == upper.min_reps:
                raise ValueError(f"duplicate threshold for {upper.min_reps} reps")
        return ordered

    @property
    def trigger(self) -> TriggerType:
        return TriggerType.AFTER_SET

    def _outcome(self, event: TriggerEvent, lift_id: int, current_value: float,
                 override_increment: Optional[float]) -> ProgressionOutcome:
        if not event.is_amrap:
            return _skip(current_value, "set is not marked as AMRAP")
        if event.reps_performed is None:
            return _skip(current_value, "reps performed not provided")

        matched = [t for t in self.thresholds if event.reps_performed >= t.min_reps]
        if not matched:
            return _skip(current_value, f"no threshold met: reps={event.reps_performed}, "
                                        f"minimum required={self.thresholds[0].min_reps}")
        return _change(current_value, matched[-1].increment)


class DeloadOnFailure(_Rule):
    """Lower the max once a lift fails ``failure_threshold`` times in a row.

    ``percent`` removes ``deload_percent`` of the current value, ``fixed``
    removes ``deload_amount``.  The new value never drops below zero.
    """

    type: Literal["DELOAD_ON_FAILURE"] = "DELOAD_ON_FAILURE"
    failure_threshold: int = Field(default=2, ge=1)
    deload_type: Literal["percent", "fixed"] = "percent"
    deload_percent: Optional[float] = Field(default=None, gt=0, le=1)
    deload_amount: Optional[float] = Field(default=None, gt=0)
    reset_on_deload: bool = True

    @model_validator(mode="after")
    def _deload_size(self) -> "DeloadOnFailure":
        if self.deload_type == "percent" and self.deload_percent is None:
            raise ValueError("deloadPercent is required for percent deloads")
        if self.deload_type == "fixed" and self.deload_amount is None:
            raise ValueError("deloadAmount is required for fixed deloads")
        return self

    @property
    def trigger(self) -> TriggerType:
        return TriggerType.ON_FAILURE

    def _outcome(self, event: TriggerEvent, lift_id: int, current_value: float,
                 override_increment: Optional[float]) -> ProgressionOutcome:
        if event.consecutive_failures is None:
            return _skip(current_value, "consecutiveFailures not provided in trigger event")
        if event.consecutive_failures < self.failure_threshold:
            return _skip(current_value, f"failure threshold not met: {event.consecutive_failures} consecutive "
                                        f"failures, threshold is {self.failure_threshold}")

        if self.deload_type == "percent":
            amount = current_value * self.deload_percent
        else:
            amount = self.deload_amount
        return _change(current_value, -min(amount, current_value))


ProgressionRule = Annotated[Union[LinearProgression, CycleProgression, AmrapProgression, DeloadOnFailure],
                            Field(discriminator="type")]

AnyRule = Union[LinearProgression, CycleProgression, AmrapProgression, DeloadOnFailure]

_rule_adapter: TypeAdapter[Any] = TypeAdapter(ProgressionRule)


def parse_progression(progression_type: str, parameters: dict[str, Any]) -> AnyRule:
    """Build a rule from a stored progression's type and parameters."""
    try:
        return _rule_adapter.validate_python({**parameters, "type": progression_type})
    except ValidationError as exc:
        raise ValidationFailedError("invalid progression", errors=field_errors("parameters", exc)) from exc
