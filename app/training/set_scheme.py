"""
Set schemes.

A set scheme expands a prescription into an ordered list of sets.  It
does not know about maxes: :meth:`generate` receives a ``weight_for``
callable mapping a percentage (100 = the prescription's full load) to a
rounded weight, so every set goes through the same max + rounding
pipeline as the load strategy itself.
"""

from typing import Annotated, Any, Callable, Literal, Union

from pydantic import Field, TypeAdapter, ValidationError

from app.core.exceptions import ValidationFailedError, field_errors
from app.schemas.base import CamelModel

WeightFor = Callable[[float], float]


class GeneratedSet(CamelModel):
    set_number: int
    weight: float
    target_reps: int
    is_work_set: bool


class FixedSets(CamelModel):
    """``sets`` identical sets of ``reps``, all work sets."""

    type: Literal["FIXED"] = "FIXED"
    sets: int = Field(..., ge=1)
    reps: int = Field(..., ge=1)

    def generate(self, weight_for: WeightFor) -> list[GeneratedSet]:
        weight = weight_for(100.0)
        return [GeneratedSet(set_number=n, weight=weight, target_reps=self.reps, is_work_set=True)
                for n in range(1, self.sets + 1)]


class RampStep(CamelModel):
    percentage: float = Field(..., gt=0)
    reps: int = Field(..., ge=1)


class RampSets(CamelModel):
    """Ascending (or arbitrary) percentage steps, one set per step.

    Steps at or above ``work_set_threshold`` are work sets; the rest are
    warm-ups.
    """

    type: Literal["RAMP"] = "RAMP"
    steps: list[RampStep] = Field(..., min_length=1)
    work_set_threshold: float = Field(80.0, ge=0, le=100)

    def generate(self, weight_for: WeightFor) -> list[GeneratedSet]:
        return [
            GeneratedSet(set_number=n, weight=weight_for(step.percentage), target_reps=step.reps,
                         is_work_set=step.percentage >= self.work_set_threshold)
            for n, step in enumerate(self.steps, start=1)
        ]


SetScheme = Annotated[Union[FixedSets, RampSets], Field(discriminator="type")]

_set_scheme_adapter: TypeAdapter[Any] = TypeAdapter(SetScheme)


def parse_set_scheme(data: Any) -> Union[FixedSets, RampSets]:
    """Build a set scheme from its JSON form; raises :class:`ValidationFailedError`."""
    if isinstance(data, (FixedSets, RampSets)):
        return data
    try:
        return _set_scheme_adapter.validate_python(data)
    except ValidationError as exc:
        raise ValidationFailedError("invalid set scheme", errors=field_errors("setScheme", exc)) from exc
