"""
Load strategies.

A load strategy turns a user's reference max into a concrete weight.
Strategies are a closed set of tagged variants stored as JSON on a
prescription and parsed through :func:`parse_load_strategy`, which
validates parameters up front so resolution code only ever sees
well-formed variants.

Rounding
--------

Rounding applies only when ``roundingIncrement`` is present:

- ``NEAREST``  round(raw / inc) * inc, halves away from zero
- ``UP``       ceil(raw / inc) * inc
- ``DOWN``     floor(raw / inc) * inc
"""

import enum
import math
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, TypeAdapter, ValidationError

from app.core.exceptions import MaxNotFoundError, ValidationFailedError, field_errors
from app.schemas.base import CamelModel
from app.training.max_lookup import MaxLookup, MaxType


class RoundingDirection(str, enum.Enum):
    NEAREST = "NEAREST"
    UP = "UP"
    DOWN = "DOWN"


# Guards ceil/floor against float noise such as 70.00000000000001 / 5.
_UNIT_PRECISION = 9


def round_weight(raw: float, increment: Optional[float],
                 direction: RoundingDirection = RoundingDirection.NEAREST) -> float:
    """Round ``raw`` to a multiple of ``increment``.

    ``None`` means no rounding.  Negative weights are rejected.
    """
    if raw < 0:
        raise ValidationFailedError("weight cannot be negative", field="weight")
    if increment is None:
        return raw
    if increment <= 0:
        raise ValidationFailedError("rounding increment must be positive", field="roundingIncrement")

    units = round(raw / increment, _UNIT_PRECISION)
    if direction == RoundingDirection.UP:
        steps = math.ceil(units)
    elif direction == RoundingDirection.DOWN:
        steps = math.floor(units)
    else:
        steps = math.floor(units + 0.5)
    return round(steps * increment, 6)


class PercentOf(CamelModel):
    """A percentage of the user's current ONE_RM or TRAINING_MAX."""

    type: Literal["PERCENT_OF"] = "PERCENT_OF"
    reference_type: MaxType
    percentage: float = Field(..., gt=0)
    rounding_increment: Optional[float] = Field(None, gt=0)
    rounding_direction: RoundingDirection = RoundingDirection.NEAREST

    def weight(self, lookup: MaxLookup, user_id: int, lift_id: int, step_percentage: float = 100.0) -> float:
        """Weight for ``lift_id``, optionally scaled by a set-scheme step.

        Raises :class:`MaxNotFoundError` when the user has no current max
        of ``reference_type``.
        """
        current = lookup.get_current_max(user_id, lift_id, self.reference_type)
        if current is None:
            raise MaxNotFoundError(lift_id, self.reference_type.value)
        raw = current.value * (self.percentage / 100.0) * (step_percentage / 100.0)
        return round_weight(raw, self.rounding_increment, self.rounding_direction)


class FixedWeight(CamelModel):
    """A constant weight, independent of any max."""

    type: Literal["FIXED_WEIGHT"] = "FIXED_WEIGHT"
    weight_value: float = Field(..., gt=0, alias="weight")
    rounding_increment: Optional[float] = Field(None, gt=0)
    rounding_direction: RoundingDirection = RoundingDirection.NEAREST

    def weight(self, lookup: MaxLookup, user_id: int, lift_id: int, step_percentage: float = 100.0) -> float:
        return round_weight(self.weight_value * step_percentage / 100.0, self.rounding_increment,
                            self.rounding_direction)


LoadStrategy = Annotated[Union[PercentOf, FixedWeight], Field(discriminator="type")]

_load_strategy_adapter: TypeAdapter[Any] = TypeAdapter(LoadStrategy)


def parse_load_strategy(data: Any) -> Union[PercentOf, FixedWeight]:
    """Build a load strategy from its JSON form.

    Raises :class:`ValidationFailedError` listing every invalid field.
    """
    if isinstance(data, (PercentOf, FixedWeight)):
        return data
    try:
        return _load_strategy_adapter.validate_python(data)
    except ValidationError as exc:
        raise ValidationFailedError("invalid load strategy", errors=field_errors("loadStrategy", exc)) from exc

