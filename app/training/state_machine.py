"""
Enrollment state machine.

Pure transitions over a user's program position.  Each function
mutates the given state in place and returns the events to publish
once the caller has committed the change.

::

    enroll ──> ACTIVE ──advance_week (last week)──> BETWEEN_CYCLES
                 ^  └─advance_week (week < length)─┘       │
                 └──────────────next_cycle─────────────────┘
"""

import enum
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from app.core.exceptions import InvalidStateError
from app.training.events import EventType


class EnrollmentStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    BETWEEN_CYCLES = "BETWEEN_CYCLES"


class CycleStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class WeekStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class ProgramPosition(Protocol):
    cycle_iteration: int
    current_week: int
    current_day_index: Optional[int]
    enrollment_status: str
    cycle_status: str
    week_status: str


PendingEvent = tuple[EventType, dict[str, Any]]


@dataclass(frozen=True)
class CompletionSnapshot:
    cycles_completed: int
    weeks_completed: int


def reset_position(state: ProgramPosition) -> None:
    """Week 1 of cycle 1, active, nothing completed."""
    state.cycle_iteration = 1
    state.current_week = 1
    state.current_day_index = None
    state.enrollment_status = EnrollmentStatus.ACTIVE.value
    state.cycle_status = CycleStatus.PENDING.value
    state.week_status = WeekStatus.PENDING.value


def advance_week(state: ProgramPosition, cycle_length_weeks: int) -> list[PendingEvent]:
    if state.enrollment_status != EnrollmentStatus.ACTIVE:
        raise InvalidStateError("advance week", state.enrollment_status)

    previous_week = state.current_week
    boundary = state.current_week >= cycle_length_weeks
    if boundary:
        state.enrollment_status = EnrollmentStatus.BETWEEN_CYCLES.value
        state.cycle_status = CycleStatus.COMPLETED.value
        state.week_status = WeekStatus.COMPLETED.value
    else:
        state.current_week += 1
        state.current_day_index = None
        state.week_status = WeekStatus.PENDING.value

    events: list[PendingEvent] = [(EventType.WEEK_COMPLETED, {
        "previousWeek": previous_week,
        "newWeek": state.current_week,
        "cycleIteration": state.cycle_iteration,
    })]
    if boundary:
        events.append((EventType.CYCLE_BOUNDARY_REACHED, {
            "completedCycle": state.cycle_iteration,
            "cycleIteration": state.cycle_iteration,
            "totalWeeks": cycle_length_weeks,
        }))
    return events


def next_cycle(state: ProgramPosition) -> list[PendingEvent]:
    if state.enrollment_status != EnrollmentStatus.BETWEEN_CYCLES:
        raise InvalidStateError("start new cycle", state.enrollment_status)

    state.enrollment_status = EnrollmentStatus.ACTIVE.value
    state.cycle_iteration += 1
    state.current_week = 1
    state.current_day_index = None
    state.cycle_status = CycleStatus.PENDING.value
    state.week_status = WeekStatus.PENDING.value
    return [(EventType.CYCLE_STARTED, {"cycleIteration": state.cycle_iteration, "weekNumber": state.current_week})]


def completion_snapshot(state: ProgramPosition, cycle_length_weeks: int) -> CompletionSnapshot:
    """Cycles and weeks finished so far, reported when a user quits.

    A cycle counts once its boundary is reached.  Weeks are the counted
    cycles' weeks plus the current week if it is completed, otherwise
    the weeks before it.  Between cycles the finished cycle shows up in
    both terms, so quitting after cycle ``n`` reports
    ``(n, (n + 1) * cycle_length_weeks)``.
    """
    at_boundary = (state.enrollment_status == EnrollmentStatus.BETWEEN_CYCLES
                   or state.cycle_status == CycleStatus.COMPLETED)
    cycles = state.cycle_iteration if at_boundary else state.cycle_iteration - 1
    weeks_in_cycle = state.current_week if state.week_status == WeekStatus.COMPLETED else state.current_week - 1
    return CompletionSnapshot(cycles_completed=cycles, weeks_completed=cycles * cycle_length_weeks + weeks_in_cycle)
