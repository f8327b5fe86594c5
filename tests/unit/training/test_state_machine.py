"""Tests for the enrollment state machine transitions."""

from dataclasses import dataclass
from typing import Optional

import pytest

from app.core.exceptions import InvalidStateError
from app.training import state_machine
from app.training.events import EventType
from app.training.state_machine import CycleStatus, EnrollmentStatus, WeekStatus

LENGTH = 4


@dataclass
class Position:
    cycle_iteration: int = 0
    current_week: int = 0
    current_day_index: Optional[int] = None
    enrollment_status: str = ""
    cycle_status: str = ""
    week_status: str = ""


@pytest.fixture
def position() -> Position:
    p = Position()
    state_machine.reset_position(p)
    return p


def test_reset_position(position):
    assert (position.cycle_iteration, position.current_week) == (1, 1)
    assert position.current_day_index is None
    assert position.enrollment_status == EnrollmentStatus.ACTIVE
    assert position.cycle_status == CycleStatus.PENDING
    assert position.week_status == WeekStatus.PENDING


class TestAdvanceWeek:
    def test_mid_cycle(self, position):
        position.current_day_index = 1
        events = state_machine.advance_week(position, LENGTH)
        assert position.current_week == 2
        assert position.current_day_index is None
        assert position.enrollment_status == EnrollmentStatus.ACTIVE
        assert events == [(EventType.WEEK_COMPLETED, {"previousWeek": 1, "newWeek": 2, "cycleIteration": 1})]

    def test_last_week_reaches_boundary(self, position):
        position.current_week = LENGTH
        events = state_machine.advance_week(position, LENGTH)
        assert position.current_week == LENGTH
        assert position.enrollment_status == EnrollmentStatus.BETWEEN_CYCLES
        assert position.cycle_status == CycleStatus.COMPLETED
        assert [e[0] for e in events] == [EventType.WEEK_COMPLETED, EventType.CYCLE_BOUNDARY_REACHED]
        assert events[1][1] == {"completedCycle": 1, "cycleIteration": 1, "totalWeeks": LENGTH}

    def test_single_week_cycle(self, position):
        events = state_machine.advance_week(position, 1)
        assert position.enrollment_status == EnrollmentStatus.BETWEEN_CYCLES
        assert len(events) == 2

    def test_between_cycles_rejected(self, position):
        position.current_week = LENGTH
        state_machine.advance_week(position, LENGTH)
        with pytest.raises(InvalidStateError) as info:
            state_machine.advance_week(position, LENGTH)
        assert info.value.message == "cannot advance week from state BETWEEN_CYCLES"


class TestNextCycle:
    def test_from_between_cycles(self, position):
        position.current_week = LENGTH
        state_machine.advance_week(position, LENGTH)
        events = state_machine.next_cycle(position)
        assert (position.cycle_iteration, position.current_week) == (2, 1)
        assert position.enrollment_status == EnrollmentStatus.ACTIVE
        assert position.cycle_status == CycleStatus.PENDING
        assert events == [(EventType.CYCLE_STARTED, {"cycleIteration": 2, "weekNumber": 1})]

    def test_from_active_rejected(self, position):
        with pytest.raises(InvalidStateError) as info:
            state_machine.next_cycle(position)
        assert info.value.status_code == 409
        assert position.cycle_iteration == 1


class TestCompletionSnapshot:
    def test_fresh_enrollment(self, position):
        snapshot = state_machine.completion_snapshot(position, LENGTH)
        assert (snapshot.cycles_completed, snapshot.weeks_completed) == (0, 0)

    def test_week_three_pending(self, position):
        position.current_week = 3
        snapshot = state_machine.completion_snapshot(position, LENGTH)
        assert (snapshot.cycles_completed, snapshot.weeks_completed) == (0, 2)

    def test_week_three_completed(self, position):
        position.current_week = 3
        position.week_status = WeekStatus.COMPLETED.value
        assert state_machine.completion_snapshot(position, LENGTH).weeks_completed == 3

    def test_at_boundary_adds_completed_week(self, position):
        position.current_week = LENGTH
        state_machine.advance_week(position, LENGTH)
        snapshot = state_machine.completion_snapshot(position, LENGTH)
        assert (snapshot.cycles_completed, snapshot.weeks_completed) == (1, LENGTH + LENGTH)

    def test_completed_cycle_status_counts_as_boundary(self, position):
        position.current_week = 2
        position.cycle_status = CycleStatus.COMPLETED.value
        snapshot = state_machine.completion_snapshot(position, LENGTH)
        assert (snapshot.cycles_completed, snapshot.weeks_completed) == (1, LENGTH + 1)

    def test_second_cycle_in_progress(self, position):
        position.current_week = LENGTH
        state_machine.advance_week(position, LENGTH)
        state_machine.next_cycle(position)
        state_machine.advance_week(position, LENGTH)
        snapshot = state_machine.completion_snapshot(position, LENGTH)
        assert (snapshot.cycles_completed, snapshot.weeks_completed) == (1, LENGTH + 1)
