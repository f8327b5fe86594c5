"""Shared fixtures: an in-memory database seeded with a small program.

Program layout (4-week cycle, every week schedules ``heavy`` then ``light``):

    heavy  squat  PERCENT_OF 100% TM, RAMP 50/75/100 x5, round 5
           bench  PERCENT_OF 75% TM, FIXED 5x5, round 2.5
    light  squat  PERCENT_OF 80% TM, FIXED 3x5, round 5 DOWN

Progressions: ``linear`` (+5 TM after session) bound to squat and bench,
``per_cycle`` (+10 TM after cycle) bound to every lift.
"""

import datetime
from dataclasses import dataclass
from typing import Optional

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import app.db.base  # noqa: F401
from app.models import (Cycle, Day, Lift, LiftMax, Prescription, Program, ProgramProgression, Progression, Week,
                        WeekDay, )
from app.training.events import EventBus, StateEvent

USER_ID = 42
CYCLE_WEEKS = 4


@dataclass
class Catalog:
    program_id: int
    cycle_id: int
    squat_id: int
    bench_id: int
    deadlift_id: int
    heavy_day_id: int
    light_day_id: int
    heavy_squat_id: int
    heavy_bench_id: int
    light_squat_id: int
    linear_id: int
    per_cycle_id: int


class RecordingBus(EventBus):
    """Inline bus that also remembers every published event."""

    def __init__(self):
        super().__init__()
        self.published: list[StateEvent] = []

    def publish(self, event: StateEvent) -> list[Exception]:
        self.published.append(event)
        return super().publish(event)

    def types(self) -> list[str]:
        return [e.type.value for e in self.published]


# ======================================================================
# Database
# ======================================================================


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def bus() -> RecordingBus:
    return RecordingBus()


def seed_catalog(session: Session) -> Catalog:
    squat = Lift(name="Squat", slug="squat")
    bench = Lift(name="Bench Press", slug="bench-press")
    deadlift = Lift(name="Deadlift", slug="deadlift")
    cycle = Cycle(name="Four week wave", length_weeks=CYCLE_WEEKS)
    session.add_all([squat, bench, deadlift, cycle])
    session.commit()

    program = Program(name="Starr 5x5", slug="starr-5x5", cycle_id=cycle.id)
    session.add(program)
    session.commit()

    heavy = Day(name="Heavy", slug="heavy", program_id=program.id)
    light = Day(name="Light", slug="light", program_id=program.id)
    session.add_all([heavy, light])
    session.commit()

    for number in range(1, CYCLE_WEEKS + 1):
        week = Week(cycle_id=cycle.id, week_number=number)
        session.add(week)
        session.commit()
        session.add_all([WeekDay(week_id=week.id, day_id=heavy.id, position=0),
                         WeekDay(week_id=week.id, day_id=light.id, position=1)])

    heavy_squat = Prescription(
        day_id=heavy.id, lift_id=squat.id, position=0, notes="Belt on top set", rest_seconds=180,
        load_strategy={"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 100,
                       "roundingIncrement": 5},
        set_scheme={"type": "RAMP", "steps": [{"percentage": 50, "reps": 5}, {"percentage": 75, "reps": 5},
                                              {"percentage": 100, "reps": 5}], "workSetThreshold": 80})
    heavy_bench = Prescription(
        day_id=heavy.id, lift_id=bench.id, position=1,
        load_strategy={"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 75,
                       "roundingIncrement": 2.5},
        set_scheme={"type": "FIXED", "sets": 5, "reps": 5})
    light_squat = Prescription(
        day_id=light.id, lift_id=squat.id, position=0,
        load_strategy={"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 80,
                       "roundingIncrement": 5, "roundingDirection": "DOWN"},
        set_scheme={"type": "FIXED", "sets": 3, "reps": 5})
    linear = Progression(name="Linear +5", type="LINEAR_PROGRESSION",
                         parameters={"increment": 5, "maxType": "TRAINING_MAX", "triggerType": "AFTER_SESSION"})
    per_cycle = Progression(name="Cycle +10", type="CYCLE_PROGRESSION",
                            parameters={"increment": 10, "maxType": "TRAINING_MAX"})
    session.add_all([heavy_squat, heavy_bench, light_squat, linear, per_cycle])
    session.commit()

    session.add_all([
        ProgramProgression(program_id=program.id, progression_id=linear.id, lift_id=squat.id, priority=1),
        ProgramProgression(program_id=program.id, progression_id=linear.id, lift_id=bench.id, priority=2),
        ProgramProgression(program_id=program.id, progression_id=per_cycle.id, lift_id=None, priority=3),
    ])
    session.commit()

    return Catalog(program_id=program.id, cycle_id=cycle.id, squat_id=squat.id, bench_id=bench.id,
                   deadlift_id=deadlift.id, heavy_day_id=heavy.id, light_day_id=light.id,
                   heavy_squat_id=heavy_squat.id, heavy_bench_id=heavy_bench.id, light_squat_id=light_squat.id,
                   linear_id=linear.id, per_cycle_id=per_cycle.id)


@pytest.fixture
def catalog(session) -> Catalog:
    return seed_catalog(session)


def add_max(session: Session, lift_id: int, value: float, max_type: str = "TRAINING_MAX", user_id: int = USER_ID,
            effective: Optional[datetime.datetime] = None) -> LiftMax:
    entry = LiftMax(user_id=user_id, lift_id=lift_id, type=max_type, value=value,
                    effective_date=effective or datetime.datetime(2020, 1, 1))
    session.add(entry)
    session.commit()
    session.refresh(entry)
    return entry


@pytest.fixture
def user_id() -> int:
    return USER_ID


@pytest.fixture
def make_max(session):
    """``make_max(lift_id, value, max_type="TRAINING_MAX", user_id=USER_ID, effective=None)``."""

    def _make(lift_id: int, value: float, max_type: str = "TRAINING_MAX", user_id: int = USER_ID,
              effective: Optional[datetime.datetime] = None) -> LiftMax:
        return add_max(session, lift_id, value, max_type, user_id, effective)

    return _make
