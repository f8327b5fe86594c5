"""Simulate one full cycle of a small program on a throwaway SQLite database.

Seeds a 3-week squat/bench program with a linear (after session) and a
cycle progression, enrolls a user, then walks every scheduled day:
generate the workout, log its work sets, finish, advance the week.
Prints the resolved weights and the progression history at the end.

Usage:
    python scripts/simulate_cycle.py [path/to/sim.db]
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlmodel import Session, SQLModel

import app.db.base  # noqa: F401
from app.db.session import build_engine
from app.models import (Cycle, Day, Lift, LiftMax, Prescription, Program, ProgramProgression, Progression, Week,
                        WeekDay, )
from app.schemas.workout_session import LoggedSetCreate, LogSetsRequest
from app.services import EnrollmentService, ProgressionService, WorkoutGenerator, WorkoutSessionService
from app.services.progression_consumer import register_progression_consumers
from app.training.events import EventBus

USER_ID = 1
WEEKS = 3


def seed(session: Session) -> int:
    squat = Lift(name="Squat", slug="squat")
    bench = Lift(name="Bench Press", slug="bench-press")
    cycle = Cycle(name="Three week wave", length_weeks=WEEKS)
    session.add_all([squat, bench, cycle])
    session.commit()

    program = Program(name="Simulated Starr", slug="simulated-starr", cycle_id=cycle.id)
    session.add(program)
    session.commit()

    heavy = Day(name="Heavy", slug="heavy", program_id=program.id)
    light = Day(name="Light", slug="light", program_id=program.id)
    session.add_all([heavy, light])
    session.commit()

    for number in range(1, WEEKS + 1):
        week = Week(cycle_id=cycle.id, week_number=number)
        session.add(week)
        session.commit()
        session.add_all([WeekDay(week_id=week.id, day_id=heavy.id, position=0),
                         WeekDay(week_id=week.id, day_id=light.id, position=1)])

    ramp = {"type": "RAMP", "steps": [{"percentage": 50, "reps": 5}, {"percentage": 75, "reps": 5},
                                      {"percentage": 100, "reps": 5}]}
    session.add_all([
        Prescription(day_id=heavy.id, lift_id=squat.id, position=0, set_scheme=ramp,
                     load_strategy={"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 100,
                                    "roundingIncrement": 5}),
        Prescription(day_id=heavy.id, lift_id=bench.id, position=1, set_scheme={"type": "FIXED", "sets": 5, "reps": 5},
                     load_strategy={"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 85,
                                    "roundingIncrement": 2.5}),
        Prescription(day_id=light.id, lift_id=squat.id, position=0, set_scheme={"type": "FIXED", "sets": 3, "reps": 5},
                     load_strategy={"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 80,
                                    "roundingIncrement": 5, "roundingDirection": "DOWN"}),
    ])

    linear = Progression(name="Add 5 per session", type="LINEAR_PROGRESSION",
                         parameters={"increment": 5, "maxType": "TRAINING_MAX", "triggerType": "AFTER_SESSION"})
    per_cycle = Progression(name="Add 10 per cycle", type="CYCLE_PROGRESSION",
                            parameters={"increment": 10, "maxType": "TRAINING_MAX"})
    session.add_all([linear, per_cycle,
                     LiftMax(user_id=USER_ID, lift_id=squat.id, type="TRAINING_MAX", value=300),
                     LiftMax(user_id=USER_ID, lift_id=bench.id, type="TRAINING_MAX", value=200)])
    session.commit()

    session.add_all([
        ProgramProgression(program_id=program.id, progression_id=linear.id, lift_id=squat.id, priority=1),
        ProgramProgression(program_id=program.id, progression_id=per_cycle.id, lift_id=None, priority=2,
                           override_increment=None),
    ])
    session.commit()
    return program.id


def main(db_path: str) -> None:
    Path(db_path).unlink(missing_ok=True)
    engine = build_engine(f"sqlite:///{db_path}")
    SQLModel.metadata.create_all(engine)

    bus = EventBus()
    register_progression_consumers(bus, lambda: Session(engine))

    with Session(engine) as session:
        program_id = seed(session)
        EnrollmentService(session, bus).enroll(USER_ID, program_id)

        for _ in range(WEEKS):
            for _ in range(2):
                workout = WorkoutGenerator(session).generate(USER_ID)
                print(f"Week {workout.week_number} / {workout.day_slug}")
                for exercise in workout.exercises:
                    weights = ", ".join(f"{s.weight:g}x{s.target_reps}" for s in exercise.sets)
                    print(f"  {exercise.lift.name:<12} {weights}")

                sessions = WorkoutSessionService(session, bus)
                started = sessions.start(USER_ID)
                work_sets = [LoggedSetCreate(lift_id=e.lift.id, prescription_id=e.prescription_id,
                                             set_number=s.set_number, weight=s.weight, target_reps=s.target_reps,
                                             reps_performed=s.target_reps)
                             for e in workout.exercises for s in e.sets if s.is_work_set]
                sessions.log_sets(USER_ID, started.id, LogSetsRequest(sets=work_sets))
                sessions.finish(USER_ID, started.id)
                session.expire_all()

            EnrollmentService(session, bus).advance_week(USER_ID)
            session.expire_all()

        print()
        print("Progression history")
        for entry in reversed(ProgressionService(session).history(USER_ID)):
            print(f"  lift {entry.lift_id}: {entry.previous_value:g} -> {entry.new_value:g} ({entry.trigger_type})")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "simulate_cycle.db")
