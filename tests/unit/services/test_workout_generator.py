"""Tests for WorkoutGenerator and MeetDateService."""

import datetime

import pytest

from app.core.exceptions import MaxNotFoundError, NotFoundError, ValidationFailedError
from app.db.repositories import ProgramRepository, UserProgramStateRepository
from app.models import Day, WeekDay
from app.services.enrollment_service import EnrollmentService
from app.services.meet_date_service import MeetDateService
from app.services.workout_generator import WorkoutGenerator
from conftest import USER_ID

TODAY = datetime.date(2026, 5, 1)


@pytest.fixture
def enrolled(session, bus, catalog, make_max):
    make_max(catalog.squat_id, 300)
    make_max(catalog.bench_id, 200)
    EnrollmentService(session, bus).enroll(USER_ID, catalog.program_id)
    return catalog


def _schedule_empty_day(session, catalog, week_number: int) -> Day:
    week = ProgramRepository(session).get_week(catalog.cycle_id, week_number)
    day = Day(name="Mobility", slug="mobility", program_id=catalog.program_id)
    session.add(day)
    session.commit()
    session.refresh(day)
    session.add(WeekDay(week_id=week.id, day_id=day.id, position=2))
    session.commit()
    return day


def _set_day_index(session, index: int) -> None:
    states = UserProgramStateRepository(session)
    state = states.get_by_user(USER_ID)
    state.current_day_index = index
    states.update(state)


@pytest.fixture
def generator(session) -> WorkoutGenerator:
    return WorkoutGenerator(session)


class TestGenerate:
    def test_current_position(self, generator, enrolled):
        workout = generator.generate(USER_ID, on_date=TODAY)
        assert (workout.week_number, workout.day_slug, workout.cycle_iteration) == (1, "heavy", 1)
        assert [e.lift.slug for e in workout.exercises] == ["squat", "bench-press"]
        assert [s.weight for s in workout.exercises[0].sets] == [150.0, 225.0, 300.0]
        assert workout.date == TODAY

    def test_explicit_week_and_day(self, generator, enrolled):
        workout = generator.generate(USER_ID, week_number=3, day_slug="light", on_date=TODAY)
        assert (workout.week_number, workout.day_slug) == (3, "light")
        assert [e.prescription_id for e in workout.exercises] == [enrolled.light_squat_id]

    def test_follows_current_day_index(self, generator, enrolled, session):
        _set_day_index(session, 1)
        assert generator.generate(USER_ID, on_date=TODAY).day_slug == "light"

    def test_day_index_past_schedule(self, generator, enrolled, session):
        _set_day_index(session, 2)
        with pytest.raises(ValidationFailedError) as info:
            generator.generate(USER_ID, on_date=TODAY)
        assert info.value.field == "daySlug"

    def test_week_outside_cycle(self, generator, enrolled):
        with pytest.raises(ValidationFailedError) as info:
            generator.generate(USER_ID, week_number=5)
        assert info.value.message == "Week not found in cycle"
        assert info.value.field == "weekNumber"

    def test_unscheduled_day(self, generator, enrolled):
        with pytest.raises(ValidationFailedError) as info:
            generator.generate(USER_ID, day_slug="rest")
        assert info.value.field == "daySlug"

    def test_not_enrolled(self, generator, catalog):
        with pytest.raises(NotFoundError):
            generator.generate(USER_ID)

    def test_day_without_prescriptions(self, generator, enrolled, session):
        _schedule_empty_day(session, enrolled, 1)
        with pytest.raises(NotFoundError) as info:
            generator.generate(USER_ID, day_slug="mobility", on_date=TODAY)
        assert info.value.message == "Day has no prescriptions"

    def test_preview_day_without_prescriptions(self, generator, enrolled, session):
        _schedule_empty_day(session, enrolled, 2)
        with pytest.raises(NotFoundError):
            generator.preview(USER_ID, 2, "mobility", on_date=TODAY)

    def test_missing_max_fails_whole_workout(self, generator, catalog, session, bus, make_max):
        make_max(catalog.squat_id, 300)
        EnrollmentService(session, bus).enroll(USER_ID, catalog.program_id)
        with pytest.raises(MaxNotFoundError):
            generator.generate(USER_ID, on_date=TODAY)


class TestTaper:
    def test_taper_applied_to_every_set(self, generator, enrolled, session):
        MeetDateService(session).set_meet_date(USER_ID, TODAY + datetime.timedelta(days=10), today=TODAY)
        workout = generator.generate(USER_ID, on_date=TODAY)
        assert [s.weight for s in workout.exercises[0].sets] == [90.0, 135.0, 180.0]
        assert {s.weight for s in workout.exercises[1].sets} == {90.0}

    def test_no_taper_far_from_meet(self, generator, enrolled, session):
        MeetDateService(session).set_meet_date(USER_ID, TODAY + datetime.timedelta(days=60), today=TODAY)
        assert generator.generate(USER_ID, on_date=TODAY).exercises[0].sets[-1].weight == 300.0

    def test_preview(self, generator, enrolled, session):
        MeetDateService(session).set_meet_date(USER_ID, TODAY + datetime.timedelta(days=25), today=TODAY)
        workout = generator.preview(USER_ID, 4, "light", on_date=TODAY)
        assert (workout.week_number, workout.day_slug) == (4, "light")
        assert {s.weight for s in workout.exercises[0].sets} == {204.0}

    def test_preview_does_not_move_position(self, generator, enrolled, session, bus):
        generator.preview(USER_ID, 2, "light", on_date=TODAY)
        assert EnrollmentService(session, bus).get(USER_ID).current_week == 1


class TestMeetDate:
    def test_set_and_countdown(self, enrolled, session):
        service = MeetDateService(session)
        response = service.set_meet_date(USER_ID, TODAY + datetime.timedelta(days=20), today=TODAY)
        assert (response.days_out, response.current_phase, response.weeks_to_meet) == (20, "taper", 2)
        countdown = service.countdown(USER_ID, today=TODAY)
        assert countdown.taper_multiplier == 0.75
        assert countdown.phase_week == 1

    def test_clear(self, enrolled, session):
        service = MeetDateService(session)
        service.set_meet_date(USER_ID, TODAY + datetime.timedelta(days=20), today=TODAY)
        response = service.set_meet_date(USER_ID, None, today=TODAY)
        assert response.meet_date is None
        assert response.current_phase == "off_season"

    def test_past_date_rejected(self, enrolled, session):
        with pytest.raises(ValidationFailedError):
            MeetDateService(session).set_meet_date(USER_ID, TODAY - datetime.timedelta(days=1), today=TODAY)

    def test_not_enrolled(self, catalog, session):
        with pytest.raises(NotFoundError):
            MeetDateService(session).countdown(USER_ID, today=TODAY)
