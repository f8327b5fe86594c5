"""
Program catalog repository.

Read-only queries over programs, cycles, weeks and the weekly day
schedule.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.program import Cycle, Day, Program, Week, WeekDay


class ProgramRepository:
    """Repository for program structure lookups."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, program_id: int) -> Optional[Program]:
        return self.session.get(Program, program_id)

    def get_cycle(self, cycle_id: int) -> Optional[Cycle]:
        return self.session.get(Cycle, cycle_id)

    def get_week(self, cycle_id: int, week_number: int) -> Optional[Week]:
        statement = select(Week).where(Week.cycle_id == cycle_id, Week.week_number == week_number)
        return self.session.exec(statement).first()

    def get_scheduled_days(self, week_id: int) -> list[Day]:
        """Days scheduled in a week, in schedule order."""
        statement = (select(Day).join(WeekDay, WeekDay.day_id == Day.id).where(WeekDay.week_id == week_id).order_by(
            WeekDay.position, WeekDay.id))
        return list(self.session.exec(statement).all())
