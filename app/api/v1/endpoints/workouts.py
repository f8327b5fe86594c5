"""
Workout generation endpoints.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.db.session import get_db
from app.schemas.workout import GeneratedWorkout
from app.services.workout_generator import WorkoutGenerator

router = APIRouter()


@router.get("/workout", summary="Generate the workout for the current (or given) day.",
            response_model=GeneratedWorkout, )
def get_workout(user_id: int, week_number: Optional[int] = Query(None, alias="weekNumber", ge=1),
                day_slug: Optional[str] = Query(None, alias="daySlug"),
                on_date: Optional[datetime.date] = Query(None, alias="date", description="Defaults to today"),
                db: Session = Depends(get_db), ):
    return WorkoutGenerator(db).generate(user_id, week_number, day_slug, on_date)


@router.get("/workout/preview", summary="Preview any week/day of the enrolled program.",
            response_model=GeneratedWorkout, )
def preview_workout(user_id: int, week: int = Query(..., ge=1), day: str = Query(...),
                    on_date: Optional[datetime.date] = Query(None, alias="date"), db: Session = Depends(get_db), ):
    return WorkoutGenerator(db).preview(user_id, week, day, on_date)
