"""
Workout session endpoints.

Sets logged here are published as SET_LOGGED events.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.api.dependencies import get_event_bus
from app.db.session import get_db
from app.schemas.workout_session import LoggedSetResponse, LogSetsRequest, WorkoutSessionResponse
from app.services.workout_session_service import WorkoutSessionService
from app.training.events import EventBus

router = APIRouter()


@router.post("/sessions", summary="Start a workout at the current position.", response_model=WorkoutSessionResponse,
             status_code=status.HTTP_201_CREATED, )
def start_session(user_id: int, db: Session = Depends(get_db), bus: EventBus = Depends(get_event_bus), ):
    return WorkoutSessionService(db, bus).start(user_id)


@router.get("/sessions/current", summary="The workout in progress.", response_model=WorkoutSessionResponse, )
def get_current_session(user_id: int, db: Session = Depends(get_db), bus: EventBus = Depends(get_event_bus), ):
    return WorkoutSessionService(db, bus).get_current(user_id)


@router.post("/sessions/{session_id}/finish", summary="Complete a workout.", response_model=WorkoutSessionResponse, )
def finish_session(user_id: int, session_id: int, db: Session = Depends(get_db),
                   bus: EventBus = Depends(get_event_bus), ):
    return WorkoutSessionService(db, bus).finish(user_id, session_id)


@router.post("/sessions/{session_id}/abandon", summary="Abandon a workout.", response_model=WorkoutSessionResponse, )
def abandon_session(user_id: int, session_id: int, db: Session = Depends(get_db),
                    bus: EventBus = Depends(get_event_bus), ):
    return WorkoutSessionService(db, bus).abandon(user_id, session_id)


@router.post("/sessions/{session_id}/sets", summary="Log performed sets.", response_model=list[LoggedSetResponse],
             status_code=status.HTTP_201_CREATED, )
def log_sets(user_id: int, session_id: int, data: LogSetsRequest, db: Session = Depends(get_db),
             bus: EventBus = Depends(get_event_bus), ):
    return WorkoutSessionService(db, bus).log_sets(user_id, session_id, data)
