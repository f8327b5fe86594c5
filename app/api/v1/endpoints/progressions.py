"""
Progression endpoints.

Manual triggering, the audit history and failure counters.
Automatic progressions run from event consumers, not from here.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.db.session import get_db
from app.schemas.progression import FailureCounterResponse, ProgressionLogResponse, TriggerRequest, TriggerResponse
from app.services.progression_service import ProgressionService

router = APIRouter()


@router.post("/progressions/trigger", summary="Apply a progression now.", response_model=TriggerResponse, )
def trigger_progression(user_id: int, data: TriggerRequest, db: Session = Depends(get_db), ):
    return ProgressionService(db).trigger_manual(user_id, data)


@router.get("/progression-history", summary="Applied progressions, newest first.",
            response_model=list[ProgressionLogResponse], )
def progression_history(user_id: int, lift_id: Optional[int] = Query(None, alias="liftId"),
                        db: Session = Depends(get_db), ):
    return ProgressionService(db).history(user_id, lift_id)


@router.get("/failure-counters", summary="Consecutive failed sets per lift and deload progression.",
            response_model=list[FailureCounterResponse], )
def failure_counters(user_id: int, lift_id: Optional[int] = Query(None, alias="liftId"),
                     db: Session = Depends(get_db), ):
    return ProgressionService(db).failure_counters(user_id, lift_id)
