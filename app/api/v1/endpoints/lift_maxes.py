"""
Lift max endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.db.session import get_db
from app.schemas.lift_max import LiftMaxCreate, LiftMaxResponse
from app.services.lift_max_service import LiftMaxService
from app.training.max_lookup import MaxType

router = APIRouter()


@router.post("/lift-maxes", summary="Record a new max.", response_model=LiftMaxResponse,
             status_code=status.HTTP_201_CREATED, )
def create_lift_max(user_id: int, data: LiftMaxCreate, db: Session = Depends(get_db), ):
    return LiftMaxService(db).create(user_id, data)


@router.get("/lift-maxes", summary="Max history, newest first.", response_model=list[LiftMaxResponse], )
def list_lift_maxes(user_id: int, lift_id: Optional[int] = Query(None, alias="liftId"),
                    db: Session = Depends(get_db), ):
    return LiftMaxService(db).list_for_user(user_id, lift_id)


@router.get("/lift-maxes/current", summary="Current max for a lift.", response_model=LiftMaxResponse, )
def get_current_lift_max(user_id: int, lift_id: int = Query(..., alias="liftId"),
                         max_type: MaxType = Query(MaxType.TRAINING_MAX, alias="type"),
                         db: Session = Depends(get_db), ):
    return LiftMaxService(db).get_current(user_id, lift_id, max_type)
