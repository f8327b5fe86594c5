"""
Meet date and countdown endpoints.
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.db.session import get_db
from app.schemas.meet_date import CountdownResponse, MeetDateResponse, MeetDateUpdate
from app.services.meet_date_service import MeetDateService

router = APIRouter()


@router.put("/state/meet-date", summary="Set or clear the competition date.", response_model=MeetDateResponse, )
def set_meet_date(user_id: int, data: MeetDateUpdate, db: Session = Depends(get_db), ):
    return MeetDateService(db).set_meet_date(user_id, data.meet_date)


@router.get("/state/countdown", summary="Days out, phase and taper for the meet.",
            response_model=CountdownResponse, )
def get_countdown(user_id: int, db: Session = Depends(get_db), ):
    return MeetDateService(db).countdown(user_id)
