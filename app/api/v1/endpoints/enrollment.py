"""
Enrollment endpoints.

Enroll in a program, read the current position, move through weeks and
cycles, and quit.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.api.dependencies import get_event_bus
from app.db.session import get_db
from app.schemas.enrollment import EnrollmentResponse, EnrollRequest, UnenrollResponse
from app.services.enrollment_service import EnrollmentService
from app.training.events import EventBus

router = APIRouter()


@router.post("/program", summary="Enroll in a program (replaces any current enrollment).",
             response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED, )
def enroll(user_id: int, data: EnrollRequest, db: Session = Depends(get_db), bus: EventBus = Depends(get_event_bus), ):
    return EnrollmentService(db, bus).enroll(user_id, data.program_id)


@router.get("/program", summary="Get the current enrollment.", response_model=EnrollmentResponse, )
def get_enrollment(user_id: int, db: Session = Depends(get_db), bus: EventBus = Depends(get_event_bus), ):
    return EnrollmentService(db, bus).get(user_id)


@router.delete("/program", summary="Quit the current program.", response_model=UnenrollResponse, )
def unenroll(user_id: int, db: Session = Depends(get_db), bus: EventBus = Depends(get_event_bus), ):
    return EnrollmentService(db, bus).unenroll(user_id)


@router.post("/enrollment/advance-week", summary="Complete the current week.", response_model=EnrollmentResponse, )
def advance_week(user_id: int, db: Session = Depends(get_db), bus: EventBus = Depends(get_event_bus), ):
    return EnrollmentService(db, bus).advance_week(user_id)


@router.post("/enrollment/next-cycle", summary="Start the next cycle.", response_model=EnrollmentResponse, )
def next_cycle(user_id: int, db: Session = Depends(get_db), bus: EventBus = Depends(get_event_bus), ):
    return EnrollmentService(db, bus).next_cycle(user_id)
