"""
Prescription resolution endpoints.
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.db.session import get_db
from app.schemas.prescription import ResolveBatchRequest, ResolveBatchResponse, ResolvedPrescription
from app.services.prescription_resolver import PrescriptionResolver

router = APIRouter()


@router.get("/prescriptions/{prescription_id}/resolve", summary="Resolve one prescription for the user.",
            response_model=ResolvedPrescription, )
def resolve_prescription(user_id: int, prescription_id: int, db: Session = Depends(get_db), ):
    return PrescriptionResolver(db).resolve(prescription_id, user_id)


@router.post("/prescriptions/resolve-batch", summary="Resolve several prescriptions; failures are per item.",
             response_model=ResolveBatchResponse, )
def resolve_batch(user_id: int, data: ResolveBatchRequest, db: Session = Depends(get_db), ):
    return PrescriptionResolver(db).resolve_batch(data.prescription_ids, user_id)
