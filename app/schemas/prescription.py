"""
Prescription resolution schemas.
"""

from typing import Literal, Optional

from pydantic import Field

from app.schemas.base import CamelModel
from app.training.set_scheme import GeneratedSet


class LiftRef(CamelModel):
    id: int
    name: str
    slug: str


class ResolvedPrescription(CamelModel):
    """A prescription turned into concrete sets for one user."""

    prescription_id: int
    lift: LiftRef
    sets: list[GeneratedSet]
    notes: Optional[str] = None
    rest_seconds: Optional[int] = None


class ResolveBatchRequest(CamelModel):
    prescription_ids: list[int] = Field(..., min_length=1, max_length=100)


class ResolveBatchItem(CamelModel):
    prescription_id: int
    status: Literal["success", "error"]
    result: Optional[ResolvedPrescription] = None
    error: Optional[str] = None


class ResolveBatchResponse(CamelModel):
    results: list[ResolveBatchItem]
