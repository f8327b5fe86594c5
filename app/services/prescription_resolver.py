"""
Prescription resolver.

Turns a stored prescription into concrete sets for one user: parse the
load strategy and set scheme, look up the lift and the user's current
max, and run every set through the same max + rounding pipeline.

Batch resolution shares one :class:`MemoizedMaxLookup` across all items
of the call and reports per-item failures instead of aborting.
"""

import logging
from typing import Optional

from sqlmodel import Session

from app.core.exceptions import DomainError, NotFoundError
from app.db.repositories.lift import LiftRepository
from app.db.repositories.lift_max import LiftMaxRepository
from app.db.repositories.prescription import PrescriptionRepository
from app.models.prescription import Prescription
from app.schemas.prescription import LiftRef, ResolveBatchItem, ResolveBatchResponse, ResolvedPrescription
from app.training.load_strategy import parse_load_strategy
from app.training.max_lookup import MaxLookup, MemoizedMaxLookup
from app.training.set_scheme import parse_set_scheme

logger = logging.getLogger(__name__)


class PrescriptionResolver:
    """Resolves prescriptions for a user.  Holds no state between calls."""

    def __init__(self, session: Session):
        self.prescriptions = PrescriptionRepository(session)
        self.lifts = LiftRepository(session)
        self.maxes = LiftMaxRepository(session)

    def new_lookup(self) -> MemoizedMaxLookup:
        """A max cache for a single call; discard it when the call returns."""
        return MemoizedMaxLookup(self.maxes)

    def resolve(self, prescription_id: int, user_id: int) -> ResolvedPrescription:
        prescription = self.prescriptions.get_by_id(prescription_id)
        if prescription is None:
            raise NotFoundError("Prescription", prescription_id)
        return self.resolve_prescription(prescription, user_id, self.new_lookup())

    def resolve_prescription(self, prescription: Prescription, user_id: int,
                             lookup: Optional[MaxLookup] = None, ) -> ResolvedPrescription:
        """Resolve an already loaded prescription.

        Raises:
            NotFoundError: the lift does not exist.
            MaxNotFoundError: the user has no current max for the lift.
            ValidationFailedError: the stored strategy or scheme is invalid.
        """
        lookup = lookup or self.new_lookup()
        lift = self.lifts.get_by_id(prescription.lift_id)
        if lift is None:
            raise NotFoundError("Lift", prescription.lift_id)

        strategy = parse_load_strategy(prescription.load_strategy)
        scheme = parse_set_scheme(prescription.set_scheme)
        sets = scheme.generate(lambda percentage: strategy.weight(lookup, user_id, lift.id, percentage))

        return ResolvedPrescription(prescription_id=prescription.id, lift=LiftRef.model_validate(lift), sets=sets,
                                    notes=prescription.notes, rest_seconds=prescription.rest_seconds, )

    def resolve_batch(self, prescription_ids: list[int], user_id: int) -> ResolveBatchResponse:
        lookup = self.new_lookup()
        found = self.prescriptions.get_many(prescription_ids)

        results: list[ResolveBatchItem] = []
        for prescription_id in prescription_ids:
            try:
                prescription = found.get(prescription_id)
                if prescription is None:
                    raise NotFoundError("Prescription", prescription_id)
                resolved = self.resolve_prescription(prescription, user_id, lookup)
            except DomainError as exc:
                logger.info("Batch item %s failed for user %s: %s", prescription_id, user_id, exc.message)
                results.append(ResolveBatchItem(prescription_id=prescription_id, status="error", error=exc.message))
                continue
            results.append(ResolveBatchItem(prescription_id=prescription_id, status="success", result=resolved))
        return ResolveBatchResponse(results=results)
