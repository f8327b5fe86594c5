"""
Event consumers feeding the progression engine.

Registered once at startup.  Each event is handled in its own database
session, after the publishing request has committed.
"""

import logging
from typing import Callable

from sqlmodel import Session

from app.services.progression_service import EVENT_TRIGGERS, ProgressionService
from app.training.events import EventBus, StateEvent

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


def register_progression_consumers(bus: EventBus, session_factory: SessionFactory) -> None:
    def handle(event: StateEvent) -> None:
        with session_factory() as session:
            report = ProgressionService(session).handle_event(event)
        if report.results:
            logger.info("%s for user %s: %s applied, %s skipped, %s errors", event.type.value, event.user_id,
                        report.total_applied, report.total_skipped, report.total_errors)

    for event_type in EVENT_TRIGGERS:
        bus.subscribe(event_type, handle)
