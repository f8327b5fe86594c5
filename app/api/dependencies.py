"""
Shared API dependencies.

Reusable FastAPI dependencies for database access and the event bus.
"""

from fastapi import Request
from sqlmodel import Session

from app.db.session import engine
from app.training.events import EventBus


def get_event_bus(request: Request) -> EventBus:
    """The application's event bus, created in the lifespan handler."""
    return request.app.state.event_bus


def session_factory() -> Session:
    """New session for work outside a request (event consumers)."""
    return Session(engine)
