"""
FastAPI application factory.

Creates and configures the FastAPI application instance: logging, the
event bus with its progression consumers, and the mapping from domain
errors to HTTP responses.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.dependencies import session_factory as default_session_factory
from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import DomainError
from app.core.logging_config import setup_logging
from app.services.progression_consumer import SessionFactory, register_progression_consumers
from app.training.events import EventBus

logger = logging.getLogger(__name__)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a :class:`DomainError` without leaking internal causes."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message,
                     exc_info=getattr(exc, "cause", None) or exc)
    return JSONResponse(status_code=exc.status_code, content={
        "detail": exc.message,
        "code": exc.code,
        "errors": [{"field": e.field, "message": e.message} for e in exc.errors()],
    })


def create_app(session_factory: Optional[SessionFactory] = None, event_bus: Optional[EventBus] = None) -> FastAPI:
    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        bus = event_bus or EventBus.with_workers(settings.EVENT_BUS_WORKERS)
        register_progression_consumers(bus, session_factory or default_session_factory)
        app.state.event_bus = bus
        logger.info("Event bus ready (%s workers)", settings.EVENT_BUS_WORKERS)
        try:
            yield
        finally:
            bus.shutdown()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Strength program enrollment, load resolution and progression engine.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan)

    app.add_exception_handler(DomainError, domain_error_handler)

    # Include API router
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """Root endpoint - health check."""
        return {
            "message": "Ironcycle API",
            "version": settings.VERSION,
            "status": "healthy"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "service": "ironcycle-api",
            "version": settings.VERSION
        }

    return app


app = create_app()
