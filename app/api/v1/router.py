"""
API v1 router.

Aggregates all v1 endpoints.  Everything is scoped to a user.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import enrollment, lift_maxes, meet_date, prescriptions, progressions, sessions, workouts

api_router = APIRouter()

USER_PREFIX = "/users/{user_id}"

# Include endpoint routers
api_router.include_router(
    enrollment.router, prefix=USER_PREFIX, tags=["Enrollment"]
)
api_router.include_router(
    workouts.router, prefix=USER_PREFIX, tags=["Workouts"]
)
api_router.include_router(
    prescriptions.router, prefix=USER_PREFIX, tags=["Prescriptions"]
)
api_router.include_router(
    progressions.router, prefix=USER_PREFIX, tags=["Progressions"]
)
api_router.include_router(
    meet_date.router, prefix=USER_PREFIX, tags=["Meet date"]
)
api_router.include_router(
    lift_maxes.router, prefix=USER_PREFIX, tags=["Lift maxes"]
)
api_router.include_router(
    sessions.router, prefix=USER_PREFIX, tags=["Workout sessions"]
)
