"""Health & Readiness — liveness and booking-store readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if the process is up
    - GET /health/ready returns 503 until the database answers and both the
      users and trips tables exist (python -m launchpad.db.reset creates them)
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "launchpad-api"}


@router.get("/ready")
async def readiness_check(request: Request):
    """Ready once the booking store can serve users and trips."""
    db_manager = getattr(request.app.state, "db_manager", None)
    user_api = getattr(request.app.state, "user_api", None)
    if db_manager is None or user_api is None or not await db_manager.health_check():
        return _not_ready("database_unavailable")

    missing = await user_api.store.missing_tables()
    if missing:
        logger.warning(f"Store not initialised, missing tables {missing}")
        return _not_ready("tables_missing", missing_tables=missing)
    return {
        "status": "ready",
        "checks": {"database": "healthy", "tables": ["users", "trips"]},
    }


def _not_ready(reason: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason, **extra},
    )
