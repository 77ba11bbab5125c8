"""Health, Readiness & Warm-up — probes for container orchestration and cold starts.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
    - GET /warmup establishes the shared database connection ahead of traffic
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from shiptrack.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "shipment-tracker-api",
        "version": "1.0.0",
    }


@router.get("/health/ready")
async def readiness_check(
    manager: DatabaseSessionManager = Depends(get_db_manager),
):
    """Readiness probe — includes database connectivity."""
    db_ok = await manager.health_check()
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}


@router.get("/warmup", status_code=status.HTTP_200_OK)
async def warmup(
    manager: DatabaseSessionManager = Depends(get_db_manager),
):
    """Open the database connection so the next webhook skips the handshake."""
    await manager.connect()
    return {"message": "Warmed up"}
