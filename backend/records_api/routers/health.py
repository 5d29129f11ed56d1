"""
Liveness and readiness probes. Neither requires a token.
"""
from fastapi import APIRouter, Depends

from records_api.database.connections import PersistenceClient
from records_api.dependencies.persistence import get_persistence

router = APIRouter(tags=["Health"])

HEALTHY = "healthy"


@router.get("/health", summary="Liveness probe")
async def health_check():
    """200 whenever the process is serving requests."""
    return {"status": HEALTHY}


@router.get("/health/ready", summary="Readiness probe")
async def readiness_check(
    persistence: PersistenceClient = Depends(get_persistence),
):
    """
    Ping MongoDB and report per-dependency status.

    Always 200; ``status`` is ``degraded`` and ``checks.mongodb`` names the
    connection state while MongoDB is unreachable or being reconnected.
    """
    mongodb = HEALTHY if await persistence.ping() else f"unhealthy: {persistence.state.value}"
    checks = {"api": HEALTHY, "mongodb": mongodb}
    overall = HEALTHY if mongodb == HEALTHY else "degraded"
    return {"status": overall, "checks": checks}
