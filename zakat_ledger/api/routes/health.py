"""Health & Readiness — process liveness and storage readiness.

Invariants:
    - GET /health/ answers 200 whenever the process serves requests; it never touches storage
    - GET /health/ready answers 503 when the session manager is missing or SELECT 1 fails
    - Neither endpoint requires a bearer token
"""

import logging
import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from zakat_ledger import __version__
from zakat_ledger.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "zakat-ledger"


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": __version__}


@router.get("/ready")
async def readiness():
    """Readiness: storage must answer a trivial query."""
    manager = database.db_manager
    started = time.perf_counter()
    storage_ok = await manager.health_check() if manager else False
    elapsed_ms = round((time.perf_counter() - started) * 1000, 1)

    if not storage_ok:
        logger.warning("Readiness check failed: storage unavailable", extra={"path": "/ready"})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": {"database": "unavailable"}},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "database_latency_ms": elapsed_ms,
    }
