"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if storage is unreachable or stores are closed
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from hiresphere.api.dependencies import get_record_store, get_storage
from hiresphere.core.repository_protocols import KeyValueStorage
from hiresphere.services.record_store import RecordStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "hiresphere-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(
    storage: KeyValueStorage = Depends(get_storage),
    records: RecordStore = Depends(get_record_store),
):
    """Readiness probe — includes storage connectivity."""
    storage_ok = storage.health_check()
    if not storage_ok or not records.is_open:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "storage_unavailable" if not storage_ok else "stores_closed",
            },
        )
    return {"status": "ready", "checks": {"storage": "healthy"}}
