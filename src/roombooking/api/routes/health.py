"""Health endpoints.

GET /health     → liveness, never touches the database
GET /health/db  → readiness, runs SELECT 1 (503 when storage is down)
"""

from fastapi import APIRouter, Depends

from roombooking.api.deps import get_storage
from roombooking.infra.db import Storage, fetchone

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/health/db")
def health_db(storage: Storage = Depends(get_storage)) -> dict:
    with storage.txn() as cur:
        fetchone(cur, "SELECT 1")
    return {"status": "ok", "database": "ok"}
