"""Health & Readiness Checks — process liveness and ledger storage readiness.

Invariants:
    - GET /health/ always returns 200 while the process is up
    - GET /health/ready returns 503 when the database is unreachable or the
      ledger_records table cannot be read; 200 with the stored record count otherwise
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from club_ledger.api.dependencies import get_context
from club_ledger.config import Settings, get_settings
from club_ledger.core.errors import DatabaseError
from club_ledger.infrastructure.app_context import AppContext
from club_ledger.infrastructure.ledger_store import SqlLedgerStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_settings)):
    return {
        "status": "healthy",
        "service": "club-ledger-api",
        "version": "1.0.0",
        "access_control": "token" if settings.admin_token else "open",
    }


@router.get("/ready")
async def readiness_check(context: AppContext = Depends(get_context)):
    if not await context.db.health_check():
        return _not_ready("database_unavailable")
    try:
        async with context.db.session() as db:
            stored = await SqlLedgerStore(db).count_records()
    except DatabaseError as e:
        logger.error(f"Ledger storage not readable: {e.message}")
        return _not_ready("ledger_storage_unavailable")
    return {
        "status": "ready",
        "checks": {"database": "healthy", "ledger_records": stored},
    }
