"""Ledger Routes — day/month reads and the single mutation endpoint.

Invariants:
    - Every write goes through POST /mutations with a tagged request body
    - An unprivileged mutation answers 200 with applied=false (never 401/403)
"""

from fastapi import APIRouter, Depends, Path, Query

from club_ledger.api.dependencies import get_store, is_privileged
from club_ledger.core.domain_types import Track
from club_ledger.infrastructure.ledger_store import SqlLedgerStore
from club_ledger.schemas.ledger import (
    DayView, MonthView, MutationRequest, MutationResponse,
)
from club_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/v1/ledger", tags=["ledger"])


@router.get("/days/{date_key}", response_model=DayView)
async def get_day(date_key: str, store: SqlLedgerStore = Depends(get_store)):
    """Both tracks of one date, with defaults resolved."""
    return await LedgerService(store).day_view(date_key)


@router.get("/months/{year}/{month}", response_model=MonthView)
async def get_month(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    track: Track = Query(Track.OFFLINE),
    store: SqlLedgerStore = Depends(get_store),
):
    return await LedgerService(store).month_view(year, month, track)


@router.post("/mutations", response_model=MutationResponse)
async def apply_mutation(
    body: MutationRequest,
    store: SqlLedgerStore = Depends(get_store),
    privileged: bool = Depends(is_privileged),
):
    """Apply one Toggle / ResetDay / ClearMonth / SetDailyMetadata / MoveSession / DeleteMember."""
    return await LedgerService(store).apply(body.to_mutation(), privileged=privileged)
