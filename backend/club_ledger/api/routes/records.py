"""Record Routes — whole-record sync and full backup.

Invariants:
    - Unknown record keys answer 404 (UnknownRecordError)
    - A backup export round-trips through POST /backup unchanged
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from club_ledger.api.dependencies import get_store, is_privileged
from club_ledger.infrastructure.ledger_store import SqlLedgerStore
from club_ledger.schemas.records import (
    BackupImportResponse, RecordReplace, RecordResponse, RecordWriteResponse,
)
from club_ledger.services.snapshot_service import SnapshotService

router = APIRouter(prefix="/api/v1", tags=["records"])


@router.get("/records/{key}", response_model=RecordResponse)
async def get_record(key: str, store: SqlLedgerStore = Depends(get_store)):
    return await SnapshotService(store).read_record(key)


@router.put("/records/{key}", response_model=RecordWriteResponse)
async def replace_record(
    key: str,
    body: RecordReplace,
    store: SqlLedgerStore = Depends(get_store),
    privileged: bool = Depends(is_privileged),
):
    return await SnapshotService(store).replace_record(
        key, body.payload, privileged=privileged,
    )


@router.get("/backup")
async def export_backup(store: SqlLedgerStore = Depends(get_store)) -> dict[str, Any]:
    return await SnapshotService(store).export_backup()


@router.post("/backup", response_model=BackupImportResponse)
async def import_backup(
    data: dict[str, Any] = Body(...),
    store: SqlLedgerStore = Depends(get_store),
    privileged: bool = Depends(is_privileged),
):
    return await SnapshotService(store).import_backup(data, privileged=privileged)
