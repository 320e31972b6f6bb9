"""Snapshot Service — whole-record sync and full backup import/export.

Invariants:
    - A record PUT replaces exactly one record and bumps its version
    - Payloads are decoded before they are stored; an invalid payload raises
      InvalidSnapshotError and nothing is written
    - Backup import replaces every record present in the file in one
      transaction and leaves absent records untouched
    - Writes require privilege; unprivileged writes return applied=False

Design Decisions:
    - Stored payloads are the re-encoded decoded value, not the raw request
      body, so a record always reads back in canonical form
"""

import logging
from datetime import datetime, timezone
from typing import Any

from club_ledger.core.domain_types import RecordKey
from club_ledger.core.errors import UnknownRecordError
from club_ledger.core.ledger_snapshot import (
    ClubState, encode_record, merge_records, present_record_keys,
    state_from_records, state_to_records, with_record,
)
from club_ledger.core.repository_protocols import LedgerStore
from club_ledger.schemas.records import (
    BackupImportResponse, RecordResponse, RecordWriteResponse,
)

logger = logging.getLogger(__name__)


def parse_record_key(raw: str) -> RecordKey:
    try:
        return RecordKey(raw)
    except ValueError:
        raise UnknownRecordError(raw)


class SnapshotService:
    def __init__(self, store: LedgerStore):
        self._store = store

    async def read_record(self, raw_key: str) -> RecordResponse:
        key = parse_record_key(raw_key)
        records = await self._store.load_records()
        stored = records.get(key)
        state = state_from_records({k.value: r.payload for k, r in records.items()})
        return RecordResponse(
            key=key,
            payload=encode_record(state, key),
            version=stored.version if stored else 0,
        )

    async def replace_record(
        self, raw_key: str, payload: Any, *, privileged: bool,
    ) -> RecordWriteResponse:
        key = parse_record_key(raw_key)
        extra = {"record_key": key.value}
        if not privileged:
            logger.warning("Record write rejected", extra={**extra, "applied": False})
            stored = await self._store.load_record(key)
            return RecordWriteResponse(
                applied=False, key=key, version=stored.version if stored else 0,
            )
        state = with_record(ClubState(), key, payload)
        versions = await self._store.replace_records({key: encode_record(state, key)})
        logger.info("Record replaced", extra={**extra, "applied": True})
        return RecordWriteResponse(applied=True, key=key, version=versions[key])

    async def export_backup(self) -> dict[str, Any]:
        state = await self._store.load_state()
        return {
            **state_to_records(state),
            "exportDate": datetime.now(timezone.utc).isoformat(),
        }

    async def import_backup(
        self, data: dict[str, Any], *, privileged: bool,
    ) -> BackupImportResponse:
        if not privileged:
            logger.warning("Backup import rejected", extra={"applied": False})
            return BackupImportResponse(applied=False)
        keys = present_record_keys(data)
        state = merge_records(ClubState(), data)
        versions = await self._store.replace_records(
            {key: encode_record(state, key) for key in keys},
        )
        logger.info(f"Backup imported: {sorted(k.value for k in keys)}", extra={"applied": True})
        return BackupImportResponse(
            applied=True,
            imported=keys,
            versions={key.value: version for key, version in versions.items()},
        )
