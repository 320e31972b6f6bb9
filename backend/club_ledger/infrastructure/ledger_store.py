"""SQL Ledger Store — LedgerStore implementation over the ledger_records table.

Invariants:
    - replace_records writes every given record and commits once; any failure
      rolls the whole batch back (MoveSession and cascading deletes rely on it)
    - Each write bumps the record's version by exactly one
    - load_state tolerates missing rows: absent records decode to defaults

Design Decisions:
    - The store receives an AsyncSession from the request dependency instead of
      owning a session factory, so tests swap the database by overriding get_db
"""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from club_ledger.core.domain_types import RecordKey
from club_ledger.core.ledger_snapshot import ClubState, state_from_records
from club_ledger.core.repository_protocols import StoredRecord
from club_ledger.models.ledger_record import LedgerRecord

logger = logging.getLogger(__name__)


class SqlLedgerStore:
    """Reads and writes whole club records as JSON rows."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def load_records(self) -> dict[RecordKey, StoredRecord]:
        result = await self._db.execute(select(LedgerRecord))
        records: dict[RecordKey, StoredRecord] = {}
        for row in result.scalars():
            try:
                key = RecordKey(row.key)
            except ValueError:
                logger.warning(
                    f"Ignoring unknown record row: {row.key}",
                    extra={"record_key": row.key},
                )
                continue
            records[key] = StoredRecord(key=key, payload=row.payload, version=row.version)
        return records

    async def load_record(self, key: RecordKey) -> StoredRecord | None:
        row = await self._db.get(LedgerRecord, key.value)
        if row is None:
            return None
        return StoredRecord(key=key, payload=row.payload, version=row.version)

    async def count_records(self) -> int:
        """Rows in ledger_records; fails if the table does not exist."""
        return await self._db.scalar(select(func.count()).select_from(LedgerRecord))

    async def load_state(self) -> ClubState:
        records = await self.load_records()
        return state_from_records(
            {key.value: record.payload for key, record in records.items()},
        )

    async def replace_records(
        self, records: Mapping[RecordKey, Any],
    ) -> dict[RecordKey, int]:
        """Upsert all records in one transaction; return their new versions."""
        if not records:
            return {}
        now = datetime.now(timezone.utc)
        versions: dict[RecordKey, int] = {}
        for key, payload in records.items():
            row = await self._db.get(LedgerRecord, key.value)
            if row is None:
                row = LedgerRecord(key=key.value, payload=payload, version=1, updated_at=now)
                self._db.add(row)
            else:
                row.payload = payload
                row.version = row.version + 1
                row.updated_at = now
            versions[key] = row.version
        await self._db.commit()
        logger.debug(
            f"Replaced records: {sorted(k.value for k in versions)}",
        )
        return versions
