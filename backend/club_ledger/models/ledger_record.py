"""LedgerRecord ORM — one row per persisted club record.

Invariants:
    - key is the RecordKey value (members, attendance, onlineMetadata, ...)
    - payload holds the whole record as JSON and is only ever replaced wholesale
    - version starts at 1 and increases by one on every write

Design Decisions:
    - Key/value rows instead of normalized tables: the record is the unit of
      sync and backup, so storing it as one JSON document keeps both trivial
    - Plain JSON type (not JSONB) so the same model runs on SQLite and PostgreSQL
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from club_ledger.db.base import Base


class LedgerRecord(Base):
    """Single named record of the club state."""
    __tablename__ = "ledger_records"

    key: Mapped[str] = mapped_column(String(40), primary_key=True)
    payload: Mapped[Any] = mapped_column(JSON, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
