"""Record Schemas — whole-record snapshot sync and backup payloads.

Invariants:
    - RecordResponse.version is 0 for a record that has never been written
    - A backup is a flat object keyed by record name, plus exportDate
"""

from typing import Any

from pydantic import BaseModel, Field

from club_ledger.core.domain_types import RecordKey


class RecordResponse(BaseModel):
    key: RecordKey
    payload: Any
    version: int


class RecordReplace(BaseModel):
    payload: Any


class RecordWriteResponse(BaseModel):
    applied: bool
    key: RecordKey
    version: int


class BackupImportResponse(BaseModel):
    applied: bool
    imported: list[RecordKey] = Field(default_factory=list)
    versions: dict[str, int] = Field(default_factory=dict)
