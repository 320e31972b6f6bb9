"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - Every persisted record is read and written through LedgerStore
    - replace_records writes all given records in one transaction or none of them

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the core functions that
      consume the loaded state stay synchronous; the shell awaits around them
    - Whole-record writes with a per-record version: last write wins, and the
      version tells a sync client that a record moved under it
"""

from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from club_ledger.core.domain_types import RecordKey
from club_ledger.core.ledger_snapshot import ClubState


@dataclass(frozen=True)
class StoredRecord:
    """One persisted record as the store holds it (JSON payload + version)."""
    key: RecordKey
    payload: Any
    version: int


class LedgerStore(Protocol):
    """Contract for club state persistence, implemented by the shell."""
    async def load_records(self) -> dict[RecordKey, StoredRecord]: ...
    async def load_record(self, key: RecordKey) -> StoredRecord | None: ...
    async def load_state(self) -> ClubState: ...
    async def replace_records(
        self, records: Mapping[RecordKey, Any],
    ) -> dict[RecordKey, int]: ...
