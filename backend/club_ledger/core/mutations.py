"""Mutation Requests — tagged variants and the single dispatch entry point.

Invariants:
    - Every ledger write goes through apply_mutation()
    - Unprivileged callers get a rejected no-op result, never an exception,
      and never a partially applied Ledger
    - Invalid input raises a LedgerError subclass from the underlying transition
    - changed_records lists exactly the records whose value differs afterwards,
      so the shell persists only those (in one transaction)

Design Decisions:
    - Explicit dict from variant type to handler: every mapping visible in one place
    - Frozen dataclasses with a `kind` tag mirror the HTTP discriminated union
      in schemas/ledger.py
"""

from dataclasses import dataclass, field
from typing import Callable, ClassVar, Union

from club_ledger.core.domain_types import (
    RecordKey, Track, attendance_key, metadata_key,
)
from club_ledger.core.ledger import Ledger
from club_ledger.core.ledger_mutations import (
    clear_month, delete_member_entries, reset_day, set_daily_metadata,
    toggle_status,
)
from club_ledger.core.move_session import move_session


# ─── Variants ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Toggle:
    kind: ClassVar[str] = "toggle"
    date_key: str
    member_id: str
    slot: int
    track: Track = Track.OFFLINE


@dataclass(frozen=True)
class ResetDay:
    kind: ClassVar[str] = "reset_day"
    date_key: str
    track: Track = Track.OFFLINE


@dataclass(frozen=True)
class ClearMonth:
    kind: ClassVar[str] = "clear_month"
    year: int
    month: int
    track: Track | None = Track.OFFLINE


@dataclass(frozen=True)
class SetDailyMetadata:
    kind: ClassVar[str] = "set_metadata"
    date_key: str
    names: tuple[str, ...]
    hosts: tuple[str, ...]
    session_count: int
    track: Track = Track.OFFLINE


@dataclass(frozen=True)
class MoveSession:
    kind: ClassVar[str] = "move_session"
    source_date: str
    source_slot: int
    target_date: str
    target_slot: int
    track: Track = Track.OFFLINE


@dataclass(frozen=True)
class DeleteMember:
    kind: ClassVar[str] = "delete_member"
    member_id: str


Mutation = Union[Toggle, ResetDay, ClearMonth, SetDailyMetadata, MoveSession, DeleteMember]


@dataclass(frozen=True)
class MutationResult:
    """Outcome of one logical operation: the ledger the caller now owns."""
    ledger: Ledger
    applied: bool
    changed_records: frozenset[RecordKey] = field(default_factory=frozenset)
    reason: str | None = None


# ─── Dispatch ────────────────────────────────────────────────────

_HANDLERS: dict[type, Callable[[Ledger, object], Ledger]] = {
    Toggle: lambda ledger, m: toggle_status(
        ledger, m.date_key, m.member_id, m.slot, m.track,
    ),
    ResetDay: lambda ledger, m: reset_day(ledger, m.date_key, m.track),
    ClearMonth: lambda ledger, m: clear_month(ledger, m.year, m.month, m.track),
    SetDailyMetadata: lambda ledger, m: set_daily_metadata(
        ledger, m.date_key, m.track, m.names, m.hosts, m.session_count,
    ),
    MoveSession: lambda ledger, m: move_session(
        ledger, m.source_date, m.source_slot, m.target_date, m.target_slot,
        m.track,
    ),
    DeleteMember: lambda ledger, m: delete_member_entries(ledger, m.member_id),
}


def apply_mutation(
    ledger: Ledger, mutation: Mutation, *, privileged: bool,
) -> MutationResult:
    """Validate and apply one mutation. Pure: returns a new Ledger or the same one."""
    if not privileged:
        return MutationResult(ledger=ledger, applied=False, reason="unauthorized")

    handler = _HANDLERS.get(type(mutation))
    if handler is None:
        raise TypeError(f"Unsupported mutation: {type(mutation).__name__}")

    updated = handler(ledger, mutation)
    return MutationResult(
        ledger=updated,
        applied=True,
        changed_records=changed_records(ledger, updated),
    )


def changed_records(before: Ledger, after: Ledger) -> frozenset[RecordKey]:
    """Record keys whose value differs between two ledgers."""
    if before is after:
        return frozenset()
    changed: set[RecordKey] = set()
    for track in (Track.OFFLINE, Track.ONLINE):
        if _differs(before.attendance(track), after.attendance(track)):
            changed.add(attendance_key(track))
        if _differs(before.metadata(track), after.metadata(track)):
            changed.add(metadata_key(track))
    if before.global_session_names != after.global_session_names:
        changed.add(RecordKey.GLOBAL_SESSION_NAMES)
    return frozenset(changed)


def _differs(a: dict, b: dict) -> bool:
    return a is not b and a != b
