"""Daily Ledger — immutable value holding both tracks' attendance and metadata records.

Invariants:
    - Ledger is never modified in place: every mutation builds a new Ledger
    - Records are shared structurally between snapshots; inner dicts are never
      written after construction, so sharing is safe
    - Reads on a missing date/member return EMPTY_VECTOR (not an error)
    - Reads on missing metadata return the track default via resolve_metadata
    - Slot reads outside 0..SLOT_COUNT-1 raise InvalidSlotError

Design Decisions:
    - Plain dicts of tuples over a mapping wrapper: the records serialize
      directly to the stored JSON layout
    - Track-indexed accessors replace the duplicated offline/online code paths
"""

from dataclasses import dataclass, field, replace
from typing import Iterable

from club_ledger.core.domain_types import (
    AttendanceStatus, DateKey, EMPTY_VECTOR, MAX_SESSION_COUNT, MemberId,
    MIN_SESSION_COUNT, SLOT_COUNT, StatusVector, Track,
)
from club_ledger.core.date_keys import in_month
from club_ledger.core.errors import (
    ErrorContext, InvalidSessionCountError, InvalidSlotError,
)
from club_ledger.core.session_defaults import (
    DEFAULT_GLOBAL_SESSION_NAMES, DailyMetadata, ResolvedMetadata,
    resolve_metadata,
)

DailyAttendance = dict[str, StatusVector]
AttendanceRecord = dict[str, DailyAttendance]
MetadataRecord = dict[str, DailyMetadata]


def check_slot(slot: int, context: ErrorContext | None = None) -> int:
    """Reject slot indices outside 0..SLOT_COUNT-1. Never clamps."""
    if isinstance(slot, bool) or not isinstance(slot, int) or not 0 <= slot < SLOT_COUNT:
        raise InvalidSlotError(slot, context=context)
    return slot


def check_session_count(count: int, context: ErrorContext | None = None) -> int:
    """Reject active counts outside MIN..MAX. Never clamps."""
    if (
        isinstance(count, bool) or not isinstance(count, int)
        or not MIN_SESSION_COUNT <= count <= MAX_SESSION_COUNT
    ):
        raise InvalidSessionCountError(count, context=context)
    return count


def make_vector(values: Iterable[int]) -> StatusVector:
    """Coerce raw cell values to a SLOT_COUNT-long status vector.

    Short input is padded with UNSET; unknown values raise ValueError.
    """
    cells = [AttendanceStatus(int(v)) for v in values][:SLOT_COUNT]
    cells += [AttendanceStatus.UNSET] * (SLOT_COUNT - len(cells))
    return tuple(cells)  # type: ignore[return-value]


def with_cell(
    vector: StatusVector, slot: int, status: AttendanceStatus,
) -> StatusVector:
    cells = list(vector)
    cells[slot] = status
    return tuple(cells)  # type: ignore[return-value]


@dataclass(frozen=True)
class Ledger:
    """Both tracks' Attendance Records and Metadata Records. Pure value, no IO."""

    offline_attendance: AttendanceRecord = field(default_factory=dict)
    online_attendance: AttendanceRecord = field(default_factory=dict)
    offline_metadata: MetadataRecord = field(default_factory=dict)
    online_metadata: MetadataRecord = field(default_factory=dict)
    global_session_names: tuple[str, ...] = DEFAULT_GLOBAL_SESSION_NAMES

    # ─── Record access ──────────────────────────────────────────

    def attendance(self, track: Track) -> AttendanceRecord:
        if track == Track.ONLINE:
            return self.online_attendance
        return self.offline_attendance

    def metadata(self, track: Track) -> MetadataRecord:
        if track == Track.ONLINE:
            return self.online_metadata
        return self.offline_metadata

    def with_track(
        self,
        track: Track,
        *,
        attendance: AttendanceRecord | None = None,
        metadata: MetadataRecord | None = None,
    ) -> "Ledger":
        """New Ledger with one track's records replaced (None keeps current)."""
        changes: dict[str, object] = {}
        prefix = "online" if track == Track.ONLINE else "offline"
        if attendance is not None:
            changes[f"{prefix}_attendance"] = attendance
        if metadata is not None:
            changes[f"{prefix}_metadata"] = metadata
        return replace(self, **changes) if changes else self

    # ─── Point queries ──────────────────────────────────────────

    def daily_attendance(self, date_key: str, track: Track) -> DailyAttendance:
        return self.attendance(track).get(date_key, {})

    def vector(
        self, date_key: str, member_id: str, track: Track,
    ) -> StatusVector:
        return self.daily_attendance(date_key, track).get(member_id, EMPTY_VECTOR)

    def status(
        self, date_key: str, member_id: str, slot: int, track: Track,
    ) -> AttendanceStatus:
        check_slot(slot)
        return self.vector(date_key, member_id, track)[slot]

    def resolved_metadata(self, date_key: str, track: Track) -> ResolvedMetadata:
        return resolve_metadata(
            track, self.metadata(track).get(date_key), self.global_session_names,
        )

    # ─── Range queries ──────────────────────────────────────────

    def entries_in_month(
        self, year: int, month: int, track: Track,
    ) -> dict[DateKey, DailyAttendance]:
        """Attendance entries of one track in a calendar month, date-ordered."""
        record = self.attendance(track)
        return {
            DateKey(key): record[key]
            for key in sorted(record)
            if in_month(key, year, month)
        }

    def member_ids(self, track: Track) -> set[MemberId]:
        """Every member id that has a vector on any date of the track."""
        return {
            MemberId(member_id)
            for daily in self.attendance(track).values()
            for member_id in daily
        }
