"""Move Session — relocate one session's attendance and identity to another (date, slot).

Invariants:
    - PURE: builds one new Ledger; either every member transfer and the metadata
      transfer appear in it, or (on invalid input) nothing is built at all
    - Only non-UNSET cells are copied; the source cell becomes UNSET
    - Target cells of members absent from the source session are left as they were
    - Source name/host move to the target slot; the vacated slot gets
      vacated_slot_name() and an empty host
    - Target active count is raised to target_slot + 1 when needed, never lowered
    - Moving a session onto itself returns the same Ledger object
"""

from club_ledger.core.domain_types import AttendanceStatus, EMPTY_VECTOR, Track
from club_ledger.core.date_keys import validate_date_key
from club_ledger.core.errors import ErrorContext
from club_ledger.core.ledger import Ledger, check_slot, with_cell
from club_ledger.core.session_defaults import DailyMetadata, vacated_slot_name


def move_session(
    ledger: Ledger,
    source_date: str,
    source_slot: int,
    target_date: str,
    target_slot: int,
    track: Track,
) -> Ledger:
    """Move (source_date, source_slot) to (target_date, target_slot) on one track."""
    ctx = ErrorContext(track=track.value, date_key=source_date, mutation="move_session")
    validate_date_key(source_date)
    validate_date_key(target_date)
    check_slot(source_slot, ctx)
    check_slot(target_slot, ctx)
    if source_date == target_date and source_slot == target_slot:
        return ledger

    attendance = _move_attendance(
        ledger, source_date, source_slot, target_date, target_slot, track,
    )
    metadata = _move_metadata(
        ledger, source_date, source_slot, target_date, target_slot, track,
    )
    return ledger.with_track(track, attendance=attendance, metadata=metadata)


def _move_attendance(
    ledger: Ledger,
    source_date: str,
    source_slot: int,
    target_date: str,
    target_slot: int,
    track: Track,
) -> dict | None:
    """New attendance record for the track, or None when nobody is marked."""
    record = ledger.attendance(track)
    source_daily = record.get(source_date, {})
    moving = {
        member_id: vector[source_slot]
        for member_id, vector in source_daily.items()
        if vector[source_slot] != AttendanceStatus.UNSET
    }
    if not moving:
        return None

    updated = dict(record)
    cleared = dict(source_daily)
    for member_id in moving:
        cleared[member_id] = with_cell(
            cleared[member_id], source_slot, AttendanceStatus.UNSET,
        )
    updated[source_date] = cleared

    # Same-date moves read the already-cleared source here
    target_daily = dict(updated.get(target_date, {}))
    for member_id, status in moving.items():
        target_daily[member_id] = with_cell(
            target_daily.get(member_id, EMPTY_VECTOR), target_slot, status,
        )
    updated[target_date] = target_daily
    return updated


def _move_metadata(
    ledger: Ledger,
    source_date: str,
    source_slot: int,
    target_date: str,
    target_slot: int,
    track: Track,
) -> dict:
    source = ledger.resolved_metadata(source_date, track)
    source_names = list(source.session_names)
    source_hosts = list(source.session_hosts)
    moved_name = source_names[source_slot]
    moved_host = source_hosts[source_slot]
    source_names[source_slot] = vacated_slot_name(track, source_slot)
    source_hosts[source_slot] = ""

    updated = dict(ledger.metadata(track))
    if source_date == target_date:
        target_names, target_hosts = source_names, source_hosts
        target_count = source.session_count
    else:
        updated[source_date] = DailyMetadata(
            session_names=tuple(source_names),
            session_hosts=tuple(source_hosts),
            session_count=source.session_count,
        )
        # Absent target metadata resolves to the synthesized track default
        target = ledger.resolved_metadata(target_date, track)
        target_names = list(target.session_names)
        target_hosts = list(target.session_hosts)
        target_count = target.session_count

    target_names[target_slot] = moved_name
    target_hosts[target_slot] = moved_host
    updated[target_date] = DailyMetadata(
        session_names=tuple(target_names),
        session_hosts=tuple(target_hosts),
        session_count=max(target_count, target_slot + 1),
    )
    return updated
