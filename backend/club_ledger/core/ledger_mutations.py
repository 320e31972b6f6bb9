"""Ledger Mutations — pure transitions from one Ledger value to the next.

Invariants:
    - All functions are PURE: the input Ledger is never modified
    - Only the touched date/member entries are copied; everything else is shared
    - Invalid input (slot, count, date key, oversize metadata) raises before
      anything is built, so a mutation is either fully applied or not at all
    - Privilege is NOT checked here: apply_mutation (core/mutations.py) owns that

Design Decisions:
    - Toggle only cycles active slots: a click on a hidden slot would change data
      that no reader can see
    - ClearMonth with track=None clears both tracks in one transition
"""

from typing import Sequence

from club_ledger.core.domain_types import EMPTY_VECTOR, SLOT_COUNT, Track
from club_ledger.core.date_keys import in_month, validate_date_key
from club_ledger.core.errors import (
    ErrorContext, InvalidDateKeyError, InvalidMetadataError, InvalidSlotError,
)
from club_ledger.core.ledger import (
    Ledger, check_session_count, check_slot, with_cell,
)
from club_ledger.core.session_defaults import DailyMetadata


def toggle_status(
    ledger: Ledger, date_key: str, member_id: str, slot: int, track: Track,
) -> Ledger:
    """Cycle one cell UNSET -> ATTENDED -> NO_SHOW -> UNSET."""
    ctx = ErrorContext(
        track=track.value, date_key=date_key, member_id=member_id,
        mutation="toggle",
    )
    validate_date_key(date_key)
    check_slot(slot, ctx)
    meta = ledger.resolved_metadata(date_key, track)
    if not meta.is_active(slot):
        raise InvalidSlotError(
            slot,
            f"Session slot {slot} is inactive on {date_key} "
            f"({meta.session_count} active)",
            ctx,
        )

    record = ledger.attendance(track)
    daily = dict(record.get(date_key, {}))
    current = daily.get(member_id, EMPTY_VECTOR)
    daily[member_id] = with_cell(current, slot, current[slot].next())
    return ledger.with_track(track, attendance={**record, date_key: daily})


def reset_day(ledger: Ledger, date_key: str, track: Track) -> Ledger:
    """Drop a date's whole attendance entry for one track. Metadata untouched."""
    validate_date_key(date_key)
    record = ledger.attendance(track)
    if date_key not in record:
        return ledger
    return ledger.with_track(
        track, attendance={k: v for k, v in record.items() if k != date_key},
    )


def clear_month(
    ledger: Ledger, year: int, month: int, track: Track | None,
) -> Ledger:
    """Drop every attendance entry in a calendar month (one track, or both)."""
    if not 1 <= month <= 12:
        raise InvalidDateKeyError(f"{year}-{month}")
    tracks = [track] if track is not None else [Track.OFFLINE, Track.ONLINE]
    result = ledger
    for t in tracks:
        record = result.attendance(t)
        kept = {k: v for k, v in record.items() if not in_month(k, year, month)}
        if len(kept) != len(record):
            result = result.with_track(t, attendance=kept)
    return result


def set_daily_metadata(
    ledger: Ledger,
    date_key: str,
    track: Track,
    names: Sequence[str],
    hosts: Sequence[str],
    session_count: int,
) -> Ledger:
    """Whole-value replace of one date's metadata. Other dates untouched."""
    ctx = ErrorContext(track=track.value, date_key=date_key, mutation="set_metadata")
    validate_date_key(date_key)
    check_session_count(session_count, ctx)
    if len(names) > SLOT_COUNT:
        raise InvalidMetadataError(
            f"At most {SLOT_COUNT} session names allowed, got {len(names)}",
            "names", ctx,
        )
    if len(hosts) > SLOT_COUNT:
        raise InvalidMetadataError(
            f"At most {SLOT_COUNT} session hosts allowed, got {len(hosts)}",
            "hosts", ctx,
        )

    entry = DailyMetadata(
        session_names=tuple(names),
        session_hosts=tuple(hosts),
        session_count=session_count,
    )
    record = ledger.metadata(track)
    return ledger.with_track(track, metadata={**record, date_key: entry})


def delete_member_entries(ledger: Ledger, member_id: str) -> Ledger:
    """Remove a member's vectors from every date of both tracks."""
    result = ledger
    for track in (Track.OFFLINE, Track.ONLINE):
        record = result.attendance(track)
        if not any(member_id in daily for daily in record.values()):
            continue
        pruned = {
            key: (
                {m: v for m, v in daily.items() if m != member_id}
                if member_id in daily else daily
            )
            for key, daily in record.items()
        }
        result = result.with_track(track, attendance=pruned)
    return result
