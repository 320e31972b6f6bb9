"""Ledger Service — load, mutate, persist: the imperative shell around core/mutations.py.

Invariants:
    - Every write path is: load_state -> apply_mutation (pure) -> replace_records
    - Only records whose value changed are written, all in one transaction
    - DeleteMember also drops the member from the roster in that same transaction
    - An unprivileged request writes nothing and returns applied=False
    - The response always carries the current value of every record the
      mutation touches (changed or not), so a client can resync from it

Design Decisions:
    - One service object per request around a LedgerStore: no cached state,
      every call sees the latest committed records (last write wins)
"""

import logging
from dataclasses import replace
from typing import Any

from club_ledger.core.domain_types import (
    RecordKey, Track, attendance_key, metadata_key,
)
from club_ledger.core.date_keys import validate_date_key
from club_ledger.core.ledger_snapshot import ClubState, encode_record
from club_ledger.core.mutations import (
    ClearMonth, DeleteMember, Mutation, apply_mutation,
)
from club_ledger.core.repository_protocols import LedgerStore
from club_ledger.core.roster import remove_member
from club_ledger.schemas.ledger import (
    DayView, MonthView, MutationResponse, TrackDay,
)

logger = logging.getLogger(__name__)

_TRACKS = (Track.OFFLINE, Track.ONLINE)


def touched_records(mutation: Mutation) -> list[RecordKey]:
    """Records a mutation may change, whether or not it actually does."""
    if isinstance(mutation, DeleteMember):
        return [RecordKey.MEMBERS, RecordKey.ATTENDANCE, RecordKey.ONLINE_ATTENDANCE]
    if isinstance(mutation, ClearMonth) and mutation.track is None:
        tracks = _TRACKS
    else:
        tracks = (mutation.track,)
    keys = []
    for track in tracks:
        keys += [attendance_key(track), metadata_key(track)]
    return keys


def _encode_vectors(daily: dict) -> dict[str, list[int]]:
    return {member_id: [int(s) for s in vector] for member_id, vector in daily.items()}


class LedgerService:
    """Reads and writes the attendance ledger through a LedgerStore."""

    def __init__(self, store: LedgerStore):
        self._store = store

    async def day_view(self, date_key: str) -> DayView:
        key = validate_date_key(date_key)
        state = await self._store.load_state()
        ledger = state.ledger
        tracks = {}
        for track in _TRACKS:
            meta = ledger.resolved_metadata(key, track)
            tracks[track.value] = TrackDay(
                session_names=list(meta.session_names),
                session_hosts=list(meta.session_hosts),
                session_count=meta.session_count,
                attendance=_encode_vectors(ledger.daily_attendance(key, track)),
            )
        return DayView(date_key=key, **tracks)

    async def month_view(self, year: int, month: int, track: Track) -> MonthView:
        state = await self._store.load_state()
        entries = state.ledger.entries_in_month(year, month, track)
        return MonthView(
            year=year,
            month=month,
            track=track,
            entries={day: _encode_vectors(daily) for day, daily in entries.items()},
        )

    async def apply(self, mutation: Mutation, *, privileged: bool) -> MutationResponse:
        """Apply one mutation and persist whatever it changed."""
        state = await self._store.load_state()
        result = apply_mutation(state.ledger, mutation, privileged=privileged)
        log_extra = _log_extra(mutation)

        if not result.applied:
            logger.warning(
                f"Mutation rejected: {mutation.kind} ({result.reason})",
                extra={**log_extra, "applied": False},
            )
            return MutationResponse(
                applied=False,
                reason=result.reason,
                records=_current_records(state, mutation),
            )

        new_state = replace(state, ledger=result.ledger)
        changed = set(result.changed_records)
        if isinstance(mutation, DeleteMember):
            members = remove_member(state.members, mutation.member_id)
            if members != state.members:
                new_state = replace(new_state, members=members)
                changed.add(RecordKey.MEMBERS)

        versions = await self._store.replace_records(
            {key: encode_record(new_state, key) for key in changed},
        )
        logger.info(
            f"Mutation applied: {mutation.kind}, "
            f"changed={sorted(k.value for k in changed)}",
            extra={**log_extra, "applied": True},
        )
        return MutationResponse(
            applied=True,
            changed_records=sorted(changed, key=lambda k: k.value),
            versions={key.value: version for key, version in versions.items()},
            records=_current_records(new_state, mutation),
        )


def _current_records(state: ClubState, mutation: Mutation) -> dict[str, Any]:
    return {key.value: encode_record(state, key) for key in touched_records(mutation)}


def _log_extra(mutation: Mutation) -> dict[str, Any]:
    track = getattr(mutation, "track", None)
    return {
        "mutation": mutation.kind,
        "track": track.value if track is not None else None,
        "date_key": getattr(mutation, "date_key", None) or getattr(mutation, "source_date", None),
        "member_id": getattr(mutation, "member_id", None),
    }
