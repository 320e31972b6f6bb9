"""Club State Snapshot — JSON-safe encoding of every persisted record.

Invariants:
    - encode_record produces JSON-safe values only (no tuples, Enums or dataclasses)
    - decode_record validates layout and raises InvalidSnapshotError, never
      returns a half-decoded value
    - Missing records fall back to ClubState defaults (forward-compatible)
    - with_record replaces exactly one record as a whole value
    - Field names follow the club backup JSON (camelCase), so backups made by
      earlier clients import unchanged

Design Decisions:
    - Per-record encoder/decoder tables: one mapping per RecordKey instead of
      a long if/elif chain
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping

from club_ledger.core.domain_types import RecordKey, SLOT_COUNT, Track
from club_ledger.core.date_keys import parse_date_key
from club_ledger.core.errors import InvalidDateKeyError, InvalidSnapshotError
from club_ledger.core.ledger import (
    AttendanceRecord, Ledger, MetadataRecord, make_vector,
)
from club_ledger.core.roster import BannedMember, Member
from club_ledger.core.session_defaults import DailyMetadata
from club_ledger.core.suggestions import Suggestion

# Older backups wrote the session-name list under this key
_BACKUP_ALIASES: dict[str, RecordKey] = {"globalSessions": RecordKey.GLOBAL_SESSION_NAMES}


@dataclass(frozen=True)
class ClubState:
    """Every record the club persists, decoded."""
    members: tuple[Member, ...] = ()
    banned_members: tuple[BannedMember, ...] = ()
    ledger: Ledger = field(default_factory=Ledger)
    club_link: str = ""
    club_notice: str = ""
    suggestions: tuple[Suggestion, ...] = ()


# ─── Encoding ────────────────────────────────────────────────────

def _encode_member(m: Member) -> dict:
    return {
        "id": m.id, "name": m.name, "joinedAt": m.joined_at,
        "isStaff": m.is_staff, "isLeader": m.is_leader,
        "previousNames": list(m.previous_names),
    }


def _encode_banned(b: BannedMember) -> dict:
    return {"id": b.id, "name": b.name, "reason": b.reason, "bannedAt": b.banned_at}


def _encode_suggestion(s: Suggestion) -> dict:
    return {"id": s.id, "content": s.content, "author": s.author, "createdAt": s.created_at}


def _encode_attendance(record: AttendanceRecord) -> dict:
    return {
        date_key: {member_id: [int(s) for s in vector] for member_id, vector in daily.items()}
        for date_key, daily in record.items()
    }


def _encode_metadata(record: MetadataRecord) -> dict:
    encoded = {}
    for date_key, meta in record.items():
        entry: dict[str, Any] = {}
        if meta.session_names is not None:
            entry["sessionNames"] = list(meta.session_names)
        if meta.session_hosts is not None:
            entry["sessionHosts"] = list(meta.session_hosts)
        if meta.session_count is not None:
            entry["sessionCount"] = meta.session_count
        encoded[date_key] = entry
    return encoded


_ENCODERS: dict[RecordKey, Callable[[ClubState], Any]] = {
    RecordKey.MEMBERS: lambda s: [_encode_member(m) for m in s.members],
    RecordKey.BANNED_MEMBERS: lambda s: [_encode_banned(b) for b in s.banned_members],
    RecordKey.ATTENDANCE: lambda s: _encode_attendance(s.ledger.offline_attendance),
    RecordKey.METADATA: lambda s: _encode_metadata(s.ledger.offline_metadata),
    RecordKey.ONLINE_ATTENDANCE: lambda s: _encode_attendance(s.ledger.online_attendance),
    RecordKey.ONLINE_METADATA: lambda s: _encode_metadata(s.ledger.online_metadata),
    RecordKey.GLOBAL_SESSION_NAMES: lambda s: list(s.ledger.global_session_names),
    RecordKey.CLUB_LINK: lambda s: s.club_link,
    RecordKey.CLUB_NOTICE: lambda s: s.club_notice,
    RecordKey.SUGGESTIONS: lambda s: [_encode_suggestion(x) for x in s.suggestions],
}


def encode_record(state: ClubState, key: RecordKey) -> Any:
    return _ENCODERS[key](state)


def state_to_records(state: ClubState) -> dict[str, Any]:
    """Every record of the state, keyed by record name."""
    return {key.value: encode_record(state, key) for key in RecordKey}


# ─── Decoding ────────────────────────────────────────────────────

def _require(condition: bool, key: RecordKey, message: str) -> None:
    if not condition:
        raise InvalidSnapshotError(key.value, message)


def _decode_members(payload: Any) -> tuple[Member, ...]:
    key = RecordKey.MEMBERS
    _require(isinstance(payload, list), key, "expected a list")
    members = []
    for raw in payload:
        _require(isinstance(raw, dict) and "id" in raw and "name" in raw, key,
                 "each member needs 'id' and 'name'")
        members.append(Member(
            id=str(raw["id"]),
            name=str(raw["name"]),
            joined_at=str(raw.get("joinedAt", "")),
            is_staff=bool(raw.get("isStaff", False)),
            is_leader=bool(raw.get("isLeader", False)),
            previous_names=tuple(raw.get("previousNames") or ()),
        ))
    return tuple(members)


def _decode_banned(payload: Any) -> tuple[BannedMember, ...]:
    key = RecordKey.BANNED_MEMBERS
    _require(isinstance(payload, list), key, "expected a list")
    entries = []
    for raw in payload:
        _require(isinstance(raw, dict) and "id" in raw and "name" in raw, key,
                 "each entry needs 'id' and 'name'")
        entries.append(BannedMember(
            id=str(raw["id"]),
            name=str(raw["name"]),
            reason=str(raw.get("reason", "")),
            banned_at=str(raw.get("bannedAt", "")),
        ))
    return tuple(entries)


def _decode_suggestions(payload: Any) -> tuple[Suggestion, ...]:
    key = RecordKey.SUGGESTIONS
    _require(isinstance(payload, list), key, "expected a list")
    entries = []
    for raw in payload:
        _require(isinstance(raw, dict) and "id" in raw and "content" in raw, key,
                 "each suggestion needs 'id' and 'content'")
        entries.append(Suggestion(
            id=str(raw["id"]),
            content=str(raw["content"]),
            author=str(raw.get("author", "")),
            created_at=str(raw.get("createdAt", "")),
        ))
    return tuple(entries)


def _check_date_key(key: RecordKey, date_key: str) -> None:
    try:
        parse_date_key(date_key)
    except InvalidDateKeyError:
        raise InvalidSnapshotError(key.value, f"bad date key '{date_key}'")


def _decode_attendance(key: RecordKey, payload: Any) -> AttendanceRecord:
    _require(isinstance(payload, dict), key, "expected an object keyed by date")
    record: AttendanceRecord = {}
    for date_key, daily in payload.items():
        _check_date_key(key, date_key)
        _require(isinstance(daily, dict), key, f"{date_key}: expected an object keyed by member")
        try:
            record[date_key] = {
                str(member_id): make_vector(values)
                for member_id, values in daily.items()
            }
        except (TypeError, ValueError):
            raise InvalidSnapshotError(key.value, f"{date_key}: bad status vector")
    return record


def _decode_metadata(key: RecordKey, payload: Any) -> MetadataRecord:
    _require(isinstance(payload, dict), key, "expected an object keyed by date")
    record: MetadataRecord = {}
    for date_key, raw in payload.items():
        _check_date_key(key, date_key)
        _require(isinstance(raw, dict), key, f"{date_key}: expected an object")
        names = raw.get("sessionNames")
        hosts = raw.get("sessionHosts")
        count = raw.get("sessionCount")
        for label, values in (("sessionNames", names), ("sessionHosts", hosts)):
            _require(
                values is None or (isinstance(values, list) and len(values) <= SLOT_COUNT),
                key, f"{date_key}: {label} must be a list of at most {SLOT_COUNT}",
            )
        _require(
            count is None or (isinstance(count, int) and not isinstance(count, bool)
                              and 0 <= count <= SLOT_COUNT),
            key, f"{date_key}: sessionCount must be 1-{SLOT_COUNT}",
        )
        record[date_key] = DailyMetadata(
            session_names=tuple(str(n) for n in names) if names is not None else None,
            session_hosts=tuple(str(h or "") for h in hosts) if hosts is not None else None,
            session_count=count,
        )
    return record


def _decode_names(payload: Any) -> tuple[str, ...]:
    _require(isinstance(payload, list), RecordKey.GLOBAL_SESSION_NAMES, "expected a list")
    return tuple(str(n) for n in payload)


def _decode_text(key: RecordKey) -> Callable[[Any], str]:
    def decode(payload: Any) -> str:
        _require(isinstance(payload, str), key, "expected a string")
        return payload
    return decode


def _replace_track(state: ClubState, track: Track, **records: Any) -> ClubState:
    return replace(state, ledger=state.ledger.with_track(track, **records))


_APPLIERS: dict[RecordKey, Callable[[ClubState, Any], ClubState]] = {
    RecordKey.MEMBERS: lambda s, p: replace(s, members=_decode_members(p)),
    RecordKey.BANNED_MEMBERS: lambda s, p: replace(s, banned_members=_decode_banned(p)),
    RecordKey.ATTENDANCE: lambda s, p: _replace_track(
        s, Track.OFFLINE, attendance=_decode_attendance(RecordKey.ATTENDANCE, p)),
    RecordKey.METADATA: lambda s, p: _replace_track(
        s, Track.OFFLINE, metadata=_decode_metadata(RecordKey.METADATA, p)),
    RecordKey.ONLINE_ATTENDANCE: lambda s, p: _replace_track(
        s, Track.ONLINE, attendance=_decode_attendance(RecordKey.ONLINE_ATTENDANCE, p)),
    RecordKey.ONLINE_METADATA: lambda s, p: _replace_track(
        s, Track.ONLINE, metadata=_decode_metadata(RecordKey.ONLINE_METADATA, p)),
    RecordKey.GLOBAL_SESSION_NAMES: lambda s, p: replace(
        s, ledger=replace(s.ledger, global_session_names=_decode_names(p))),
    RecordKey.CLUB_LINK: lambda s, p: replace(s, club_link=_decode_text(RecordKey.CLUB_LINK)(p)),
    RecordKey.CLUB_NOTICE: lambda s, p: replace(s, club_notice=_decode_text(RecordKey.CLUB_NOTICE)(p)),
    RecordKey.SUGGESTIONS: lambda s, p: replace(s, suggestions=_decode_suggestions(p)),
}


def with_record(state: ClubState, key: RecordKey, payload: Any) -> ClubState:
    """New state with one record replaced wholesale by a decoded payload."""
    return _APPLIERS[key](state, payload)


def _resolve_key(raw_key: str) -> RecordKey | None:
    key = _BACKUP_ALIASES.get(raw_key)
    if key is not None:
        return key
    try:
        return RecordKey(raw_key)
    except ValueError:
        return None


def state_from_records(records: Mapping[str, Any]) -> ClubState:
    """Decode stored records. Missing or None records keep their defaults."""
    return merge_records(ClubState(), records)


def merge_records(state: ClubState, records: Mapping[str, Any]) -> ClubState:
    """Replace every record present in `records`; leave the others as they are.

    Unknown keys (e.g. exportDate in a backup) are ignored.
    """
    result = state
    for key in present_record_keys(records):
        raw_key = key.value if key.value in records else _alias_for(key, records)
        result = with_record(result, key, records[raw_key])
    return result


def present_record_keys(records: Mapping[str, Any]) -> list[RecordKey]:
    """Record keys a merge_records() call with `records` would replace."""
    keys = []
    for raw_key, payload in records.items():
        key = _resolve_key(raw_key)
        if key is not None and payload is not None and key not in keys:
            keys.append(key)
    return keys


def _alias_for(key: RecordKey, records: Mapping[str, Any]) -> str:
    return next(
        alias for alias, target in _BACKUP_ALIASES.items()
        if target == key and alias in records
    )
