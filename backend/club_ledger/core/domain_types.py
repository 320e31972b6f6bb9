"""Domain Types — rich types that replace bare primitives across the ledger.

Invariants:
    - MemberId and DateKey wrap str; DateKey is always YYYY-MM-DD (local calendar day)
    - A status vector always has exactly SLOT_COUNT cells
    - Active session count is bounded MIN_SESSION_COUNT..MAX_SESSION_COUNT
    - All valid states encoded as Enums, no raw int/string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Track is a str Enum and AttendanceStatus an IntEnum: both serialize to JSON
      without custom encoders, matching the stored record layout
"""

from enum import Enum, IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

MemberId = NewType("MemberId", str)
DateKey = NewType("DateKey", str)          # YYYY-MM-DD


# ─── Session Slots ───────────────────────────────────────────────

SLOT_COUNT: int = 4
MIN_SESSION_COUNT: int = 1
MAX_SESSION_COUNT: int = SLOT_COUNT
MAX_NAME_HISTORY: int = 3


# ─── Enums ───────────────────────────────────────────────────────

class Track(str, Enum):
    """The two parallel attendance domains. Each owns its own records."""
    OFFLINE = "offline"
    ONLINE = "online"


class AttendanceStatus(IntEnum):
    """Tri-state cell value. Cycles UNSET -> ATTENDED -> NO_SHOW -> UNSET."""
    UNSET = 0
    ATTENDED = 1
    NO_SHOW = 2

    def next(self) -> "AttendanceStatus":
        return AttendanceStatus((self.value + 1) % len(AttendanceStatus))


StatusVector = tuple[
    AttendanceStatus, AttendanceStatus, AttendanceStatus, AttendanceStatus,
]

EMPTY_VECTOR: StatusVector = (AttendanceStatus.UNSET,) * SLOT_COUNT  # type: ignore[assignment]


class RecordKey(str, Enum):
    """Names of the whole-value records exchanged with persistence.

    Values match the keys of the club backup JSON.
    """
    MEMBERS = "members"
    BANNED_MEMBERS = "bannedMembers"
    ATTENDANCE = "attendance"
    METADATA = "metadata"
    ONLINE_ATTENDANCE = "onlineAttendance"
    ONLINE_METADATA = "onlineMetadata"
    GLOBAL_SESSION_NAMES = "globalSessionNames"
    CLUB_LINK = "clubLink"
    CLUB_NOTICE = "clubNotice"
    SUGGESTIONS = "suggestions"


def attendance_key(track: Track) -> RecordKey:
    """Record key holding the attendance record of a track."""
    if track == Track.ONLINE:
        return RecordKey.ONLINE_ATTENDANCE
    return RecordKey.ATTENDANCE


def metadata_key(track: Track) -> RecordKey:
    """Record key holding the daily metadata record of a track."""
    if track == Track.ONLINE:
        return RecordKey.ONLINE_METADATA
    return RecordKey.METADATA
