"""Session Defaults — the single place that fills in missing daily metadata.

Invariants:
    - resolve_metadata is the ONLY function that applies track defaults on read paths
    - Each missing field resolves independently: names -> track default,
      hosts -> blanks, count -> MIN_SESSION_COUNT
    - ResolvedMetadata always carries exactly SLOT_COUNT names and hosts
    - Offline defaults come from the club's global session-name list;
      online defaults are the fixed ONLINE_SESSION_NAMES labels
    - vacated_slot_name() is a different scheme from both default lists and
      must stay distinct ("Meetup 2" vs "Meetup #2")
"""

from dataclasses import dataclass
from typing import Sequence

from club_ledger.core.domain_types import (
    MIN_SESSION_COUNT, SLOT_COUNT, Track,
)

DEFAULT_GLOBAL_SESSION_NAMES: tuple[str, ...] = (
    "Meetup #1", "Meetup #2", "Meetup #3", "Meetup #4",
)
ONLINE_SESSION_NAMES: tuple[str, ...] = (
    "Online 1", "Online 2", "Online 3", "Online 4",
)
BLANK_HOSTS: tuple[str, ...] = ("",) * SLOT_COUNT

_VACATED_NAME_PATTERNS: dict[Track, str] = {
    Track.OFFLINE: "Meetup {n}",
    Track.ONLINE: "Online {n}",
}


@dataclass(frozen=True)
class DailyMetadata:
    """Stored per-date metadata. Any field may be absent (None)."""
    session_names: tuple[str, ...] | None = None
    session_hosts: tuple[str, ...] | None = None
    session_count: int | None = None


@dataclass(frozen=True)
class ResolvedMetadata:
    """Metadata with every default applied: what readers actually see."""
    session_names: tuple[str, ...]
    session_hosts: tuple[str, ...]
    session_count: int

    def is_active(self, slot: int) -> bool:
        return 0 <= slot < self.session_count

    @property
    def active_hosts(self) -> tuple[str, ...]:
        return self.session_hosts[:self.session_count]


def default_session_names(
    track: Track, global_session_names: Sequence[str],
) -> tuple[str, ...]:
    """Track default names, padded to SLOT_COUNT."""
    if track == Track.ONLINE:
        return ONLINE_SESSION_NAMES
    return _pad(global_session_names, DEFAULT_GLOBAL_SESSION_NAMES)


def vacated_slot_name(track: Track, slot: int) -> str:
    """Name given to a slot whose session was moved away (1-based number)."""
    return _VACATED_NAME_PATTERNS[track].format(n=slot + 1)


def default_metadata(
    track: Track, global_session_names: Sequence[str],
) -> ResolvedMetadata:
    """Metadata synthesized for a date that has none."""
    return ResolvedMetadata(
        session_names=default_session_names(track, global_session_names),
        session_hosts=BLANK_HOSTS,
        session_count=MIN_SESSION_COUNT,
    )


def resolve_metadata(
    track: Track,
    stored: DailyMetadata | None,
    global_session_names: Sequence[str],
) -> ResolvedMetadata:
    """Apply track defaults to stored metadata (or to its absence)."""
    defaults = default_metadata(track, global_session_names)
    if stored is None:
        return defaults
    names = (
        _pad(stored.session_names, defaults.session_names)
        if stored.session_names is not None else defaults.session_names
    )
    hosts = (
        _pad(stored.session_hosts, BLANK_HOSTS)
        if stored.session_hosts is not None else BLANK_HOSTS
    )
    # 0 is treated like a missing count, as the stored layout always did
    count = stored.session_count or MIN_SESSION_COUNT
    return ResolvedMetadata(
        session_names=names, session_hosts=hosts, session_count=count,
    )


def _pad(values: Sequence[str], fill: Sequence[str]) -> tuple[str, ...]:
    """First SLOT_COUNT values, missing tail taken from fill."""
    head = tuple(values[:SLOT_COUNT])
    return head + tuple(fill[len(head):SLOT_COUNT])
