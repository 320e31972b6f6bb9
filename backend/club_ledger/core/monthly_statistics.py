"""Monthly Statistics — sessions held, attendance volume and the member table for a month.

Invariants:
    - sessions_held sums the active count of every date with stored metadata in the month
    - attended counts every stored vector, roster or not, over active slots only
    - rows include anyone with offline OR online attendance, sorted by offline count
"""

from dataclasses import dataclass
from typing import Sequence

from club_ledger.core.domain_types import Track
from club_ledger.core.date_keys import in_month
from club_ledger.core.aggregation import compute_member_stats, iter_active_counts
from club_ledger.core.ledger import Ledger
from club_ledger.core.roster import Member


@dataclass(frozen=True)
class TrackMonthSummary:
    track: Track
    sessions_held: int
    attended: int


@dataclass(frozen=True)
class MonthlyMemberRow:
    member_id: str
    name: str
    offline: int
    online: int


@dataclass(frozen=True)
class MonthlyStatistics:
    year: int
    month: int
    offline: TrackMonthSummary
    online: TrackMonthSummary
    rows: list[MonthlyMemberRow]

    @property
    def total_attended(self) -> int:
        return self.offline.attended + self.online.attended


def summarize_track_month(
    ledger: Ledger, year: int, month: int, track: Track,
) -> TrackMonthSummary:
    held = sum(
        ledger.resolved_metadata(date_key, track).session_count
        for date_key in ledger.metadata(track)
        if in_month(date_key, year, month)
    )
    attended = sum(
        count
        for date_key, _, count, _ in iter_active_counts(ledger, track)
        if in_month(date_key, year, month)
    )
    return TrackMonthSummary(track=track, sessions_held=held, attended=attended)


def compute_monthly_statistics(
    members: Sequence[Member], ledger: Ledger, year: int, month: int,
) -> MonthlyStatistics:
    stats = compute_member_stats(members, ledger, year, month)
    active = [s for s in stats if s.offline_monthly > 0 or s.online_monthly > 0]
    active.sort(key=lambda s: s.offline_monthly, reverse=True)
    return MonthlyStatistics(
        year=year,
        month=month,
        offline=summarize_track_month(ledger, year, month, Track.OFFLINE),
        online=summarize_track_month(ledger, year, month, Track.ONLINE),
        rows=[
            MonthlyMemberRow(s.member_id, s.name, s.offline_monthly, s.online_monthly)
            for s in active
        ],
    )
