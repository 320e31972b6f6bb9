"""Export Table — per-day, per-member, per-track counts for one month.

Invariants:
    - One row per roster member per track, offline row first
    - daily_attended has one entry per calendar day of the month
    - Totals count active slots only; formatting/encoding is left to the shell
"""

from dataclasses import dataclass
from typing import Sequence

from club_ledger.core.domain_types import DateKey, Track
from club_ledger.core.date_keys import month_date_keys
from club_ledger.core.aggregation import count_active
from club_ledger.core.ledger import Ledger
from club_ledger.core.roster import Member


@dataclass(frozen=True)
class ExportRow:
    member_id: str
    name: str
    track: Track
    daily_attended: list[int]
    total_attended: int
    total_no_show: int


@dataclass(frozen=True)
class ExportTable:
    year: int
    month: int
    days: list[DateKey]
    rows: list[ExportRow]


def build_export_table(
    members: Sequence[Member], ledger: Ledger, year: int, month: int,
) -> ExportTable:
    days = month_date_keys(year, month)
    counts_by_track = {
        track: [
            (ledger.daily_attendance(day, track),
             ledger.resolved_metadata(day, track).session_count)
            for day in days
        ]
        for track in (Track.OFFLINE, Track.ONLINE)
    }

    rows = []
    for member in members:
        for track in (Track.OFFLINE, Track.ONLINE):
            daily_attended = []
            total_no_show = 0
            for daily, session_count in counts_by_track[track]:
                vector = daily.get(member.id)
                if vector is None:
                    daily_attended.append(0)
                    continue
                attended, no_show = count_active(vector, session_count)
                daily_attended.append(attended)
                total_no_show += no_show
            rows.append(ExportRow(
                member_id=member.id,
                name=member.name,
                track=track,
                daily_attended=daily_attended,
                total_attended=sum(daily_attended),
                total_no_show=total_no_show,
            ))
    return ExportTable(year=year, month=month, days=days, rows=rows)
