"""Aggregation — pure statistics computed from a Ledger snapshot and a roster.

Invariants:
    - All functions are pure (no IO, no async, no DB) and never modify inputs
    - Only slots below the date's active session count are counted; stale cells
      in trimmed slots are invisible and reappear if the count is raised again
    - Rankings drop zero counts and keep roster order among ties (stable sort)
    - Nothing here is cached or stored: every figure is recomputable from the
      ledger alone
    - Members absent from the roster are ignored by per-member figures

Design Decisions:
    - One pass per track over the records, tallying every member at once,
      instead of one scan per member
    - Monthly, yearly and previous-month rankings are keyed on the offline track;
      online attendance never moves a member in the rankings
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterator, Sequence

from club_ledger.core.domain_types import AttendanceStatus, StatusVector, Track
from club_ledger.core.date_keys import in_month, in_year, previous_month
from club_ledger.core.ledger import Ledger
from club_ledger.core.roster import Member


@dataclass(frozen=True)
class MemberStats:
    member_id: str
    name: str
    offline_monthly: int = 0
    online_monthly: int = 0
    offline_no_show: int = 0
    online_no_show: int = 0
    previous_offline_monthly: int = 0
    yearly_offline: int = 0
    cumulative: int = 0


@dataclass(frozen=True)
class RankingEntry:
    member_id: str
    name: str
    count: int


@dataclass(frozen=True)
class HostCount:
    name: str
    count: int


@dataclass(frozen=True)
class Totals:
    monthly_attended: int
    cumulative_attended: int


@dataclass(frozen=True)
class Dashboard:
    """Everything the monthly dashboard shows, for one reference month."""
    year: int
    month: int
    member_stats: list[MemberStats] = field(default_factory=list)
    monthly_ranking: list[RankingEntry] = field(default_factory=list)
    yearly_ranking: list[RankingEntry] = field(default_factory=list)
    previous_month_ranking: list[RankingEntry] = field(default_factory=list)
    host_leaderboard: list[HostCount] = field(default_factory=list)
    totals: Totals = Totals(0, 0)


@dataclass
class _Tally:
    offline_monthly: int = 0
    online_monthly: int = 0
    offline_no_show: int = 0
    online_no_show: int = 0
    previous_offline_monthly: int = 0
    yearly_offline: int = 0
    cumulative: int = 0


# ─── Cell counting ───────────────────────────────────────────────

def count_active(vector: StatusVector, session_count: int) -> tuple[int, int]:
    """(attended, no_show) over the first session_count slots."""
    active = vector[:session_count]
    attended = sum(1 for s in active if s == AttendanceStatus.ATTENDED)
    no_show = sum(1 for s in active if s == AttendanceStatus.NO_SHOW)
    return attended, no_show


def iter_active_counts(
    ledger: Ledger, track: Track,
) -> Iterator[tuple[str, str, int, int]]:
    """Yield (date_key, member_id, attended, no_show) for every stored vector."""
    for date_key, daily in ledger.attendance(track).items():
        session_count = ledger.resolved_metadata(date_key, track).session_count
        for member_id, vector in daily.items():
            attended, no_show = count_active(vector, session_count)
            yield date_key, member_id, attended, no_show


# ─── Per-member stats ────────────────────────────────────────────

def compute_member_stats(
    members: Sequence[Member], ledger: Ledger, year: int, month: int,
) -> list[MemberStats]:
    """Per-member figures for the reference month/year, in roster order."""
    prev_year, prev_month = previous_month(year, month)
    tallies: dict[str, _Tally] = {m.id: _Tally() for m in members}

    for date_key, member_id, attended, no_show in iter_active_counts(ledger, Track.OFFLINE):
        tally = tallies.get(member_id)
        if tally is None:
            continue
        tally.cumulative += attended
        if in_month(date_key, year, month):
            tally.offline_monthly += attended
            tally.offline_no_show += no_show
        if in_month(date_key, prev_year, prev_month):
            tally.previous_offline_monthly += attended
        if in_year(date_key, year):
            tally.yearly_offline += attended

    for date_key, member_id, attended, no_show in iter_active_counts(ledger, Track.ONLINE):
        tally = tallies.get(member_id)
        if tally is None:
            continue
        tally.cumulative += attended
        if in_month(date_key, year, month):
            tally.online_monthly += attended
            tally.online_no_show += no_show

    return [
        MemberStats(member_id=m.id, name=m.name, **vars(tallies[m.id]))
        for m in members
    ]


# ─── Rankings ────────────────────────────────────────────────────

def rank_by(
    stats: Sequence[MemberStats],
    value: Callable[[MemberStats], int],
    limit: int | None = None,
) -> list[RankingEntry]:
    """Descending by value, zero counts dropped, ties in input order."""
    ranked = sorted((s for s in stats if value(s) > 0), key=value, reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return [RankingEntry(s.member_id, s.name, value(s)) for s in ranked]


def monthly_ranking(
    stats: Sequence[MemberStats], limit: int | None = None,
) -> list[RankingEntry]:
    return rank_by(stats, lambda s: s.offline_monthly, limit)


def yearly_ranking(
    stats: Sequence[MemberStats], limit: int | None = None,
) -> list[RankingEntry]:
    return rank_by(stats, lambda s: s.yearly_offline, limit)


def previous_month_ranking(
    stats: Sequence[MemberStats], limit: int | None = None,
) -> list[RankingEntry]:
    return rank_by(stats, lambda s: s.previous_offline_monthly, limit)


# ─── Hosts & totals ──────────────────────────────────────────────

def host_leaderboard(
    ledger: Ledger, year: int, month: int, limit: int | None = None,
) -> list[HostCount]:
    """Host appearances over active slots of the month, both tracks combined.

    Whitespace-only hosts are ignored. Names are counted as stored, so
    "Sam" and "Sam " are separate entries.
    Ties keep first-seen order (offline dates first, each track date-ordered).
    """
    counts: Counter[str] = Counter()
    for track in (Track.OFFLINE, Track.ONLINE):
        for date_key in sorted(ledger.metadata(track)):
            if not in_month(date_key, year, month):
                continue
            for host in ledger.resolved_metadata(date_key, track).active_hosts:
                if host.strip():
                    counts[host] += 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return [HostCount(name, count) for name, count in ranked]


def compute_totals(stats: Sequence[MemberStats]) -> Totals:
    return Totals(
        monthly_attended=sum(s.offline_monthly + s.online_monthly for s in stats),
        cumulative_attended=sum(s.cumulative for s in stats),
    )


def build_dashboard(
    members: Sequence[Member],
    ledger: Ledger,
    year: int,
    month: int,
    *,
    ranking_limit: int | None = 5,
    previous_ranking_limit: int | None = 3,
    host_limit: int | None = 5,
) -> Dashboard:
    stats = compute_member_stats(members, ledger, year, month)
    return Dashboard(
        year=year,
        month=month,
        member_stats=stats,
        monthly_ranking=monthly_ranking(stats, ranking_limit),
        yearly_ranking=yearly_ranking(stats, ranking_limit),
        previous_month_ranking=previous_month_ranking(stats, previous_ranking_limit),
        host_leaderboard=host_leaderboard(ledger, year, month, host_limit),
        totals=compute_totals(stats),
    )
