"""Stats Schemas — dashboard and monthly-statistics response models.

Invariants:
    - Every model reads straight from the core result dataclasses (from_attributes)
    - Nothing here computes; all figures come from core/aggregation.py and friends
"""

from pydantic import BaseModel, ConfigDict

from club_ledger.core.domain_types import Track


class _FromCore(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class MemberStatsResponse(_FromCore):
    member_id: str
    name: str
    offline_monthly: int
    online_monthly: int
    offline_no_show: int
    online_no_show: int
    previous_offline_monthly: int
    yearly_offline: int
    cumulative: int


class RankingEntryResponse(_FromCore):
    member_id: str
    name: str
    count: int


class HostCountResponse(_FromCore):
    name: str
    count: int


class TotalsResponse(_FromCore):
    monthly_attended: int
    cumulative_attended: int


class RosterSummaryResponse(_FromCore):
    new_this_month: int
    staff_count: int
    leader_count: int
    total: int


class MemberActivityResponse(_FromCore):
    member_id: str
    total_attended: int
    total_no_show: int
    last_attended: str | None
    inactive: bool


class DashboardResponse(_FromCore):
    year: int
    month: int
    member_stats: list[MemberStatsResponse]
    monthly_ranking: list[RankingEntryResponse]
    yearly_ranking: list[RankingEntryResponse]
    previous_month_ranking: list[RankingEntryResponse]
    host_leaderboard: list[HostCountResponse]
    totals: TotalsResponse
    roster: RosterSummaryResponse
    activity: list[MemberActivityResponse]


class TrackMonthSummaryResponse(_FromCore):
    track: Track
    sessions_held: int
    attended: int


class MonthlyMemberRowResponse(_FromCore):
    member_id: str
    name: str
    offline: int
    online: int


class MonthlyStatisticsResponse(_FromCore):
    year: int
    month: int
    offline: TrackMonthSummaryResponse
    online: TrackMonthSummaryResponse
    total_attended: int
    rows: list[MonthlyMemberRowResponse]
