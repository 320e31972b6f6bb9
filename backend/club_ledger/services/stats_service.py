"""Stats Service — dashboard and monthly tables over the latest stored state."""

import logging
from datetime import date

from club_ledger.config import Settings
from club_ledger.core.aggregation import build_dashboard
from club_ledger.core.export_table import ExportTable, build_export_table
from club_ledger.core.member_activity import compute_member_activity
from club_ledger.core.monthly_statistics import compute_monthly_statistics
from club_ledger.core.repository_protocols import LedgerStore
from club_ledger.core.roster import summarize_roster
from club_ledger.schemas.stats import DashboardResponse, MonthlyStatisticsResponse

logger = logging.getLogger(__name__)


class StatsService:
    def __init__(self, store: LedgerStore, settings: Settings):
        self._store = store
        self._settings = settings

    async def dashboard(
        self, year: int, month: int, today: date | None = None,
    ) -> DashboardResponse:
        state = await self._store.load_state()
        dashboard = build_dashboard(
            state.members, state.ledger, year, month,
            ranking_limit=self._settings.ranking_limit,
            previous_ranking_limit=self._settings.previous_ranking_limit,
            host_limit=self._settings.host_leaderboard_limit,
        )
        activity = compute_member_activity(
            state.members, state.ledger, today or date.today(), year, month,
        )
        return DashboardResponse.model_validate(
            {
                **vars(dashboard),
                "roster": summarize_roster(state.members, year, month),
                "activity": activity,
            },
            from_attributes=True,
        )

    async def monthly(self, year: int, month: int) -> MonthlyStatisticsResponse:
        state = await self._store.load_state()
        stats = compute_monthly_statistics(state.members, state.ledger, year, month)
        return MonthlyStatisticsResponse.model_validate(stats, from_attributes=True)

    async def export_table(self, year: int, month: int) -> ExportTable:
        state = await self._store.load_state()
        return build_export_table(state.members, state.ledger, year, month)
