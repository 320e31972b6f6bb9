"""Stats Routes — dashboard, monthly statistics and CSV export."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from fastapi.responses import Response

from club_ledger.api.dependencies import get_store
from club_ledger.config import Settings, get_settings
from club_ledger.infrastructure.ledger_store import SqlLedgerStore
from club_ledger.schemas.stats import DashboardResponse, MonthlyStatisticsResponse
from club_ledger.services.export_csv import export_filename, render_export_csv
from club_ledger.services.stats_service import StatsService

router = APIRouter(prefix="/api/v1/stats", tags=["stats"])

Year = Annotated[int, Path(ge=1, le=9999)]
Month = Annotated[int, Path(ge=1, le=12)]


def get_stats_service(
    store: SqlLedgerStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> StatsService:
    return StatsService(store, settings)


@router.get("/{year}/{month}", response_model=DashboardResponse)
async def get_dashboard(
    year: Year,
    month: Month,
    service: StatsService = Depends(get_stats_service),
):
    return await service.dashboard(year, month)


@router.get("/{year}/{month}/monthly", response_model=MonthlyStatisticsResponse)
async def get_monthly_statistics(
    year: Year,
    month: Month,
    service: StatsService = Depends(get_stats_service),
):
    return await service.monthly(year, month)


@router.get("/{year}/{month}/export.csv")
async def export_csv(
    year: Year,
    month: Month,
    service: StatsService = Depends(get_stats_service),
):
    table = await service.export_table(year, month)
    return Response(
        content=render_export_csv(table).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(year, month)}"',
        },
    )
