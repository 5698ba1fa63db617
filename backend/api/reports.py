"""Report API endpoints built on snapshot history."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.helpers import get_current_user_id, get_date_range
from database import get_db
from schemas import (
    AssetPivotResponse,
    CategoryAllocationResponse,
    ReportSummaryResponse,
    StackedSeriesResponse,
    ValuePointResponse,
)
from services.report_service import DateRange, derive_summary
from services.snapshot_pivot_service import (
    PivotGrouping,
    pivot_by_asset,
    pivot_by_date,
    total_value_series,
)
from services.snapshot_service import SnapshotService

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/summary", response_model=ReportSummaryResponse)
def get_summary(
    date_range: Optional[DateRange] = Depends(get_date_range),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Initial vs final net worth in the period, and the latest allocation."""
    groups = SnapshotService.list_groups(db, user_id)
    summary = derive_summary(groups, date_range)
    return ReportSummaryResponse(
        from_date=date_range.from_date if date_range else None,
        to_date=date_range.to_date if date_range else None,
        initial=summary.initial,
        final=summary.final,
        pnl=summary.pnl,
        pnl_percent=summary.pnl_percent,
        snapshot_count=summary.snapshot_count,
        start=summary.start,
        end=summary.end,
        latest_total=summary.latest_total,
        allocation=[CategoryAllocationResponse.model_validate(a) for a in summary.allocation],
    )


@router.get("/pivot/assets", response_model=AssetPivotResponse)
def get_asset_pivot(
    date_range: Optional[DateRange] = Depends(get_date_range),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Asset-by-date table; null cells mean the asset was absent."""
    groups = SnapshotService.list_groups(db, user_id, date_range)
    return AssetPivotResponse.model_validate(pivot_by_asset(groups))


@router.get("/pivot/dates", response_model=StackedSeriesResponse)
def get_stacked_series(
    grouping: PivotGrouping = Query(default=PivotGrouping.asset),
    date_range: Optional[DateRange] = Depends(get_date_range),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Dense per-date values grouped by asset or by category."""
    groups = SnapshotService.list_groups(db, user_id, date_range)
    return StackedSeriesResponse.model_validate(pivot_by_date(groups, grouping))


@router.get("/total-series", response_model=list[ValuePointResponse])
def get_total_series(
    date_range: Optional[DateRange] = Depends(get_date_range),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Net worth per snapshot, oldest first."""
    groups = SnapshotService.list_groups(db, user_id, date_range)
    return [ValuePointResponse.model_validate(p) for p in total_value_series(groups)]
