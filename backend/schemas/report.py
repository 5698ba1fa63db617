"""Pydantic schemas for report endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict

from services.snapshot_pivot_service import PivotGrouping


class CategoryAllocationResponse(BaseModel):
    category: str
    value: Decimal
    percentage: Decimal

    model_config = ConfigDict(from_attributes=True)


class ReportSummaryResponse(BaseModel):
    """P&L between the first and last snapshot of a period."""

    from_date: Optional[date] = None
    to_date: Optional[date] = None
    initial: Decimal
    final: Decimal
    pnl: Decimal
    pnl_percent: Decimal
    snapshot_count: int
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    latest_total: Decimal
    allocation: list[CategoryAllocationResponse]


class PivotRowResponse(BaseModel):
    key: str
    asset_name: str
    category_name: str
    values: list[Optional[Decimal]]
    is_total: bool

    model_config = ConfigDict(from_attributes=True)


class AssetPivotResponse(BaseModel):
    """Asset-by-date table. A null cell means the asset was absent that day."""

    dates: list[datetime]
    group_ids: list[str]
    rows: list[PivotRowResponse]

    model_config = ConfigDict(from_attributes=True)


class StackedPointResponse(BaseModel):
    date: datetime
    group_id: str
    values: dict[str, Decimal]

    model_config = ConfigDict(from_attributes=True)


class StackedSeriesResponse(BaseModel):
    """Dense series for stacked charts; every key has a value at every date."""

    grouping: PivotGrouping
    keys: list[str]
    labels: dict[str, str]
    points: list[StackedPointResponse]

    model_config = ConfigDict(from_attributes=True)


class ValuePointResponse(BaseModel):
    date: datetime
    group_id: str
    value: Decimal

    model_config = ConfigDict(from_attributes=True)
