"""Dashboard API endpoints."""

import logging
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from api.crypto import get_crypto_service
from api.helpers import get_current_user_id
from database import get_db
from services.asset_service import AssetService
from services.crypto_service import CryptoService
from services.label_service import category_labels
from services.metrics_service import (
    compute_class_allocation,
    compute_crypto_metrics,
    compute_portfolio_total,
    compute_tab_metrics,
)
from utils.labels import UNCATEGORIZED_LABEL

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


class TabSummary(BaseModel):
    """Metrics for one category tab."""

    category_id: Optional[str] = None
    category_name: str
    total: Decimal
    asset_count: int
    average_return: Decimal
    percent_of_portfolio: Decimal
    largest_position_id: Optional[str] = None
    largest_position_name: Optional[str] = None
    largest_position_percentage: Decimal


class SectorAllocationData(BaseModel):
    sector_name: str
    total_usd: Decimal
    percentage: Decimal


class CryptoSummary(BaseModel):
    """Crypto page summary; the stablecoin subtotal is in USD."""

    total_usd: Decimal
    total_brl: Decimal
    crypto_count: int
    portfolio_percentage: Decimal
    top_custody: Optional[str] = None
    stablecoins_total: Decimal
    sector_allocation: list[SectorAllocationData]


class ClassAllocationData(BaseModel):
    class_name: str
    total_brl: Decimal
    percentage: Decimal


class DashboardResponse(BaseModel):
    """Dashboard data response."""

    portfolio_total: Decimal
    conversion_rate: Decimal
    tabs: list[TabSummary]
    crypto: CryptoSummary
    class_allocation: list[ClassAllocationData]


def _tab_summary(category_id: Optional[str], name: str, holdings: list, portfolio_total: Decimal) -> TabSummary:
    metrics = compute_tab_metrics(holdings, portfolio_total)
    largest = metrics.largest_position
    return TabSummary(
        category_id=category_id,
        category_name=name,
        total=metrics.total,
        asset_count=metrics.asset_count,
        average_return=metrics.average_return,
        percent_of_portfolio=metrics.percent_of_portfolio,
        largest_position_id=largest.id if largest is not None else None,
        largest_position_name=largest.name if largest is not None else None,
        largest_position_percentage=metrics.largest_position_percentage,
    )


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: CryptoService = Depends(get_crypto_service),
):
    """Portfolio total, per-category tab metrics, crypto metrics and class allocation.

    Crypto holdings are valued in BRL at the current conversion rate, not
    from the BRL totals stored at their last recomputation.
    """
    conversion_rate = service.resolve_conversion_rate()
    assets = AssetService.list_assets(db, user_id)
    cryptos = CryptoService.list_cryptos(db, user_id)
    portfolio_total = compute_portfolio_total(assets, cryptos, conversion_rate)

    tabs = []
    for category in category_labels.list_for_user(db, user_id):
        holdings = [a for a in assets if a.category_id == category.id]
        tabs.append(_tab_summary(category.id, category.name, holdings, portfolio_total))

    uncategorized = [a for a in assets if a.category_id is None]
    if uncategorized:
        tabs.append(_tab_summary(None, UNCATEGORIZED_LABEL, uncategorized, portfolio_total))

    crypto_metrics = compute_crypto_metrics(cryptos, portfolio_total, conversion_rate)

    return DashboardResponse(
        portfolio_total=portfolio_total,
        conversion_rate=conversion_rate,
        tabs=tabs,
        crypto=CryptoSummary(
            total_usd=crypto_metrics.total_usd,
            total_brl=crypto_metrics.total_brl,
            crypto_count=crypto_metrics.crypto_count,
            portfolio_percentage=crypto_metrics.portfolio_percentage,
            top_custody=crypto_metrics.top_custody,
            stablecoins_total=crypto_metrics.stablecoins_total,
            sector_allocation=[
                SectorAllocationData(
                    sector_name=s.sector_name, total_usd=s.total_usd, percentage=s.percentage
                )
                for s in crypto_metrics.sector_allocation
            ],
        ),
        class_allocation=[
            ClassAllocationData(class_name=c.class_name, total_brl=c.total_brl, percentage=c.percentage)
            for c in compute_class_allocation(assets)
        ],
    )
