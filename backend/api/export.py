"""CSV export endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.helpers import csv_response, get_current_user_id, get_date_range
from database import get_db
from services.asset_service import AssetService
from services.crypto_service import CryptoService
from services.export_service import (
    export_assets_csv,
    export_crypto_csv,
    export_pivot_csv,
    export_snapshots_csv,
)
from services.report_service import DateRange
from services.snapshot_pivot_service import pivot_by_asset
from services.snapshot_service import SnapshotService

router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("/assets.csv")
def export_assets(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return csv_response(export_assets_csv(AssetService.list_assets(db, user_id)), "assets.csv")


@router.get("/crypto.csv")
def export_crypto(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return csv_response(export_crypto_csv(CryptoService.list_cryptos(db, user_id)), "crypto.csv")


@router.get("/snapshots.csv")
def export_snapshots(
    date_range: Optional[DateRange] = Depends(get_date_range),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Every snapshot item, newest snapshot first."""
    groups = SnapshotService.list_groups(db, user_id, date_range)
    return csv_response(export_snapshots_csv(groups), "snapshots.csv")


@router.get("/pivot.csv")
def export_pivot(
    date_range: Optional[DateRange] = Depends(get_date_range),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """The asset pivot table with "—" for absent cells."""
    groups = SnapshotService.list_groups(db, user_id, date_range)
    return csv_response(export_pivot_csv(pivot_by_asset(groups)), "pivot.csv")
