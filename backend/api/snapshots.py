"""Snapshot API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from api.crypto import get_crypto_service
from api.helpers import get_current_user_id, get_date_range
from database import get_db
from schemas import (
    SnapshotCreate,
    SnapshotDraftItem,
    SnapshotGroupResponse,
    SnapshotItemResponse,
    SnapshotItemUpdate,
)
from services.crypto_service import CryptoService
from services.report_service import DateRange
from services.snapshot_service import SnapshotService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/snapshots", tags=["snapshots"])


@router.get("", response_model=list[SnapshotGroupResponse])
def list_snapshots(
    date_range: Optional[DateRange] = Depends(get_date_range),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """List snapshots newest first, optionally within ``?from=&to=``."""
    return SnapshotService.list_groups(db, user_id, date_range)


@router.get("/draft", response_model=list[SnapshotDraftItem])
def get_snapshot_draft(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: CryptoService = Depends(get_crypto_service),
):
    """Pre-filled lines for a new snapshot, crypto aggregate last at the current rate."""
    return SnapshotService.build_snapshot_draft(db, user_id, service.resolve_conversion_rate())


@router.post("", response_model=SnapshotGroupResponse, status_code=201)
def register_snapshot(
    data: SnapshotCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: CryptoService = Depends(get_crypto_service),
):
    """Register the submitted lines, or the current draft when none are given."""
    rate = service.resolve_conversion_rate() if data.items is None else None
    return SnapshotService.register_snapshot(
        db, user_id, notes=data.notes, items=data.items, conversion_rate=rate
    )


@router.patch("/items/{item_id}", response_model=SnapshotItemResponse)
def update_snapshot_item(
    item_id: str,
    data: SnapshotItemUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Correct the value of a single snapshot item."""
    return SnapshotService.update_item_value(db, user_id, item_id, data.total_value_brl)


@router.get("/{group_id}", response_model=SnapshotGroupResponse)
def get_snapshot(
    group_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return SnapshotService.get_group(db, user_id, group_id)


@router.post("/{group_id}/duplicate", response_model=SnapshotGroupResponse, status_code=201)
def duplicate_snapshot(
    group_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Copy a snapshot and its items into a new snapshot dated now."""
    return SnapshotService.duplicate_group(db, user_id, group_id)


@router.delete("/{group_id}", status_code=204)
def delete_snapshot(
    group_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    SnapshotService.delete_group(db, user_id, group_id)
    return Response(status_code=204)
