"""Traditional holdings API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from api.helpers import get_current_user_id
from database import get_db
from schemas import AssetCreate, AssetResponse, AssetUpdate
from services.asset_service import AssetService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assets", tags=["assets"])


@router.get("", response_model=list[AssetResponse])
def list_assets(
    category_id: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """List the user's assets, optionally for one category."""
    return AssetService.list_assets(db, user_id, category_id=category_id)


@router.post("", response_model=AssetResponse, status_code=201)
def create_asset(
    data: AssetCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Create an asset; its total is price times quantity."""
    return AssetService.create_asset(db, user_id, data)


@router.get("/{asset_id}", response_model=AssetResponse)
def get_asset(
    asset_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return AssetService.get_asset(db, user_id, asset_id)


@router.patch("/{asset_id}", response_model=AssetResponse)
def update_asset(
    asset_id: str,
    data: AssetUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Update an asset. The total is always recomputed."""
    return AssetService.update_asset(db, user_id, asset_id, data)


@router.delete("/{asset_id}", status_code=204)
def delete_asset(
    asset_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Delete an asset. Past snapshots keep their copy of it."""
    AssetService.delete_asset(db, user_id, asset_id)
    return Response(status_code=204)
