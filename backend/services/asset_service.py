"""Service for traditional holdings (assets)."""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from models import Asset, SnapshotItem
from schemas import AssetCreate, AssetUpdate
from services.label_service import category_labels

logger = logging.getLogger(__name__)


class AssetService:
    """CRUD for a user's traditional holdings."""

    @staticmethod
    def list_assets(db: Session, user_id: str, category_id: Optional[str] = None) -> list[Asset]:
        """List the user's assets ordered by name, optionally for one category."""
        query = (
            db.query(Asset)
            .options(joinedload(Asset.category))
            .filter(Asset.user_id == user_id)
        )
        if category_id is not None:
            query = query.filter(Asset.category_id == category_id)
        return query.order_by(Asset.name).all()

    @staticmethod
    def get_asset(db: Session, user_id: str, asset_id: str) -> Asset:
        asset = (
            db.query(Asset)
            .filter(Asset.id == asset_id, Asset.user_id == user_id)
            .first()
        )
        if not asset:
            raise HTTPException(status_code=404, detail="Asset not found")
        return asset

    @staticmethod
    def create_asset(db: Session, user_id: str, data: AssetCreate) -> Asset:
        """Create an asset; its total is derived from price and quantity.

        Raises:
            HTTPException: 404 if ``category_id`` is not visible to the user
        """
        if data.category_id is not None:
            category_labels.get_visible(db, user_id, data.category_id)

        asset = Asset(
            user_id=user_id,
            name=data.name.strip(),
            ticker=data.ticker.strip(),
            category_id=data.category_id,
            price=data.price,
            quantity=data.quantity,
            return_value=data.return_value,
            return_percentage=data.return_percentage,
        )
        db.add(asset)
        db.commit()
        db.refresh(asset)
        logger.info("Asset created: %s (id=%s)", asset.name, asset.id)
        return asset

    @staticmethod
    def update_asset(db: Session, user_id: str, asset_id: str, data: AssetUpdate) -> Asset:
        """Apply the fields that were set; the total follows price and quantity.

        Raises:
            HTTPException: 404 if the asset or the new category is unknown
        """
        asset = AssetService.get_asset(db, user_id, asset_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("category_id") is not None:
            category_labels.get_visible(db, user_id, changes["category_id"])

        for field, value in changes.items():
            if field != "category_id" and value is None:
                continue
            setattr(asset, field, value)

        db.commit()
        db.refresh(asset)
        logger.info("Asset updated: %s (id=%s)", asset.name, asset.id)
        return asset

    @staticmethod
    def delete_asset(db: Session, user_id: str, asset_id: str) -> None:
        """Delete an asset; snapshot items keep their stored name and value."""
        asset = AssetService.get_asset(db, user_id, asset_id)

        detached = (
            db.query(SnapshotItem)
            .filter(SnapshotItem.asset_id == asset.id)
            .update({SnapshotItem.asset_id: None}, synchronize_session="fetch")
        )

        db.delete(asset)
        db.commit()
        logger.info(
            "Asset deleted: %s (id=%s), %d snapshot items detached",
            asset.name, asset_id, detached,
        )
