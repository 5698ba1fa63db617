"""Service for registering, correcting and duplicating net worth snapshots."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from models import Asset, CryptoAsset, SnapshotGroup, SnapshotItem
from schemas import SnapshotItemInput
from services.report_service import DateRange
from utils.labels import (
    CRYPTO_TOTAL_ASSET_NAME,
    CRYPTO_TOTAL_CATEGORY_NAME,
    DUPLICATE_NOTES_PREFIX,
)
from utils.numbers import parse_decimal_input

logger = logging.getLogger(__name__)


@dataclass
class DraftItem:
    """A pre-filled snapshot line built from the current holdings."""

    asset_id: Optional[str]
    asset_name: str
    asset_category_name: Optional[str]
    total_value_brl: Decimal
    is_crypto_total: bool = False


class SnapshotService:
    """Lifecycle of snapshot groups. Every query is scoped to ``user_id``."""

    @staticmethod
    def build_snapshot_draft(
        db: Session, user_id: str, conversion_rate: Optional[Decimal] = None
    ) -> list[DraftItem]:
        """One line per traditional holding, sorted by name, then the crypto aggregate.

        The aggregate line sums every crypto holding in BRL and is present
        even when the user holds no crypto. With ``conversion_rate`` the
        USD totals are converted at that rate instead of using the stored
        BRL totals.
        """
        assets = (
            db.query(Asset)
            .filter(Asset.user_id == user_id)
            .all()
        )
        draft = [
            DraftItem(
                asset_id=asset.id,
                asset_name=asset.name,
                asset_category_name=asset.category_name,
                total_value_brl=asset.total or Decimal("0"),
            )
            for asset in sorted(assets, key=lambda a: a.name.lower())
        ]

        cryptos = db.query(CryptoAsset).filter(CryptoAsset.user_id == user_id).all()
        if conversion_rate is None:
            crypto_total = sum((c.total_brl for c in cryptos), Decimal("0"))
        else:
            crypto_total = sum((c.total_usd for c in cryptos), Decimal("0")) * conversion_rate
        draft.append(
            DraftItem(
                asset_id=None,
                asset_name=CRYPTO_TOTAL_ASSET_NAME,
                asset_category_name=CRYPTO_TOTAL_CATEGORY_NAME,
                total_value_brl=crypto_total,
                is_crypto_total=True,
            )
        )
        return draft

    @staticmethod
    def register_snapshot(
        db: Session,
        user_id: str,
        notes: Optional[str] = None,
        items: Optional[list[SnapshotItemInput]] = None,
        conversion_rate: Optional[Decimal] = None,
    ) -> SnapshotGroup:
        """Create a group and its items in a single transaction.

        Args:
            db: Database session
            user_id: Owner of the snapshot
            notes: Optional free text
            items: Submitted lines; values typed by the user are parsed
                   with a comma decimal separator and fall back to 0. When
                   None, the current draft is registered unchanged.
            conversion_rate: Rate for the crypto aggregate line of the draft;
                   only used when ``items`` is None

        Raises:
            HTTPException: 400 if ``items`` is an empty list, 404 if an item
                references an asset the user does not own
        """
        if items is None:
            rows = [
                {
                    "asset_id": d.asset_id,
                    "asset_name": d.asset_name,
                    "asset_category_name": d.asset_category_name,
                    "total_value_brl": d.total_value_brl,
                    "is_crypto_total": d.is_crypto_total,
                }
                for d in SnapshotService.build_snapshot_draft(db, user_id, conversion_rate)
            ]
        else:
            if not items:
                raise HTTPException(status_code=400, detail="A snapshot needs at least one item")
            owned_ids = {
                asset_id
                for (asset_id,) in db.query(Asset.id).filter(Asset.user_id == user_id)
            }
            rows = []
            for item in items:
                if item.asset_id is not None and item.asset_id not in owned_ids:
                    raise HTTPException(status_code=404, detail=f"Asset {item.asset_id} not found")
                rows.append(
                    {
                        "asset_id": None if item.is_crypto_total else item.asset_id,
                        "asset_name": item.asset_name,
                        "asset_category_name": item.asset_category_name,
                        "total_value_brl": parse_decimal_input(item.total_value_brl),
                        "is_crypto_total": item.is_crypto_total,
                    }
                )

        group = SnapshotGroup(user_id=user_id, notes=notes or None)
        for position, row in enumerate(rows):
            group.items.append(SnapshotItem(position=position, **row))
        db.add(group)
        db.commit()
        db.refresh(group)
        logger.info(
            "Snapshot registered: %d items, total %s (id=%s)",
            len(group.items), group.total, group.id,
        )
        return group

    @staticmethod
    def list_groups(
        db: Session, user_id: str, date_range: Optional[DateRange] = None
    ) -> list[SnapshotGroup]:
        """The user's groups, newest first, with their items loaded."""
        query = (
            db.query(SnapshotGroup)
            .options(selectinload(SnapshotGroup.items))
            .filter(SnapshotGroup.user_id == user_id)
        )
        if date_range is not None:
            lower = date_range.lower_bound()
            upper = date_range.upper_bound()
            if lower is not None:
                query = query.filter(SnapshotGroup.created_at >= lower)
            if upper is not None:
                query = query.filter(SnapshotGroup.created_at <= upper)
        return query.order_by(SnapshotGroup.created_at.desc()).all()

    @staticmethod
    def get_group(db: Session, user_id: str, group_id: str) -> SnapshotGroup:
        group = (
            db.query(SnapshotGroup)
            .options(selectinload(SnapshotGroup.items))
            .filter(SnapshotGroup.id == group_id, SnapshotGroup.user_id == user_id)
            .first()
        )
        if not group:
            raise HTTPException(status_code=404, detail="Snapshot not found")
        return group

    @staticmethod
    def delete_group(db: Session, user_id: str, group_id: str) -> None:
        """Delete a group together with its items."""
        group = SnapshotService.get_group(db, user_id, group_id)
        db.delete(group)
        db.commit()
        logger.info("Snapshot deleted (id=%s)", group_id)

    @staticmethod
    def update_item_value(
        db: Session, user_id: str, item_id: str, value: str | Decimal
    ) -> SnapshotItem:
        """Correct the value of one item; the only edit items allow."""
        item = (
            db.query(SnapshotItem)
            .join(SnapshotGroup)
            .filter(SnapshotItem.id == item_id, SnapshotGroup.user_id == user_id)
            .first()
        )
        if not item:
            raise HTTPException(status_code=404, detail="Snapshot item not found")

        item.total_value_brl = parse_decimal_input(value)
        db.commit()
        db.refresh(item)
        logger.info("Snapshot item %s corrected to %s", item.id, item.total_value_brl)
        return item

    @staticmethod
    def _insert_items(db: Session, group_id: str, rows: list[dict]) -> None:
        """Bulk-insert item rows into ``group_id``."""
        if not rows:
            return
        db.execute(
            insert(SnapshotItem),
            [{**row, "snapshot_group_id": group_id} for row in rows],
        )

    @staticmethod
    def duplicate_group(db: Session, user_id: str, group_id: str) -> SnapshotGroup:
        """Copy a group and its items into a new group dated now.

        The new group is committed before its items are inserted. If the
        insert fails the new group is deleted again, so either exactly one
        complete copy exists or none does.

        Raises:
            HTTPException: 404 if the source is unknown, 500 if copying items failed
        """
        source = SnapshotService.get_group(db, user_id, group_id)
        rows = [
            {
                "asset_id": item.asset_id,
                "asset_name": item.asset_name,
                "asset_category_name": item.asset_category_name,
                "total_value_brl": item.total_value_brl,
                "is_crypto_total": item.is_crypto_total,
                "position": item.position,
            }
            for item in source.items
        ]

        copy = SnapshotGroup(
            user_id=user_id,
            created_at=datetime.now(timezone.utc),
            notes=f"{DUPLICATE_NOTES_PREFIX}{source.notes or ''}",
        )
        db.add(copy)
        db.commit()
        copy_id = copy.id

        try:
            SnapshotService._insert_items(db, copy_id, rows)
            db.commit()
        except SQLAlchemyError:
            logger.warning(
                "Copying items of snapshot %s failed, removing copy %s",
                group_id, copy_id, exc_info=True,
            )
            db.rollback()
            db.query(SnapshotGroup).filter(SnapshotGroup.id == copy_id).delete(
                synchronize_session=False
            )
            db.commit()
            raise HTTPException(status_code=500, detail="Failed to duplicate snapshot")

        logger.info("Snapshot %s duplicated as %s (%d items)", group_id, copy_id, len(rows))
        return SnapshotService.get_group(db, user_id, copy_id)
