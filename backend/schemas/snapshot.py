"""Pydantic schemas for snapshot groups and items."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class SnapshotDraftItem(BaseModel):
    """One pre-filled line offered before registering a snapshot."""

    asset_id: Optional[str] = None
    asset_name: str
    asset_category_name: Optional[str] = None
    total_value_brl: Decimal
    is_crypto_total: bool = False

    model_config = ConfigDict(from_attributes=True)


class SnapshotItemInput(BaseModel):
    """A line submitted when registering a snapshot.

    ``total_value_brl`` may arrive as typed by the user ("1234,56").
    """

    asset_id: Optional[str] = None
    asset_name: str
    asset_category_name: Optional[str] = None
    total_value_brl: str | Decimal = Decimal("0")
    is_crypto_total: bool = False


class SnapshotCreate(BaseModel):
    """Request body for registering a snapshot.

    When ``items`` is omitted the current draft is registered as-is.
    """

    notes: Optional[str] = None
    items: Optional[list[SnapshotItemInput]] = None


class SnapshotItemUpdate(BaseModel):
    """Correction of a single item value."""

    total_value_brl: str | Decimal


class SnapshotItemResponse(BaseModel):
    """Schema for SnapshotItem API response."""

    id: str
    snapshot_group_id: str
    asset_id: Optional[str] = None
    asset_name: str
    asset_category_name: Optional[str] = None
    total_value_brl: Decimal
    is_crypto_total: bool

    model_config = ConfigDict(from_attributes=True)


class SnapshotGroupResponse(BaseModel):
    """Schema for SnapshotGroup API response with its items and total."""

    id: str
    created_at: datetime
    notes: Optional[str] = None
    total: Decimal
    items: list[SnapshotItemResponse]

    model_config = ConfigDict(from_attributes=True)
