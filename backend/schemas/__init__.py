"""Pydantic schemas for API request/response validation."""

from .holding import (
    AssetCreate,
    AssetResponse,
    AssetUpdate,
    CryptoCreate,
    CryptoResponse,
    CryptoUpdate,
    PriceRefreshResponse,
)
from .label import LabelCreate, LabelResponse
from .report import (
    AssetPivotResponse,
    CategoryAllocationResponse,
    PivotRowResponse,
    ReportSummaryResponse,
    StackedPointResponse,
    StackedSeriesResponse,
    ValuePointResponse,
)
from .snapshot import (
    SnapshotCreate,
    SnapshotDraftItem,
    SnapshotGroupResponse,
    SnapshotItemInput,
    SnapshotItemResponse,
    SnapshotItemUpdate,
)

__all__ = [
    "AssetCreate",
    "AssetPivotResponse",
    "AssetResponse",
    "AssetUpdate",
    "CategoryAllocationResponse",
    "CryptoCreate",
    "CryptoResponse",
    "CryptoUpdate",
    "LabelCreate",
    "LabelResponse",
    "PivotRowResponse",
    "PriceRefreshResponse",
    "ReportSummaryResponse",
    "SnapshotCreate",
    "SnapshotDraftItem",
    "SnapshotGroupResponse",
    "SnapshotItemInput",
    "SnapshotItemResponse",
    "SnapshotItemUpdate",
    "StackedPointResponse",
    "StackedSeriesResponse",
    "ValuePointResponse",
]
