"""SQLAlchemy ORM models."""

from .asset import Asset
from .asset_category import AssetCategory
from .crypto_asset import CryptoAsset
from .crypto_sector import CryptoSector
from .custody import Custody
from .snapshot_group import SnapshotGroup
from .snapshot_item import SnapshotItem
from .utils import generate_uuid

__all__ = ["Asset", "AssetCategory", "CryptoAsset", "CryptoSector", "Custody", "SnapshotGroup", "SnapshotItem", "generate_uuid"]
