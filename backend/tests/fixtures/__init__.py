"""Test fixtures and sample data."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest
from sqlalchemy.orm import Session

from models import Asset, AssetCategory, CryptoAsset, CryptoSector, Custody, SnapshotGroup, SnapshotItem
from tests.fixtures.mocks import TEST_USER_ID


def create_asset(
    db: Session,
    name: str,
    price: Decimal,
    quantity: Decimal = Decimal("1"),
    category: Optional[AssetCategory] = None,
    user_id: str = TEST_USER_ID,
    return_percentage: Decimal = Decimal("0"),
) -> Asset:
    """Create and commit an Asset."""
    asset = Asset(
        user_id=user_id,
        name=name,
        ticker=name[:4].upper(),
        category_id=category.id if category else None,
        price=price,
        quantity=quantity,
        return_percentage=return_percentage,
    )
    db.add(asset)
    db.commit()
    db.refresh(asset)
    return asset


def create_snapshot_group(
    db: Session,
    created_at: datetime,
    items: list[tuple[str, Optional[str], Decimal]],
    user_id: str = TEST_USER_ID,
    notes: Optional[str] = None,
) -> SnapshotGroup:
    """Create and commit a SnapshotGroup.

    Args:
        db: Database session
        created_at: Naive UTC timestamp of the group
        items: List of (asset_name, category_name, value) tuples
        user_id: Owner
        notes: Optional notes
    """
    group = SnapshotGroup(user_id=user_id, created_at=created_at, notes=notes)
    for position, (name, category_name, value) in enumerate(items):
        group.items.append(
            SnapshotItem(
                asset_name=name,
                asset_category_name=category_name,
                total_value_brl=value,
                position=position,
            )
        )
    db.add(group)
    db.commit()
    db.refresh(group)
    return group


@pytest.fixture
def user_id() -> str:
    return TEST_USER_ID


@pytest.fixture
def category(db: Session) -> AssetCategory:
    """Create a user-owned test category."""
    label = AssetCategory(user_id=TEST_USER_ID, name="Renda Fixa")
    db.add(label)
    db.commit()
    db.refresh(label)
    return label


@pytest.fixture
def sector(db: Session) -> CryptoSector:
    """Create a user-owned test sector."""
    label = CryptoSector(user_id=TEST_USER_ID, name="Store of Value")
    db.add(label)
    db.commit()
    db.refresh(label)
    return label


@pytest.fixture
def custody(db: Session) -> Custody:
    """Create a user-owned test custody."""
    label = Custody(user_id=TEST_USER_ID, name="Ledger")
    db.add(label)
    db.commit()
    db.refresh(label)
    return label


@pytest.fixture
def crypto_asset(db: Session, sector: CryptoSector, custody: Custody) -> CryptoAsset:
    """Create a BTC holding: 0.5 BTC at 50000 USD, rate 5."""
    crypto = CryptoAsset(
        user_id=TEST_USER_ID,
        ticker="BTC",
        name="Bitcoin",
        sector_id=sector.id,
        custody_id=custody.id,
        price_usd=Decimal("50000"),
        quantity=Decimal("0.5"),
        total_brl=Decimal("125000"),
    )
    db.add(crypto)
    db.commit()
    db.refresh(crypto)
    return crypto
