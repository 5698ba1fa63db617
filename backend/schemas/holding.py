"""Pydantic schemas for traditional and crypto holdings."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AssetCreate(BaseModel):
    """Schema for creating a traditional holding.

    ``total`` is not accepted; it is always ``price * quantity``.
    """

    name: str = Field(min_length=1)
    ticker: str = ""
    category_id: Optional[str] = None
    price: Decimal = Decimal("0")
    quantity: Decimal = Decimal("0")
    return_value: Decimal = Decimal("0")
    return_percentage: Decimal = Decimal("0")


class AssetUpdate(BaseModel):
    """Schema for updating a traditional holding. Unset fields are left alone."""

    name: Optional[str] = None
    ticker: Optional[str] = None
    category_id: Optional[str] = None
    price: Optional[Decimal] = None
    quantity: Optional[Decimal] = None
    return_value: Optional[Decimal] = None
    return_percentage: Optional[Decimal] = None


class AssetResponse(BaseModel):
    """Schema for Asset API response."""

    id: str
    name: str
    ticker: str
    category_id: Optional[str] = None
    category_name: str
    price: Decimal
    quantity: Decimal
    total: Decimal
    return_value: Decimal
    return_percentage: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CryptoCreate(BaseModel):
    """Schema for creating a crypto holding."""

    ticker: str = Field(min_length=1)
    name: str = Field(min_length=1)
    sector_id: Optional[str] = None
    custody_id: Optional[str] = None
    price_usd: Decimal = Decimal("0")
    quantity: Decimal = Decimal("0")
    change_percentage: Decimal = Decimal("0")


class CryptoUpdate(BaseModel):
    """Schema for updating a crypto holding."""

    ticker: Optional[str] = None
    name: Optional[str] = None
    sector_id: Optional[str] = None
    custody_id: Optional[str] = None
    price_usd: Optional[Decimal] = None
    quantity: Optional[Decimal] = None
    change_percentage: Optional[Decimal] = None


class CryptoResponse(BaseModel):
    """Schema for CryptoAsset API response."""

    id: str
    ticker: str
    name: str
    sector_id: Optional[str] = None
    sector_name: str
    custody_id: Optional[str] = None
    custody_name: str
    price_usd: Decimal
    quantity: Decimal
    total_usd: Decimal
    total_brl: Decimal
    change_percentage: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PriceRefreshResponse(BaseModel):
    """Outcome of a crypto price refresh."""

    updated: list[str]
    missing: list[str]
    conversion_rate: Decimal
