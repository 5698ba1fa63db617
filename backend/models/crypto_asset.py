"""CryptoAsset model - a crypto holding priced in USD."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid
from utils.labels import DEFAULT_SECTOR_LABEL, UNKNOWN_CUSTODY_LABEL, label_or


class CryptoAsset(Base):
    """A crypto holding.

    ``total_usd`` is ``price_usd * quantity`` and is never stored. ``total_brl``
    is ``total_usd`` times the conversion rate in effect at the last
    recomputation; the rate itself is not kept.
    """

    __tablename__ = "crypto_assets"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False, index=True)
    sector_id = Column(String(36), ForeignKey("crypto_sectors.id"), nullable=True, index=True)
    custody_id = Column(String(36), ForeignKey("custodies.id"), nullable=True, index=True)
    ticker = Column(String, nullable=False)  # e.g., "BTC"
    name = Column(String, nullable=False)
    price_usd = Column(Numeric(18, 8), nullable=False, default=Decimal("0"))
    quantity = Column(Numeric(24, 10), nullable=False, default=Decimal("0"))
    # Exact decimal text; Numeric round-trips through float on SQLite
    total_brl_text = Column("total_brl", String, nullable=False, default="0")
    change_percentage = Column(Numeric(9, 4), nullable=False, default=Decimal("0"))  # 24h
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    sector = relationship("CryptoSector", back_populates="crypto_assets")
    custody = relationship("Custody", back_populates="crypto_assets")

    @property
    def sector_name(self) -> str:
        return label_or(self.sector.name if self.sector else None, DEFAULT_SECTOR_LABEL)

    @property
    def custody_name(self) -> str:
        return label_or(self.custody.name if self.custody else None, UNKNOWN_CUSTODY_LABEL)

    @property
    def total_usd(self) -> Decimal:
        return (self.price_usd or Decimal("0")) * (self.quantity or Decimal("0"))

    @property
    def total_brl(self) -> Decimal:
        return Decimal(self.total_brl_text or "0")

    @total_brl.setter
    def total_brl(self, value: Decimal) -> None:
        self.total_brl_text = str(value)
