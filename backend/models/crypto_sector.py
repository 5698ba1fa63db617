"""CryptoSector model - sector labels for crypto holdings."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid


class CryptoSector(Base):
    """A sector label (e.g. "Stablecoins", "DeFi") for crypto holdings."""

    __tablename__ = "crypto_sectors"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=True, index=True)
    name = Column(String, nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    crypto_assets = relationship("CryptoAsset", back_populates="sector")
