"""Asset model - a traditional (non-crypto) holding."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid
from utils.labels import UNCATEGORIZED_LABEL, label_or


class Asset(Base):
    """A traditional holding owned by a single user.

    ``total`` is derived from ``price`` and ``quantity`` and never stored.
    """

    __tablename__ = "assets"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False, index=True)
    category_id = Column(
        String(36), ForeignKey("asset_categories.id"), nullable=True, index=True
    )
    name = Column(String, nullable=False)
    ticker = Column(String, nullable=False, default="")
    price = Column(Numeric(18, 8), nullable=False, default=Decimal("0"))
    quantity = Column(Numeric(18, 8), nullable=False, default=Decimal("0"))
    return_value = Column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    return_percentage = Column(Numeric(9, 4), nullable=False, default=Decimal("0"))
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    category = relationship("AssetCategory", back_populates="assets")

    @property
    def category_name(self) -> str:
        """Category label, or the placeholder when the holding has none."""
        return label_or(self.category.name if self.category else None, UNCATEGORIZED_LABEL)

    @property
    def total(self) -> Decimal:
        return (self.price or Decimal("0")) * (self.quantity or Decimal("0"))
