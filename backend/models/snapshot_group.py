"""SnapshotGroup model - a point-in-time capture of net worth."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid


class SnapshotGroup(Base):
    """A timestamped set of valuation items registered by the user."""

    __tablename__ = "snapshot_groups"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False, index=True)
    created_at = Column(
        DateTime, nullable=False, index=True, default=lambda: datetime.now(timezone.utc)
    )
    notes = Column(Text, nullable=True)

    # Relationships
    items = relationship(
        "SnapshotItem",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="SnapshotItem.position",
    )

    @property
    def total(self) -> Decimal:
        """Sum of item values; derived, never stored."""
        return sum((item.total_value_brl or Decimal("0") for item in self.items), Decimal("0"))
