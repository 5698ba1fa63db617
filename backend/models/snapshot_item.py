"""SnapshotItem model - one valuation line within a snapshot group."""

from decimal import Decimal

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid


class SnapshotItem(Base):
    """The value of one holding (or of the crypto aggregate) at capture time.

    ``asset_id`` is NULL for the crypto aggregate line and for items whose
    holding has since been deleted; ``asset_name`` keeps the display name.
    """

    __tablename__ = "snapshot_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    snapshot_group_id = Column(
        String(36),
        ForeignKey("snapshot_groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    asset_id = Column(String(36), ForeignKey("assets.id", ondelete="SET NULL"), nullable=True)
    asset_name = Column(String, nullable=False)
    asset_category_name = Column(String, nullable=True)
    total_value_brl = Column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    is_crypto_total = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False, default=0)  # order within the group

    # Relationships
    group = relationship("SnapshotGroup", back_populates="items")
