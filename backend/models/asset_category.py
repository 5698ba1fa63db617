"""AssetCategory model - labels for traditional holdings."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid


class AssetCategory(Base):
    """A category label (e.g. "Renda Fixa") attached to traditional holdings.

    Rows with ``user_id`` NULL are shared defaults visible to every user.
    """

    __tablename__ = "asset_categories"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=True, index=True)
    name = Column(String, nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    assets = relationship("Asset", back_populates="category")
