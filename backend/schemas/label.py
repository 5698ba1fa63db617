"""Pydantic schemas for label vocabularies."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class LabelCreate(BaseModel):
    """Request body for creating or renaming a label."""

    name: str


class LabelResponse(BaseModel):
    """Schema for a category, sector or custody label."""

    id: str
    name: str
    is_default: bool
    user_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
