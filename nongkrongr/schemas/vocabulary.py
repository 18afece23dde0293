"""Schemas for vibes, amenities and tags."""

from typing import Optional

from pydantic import BaseModel, Field


class VocabularyCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=64, description="Stable slug, e.g. 'cozy'")
    name: str = Field(..., min_length=1)
    icon: Optional[str] = None


class VocabularyItem(VocabularyCreate):
    model_config = {"from_attributes": True}
