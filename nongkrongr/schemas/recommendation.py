"""Schemas for the AI recommender flow."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from nongkrongr.schemas.cafe import CafeOut

SortBy = Literal["aesthetic", "work", "quiet"]


class RecommendationRequest(BaseModel):
    prompt: str = Field(..., min_length=1, description="Free-text wish, e.g. 'cafe sepi buat nugas'")
    limit: Optional[int] = Field(None, ge=1, le=20, description="Number of cafes to return")


class AiRecommendationParams(BaseModel):
    """Structured filters the model extracts from the user's wish."""

    vibes: list[str] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)
    max_price_tier: Optional[int] = Field(None, ge=1, le=4)
    sort_by: Optional[SortBy] = None
    reasoning: str = ""


class ScoredCafe(BaseModel):
    cafe: CafeOut
    match_score: int


class RecommendationResponse(BaseModel):
    reasoning: str
    params: AiRecommendationParams
    items: list[ScoredCafe]


class DescriptionRequest(BaseModel):
    name: str = Field(..., min_length=1)
    vibes: list[str] = Field(default_factory=list)


class DescriptionResponse(BaseModel):
    description: str
