"""Review schemas."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

ReviewStatus = Literal["pending", "approved", "rejected"]


def parse_photos(value: Any) -> list[str]:
    """Accept a list, or Postgres array text such as "{a.jpg,b.jpg}"."""
    if value is None:
        return []
    if isinstance(value, str):
        if value.startswith("{") and value.endswith("}"):
            content = value[1:-1]
            return [p for p in content.split(",") if p] if content else []
        return [value] if value else []
    return list(value)


class ReviewCreate(BaseModel):
    author: str = Field(..., min_length=1, max_length=100)
    rating_aesthetic: int = Field(..., ge=1, le=10)
    rating_work: int = Field(..., ge=1, le=10)
    crowd_morning: int = Field(..., ge=1, le=5)
    crowd_afternoon: int = Field(..., ge=1, le=5)
    crowd_evening: int = Field(..., ge=1, le=5)
    text: str = ""
    photos: list[str] = Field(default_factory=list)
    user_id: Optional[str] = None


class ReviewOut(BaseModel):
    id: str
    cafe_id: str
    user_id: Optional[str] = None
    author: str
    rating_aesthetic: int
    rating_work: int
    crowd_morning: int
    crowd_afternoon: int
    crowd_evening: int
    text: str
    photos: list[str] = Field(default_factory=list)
    status: ReviewStatus
    helpful_count: int = 0
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("photos", mode="before")
    @classmethod
    def _photos(cls, value: Any) -> list[str]:
        return parse_photos(value)


class ReviewStatusUpdate(BaseModel):
    status: ReviewStatus


class PendingReviewOut(ReviewOut):
    cafe_name: str


class TopReviewOut(ReviewOut):
    cafe_name: str
    cafe_slug: str


class LeaderboardEntry(BaseModel):
    author: str
    total_helpful: int
    review_count: int
