"""Cafe, spot and event schemas."""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from nongkrongr.schemas.review import ReviewOut, TopReviewOut
from nongkrongr.schemas.vocabulary import VocabularyItem

CafeStatus = Literal["pending", "approved", "rejected", "archived"]


class Coords(BaseModel):
    lat: float = 0.0
    lng: float = 0.0


class SpotIn(BaseModel):
    id: Optional[str] = None
    title: str = Field(..., min_length=1)
    tip: Optional[str] = None
    photo_url: Optional[str] = None


class SpotOut(SpotIn):
    id: str
    cafe_id: str

    model_config = {"from_attributes": True}


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_date: date
    end_date: date
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def _check_dates(self) -> "EventCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EventOut(EventCreate):
    id: str
    cafe_id: str

    model_config = {"from_attributes": True}


class CafeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    address: str = ""
    district: str = ""
    city: str = "Palembang"
    opening_hours: str = ""
    price_tier: int = Field(2, ge=1, le=4)
    coords: Optional[Coords] = None
    is_sponsored: bool = False
    sponsored_until: Optional[date] = None
    sponsored_rank: int = Field(0, ge=0)
    logo_url: Optional[str] = None
    cover_url: Optional[str] = None


class CafeCreate(CafeBase):
    id: Optional[str] = None
    status: Optional[CafeStatus] = None
    manager_id: Optional[str] = None
    vibes: list[str] = Field(default_factory=list, description="Vibe ids")
    amenities: list[str] = Field(default_factory=list, description="Amenity ids")
    tags: list[str] = Field(default_factory=list, description="Tag ids")
    spots: list[SpotIn] = Field(default_factory=list)


class CafeUpdate(BaseModel):
    """Partial update; relation lists replace the stored set when present."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    opening_hours: Optional[str] = None
    price_tier: Optional[int] = Field(None, ge=1, le=4)
    coords: Optional[Coords] = None
    is_sponsored: Optional[bool] = None
    sponsored_until: Optional[date] = None
    sponsored_rank: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None
    cover_url: Optional[str] = None
    manager_id: Optional[str] = None
    vibes: Optional[list[str]] = None
    amenities: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    spots: Optional[list[SpotIn]] = None


class CafeStatusUpdate(BaseModel):
    status: CafeStatus


class CafeOut(CafeBase):
    id: str
    slug: str
    coords: Coords
    status: CafeStatus
    manager_id: Optional[str] = None
    created_at: datetime
    vibes: list[VocabularyItem] = Field(default_factory=list)
    amenities: list[VocabularyItem] = Field(default_factory=list)
    tags: list[VocabularyItem] = Field(default_factory=list)
    spots: list[SpotOut] = Field(default_factory=list)
    events: list[EventOut] = Field(default_factory=list)
    reviews: list[ReviewOut] = Field(default_factory=list)

    avg_aesthetic_score: float = 0.0
    avg_work_score: float = 0.0
    avg_crowd_morning: float = 0.0
    avg_crowd_afternoon: float = 0.0
    avg_crowd_evening: float = 0.0
    approved_review_count: int = 0
    thumbnail_url: str = ""


class ExploreResponse(BaseModel):
    total: int
    items: list[CafeOut]


class NearbyCafe(BaseModel):
    cafe: CafeOut
    distance_km: float
    road_distance_km: float
    travel_minutes: int
    travel_label: str


class HomeFeed(BaseModel):
    trending: list[CafeOut]
    recommended: list[CafeOut]
    sponsored: list[CafeOut]
    top_reviews: list[TopReviewOut]


class OpeningStatusOut(BaseModel):
    is_open: bool
    status: Literal["open", "closed", "opening_soon", "closing_soon", "unknown"]
    message: str
    open_late: bool
