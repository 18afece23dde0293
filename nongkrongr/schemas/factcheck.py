"""Schemas for the SumselCekFakta portal."""

from datetime import date
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class NewsStatus(str, Enum):
    HOAX = "HOAKS"
    FAKTA = "FAKTA"
    DISINFORMASI = "DISINFORMASI"
    HATE_SPEECH = "HATE SPEECH"


TicketStatus = Literal["pending", "investigating", "verified", "rejected"]


class NewsBase(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    date: date
    status: NewsStatus
    image_url: Optional[str] = None
    source: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    reference_link: Optional[str] = None


class NewsCreate(NewsBase):
    id: Optional[str] = None


class NewsOut(NewsBase):
    id: str
    view_count: int = 0

    model_config = {"from_attributes": True}


class ReportData(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = ""
    phone: str = ""
    content: str = Field(..., min_length=1)
    category: str = ""
    evidence_url: Optional[str] = None


class HistoryEntry(BaseModel):
    date: str
    note: str


class TicketOut(BaseModel):
    id: str
    report_data: ReportData
    status: TicketStatus
    submission_date: date
    history: list[HistoryEntry]

    model_config = {"from_attributes": True}


class TicketStatusUpdate(BaseModel):
    status: TicketStatus
    note: Optional[str] = None


class TopicStat(BaseModel):
    label: str
    count: int
    percentage: int


class FactCheckStats(BaseModel):
    total: int
    hoax: int
    fakta: int
    disinformasi: int
    hate_speech: int
    hoax_percentage: int
    total_views: int
    top_topics: list[TopicStat]


class SiteSettingsIn(BaseModel):
    hero_title: Optional[str] = None
    hero_description: Optional[str] = None
    hero_bg_url: Optional[str] = None
    logo_url: Optional[str] = None
    secondary_logo_url: Optional[str] = None
    cta_config: Optional[dict[str, Any]] = None
    socials_config: Optional[dict[str, Any]] = None


class SiteSettingsOut(SiteSettingsIn):
    visitor_count: int = 0

    model_config = {"from_attributes": True}


class VisitorCount(BaseModel):
    visitor_count: int


class DeepfakeRequest(BaseModel):
    image: str = Field(..., min_length=1, description="data: URL or https URL of the image")


class DeepfakeResult(BaseModel):
    score: int = Field(..., ge=0, le=100, description="Likelihood (0-100) that the image is AI-made")
    verdict: str
    reason: str = ""
    flags: list[str] = Field(default_factory=list)
    risk_level: Literal["high", "suspicious", "low"] = "low"
