"""Feedback, settings and notification schemas."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

FeedbackStatus = Literal["new", "read", "archived"]


class FeedbackCreate(BaseModel):
    name: str = Field("Anonim", max_length=100)
    message: str = Field(..., min_length=1)
    user_id: Optional[str] = None


class FeedbackOut(BaseModel):
    id: int
    name: str
    message: str
    user_id: Optional[str] = None
    status: FeedbackStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class FeedbackStatusUpdate(BaseModel):
    status: FeedbackStatus


class SettingValue(BaseModel):
    key: str
    value: Optional[str] = None


class SettingUpdate(BaseModel):
    value: str


class NotificationCreate(BaseModel):
    user_id: str
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    target_id: Optional[str] = None


class NotificationOut(NotificationCreate):
    id: int
    is_read: bool
    created_at: datetime
    push_payload: dict[str, Any] = Field(default_factory=dict)

    model_config = {"from_attributes": True}


class PushSubscriptionCreate(BaseModel):
    user_id: str
    endpoint: str = Field(..., min_length=1)
    keys: dict[str, str]


class PushSubscriptionOut(PushSubscriptionCreate):
    id: int

    model_config = {"from_attributes": True}
