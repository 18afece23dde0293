"""Profile schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

Role = Literal["admin", "admin_cafe", "user"]
ProfileStatus = Literal["pending_approval", "active", "rejected", "archived"]


class ProfileCreate(BaseModel):
    id: Optional[str] = None
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    role: Role = "user"


class ProfileOut(BaseModel):
    id: str
    username: str
    email: str
    role: Role
    status: ProfileStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class OwnerDashboard(BaseModel):
    """Counts of cafes a cafe owner manages."""

    total: int
    pending: int
    approved: int
    rejected: int


class FavoriteList(BaseModel):
    profile_id: str
    cafe_ids: list[str]
