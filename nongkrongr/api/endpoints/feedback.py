"""Feedback inbox and app settings endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from nongkrongr.db.session import get_db
from nongkrongr.schemas.feedback import (
    FeedbackCreate,
    FeedbackOut,
    FeedbackStatusUpdate,
    SettingUpdate,
    SettingValue,
)
from nongkrongr.services import feedback as feedback_service

router = APIRouter(tags=["feedback"])


@router.post("/feedback", response_model=FeedbackOut, status_code=status.HTTP_201_CREATED)
def submit_feedback(payload: FeedbackCreate, db: Session = Depends(get_db)) -> FeedbackOut:
    return FeedbackOut.model_validate(feedback_service.submit_feedback(db, payload))


@router.get("/feedback", response_model=list[FeedbackOut])
def list_feedback(
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
) -> list[FeedbackOut]:
    return [FeedbackOut.model_validate(f) for f in feedback_service.list_feedback(db, status_filter)]


@router.patch("/feedback/{feedback_id}/status", response_model=FeedbackOut)
def update_status(feedback_id: int, payload: FeedbackStatusUpdate, db: Session = Depends(get_db)) -> FeedbackOut:
    return FeedbackOut.model_validate(feedback_service.update_feedback_status(db, feedback_id, payload.status))


@router.delete("/feedback/{feedback_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_feedback(feedback_id: int, db: Session = Depends(get_db)) -> None:
    feedback_service.delete_feedback(db, feedback_id)


@router.get("/settings/{key}", response_model=SettingValue)
def get_setting(key: str, db: Session = Depends(get_db)) -> SettingValue:
    """Unknown keys answer with a null value."""
    return SettingValue(key=key, value=feedback_service.get_setting(db, key))


@router.put("/settings/{key}", response_model=SettingValue)
def update_setting(key: str, payload: SettingUpdate, db: Session = Depends(get_db)) -> SettingValue:
    return SettingValue(key=key, value=feedback_service.update_setting(db, key, payload.value))
