"""Visitor feedback inbox and key/value app settings."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from nongkrongr.core.exceptions import NotFoundError
from nongkrongr.models.feedback import Feedback, Setting
from nongkrongr.models.profile import Profile
from nongkrongr.schemas.feedback import FeedbackCreate

logger = logging.getLogger(__name__)


def submit_feedback(db: Session, payload: FeedbackCreate) -> Feedback:
    """Signed-in users are recorded under their username."""
    name = payload.name or "Anonim"
    if payload.user_id:
        profile = db.get(Profile, payload.user_id)
        if profile is not None:
            name = profile.username
    feedback = Feedback(name=name, message=payload.message.strip(), user_id=payload.user_id, status="new")
    try:
        db.add(feedback)
        db.commit()
        db.refresh(feedback)
    except Exception:
        db.rollback()
        raise
    logger.info("Feedback %s received from %s", feedback.id, feedback.name)
    return feedback


def list_feedback(db: Session, status: str | None = None) -> list[Feedback]:
    stmt = select(Feedback).order_by(Feedback.created_at.desc(), Feedback.id.desc())
    if status:
        stmt = stmt.where(Feedback.status == status)
    return list(db.execute(stmt).scalars().all())


def _get_feedback(db: Session, feedback_id: int) -> Feedback:
    feedback = db.get(Feedback, feedback_id)
    if feedback is None:
        raise NotFoundError(f"Feedback {feedback_id} not found")
    return feedback


def update_feedback_status(db: Session, feedback_id: int, status: str) -> Feedback:
    feedback = _get_feedback(db, feedback_id)
    try:
        feedback.status = status
        db.commit()
        db.refresh(feedback)
    except Exception:
        db.rollback()
        raise
    return feedback


def delete_feedback(db: Session, feedback_id: int) -> None:
    feedback = _get_feedback(db, feedback_id)
    try:
        db.delete(feedback)
        db.commit()
    except Exception:
        db.rollback()
        raise


def get_setting(db: Session, key: str) -> str | None:
    setting = db.get(Setting, key)
    return setting.value if setting else None


def update_setting(db: Session, key: str, value: str) -> str:
    try:
        setting = db.get(Setting, key)
        if setting:
            setting.value = value
        else:
            db.add(Setting(key=key, value=value))
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Setting %s updated", key)
    return value
