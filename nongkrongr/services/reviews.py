"""Review submission and moderation."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from nongkrongr.core.exceptions import NotFoundError
from nongkrongr.models.review import Review
from nongkrongr.schemas.review import PendingReviewOut, ReviewCreate, ReviewOut
from nongkrongr.services.cafes import get_cafe_row
from nongkrongr.services.catalog import catalog

logger = logging.getLogger(__name__)


def _get_review(db: Session, review_id: str) -> Review:
    review = db.get(Review, review_id)
    if review is None:
        raise NotFoundError(f"Review {review_id} not found")
    return review


def add_review(db: Session, cafe_id: str, payload: ReviewCreate) -> ReviewOut:
    """Store a visitor review; it waits in the moderation queue until approved."""
    cafe = get_cafe_row(db, cafe_id)
    review = Review(
        id=f"rev-{uuid.uuid4()}",
        cafe_id=cafe.id,
        status="pending",
        helpful_count=0,
        **payload.model_dump(),
    )
    try:
        db.add(review)
        db.commit()
        db.refresh(review)
    except Exception:
        db.rollback()
        raise
    logger.info("Review %s submitted for cafe %s by %s", review.id, cafe.id, review.author)
    catalog.refresh(db)
    return ReviewOut.model_validate(review)


def update_review_status(db: Session, review_id: str, status: str) -> ReviewOut:
    review = _get_review(db, review_id)
    try:
        review.status = status
        db.commit()
        db.refresh(review)
    except Exception:
        db.rollback()
        raise
    logger.info("Review %s status -> %s", review.id, status)
    catalog.refresh(db)
    return ReviewOut.model_validate(review)


def mark_helpful(db: Session, review_id: str) -> ReviewOut:
    review = _get_review(db, review_id)
    try:
        review.helpful_count = Review.helpful_count + 1
        db.commit()
        db.refresh(review)
    except Exception:
        db.rollback()
        raise
    catalog.refresh(db)
    return ReviewOut.model_validate(review)


def pending_reviews(db: Session) -> list[PendingReviewOut]:
    return catalog.pending_reviews(db)
