"""Review moderation endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from nongkrongr.db.session import get_db
from nongkrongr.schemas.review import PendingReviewOut, ReviewOut, ReviewStatusUpdate
from nongkrongr.services import reviews as review_service

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("/pending", response_model=list[PendingReviewOut])
def pending_reviews(db: Session = Depends(get_db)) -> list[PendingReviewOut]:
    return review_service.pending_reviews(db)


@router.patch("/{review_id}/status", response_model=ReviewOut)
def update_status(review_id: str, payload: ReviewStatusUpdate, db: Session = Depends(get_db)) -> ReviewOut:
    return review_service.update_review_status(db, review_id, payload.status)


@router.post("/{review_id}/helpful", response_model=ReviewOut)
def mark_helpful(review_id: str, db: Session = Depends(get_db)) -> ReviewOut:
    return review_service.mark_helpful(db, review_id)
