"""Cafe listing endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from nongkrongr.db.session import get_db
from nongkrongr.schemas.cafe import (
    CafeCreate,
    CafeOut,
    CafeStatusUpdate,
    CafeUpdate,
    EventCreate,
    EventOut,
    OpeningStatusOut,
    SpotIn,
    SpotOut,
)
from nongkrongr.schemas.recommendation import DescriptionRequest, DescriptionResponse
from nongkrongr.schemas.review import ReviewCreate, ReviewOut
from nongkrongr.services import cafes as cafe_service
from nongkrongr.services import reviews as review_service
from nongkrongr.services.directory import public_view
from nongkrongr.services.hours import is_open_late, opening_status
from nongkrongr.services.recommendation import describe_cafe

router = APIRouter(prefix="/cafes", tags=["cafes"])


@router.get("", response_model=list[CafeOut])
def list_cafes(
    status_filter: str = Query("approved", alias="status", description="Cafe status, or 'all'"),
    db: Session = Depends(get_db),
) -> list[CafeOut]:
    """Approved cafes by default; admins pass status=all or a specific status."""
    cafes = cafe_service.list_cafes(db, None if status_filter == "all" else status_filter)
    if status_filter == "approved":
        return [public_view(c) for c in cafes]
    return cafes


@router.post("", response_model=CafeOut, status_code=status.HTTP_201_CREATED)
def create_cafe(payload: CafeCreate, db: Session = Depends(get_db)) -> CafeOut:
    return cafe_service.create_cafe(db, payload)


@router.post("/describe", response_model=DescriptionResponse)
def generate_description(payload: DescriptionRequest) -> DescriptionResponse:
    """Draft a marketing blurb for the admin cafe form."""
    return DescriptionResponse(description=describe_cafe(payload.name, payload.vibes))


@router.get("/events/active", response_model=list[EventOut])
def active_events(db: Session = Depends(get_db)) -> list[EventOut]:
    return [EventOut.model_validate(e) for e in cafe_service.active_events(db)]


@router.get("/{cafe_id}", response_model=CafeOut)
def get_cafe(cafe_id: str, db: Session = Depends(get_db)) -> CafeOut:
    """Look up by id or slug."""
    return public_view(cafe_service.get_cafe(db, cafe_id))


@router.patch("/{cafe_id}", response_model=CafeOut)
def update_cafe(cafe_id: str, payload: CafeUpdate, db: Session = Depends(get_db)) -> CafeOut:
    return cafe_service.update_cafe(db, cafe_id, payload)


@router.patch("/{cafe_id}/status", response_model=CafeOut)
def set_status(cafe_id: str, payload: CafeStatusUpdate, db: Session = Depends(get_db)) -> CafeOut:
    return cafe_service.set_cafe_status(db, cafe_id, payload.status)


@router.delete("/{cafe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cafe(cafe_id: str, db: Session = Depends(get_db)) -> None:
    cafe_service.delete_cafe(db, cafe_id)


@router.get("/{cafe_id}/opening-status", response_model=OpeningStatusOut)
def get_opening_status(cafe_id: str, db: Session = Depends(get_db)) -> OpeningStatusOut:
    cafe = cafe_service.get_cafe_row(db, cafe_id)
    current = opening_status(cafe.opening_hours, datetime.now())
    return OpeningStatusOut(
        is_open=current.is_open,
        status=current.status,
        message=current.message,
        open_late=is_open_late(cafe.opening_hours),
    )


@router.post("/{cafe_id}/reviews", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def add_review(cafe_id: str, payload: ReviewCreate, db: Session = Depends(get_db)) -> ReviewOut:
    """Submit a review; it stays pending until a moderator approves it."""
    return review_service.add_review(db, cafe_id, payload)


@router.post("/{cafe_id}/spots", response_model=SpotOut, status_code=status.HTTP_201_CREATED)
def add_spot(cafe_id: str, payload: SpotIn, db: Session = Depends(get_db)) -> SpotOut:
    return SpotOut.model_validate(cafe_service.add_spot(db, cafe_id, payload))


@router.delete("/{cafe_id}/spots/{spot_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_spot(cafe_id: str, spot_id: str, db: Session = Depends(get_db)) -> None:
    cafe_service.delete_spot(db, cafe_id, spot_id)


@router.post("/{cafe_id}/events", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def add_event(cafe_id: str, payload: EventCreate, db: Session = Depends(get_db)) -> EventOut:
    return EventOut.model_validate(cafe_service.add_event(db, cafe_id, payload))


@router.delete("/{cafe_id}/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(cafe_id: str, event_id: str, db: Session = Depends(get_db)) -> None:
    cafe_service.delete_event(db, cafe_id, event_id)
