"""Cafe listing management: create, update, approve, archive, delete."""

from __future__ import annotations

import logging
import re
import time
import uuid
from datetime import date, datetime
from typing import Sequence, Type

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from nongkrongr.core.exceptions import ConflictError, NotFoundError
from nongkrongr.models.cafe import Cafe
from nongkrongr.models.profile import Favorite, Profile
from nongkrongr.models.spot import Event, Spot
from nongkrongr.models.vocabulary import Amenity, Tag, Vibe
from nongkrongr.schemas.cafe import CafeCreate, CafeOut, CafeUpdate, EventCreate, SpotIn
from nongkrongr.schemas.profile import OwnerDashboard
from nongkrongr.services.catalog import catalog, cafe_to_out

logger = logging.getLogger(__name__)

SIMPLE_FIELDS = (
    "name",
    "description",
    "address",
    "district",
    "city",
    "opening_hours",
    "price_tier",
    "is_sponsored",
    "sponsored_until",
    "sponsored_rank",
    "logo_url",
    "cover_url",
    "manager_id",
)


def slugify(name: str) -> str:
    """Lowercase, hyphenate whitespace, drop anything outside [a-z0-9-]."""
    slug = re.sub(r"\s+", "-", name.strip().lower())
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    return slug or f"cafe-{int(time.time() * 1000)}"


def _unique_slug(db: Session, name: str, exclude_id: str | None = None) -> str:
    base = slugify(name)
    slug = base
    suffix = 2
    while True:
        stmt = select(Cafe.id).where(Cafe.slug == slug)
        if exclude_id:
            stmt = stmt.where(Cafe.id != exclude_id)
        if db.execute(stmt).first() is None:
            return slug
        slug = f"{base}-{suffix}"
        suffix += 1


def _resolve(db: Session, model: Type, ids: Sequence[str], label: str) -> list:
    wanted = list(dict.fromkeys(ids))
    if not wanted:
        return []
    found = {row.id: row for row in db.execute(select(model).where(model.id.in_(wanted))).scalars()}
    missing = [i for i in wanted if i not in found]
    if missing:
        raise NotFoundError(f"Unknown {label}: {', '.join(missing)}")
    return [found[i] for i in wanted]


def _spot_rows(spots: Sequence[SpotIn], cafe_id: str) -> list[Spot]:
    return [
        Spot(
            id=s.id or f"spot-{uuid.uuid4()}",
            cafe_id=cafe_id,
            title=s.title,
            tip=s.tip,
            photo_url=s.photo_url,
        )
        for s in spots
    ]


def get_cafe_row(db: Session, cafe_id_or_slug: str) -> Cafe:
    cafe = db.execute(
        select(Cafe).where(or_(Cafe.id == cafe_id_or_slug, Cafe.slug == cafe_id_or_slug))
    ).scalar_one_or_none()
    if cafe is None:
        raise NotFoundError(f"Cafe {cafe_id_or_slug} not found")
    return cafe


def get_cafe(db: Session, cafe_id_or_slug: str) -> CafeOut:
    return cafe_to_out(get_cafe_row(db, cafe_id_or_slug))


def list_cafes(db: Session, status: str | None = None) -> list[CafeOut]:
    cafes = catalog.snapshot(db)
    if status:
        cafes = [c for c in cafes if c.status == status]
    return cafes


def _initial_status(db: Session, payload: CafeCreate) -> str:
    if payload.status:
        return payload.status
    if payload.manager_id:
        manager = db.get(Profile, payload.manager_id)
        if manager is not None and manager.role == "admin_cafe":
            return "pending"
    return "approved"


def create_cafe(db: Session, payload: CafeCreate) -> CafeOut:
    """Insert a cafe with its vibes, amenities, tags and spots."""
    cafe_id = payload.id or f"cafe-{uuid.uuid4()}"
    if db.get(Cafe, cafe_id) is not None:
        raise ConflictError(f"Cafe {cafe_id} already exists")
    try:
        cafe = Cafe(
            id=cafe_id,
            slug=_unique_slug(db, payload.name),
            status=_initial_status(db, payload),
            lat=payload.coords.lat if payload.coords else None,
            lng=payload.coords.lng if payload.coords else None,
            **{f: getattr(payload, f) for f in SIMPLE_FIELDS},
        )
        cafe.vibes = _resolve(db, Vibe, payload.vibes, "vibes")
        cafe.amenities = _resolve(db, Amenity, payload.amenities, "amenities")
        cafe.tags = _resolve(db, Tag, payload.tags, "tags")
        cafe.spots = _spot_rows(payload.spots, cafe_id)
        db.add(cafe)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Created cafe %s (%s) status=%s", cafe.id, cafe.slug, cafe.status)
    catalog.refresh(db)
    return get_cafe(db, cafe_id)


def update_cafe(db: Session, cafe_id: str, payload: CafeUpdate) -> CafeOut:
    """Apply a partial update; supplied relation lists replace the old ones."""
    cafe = get_cafe_row(db, cafe_id)
    data = payload.model_dump(exclude_unset=True)
    try:
        for field in SIMPLE_FIELDS:
            if field in data:
                setattr(cafe, field, data[field])
        if "name" in data and data["name"]:
            cafe.slug = _unique_slug(db, data["name"], exclude_id=cafe.id)
        if payload.coords is not None:
            cafe.lat, cafe.lng = payload.coords.lat, payload.coords.lng
        if payload.vibes is not None:
            cafe.vibes = _resolve(db, Vibe, payload.vibes, "vibes")
        if payload.amenities is not None:
            cafe.amenities = _resolve(db, Amenity, payload.amenities, "amenities")
        if payload.tags is not None:
            cafe.tags = _resolve(db, Tag, payload.tags, "tags")
        if payload.spots is not None:
            cafe.spots.clear()
            db.flush()
            cafe.spots.extend(_spot_rows(payload.spots, cafe.id))
        cafe.updated_at = datetime.now()
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Updated cafe %s fields=%s", cafe.id, sorted(data))
    catalog.refresh(db)
    return get_cafe(db, cafe.id)


def set_cafe_status(db: Session, cafe_id: str, status: str) -> CafeOut:
    """Approve, reject or soft-archive a listing."""
    cafe = get_cafe_row(db, cafe_id)
    try:
        cafe.status = status
        cafe.updated_at = datetime.now()
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Cafe %s status -> %s", cafe.id, status)
    catalog.refresh(db)
    return get_cafe(db, cafe.id)


def delete_cafe(db: Session, cafe_id: str) -> None:
    cafe = get_cafe_row(db, cafe_id)
    try:
        db.execute(delete(Favorite).where(Favorite.cafe_id == cafe.id))
        db.delete(cafe)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Deleted cafe %s", cafe_id)
    catalog.refresh(db)


def owner_dashboard(db: Session, manager_id: str) -> OwnerDashboard:
    rows = db.execute(
        select(Cafe.status, func.count(Cafe.id)).where(Cafe.manager_id == manager_id).group_by(Cafe.status)
    ).all()
    counts = {status: count for status, count in rows}
    return OwnerDashboard(
        total=sum(count for status, count in counts.items() if status != "archived"),
        pending=counts.get("pending", 0),
        approved=counts.get("approved", 0),
        rejected=counts.get("rejected", 0),
    )


# --- spots & events -------------------------------------------------------


def add_spot(db: Session, cafe_id: str, payload: SpotIn) -> Spot:
    cafe = get_cafe_row(db, cafe_id)
    spot = _spot_rows([payload], cafe.id)[0]
    if db.get(Spot, spot.id) is not None:
        raise ConflictError(f"Spot {spot.id} already exists")
    try:
        db.add(spot)
        db.commit()
        db.refresh(spot)
    except Exception:
        db.rollback()
        raise
    catalog.refresh(db)
    return spot


def delete_spot(db: Session, cafe_id: str, spot_id: str) -> None:
    spot = db.get(Spot, spot_id)
    if spot is None or spot.cafe_id != cafe_id:
        raise NotFoundError(f"Spot {spot_id} not found")
    try:
        db.delete(spot)
        db.commit()
    except Exception:
        db.rollback()
        raise
    catalog.refresh(db)


def add_event(db: Session, cafe_id: str, payload: EventCreate) -> Event:
    cafe = get_cafe_row(db, cafe_id)
    event = Event(id=f"event-{uuid.uuid4()}", cafe_id=cafe.id, **payload.model_dump())
    try:
        db.add(event)
        db.commit()
        db.refresh(event)
    except Exception:
        db.rollback()
        raise
    logger.info("Added event %s to cafe %s", event.id, cafe.id)
    catalog.refresh(db)
    return event


def delete_event(db: Session, cafe_id: str, event_id: str) -> None:
    event = db.get(Event, event_id)
    if event is None or event.cafe_id != cafe_id:
        raise NotFoundError(f"Event {event_id} not found")
    try:
        db.delete(event)
        db.commit()
    except Exception:
        db.rollback()
        raise
    catalog.refresh(db)


def active_events(db: Session, today: date | None = None) -> list[Event]:
    """Events running today, soonest ending first."""
    today = today or datetime.now().date()
    stmt = (
        select(Event)
        .where(Event.start_date <= today, Event.end_date >= today)
        .order_by(Event.end_date, Event.name)
    )
    return list(db.execute(stmt).scalars().all())
