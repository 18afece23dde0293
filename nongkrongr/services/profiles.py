"""Profiles, the account approval lifecycle, and favorites."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from nongkrongr.core.exceptions import ConflictError, InvalidStateError, NotFoundError
from nongkrongr.models.cafe import Cafe
from nongkrongr.models.profile import Favorite, Profile
from nongkrongr.schemas.profile import ProfileCreate
from nongkrongr.services.catalog import catalog

logger = logging.getLogger(__name__)

# status -> states it may move to
TRANSITIONS = {
    "pending_approval": {"active", "rejected", "archived"},
    "active": {"archived"},
    "rejected": {"active", "archived"},
    "archived": {"active"},
}


def get_profile(db: Session, profile_id: str) -> Profile:
    profile = db.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError(f"Profile {profile_id} not found")
    return profile


def register(db: Session, payload: ProfileCreate) -> Profile:
    """Cafe owners wait for admin approval; everyone else is active at once."""
    clash = db.execute(
        select(Profile).where((Profile.username == payload.username) | (Profile.email == payload.email))
    ).first()
    if clash is not None:
        raise ConflictError("Username or email already registered")
    profile = Profile(
        id=payload.id or str(uuid.uuid4()),
        username=payload.username,
        email=payload.email,
        role=payload.role,
        status="pending_approval" if payload.role == "admin_cafe" else "active",
    )
    try:
        db.add(profile)
        db.commit()
        db.refresh(profile)
    except Exception:
        db.rollback()
        raise
    logger.info("Registered profile %s role=%s status=%s", profile.username, profile.role, profile.status)
    return profile


def list_profiles(db: Session, status: str | None = None, include_archived: bool = False) -> list[Profile]:
    stmt = select(Profile).order_by(Profile.username)
    if status:
        stmt = stmt.where(Profile.status == status)
    elif not include_archived:
        stmt = stmt.where(Profile.status != "archived")
    return list(db.execute(stmt).scalars().all())


def set_status(db: Session, profile_id: str, status: str) -> Profile:
    profile = get_profile(db, profile_id)
    if status not in TRANSITIONS.get(profile.status, set()):
        raise InvalidStateError(f"Cannot move profile from {profile.status} to {status}")
    try:
        profile.status = status
        db.commit()
        db.refresh(profile)
    except Exception:
        db.rollback()
        raise
    logger.info("Profile %s status -> %s", profile.id, status)
    return profile


def approve(db: Session, profile_id: str) -> Profile:
    if get_profile(db, profile_id).status != "pending_approval":
        raise InvalidStateError("Only profiles awaiting approval can be approved")
    return set_status(db, profile_id, "active")


def reject(db: Session, profile_id: str) -> Profile:
    if get_profile(db, profile_id).status != "pending_approval":
        raise InvalidStateError("Only profiles awaiting approval can be rejected")
    return set_status(db, profile_id, "rejected")


def archive(db: Session, profile_id: str) -> Profile:
    return set_status(db, profile_id, "archived")


def restore(db: Session, profile_id: str) -> Profile:
    if get_profile(db, profile_id).status not in ("archived", "rejected"):
        raise InvalidStateError("Only archived or rejected profiles can be restored")
    return set_status(db, profile_id, "active")


def delete_permanent(db: Session, profile_id: str) -> None:
    profile = get_profile(db, profile_id)
    try:
        db.query(Favorite).filter(Favorite.profile_id == profile.id).delete()
        db.query(Cafe).filter(Cafe.manager_id == profile.id).update({Cafe.manager_id: None})
        db.delete(profile)
        db.commit()
    except Exception:
        db.rollback()
        raise
    # managed cafes lost their manager_id
    catalog.invalidate()
    logger.info("Deleted profile %s", profile_id)


# --- favorites ------------------------------------------------------------


def list_favorites(db: Session, profile_id: str) -> list[str]:
    get_profile(db, profile_id)
    rows = db.execute(
        select(Favorite.cafe_id).where(Favorite.profile_id == profile_id).order_by(Favorite.created_at)
    ).scalars()
    return list(rows)


def add_favorite(db: Session, profile_id: str, cafe_id: str) -> list[str]:
    get_profile(db, profile_id)
    if db.get(Cafe, cafe_id) is None:
        raise NotFoundError(f"Cafe {cafe_id} not found")
    if db.get(Favorite, (profile_id, cafe_id)) is None:
        try:
            db.add(Favorite(profile_id=profile_id, cafe_id=cafe_id))
            db.commit()
        except Exception:
            db.rollback()
            raise
    return list_favorites(db, profile_id)


def remove_favorite(db: Session, profile_id: str, cafe_id: str) -> list[str]:
    favorite = db.get(Favorite, (profile_id, cafe_id))
    if favorite is not None:
        try:
            db.delete(favorite)
            db.commit()
        except Exception:
            db.rollback()
            raise
    return list_favorites(db, profile_id)
