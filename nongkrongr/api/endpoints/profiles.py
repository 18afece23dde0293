"""Profile, approval and favorites endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from nongkrongr.db.session import get_db
from nongkrongr.schemas.profile import FavoriteList, OwnerDashboard, ProfileCreate, ProfileOut
from nongkrongr.services import profiles as profile_service
from nongkrongr.services.cafes import owner_dashboard

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post("", response_model=ProfileOut, status_code=status.HTTP_201_CREATED)
def register(payload: ProfileCreate, db: Session = Depends(get_db)) -> ProfileOut:
    return ProfileOut.model_validate(profile_service.register(db, payload))


@router.get("", response_model=list[ProfileOut])
def list_profiles(
    status_filter: Optional[str] = Query(None, alias="status"),
    include_archived: bool = False,
    db: Session = Depends(get_db),
) -> list[ProfileOut]:
    profiles = profile_service.list_profiles(db, status_filter, include_archived)
    return [ProfileOut.model_validate(p) for p in profiles]


@router.get("/{profile_id}", response_model=ProfileOut)
def get_profile(profile_id: str, db: Session = Depends(get_db)) -> ProfileOut:
    return ProfileOut.model_validate(profile_service.get_profile(db, profile_id))


@router.post("/{profile_id}/approve", response_model=ProfileOut)
def approve(profile_id: str, db: Session = Depends(get_db)) -> ProfileOut:
    return ProfileOut.model_validate(profile_service.approve(db, profile_id))


@router.post("/{profile_id}/reject", response_model=ProfileOut)
def reject(profile_id: str, db: Session = Depends(get_db)) -> ProfileOut:
    return ProfileOut.model_validate(profile_service.reject(db, profile_id))


@router.post("/{profile_id}/archive", response_model=ProfileOut)
def archive(profile_id: str, db: Session = Depends(get_db)) -> ProfileOut:
    return ProfileOut.model_validate(profile_service.archive(db, profile_id))


@router.post("/{profile_id}/restore", response_model=ProfileOut)
def restore(profile_id: str, db: Session = Depends(get_db)) -> ProfileOut:
    return ProfileOut.model_validate(profile_service.restore(db, profile_id))


@router.delete("/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_profile(profile_id: str, db: Session = Depends(get_db)) -> None:
    """Permanent delete; favorites go with it and managed cafes lose their owner."""
    profile_service.delete_permanent(db, profile_id)


@router.get("/{profile_id}/dashboard", response_model=OwnerDashboard)
def dashboard(profile_id: str, db: Session = Depends(get_db)) -> OwnerDashboard:
    profile_service.get_profile(db, profile_id)
    return owner_dashboard(db, profile_id)


@router.get("/{profile_id}/favorites", response_model=FavoriteList)
def list_favorites(profile_id: str, db: Session = Depends(get_db)) -> FavoriteList:
    return FavoriteList(profile_id=profile_id, cafe_ids=profile_service.list_favorites(db, profile_id))


@router.put("/{profile_id}/favorites/{cafe_id}", response_model=FavoriteList)
def add_favorite(profile_id: str, cafe_id: str, db: Session = Depends(get_db)) -> FavoriteList:
    return FavoriteList(profile_id=profile_id, cafe_ids=profile_service.add_favorite(db, profile_id, cafe_id))


@router.delete("/{profile_id}/favorites/{cafe_id}", response_model=FavoriteList)
def remove_favorite(profile_id: str, cafe_id: str, db: Session = Depends(get_db)) -> FavoriteList:
    return FavoriteList(profile_id=profile_id, cafe_ids=profile_service.remove_favorite(db, profile_id, cafe_id))
