"""Explore page, home feeds and the reviewer leaderboard."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from nongkrongr.core.config import settings
from nongkrongr.db.session import get_db
from nongkrongr.schemas.cafe import ExploreResponse, HomeFeed, NearbyCafe
from nongkrongr.schemas.review import LeaderboardEntry
from nongkrongr.services import directory
from nongkrongr.services.catalog import catalog

router = APIRouter(tags=["explore"])


def _public_cafes(db: Session):
    return [directory.public_view(c) for c in catalog.snapshot(db) if c.status == "approved"]


def explore_filters(
    search: str = "",
    district: str = "all",
    vibe: Optional[list[str]] = Query(None),
    amenity: Optional[list[str]] = Query(None),
    price_tier: int = Query(settings.price_tier_max, ge=1, le=4),
    crowd: int = Query(settings.crowd_filter_max, ge=1, le=5),
    open_now: bool = False,
) -> directory.ExploreFilters:
    """Sidebar filters shared by the explore list and the nearby search."""
    return directory.ExploreFilters(
        search=search.strip(),
        district=district,
        vibes=vibe or [],
        amenities=amenity or [],
        price_tier=price_tier,
        crowd=crowd,
        open_now=open_now,
    )


@router.get("/explore", response_model=ExploreResponse)
def explore(
    filters: directory.ExploreFilters = Depends(explore_filters),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    max_km: float = Query(50.0, gt=0),
    offset: int = Query(0, ge=0),
    limit: int = Query(12, ge=1, le=100),
    db: Session = Depends(get_db),
) -> ExploreResponse:
    """Filter approved cafes the way the explore sidebar does; closest first when lat/lng are given."""
    if lat is not None and lng is not None:
        filters.near = (lat, lng, max_km)
    matched = directory.filter_cafes(_public_cafes(db), filters)
    return ExploreResponse(total=len(matched), items=matched[offset : offset + limit])


@router.get("/explore/nearby", response_model=list[NearbyCafe])
def nearby(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    max_km: float = Query(50.0, gt=0),
    limit: int = Query(20, ge=1, le=100),
    filters: directory.ExploreFilters = Depends(explore_filters),
    db: Session = Depends(get_db),
) -> list[NearbyCafe]:
    matched = directory.filter_cafes(_public_cafes(db), filters)
    return directory.nearby(matched, lat, lng, max_km)[:limit]


@router.get("/home", response_model=HomeFeed)
def home(today: Optional[date] = None, db: Session = Depends(get_db)) -> HomeFeed:
    cafes = _public_cafes(db)
    return HomeFeed(
        trending=directory.trending(cafes),
        recommended=directory.recommended(cafes),
        sponsored=directory.sponsored(cafes, today, settings.sponsored_limit),
        top_reviews=directory.top_reviews(cafes),
    )


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
def leaderboard(limit: int = Query(20, ge=1, le=100), db: Session = Depends(get_db)) -> list[LeaderboardEntry]:
    return directory.leaderboard(_public_cafes(db), limit)
