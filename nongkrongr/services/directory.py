"""In-memory views over the cafe snapshot: aggregates, explore filters, home feeds."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Sequence

from nongkrongr.core.utils import round_half_up
from nongkrongr.schemas.cafe import CafeOut, NearbyCafe
from nongkrongr.schemas.review import LeaderboardEntry, PendingReviewOut, ReviewOut, TopReviewOut
from nongkrongr.services import geo
from nongkrongr.services.hours import is_open_now

AVERAGE_FIELDS = {
    "avg_aesthetic_score": "rating_aesthetic",
    "avg_work_score": "rating_work",
    "avg_crowd_morning": "crowd_morning",
    "avg_crowd_afternoon": "crowd_afternoon",
    "avg_crowd_evening": "crowd_evening",
}


def compute_averages(reviews: Iterable) -> dict[str, float]:
    """Mean of each rating over approved reviews, one decimal, 0 when none."""
    approved = [r for r in reviews if r.status == "approved"]
    if not approved:
        return {name: 0.0 for name in AVERAGE_FIELDS}
    return {
        name: round_half_up(sum(getattr(r, attr) for r in approved) / len(approved), 1)
        for name, attr in AVERAGE_FIELDS.items()
    }


def public_view(cafe: CafeOut) -> CafeOut:
    """Copy of the cafe carrying approved reviews only."""
    return cafe.model_copy(update={"reviews": [r for r in cafe.reviews if r.status == "approved"]})


@dataclass
class ExploreFilters:
    search: str = ""
    district: str = "all"
    vibes: list[str] = field(default_factory=list)
    amenities: list[str] = field(default_factory=list)
    price_tier: int = 4
    crowd: int = 5
    open_now: bool = False
    # (lat, lng, max_km)
    near: tuple[float, float, float] | None = None


def _distance_from(cafe: CafeOut, lat: float, lng: float) -> float:
    return geo.distance_km(lat, lng, cafe.coords.lat, cafe.coords.lng)


def _matches(cafe: CafeOut, filters: ExploreFilters, now: datetime | None) -> bool:
    if filters.search and filters.search.lower() not in cafe.name.lower():
        return False
    if filters.district != "all" and cafe.district != filters.district:
        return False
    vibe_ids = {v.id for v in cafe.vibes}
    if filters.vibes and not all(v in vibe_ids for v in filters.vibes):
        return False
    amenity_ids = {a.id for a in cafe.amenities}
    if filters.amenities and not all(a in amenity_ids for a in filters.amenities):
        return False
    if cafe.price_tier > filters.price_tier:
        return False
    if cafe.avg_crowd_evening > filters.crowd:
        return False
    if filters.open_now and not is_open_now(cafe.opening_hours, now):
        return False
    if filters.near is not None:
        lat, lng, max_km = filters.near
        if _distance_from(cafe, lat, lng) > max_km:
            return False
    return True


def filter_cafes(
    cafes: Sequence[CafeOut],
    filters: ExploreFilters,
    now: datetime | None = None,
) -> list[CafeOut]:
    """Cafes passing every filter; closest first when ``near`` is set."""
    matched = [c for c in cafes if _matches(c, filters, now)]
    if filters.near is not None:
        lat, lng, _max_km = filters.near
        matched.sort(key=lambda c: _distance_from(c, lat, lng))
    return matched


def nearby(cafes: Sequence[CafeOut], lat: float, lng: float, max_km: float) -> list[NearbyCafe]:
    """Cafes within max_km (straight line), closest first."""
    results = []
    for cafe in cafes:
        km = _distance_from(cafe, lat, lng)
        if km > max_km:
            continue
        road_km = geo.road_distance(km)
        minutes = geo.estimate_minutes(road_km)
        results.append(
            NearbyCafe(
                cafe=cafe,
                distance_km=round(km, 2),
                road_distance_km=road_km,
                travel_minutes=minutes,
                travel_label=geo.format_duration(minutes),
            )
        )
    results.sort(key=lambda item: item.distance_km)
    return results


def trending(cafes: Sequence[CafeOut], n: int = 4) -> list[CafeOut]:
    return sorted(cafes, key=lambda c: c.avg_aesthetic_score, reverse=True)[:n]


def recommendation_score(cafe: CafeOut) -> float:
    """Home-page score; sponsorship dominates, rank 0 being the strongest."""
    if cafe.approved_review_count == 0:
        return 0.0
    score = (cafe.avg_aesthetic_score + cafe.avg_work_score) / 2
    if cafe.spots:
        score += 1.5
    if len(cafe.reviews) > 3:
        score += 1.0
    if len(cafe.amenities) >= 5:
        score += 0.5
    if cafe.is_sponsored:
        score += 10 - cafe.sponsored_rank * 0.5
    return score


def recommended(cafes: Sequence[CafeOut], n: int = 5) -> list[CafeOut]:
    scored = [(recommendation_score(c), c) for c in cafes]
    scored = [item for item in scored if item[0] > 0]
    scored.sort(key=lambda item: item[0], reverse=True)
    return [cafe for _score, cafe in scored[:n]]


def is_sponsorship_active(cafe: CafeOut, today: date) -> bool:
    if not cafe.is_sponsored:
        return False
    return cafe.sponsored_until is None or cafe.sponsored_until >= today


def sponsored(cafes: Sequence[CafeOut], today: date | None = None, n: int | None = None) -> list[CafeOut]:
    today = today or date.today()
    active = [c for c in cafes if c.status == "approved" and is_sponsorship_active(c, today)]
    active.sort(key=lambda c: (c.sponsored_rank, c.name.lower()))
    return active[:n] if n else active


def top_reviews(cafes: Sequence[CafeOut], n: int = 4) -> list[TopReviewOut]:
    """Approved reviews with real text, best combined rating first, longer text on ties."""
    candidates = [
        TopReviewOut(**review.model_dump(), cafe_name=cafe.name, cafe_slug=cafe.slug)
        for cafe in cafes
        for review in cafe.reviews
        if review.status == "approved" and len(review.text) > 20
    ]
    candidates.sort(key=lambda r: (r.rating_aesthetic + r.rating_work, len(r.text)), reverse=True)
    return candidates[:n]


def pending_reviews(cafes: Sequence[CafeOut]) -> list[PendingReviewOut]:
    return [
        PendingReviewOut(**review.model_dump(), cafe_name=cafe.name)
        for cafe in cafes
        for review in cafe.reviews
        if review.status == "pending"
    ]


def leaderboard(cafes: Sequence[CafeOut], n: int = 20) -> list[LeaderboardEntry]:
    stats: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    reviews: list[ReviewOut] = [r for cafe in cafes for r in cafe.reviews]
    for review in reviews:
        entry = stats[review.author]
        entry[0] += review.helpful_count or 0
        entry[1] += 1
    ranked = sorted(stats.items(), key=lambda item: item[1][0], reverse=True)
    return [
        LeaderboardEntry(author=author, total_helpful=helpful, review_count=count)
        for author, (helpful, count) in ranked[:n]
    ]
