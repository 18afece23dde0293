"""Process-wide snapshot of every cafe with its computed aggregates."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from nongkrongr.core.config import settings
from nongkrongr.models.cafe import Cafe
from nongkrongr.schemas.cafe import CafeOut, Coords, EventOut, SpotOut
from nongkrongr.schemas.review import PendingReviewOut, ReviewOut
from nongkrongr.schemas.vocabulary import VocabularyItem
from nongkrongr.services import directory
from nongkrongr.services.images import optimized_image_url

logger = logging.getLogger(__name__)


def cafe_to_out(cafe: Cafe) -> CafeOut:
    """Flatten an ORM cafe into its API shape, aggregates included."""
    reviews = [ReviewOut.model_validate(r) for r in cafe.reviews]
    averages = directory.compute_averages(reviews)
    return CafeOut(
        id=cafe.id,
        slug=cafe.slug,
        name=cafe.name,
        description=cafe.description,
        address=cafe.address or "",
        district=cafe.district or "",
        city=cafe.city or settings.default_city,
        opening_hours=cafe.opening_hours or "",
        price_tier=cafe.price_tier,
        coords=Coords(lat=cafe.lat or 0.0, lng=cafe.lng or 0.0),
        is_sponsored=bool(cafe.is_sponsored),
        sponsored_until=cafe.sponsored_until,
        sponsored_rank=cafe.sponsored_rank or 0,
        logo_url=cafe.logo_url,
        cover_url=cafe.cover_url,
        status=cafe.status,
        manager_id=cafe.manager_id,
        created_at=cafe.created_at,
        vibes=[VocabularyItem.model_validate(v) for v in cafe.vibes],
        amenities=[VocabularyItem.model_validate(a) for a in cafe.amenities],
        tags=[VocabularyItem.model_validate(t) for t in cafe.tags],
        spots=[SpotOut.model_validate(s) for s in cafe.spots],
        events=[EventOut.model_validate(e) for e in cafe.events],
        reviews=reviews,
        approved_review_count=sum(1 for r in reviews if r.status == "approved"),
        thumbnail_url=optimized_image_url(cafe.cover_url, 400),
        **averages,
    )


def load_cafes(db: Session) -> list[CafeOut]:
    stmt = (
        select(Cafe)
        .options(
            selectinload(Cafe.vibes),
            selectinload(Cafe.amenities),
            selectinload(Cafe.tags),
            selectinload(Cafe.spots),
            selectinload(Cafe.events),
            selectinload(Cafe.reviews),
        )
        .order_by(Cafe.name)
    )
    return [cafe_to_out(c) for c in db.execute(stmt).scalars().all()]


class CafeCatalog:
    """Holds the last loaded cafe list.

    Only one refresh runs at a time. A refresh requested while another is in
    flight is skipped and the snapshot is marked stale, so the next read
    reloads it. The stale flag is cleared when a load starts, so a skip that
    lands during a load survives it.
    """

    def __init__(self, ttl_seconds: int | None = None) -> None:
        self._lock = threading.Lock()
        self._cafes: list[CafeOut] = []
        self._stale = True
        self._ttl = timedelta(seconds=settings.catalog_ttl_seconds if ttl_seconds is None else ttl_seconds)
        self.loading = False
        self.error: str | None = None
        self.refreshed_at: datetime | None = None

    @property
    def cafes(self) -> list[CafeOut]:
        return list(self._cafes)

    def refresh(self, db: Session, raise_errors: bool = False) -> bool:
        """Reload from the database.

        Returns False when another refresh holds the lock or the load failed.
        A failed load keeps the previous snapshot and records the message in
        ``error``; with ``raise_errors`` the exception propagates instead.
        """
        if not self._lock.acquire(blocking=False):
            self._stale = True
            logger.warning("Catalog refresh already running, skipping")
            return False
        self.loading = True
        self.error = None
        self._stale = False
        try:
            self._cafes = load_cafes(db)
            self.refreshed_at = datetime.now()
            logger.info("Catalog refreshed: %d cafes", len(self._cafes))
            return True
        except Exception as exc:
            self.error = str(exc)
            self._stale = True
            logger.exception("Catalog refresh failed")
            if raise_errors:
                raise
            return False
        finally:
            self.loading = False
            self._lock.release()

    def needs_refresh(self) -> bool:
        if self._stale or self.refreshed_at is None:
            return True
        return datetime.now() - self.refreshed_at > self._ttl

    def _wait_for_running_refresh(self) -> None:
        with self._lock:
            pass

    def snapshot(self, db: Session) -> list[CafeOut]:
        """Current cafes, reloading first when stale or expired.

        A reader that finds the first load still running waits for it rather
        than returning an empty list.
        """
        if self.needs_refresh() and not self.refresh(db, raise_errors=True) and self.refreshed_at is None:
            self._wait_for_running_refresh()
            if self.refreshed_at is None:
                # the other load failed
                self.refresh(db, raise_errors=True)
        return self.cafes

    def pending_reviews(self, db: Session) -> list[PendingReviewOut]:
        return directory.pending_reviews(self.snapshot(db))

    def invalidate(self) -> None:
        self._stale = True

    def reset(self) -> None:
        with self._lock:
            self._cafes = []
            self._stale = True
            self.refreshed_at = None
            self.error = None


catalog = CafeCatalog()
