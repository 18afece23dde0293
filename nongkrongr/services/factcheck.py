"""SumselCekFakta: fact-check articles, hoax report tickets, portal statistics."""

from __future__ import annotations

import logging
import random
import uuid
from collections import Counter
from datetime import date, datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from nongkrongr.core.exceptions import ConflictError, NotFoundError
from nongkrongr.core.utils import round_half_up
from nongkrongr.models.factcheck import NewsItem, SiteSettings, Ticket
from nongkrongr.schemas.factcheck import (
    FactCheckStats,
    NewsCreate,
    NewsStatus,
    ReportData,
    SiteSettingsIn,
    TopicStat,
)

logger = logging.getLogger(__name__)

MONTHS = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)
SITE_SETTINGS_ID = 1
TICKET_ATTEMPTS = 50


def indonesian_timestamp(now: datetime | None = None) -> str:
    """e.g. "5 Maret 2025, Pukul 09:05 WIB"."""
    now = now or datetime.now()
    return f"{now.day} {MONTHS[now.month - 1]} {now.year}, Pukul {now.hour:02d}:{now.minute:02d} WIB"


# --- news -----------------------------------------------------------------


def list_news(db: Session) -> list[NewsItem]:
    return list(db.execute(select(NewsItem).order_by(NewsItem.date.desc(), NewsItem.title)).scalars().all())


def get_news(db: Session, news_id: str) -> NewsItem:
    news = db.get(NewsItem, news_id)
    if news is None:
        raise NotFoundError(f"News {news_id} not found")
    return news


def create_news(db: Session, payload: NewsCreate) -> NewsItem:
    news_id = payload.id or f"news-{uuid.uuid4()}"
    if db.get(NewsItem, news_id) is not None:
        raise ConflictError(f"News {news_id} already exists")
    data = payload.model_dump(exclude={"id"})
    data["status"] = payload.status.value
    news = NewsItem(id=news_id, view_count=0, **data)
    try:
        db.add(news)
        db.commit()
        db.refresh(news)
    except Exception:
        db.rollback()
        raise
    logger.info("Published news %s (%s)", news.id, news.status)
    return news


def update_news(db: Session, news_id: str, payload: NewsCreate) -> NewsItem:
    news = get_news(db, news_id)
    data = payload.model_dump(exclude={"id"})
    data["status"] = payload.status.value
    try:
        for field, value in data.items():
            setattr(news, field, value)
        db.commit()
        db.refresh(news)
    except Exception:
        db.rollback()
        raise
    return news


def delete_news(db: Session, news_id: str) -> None:
    news = get_news(db, news_id)
    try:
        db.delete(news)
        db.commit()
    except Exception:
        db.rollback()
        raise


def increment_view(db: Session, news_id: str) -> NewsItem:
    news = get_news(db, news_id)
    try:
        news.view_count = NewsItem.view_count + 1
        db.commit()
        db.refresh(news)
    except Exception:
        db.rollback()
        raise
    return news


# --- tickets --------------------------------------------------------------


def _new_ticket_id(db: Session) -> str:
    for _ in range(TICKET_ATTEMPTS):
        candidate = f"TIKET-{random.randint(1000, 9999)}"
        if db.get(Ticket, candidate) is None:
            return candidate
    raise ConflictError("Could not allocate a free ticket number")


def create_ticket(db: Session, report: ReportData) -> Ticket:
    """File a hoax report; the returned id is what the reporter tracks it by."""
    ticket = Ticket(
        id=_new_ticket_id(db),
        report_data=report.model_dump(),
        status="pending",
        submission_date=date.today(),
        history=[{"date": indonesian_timestamp(), "note": "Laporan diterima oleh sistem."}],
    )
    try:
        db.add(ticket)
        db.commit()
        db.refresh(ticket)
    except Exception:
        db.rollback()
        raise
    logger.info("Ticket %s filed (category=%s)", ticket.id, report.category or "-")
    return ticket


def list_tickets(db: Session) -> list[Ticket]:
    return list(db.execute(select(Ticket).order_by(Ticket.submission_date.desc(), Ticket.id)).scalars().all())


def track_ticket(db: Session, ticket_id: str) -> Ticket:
    ticket = db.get(Ticket, ticket_id.strip().upper())
    if ticket is None:
        raise NotFoundError("Tiket tidak ditemukan. Pastikan ID yang Anda masukkan benar.")
    return ticket


def update_ticket_status(db: Session, ticket_id: str, status: str, note: str | None = None) -> Ticket:
    ticket = track_ticket(db, ticket_id)
    entry = {"date": indonesian_timestamp(), "note": note or f"Status diubah menjadi {status} oleh Admin."}
    try:
        ticket.status = status
        # reassign so the JSON column is flagged dirty
        ticket.history = [*ticket.history, entry]
        db.commit()
        db.refresh(ticket)
    except Exception:
        db.rollback()
        raise
    logger.info("Ticket %s status -> %s", ticket.id, status)
    return ticket


def delete_ticket(db: Session, ticket_id: str) -> None:
    ticket = track_ticket(db, ticket_id)
    try:
        db.delete(ticket)
        db.commit()
    except Exception:
        db.rollback()
        raise


# --- statistics -----------------------------------------------------------


def compute_stats(news: Sequence[NewsItem]) -> FactCheckStats:
    total = len(news)
    by_status = Counter(n.status for n in news)
    hoax = by_status[NewsStatus.HOAX.value]

    topic_counts: Counter[str] = Counter()
    for item in news:
        for tag in item.tags or []:
            label = tag.strip()
            if label:
                topic_counts[label] += 1
    top = topic_counts.most_common(4)
    max_count = top[0][1] if top else 1

    return FactCheckStats(
        total=total,
        hoax=hoax,
        fakta=by_status[NewsStatus.FAKTA.value],
        disinformasi=by_status[NewsStatus.DISINFORMASI.value],
        hate_speech=by_status[NewsStatus.HATE_SPEECH.value],
        hoax_percentage=int(round_half_up(hoax / total * 100)) if total else 0,
        total_views=sum(n.view_count or 0 for n in news),
        top_topics=[
            TopicStat(label=label, count=count, percentage=int(round_half_up(count / max_count * 100)))
            for label, count in top
        ],
    )


# --- site settings & visitors ---------------------------------------------


def get_site_settings(db: Session) -> SiteSettings:
    site = db.get(SiteSettings, SITE_SETTINGS_ID)
    if site is None:
        raise NotFoundError("Site settings have not been configured")
    return site


def update_site_settings(db: Session, payload: SiteSettingsIn) -> SiteSettings:
    """Upsert the single settings row."""
    try:
        site = db.get(SiteSettings, SITE_SETTINGS_ID)
        if site is None:
            site = SiteSettings(id=SITE_SETTINGS_ID, visitor_count=0)
            db.add(site)
        for field, value in payload.model_dump().items():
            setattr(site, field, value)
        site.updated_at = datetime.now()
        db.commit()
        db.refresh(site)
    except Exception:
        db.rollback()
        raise
    return site


def register_visit(db: Session, new_session: bool) -> int:
    """Count a visitor once per browser session; returns the running total."""
    try:
        site = db.get(SiteSettings, SITE_SETTINGS_ID)
        if site is None:
            site = SiteSettings(id=SITE_SETTINGS_ID, visitor_count=0)
            db.add(site)
            db.flush()
        if new_session:
            site.visitor_count = SiteSettings.visitor_count + 1
        db.commit()
        db.refresh(site)
    except Exception:
        db.rollback()
        raise
    return site.visitor_count
