"""Tables backing the SumselCekFakta portal."""

from datetime import datetime

from sqlalchemy import JSON, Column, Date, DateTime, Integer, String, Text

from nongkrongr.db.base import Base


class NewsItem(Base):
    """A fact-check article."""

    __tablename__ = "news"

    id = Column(String(64), primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False)  # HOAKS, FAKTA, DISINFORMASI, HATE SPEECH
    image_url = Column(Text)
    source = Column(String(255))
    tags = Column(JSON)
    view_count = Column(Integer, nullable=False, default=0)
    reference_link = Column(Text)


class Ticket(Base):
    """A hoax report submitted by the public, tracked by its ticket id."""

    __tablename__ = "tickets"

    id = Column(String(20), primary_key=True, index=True)
    report_data = Column(JSON, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, investigating, verified, rejected
    submission_date = Column(Date, nullable=False, index=True)
    history = Column(JSON, nullable=False)


class SiteSettings(Base):
    """Single-row portal configuration (id is always 1)."""

    __tablename__ = "site_settings"

    id = Column(Integer, primary_key=True)
    hero_title = Column(String(255))
    hero_description = Column(Text)
    hero_bg_url = Column(Text)
    logo_url = Column(Text)
    secondary_logo_url = Column(Text)
    cta_config = Column(JSON)
    socials_config = Column(JSON)
    visitor_count = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, default=datetime.now)
