"""Visitor feedback and key/value settings."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from nongkrongr.db.base import Base


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    message = Column(Text, nullable=False)
    user_id = Column(ForeignKey("profiles.id", ondelete="SET NULL"))
    status = Column(String(20), nullable=False, default="new")  # new, read, archived
    created_at = Column(DateTime, nullable=False, default=datetime.now)


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
