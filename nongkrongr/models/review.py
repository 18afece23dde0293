"""Review model."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from nongkrongr.db.base import Base


class Review(Base):
    """A visitor review of one cafe, counted in aggregates once approved."""

    __tablename__ = "reviews"

    id = Column(String(64), primary_key=True, index=True)
    cafe_id = Column(ForeignKey("cafes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(ForeignKey("profiles.id", ondelete="SET NULL"))
    author = Column(String(100), nullable=False)
    rating_aesthetic = Column(Integer, nullable=False)
    rating_work = Column(Integer, nullable=False)
    crowd_morning = Column(Integer, nullable=False)
    crowd_afternoon = Column(Integer, nullable=False)
    crowd_evening = Column(Integer, nullable=False)
    text = Column(Text, nullable=False, default="")
    # list of URLs; older rows may hold Postgres array text like "{a,b}"
    photos = Column(JSON)
    status = Column(String(20), nullable=False, default="pending", index=True)  # pending, approved, rejected
    helpful_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    cafe = relationship("Cafe", back_populates="reviews")
