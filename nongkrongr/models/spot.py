"""Photo spots and promotional events owned by a cafe."""

from sqlalchemy import Column, Date, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from nongkrongr.db.base import Base


class Spot(Base):
    __tablename__ = "spots"

    id = Column(String(64), primary_key=True)
    cafe_id = Column(ForeignKey("cafes.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    tip = Column(Text)
    photo_url = Column(Text)

    cafe = relationship("Cafe", back_populates="spots")


class Event(Base):
    __tablename__ = "events"

    id = Column(String(64), primary_key=True)
    cafe_id = Column(ForeignKey("cafes.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    image_url = Column(Text)

    cafe = relationship("Cafe", back_populates="events")
