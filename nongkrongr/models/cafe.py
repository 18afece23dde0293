"""Cafe model and its many-to-many join tables."""

from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from nongkrongr.db.base import Base

cafe_vibes = Table(
    "cafe_vibes",
    Base.metadata,
    Column("cafe_id", ForeignKey("cafes.id", ondelete="CASCADE"), primary_key=True),
    Column("vibe_id", ForeignKey("vibes.id", ondelete="CASCADE"), primary_key=True),
)

cafe_amenities = Table(
    "cafe_amenities",
    Base.metadata,
    Column("cafe_id", ForeignKey("cafes.id", ondelete="CASCADE"), primary_key=True),
    Column("amenity_id", ForeignKey("amenities.id", ondelete="CASCADE"), primary_key=True),
)

cafe_tags = Table(
    "cafe_tags",
    Base.metadata,
    Column("cafe_id", ForeignKey("cafes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Cafe(Base):
    """A cafe listing."""

    __tablename__ = "cafes"

    id = Column(String(64), primary_key=True, index=True)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    address = Column(Text, nullable=False, default="")
    district = Column(String(100), nullable=False, default="")
    city = Column(String(100), nullable=False, default="Palembang")
    opening_hours = Column(String(100), nullable=False, default="")
    price_tier = Column(Integer, nullable=False, default=2)
    lat = Column(Float)
    lng = Column(Float)
    is_sponsored = Column(Boolean, nullable=False, default=False)
    sponsored_until = Column(Date)
    sponsored_rank = Column(Integer, nullable=False, default=0)
    logo_url = Column(Text)
    cover_url = Column(Text)
    status = Column(String(20), nullable=False, default="approved", index=True)  # pending, approved, rejected, archived
    manager_id = Column(ForeignKey("profiles.id", ondelete="SET NULL"), index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime)

    vibes = relationship("Vibe", secondary=cafe_vibes, order_by="Vibe.id")
    amenities = relationship("Amenity", secondary=cafe_amenities, order_by="Amenity.id")
    tags = relationship("Tag", secondary=cafe_tags, order_by="Tag.id")
    spots = relationship("Spot", back_populates="cafe", cascade="all, delete-orphan")
    events = relationship("Event", back_populates="cafe", cascade="all, delete-orphan")
    reviews = relationship(
        "Review",
        back_populates="cafe",
        cascade="all, delete-orphan",
        order_by="Review.created_at",
    )
    manager = relationship("Profile")
