"""Controlled vocabularies attached to cafes."""

from sqlalchemy import Column, String

from nongkrongr.db.base import Base


class Vibe(Base):
    __tablename__ = "vibes"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    icon = Column(String(50))


class Amenity(Base):
    __tablename__ = "amenities"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    icon = Column(String(50))


class Tag(Base):
    __tablename__ = "tags"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    icon = Column(String(50))
