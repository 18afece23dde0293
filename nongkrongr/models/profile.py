"""Profile and favorite models."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String

from nongkrongr.db.base import Base


class Profile(Base):
    """Role-tagged account record."""

    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(20), nullable=False, default="user")  # admin, admin_cafe, user
    status = Column(String(20), nullable=False, default="active", index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)


class Favorite(Base):
    __tablename__ = "favorites"

    profile_id = Column(ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    cafe_id = Column(ForeignKey("cafes.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
