"""Database initialization utilities."""

import logging

from nongkrongr import models  # noqa: F401
from nongkrongr.db.base import Base
from nongkrongr.db.session import engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured (%d tables)", len(Base.metadata.tables))
