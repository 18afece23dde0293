"""Vibe, amenity and tag vocabularies."""

from __future__ import annotations

import logging
from typing import Type

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from nongkrongr.core.exceptions import ConflictError, NotFoundError
from nongkrongr.models.cafe import cafe_amenities, cafe_tags, cafe_vibes
from nongkrongr.models.vocabulary import Amenity, Tag, Vibe
from nongkrongr.schemas.vocabulary import VocabularyCreate
from nongkrongr.services.catalog import catalog

logger = logging.getLogger(__name__)

KINDS: dict[str, Type] = {"vibes": Vibe, "amenities": Amenity, "tags": Tag}

JOIN_COLUMNS = {
    Vibe: cafe_vibes.c.vibe_id,
    Amenity: cafe_amenities.c.amenity_id,
    Tag: cafe_tags.c.tag_id,
}


def list_items(db: Session, model: Type) -> list:
    return list(db.execute(select(model).order_by(model.name)).scalars().all())


def create_item(db: Session, model: Type, payload: VocabularyCreate):
    if db.get(model, payload.id) is not None:
        raise ConflictError(f"{model.__tablename__} entry {payload.id} already exists")
    item = model(**payload.model_dump())
    try:
        db.add(item)
        db.commit()
        db.refresh(item)
    except Exception:
        db.rollback()
        raise
    logger.info("Added %s %s", model.__tablename__, item.id)
    return item


def delete_item(db: Session, model: Type, item_id: str) -> None:
    item = db.get(model, item_id)
    if item is None:
        raise NotFoundError(f"{model.__tablename__} entry {item_id} not found")
    join_column = JOIN_COLUMNS[model]
    try:
        db.execute(delete(join_column.table).where(join_column == item_id))
        db.delete(item)
        db.commit()
    except Exception:
        db.rollback()
        raise
    catalog.refresh(db)
