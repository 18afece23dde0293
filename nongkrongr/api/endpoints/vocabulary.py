"""Vibe, amenity and tag endpoints (/vibes, /amenities, /tags)."""

from typing import Type

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from nongkrongr.db.session import get_db
from nongkrongr.schemas.vocabulary import VocabularyCreate, VocabularyItem
from nongkrongr.services import vocabulary

router = APIRouter(tags=["vocabulary"])


def _register(kind: str, model: Type) -> None:
    @router.get(f"/{kind}", response_model=list[VocabularyItem], name=f"list_{kind}")
    def list_items(db: Session = Depends(get_db)) -> list[VocabularyItem]:
        return [VocabularyItem.model_validate(i) for i in vocabulary.list_items(db, model)]

    @router.post(
        f"/{kind}",
        response_model=VocabularyItem,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{kind}",
    )
    def create_item(payload: VocabularyCreate, db: Session = Depends(get_db)) -> VocabularyItem:
        return VocabularyItem.model_validate(vocabulary.create_item(db, model, payload))

    @router.delete(f"/{kind}/{{item_id}}", status_code=status.HTTP_204_NO_CONTENT, name=f"delete_{kind}")
    def delete_item(item_id: str, db: Session = Depends(get_db)) -> None:
        vocabulary.delete_item(db, model, item_id)


for _kind, _model in vocabulary.KINDS.items():
    _register(_kind, _model)
