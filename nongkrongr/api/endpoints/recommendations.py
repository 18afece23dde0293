"""Recommendation endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from nongkrongr.db.session import get_db
from nongkrongr.schemas.recommendation import RecommendationRequest, RecommendationResponse
from nongkrongr.services.recommendation import recommend

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.post("", response_model=RecommendationResponse)
def recommend_cafes(payload: RecommendationRequest, db: Session = Depends(get_db)) -> RecommendationResponse:
    """Recommend cafes for a natural-language wish."""
    prompt = payload.prompt.strip()
    if not prompt:
        raise HTTPException(status_code=422, detail="Prompt must not be blank")
    return recommend(db, prompt, payload.limit)
