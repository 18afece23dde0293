"""Core recommendation logic."""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from nongkrongr.core.config import settings
from nongkrongr.core.exceptions import AIServiceError
from nongkrongr.models.vocabulary import Amenity, Vibe
from nongkrongr.schemas.cafe import CafeOut
from nongkrongr.schemas.recommendation import AiRecommendationParams, RecommendationResponse, ScoredCafe
from nongkrongr.schemas.vocabulary import VocabularyItem
from nongkrongr.services import vocabulary
from nongkrongr.services.catalog import catalog
from nongkrongr.services.directory import public_view
from nongkrongr.services.llm import llm_service, offline_description

logger = logging.getLogger(__name__)

SEARCH_ERROR_MESSAGE = "Maaf, terjadi kesalahan saat mencari rekomendasi. Coba lagi ya."


def overlap_score(cafe: CafeOut, params: AiRecommendationParams) -> int:
    """How many of the requested vibes and amenities the cafe has."""
    vibe_ids = {v.id for v in cafe.vibes}
    amenity_ids = {a.id for a in cafe.amenities}
    return sum(1 for v in params.vibes if v in vibe_ids) + sum(1 for a in params.amenities if a in amenity_ids)


def _secondary_key(cafe: CafeOut, sort_by: str | None) -> float:
    # smaller sorts first
    if sort_by == "work":
        return -cafe.avg_work_score
    if sort_by == "quiet":
        return cafe.avg_crowd_evening
    return -cafe.avg_aesthetic_score


def score_cafes(
    cafes: Sequence[CafeOut],
    params: AiRecommendationParams,
    limit: int | None = None,
) -> list[ScoredCafe]:
    """Rank cafes for the extracted parameters.

    Price tier is a hard ceiling. Cafes are ranked by vibe/amenity overlap;
    when any were requested, cafes matching none of them are dropped. Ties
    fall back to the requested sort criterion, then the name.
    """
    limit = limit or settings.recommendation_top_k
    candidates = list(cafes)
    if params.max_price_tier:
        candidates = [c for c in candidates if c.price_tier <= params.max_price_tier]

    requested = bool(params.vibes or params.amenities)
    scored = [(overlap_score(c, params), c) for c in candidates]
    if requested:
        scored = [item for item in scored if item[0] > 0]

    scored.sort(key=lambda item: (-item[0], _secondary_key(item[1], params.sort_by), item[1].name.lower()))
    return [ScoredCafe(cafe=cafe, match_score=score) for score, cafe in scored[:limit]]


def recommend(db: Session, prompt: str, limit: int | None = None) -> RecommendationResponse:
    """Ask the model for filters, then rank the approved cafes locally."""
    vibes = [VocabularyItem.model_validate(v) for v in vocabulary.list_items(db, Vibe)]
    amenities = [VocabularyItem.model_validate(a) for a in vocabulary.list_items(db, Amenity)]
    try:
        params = llm_service.extract_recommendation_params(prompt, vibes, amenities)
    except AIServiceError as exc:
        logger.error("Recommendation params extraction failed: %s", exc.message)
        raise AIServiceError(SEARCH_ERROR_MESSAGE) from exc

    approved = [public_view(c) for c in catalog.snapshot(db) if c.status == "approved"]
    items = score_cafes(approved, params, limit)
    logger.info(
        "Recommendation for %r: vibes=%s amenities=%s price<=%s sort=%s -> %d cafes",
        prompt,
        params.vibes,
        params.amenities,
        params.max_price_tier,
        params.sort_by,
        len(items),
    )
    return RecommendationResponse(reasoning=params.reasoning, params=params, items=items)


def describe_cafe(name: str, vibes: list[str]) -> str:
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY missing, using offline cafe description")
        return offline_description(name, vibes)
    return llm_service.generate_cafe_description(name, vibes)
