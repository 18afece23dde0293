"""Utilities for interacting with OpenAI."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from openai import OpenAI, OpenAIError

from nongkrongr.core.config import settings
from nongkrongr.core.exceptions import AIServiceError
from nongkrongr.schemas.factcheck import DeepfakeResult
from nongkrongr.schemas.recommendation import AiRecommendationParams
from nongkrongr.schemas.vocabulary import VocabularyItem

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("aesthetic", "work", "quiet")
FALLBACK_DESCRIPTION = "Discover your new favorite spot for coffee and creativity."


def _as_list(value: Any) -> list[str]:
    """The model sometimes answers a list as one comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    return [str(value)]


def _as_int(value: Any) -> int | None:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def parse_recommendation_params(
    data: dict[str, Any],
    vibe_ids: Iterable[str],
    amenity_ids: Iterable[str],
) -> AiRecommendationParams:
    """Validate raw model output against the known vocabularies."""
    known_vibes, known_amenities = set(vibe_ids), set(amenity_ids)
    vibes = [v for v in dict.fromkeys(_as_list(data.get("vibes"))) if v in known_vibes]
    amenities = [a for a in dict.fromkeys(_as_list(data.get("amenities"))) if a in known_amenities]

    price = _as_int(data.get("maxPriceTier", data.get("max_price_tier")))
    if price is not None:
        price = min(max(price, 1), 4)

    sort_by = data.get("sortBy", data.get("sort_by"))
    if sort_by not in SORT_OPTIONS:
        sort_by = None

    reasoning = data.get("reasoning") or ""
    return AiRecommendationParams(
        vibes=vibes,
        amenities=amenities,
        max_price_tier=price,
        sort_by=sort_by,
        reasoning=str(reasoning),
    )


def risk_level(score: int) -> str:
    if score > 70:
        return "high"
    if score > 40:
        return "suspicious"
    return "low"


def parse_deepfake_result(data: dict[str, Any]) -> DeepfakeResult:
    score = _as_int(data.get("score"))
    if score is None:
        raise AIServiceError("Gagal menganalisis gambar.")
    score = min(max(score, 0), 100)
    verdict = str(data.get("verdict") or ("Kemungkinan Buatan AI" if score > 50 else "Kemungkinan Asli"))
    return DeepfakeResult(
        score=score,
        verdict=verdict,
        reason=str(data.get("reason") or ""),
        flags=_as_list(data.get("flags")),
        risk_level=risk_level(score),
    )


class LLMService:
    """Wrapper around the OpenAI chat API for search parsing and image checks."""

    def __init__(self) -> None:
        if not settings.openai_api_key:
            raise AIServiceError("OPENAI_API_KEY is not configured.")
        self._client = OpenAI(api_key=settings.openai_api_key)

    def _json_completion(self, model: str, messages: list[dict[str, Any]]) -> dict[str, Any]:
        try:
            response = self._client.chat.completions.create(
                model=model,
                messages=messages,
                response_format={"type": "json_object"},
                temperature=0.2,
            )
            content = response.choices[0].message.content or "{}"
            return json.loads(content)
        except (OpenAIError, json.JSONDecodeError) as exc:
            logger.exception("OpenAI completion failed")
            raise AIServiceError(str(exc)) from exc

    def extract_recommendation_params(
        self,
        prompt: str,
        vibes: list[VocabularyItem],
        amenities: list[VocabularyItem],
    ) -> AiRecommendationParams:
        """Turn a free-text cafe wish into structured filters."""
        vibe_catalog = ", ".join(f"{v.id} ({v.name})" for v in vibes) or "-"
        amenity_catalog = ", ".join(f"{a.id} ({a.name})" for a in amenities) or "-"
        system_prompt = (
            "Kamu asisten pencarian cafe di Sumatera Selatan. "
            "Ubah permintaan pengguna menjadi filter terstruktur. Jawab hanya dengan JSON."
        )
        user_prompt = (
            "Isi field berikut:\n"
            f"- vibes: array id dari daftar ini saja: {vibe_catalog}\n"
            f"- amenities: array id dari daftar ini saja: {amenity_catalog}\n"
            "- maxPriceTier: angka 1-4 (1 paling murah) atau null\n"
            "- sortBy: 'aesthetic', 'work', 'quiet', atau null\n"
            "- reasoning: satu kalimat santai berbahasa Indonesia yang menjelaskan pilihanmu\n\n"
            f"Permintaan: {prompt}"
        )
        data = self._json_completion(
            settings.openai_response_model,
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return parse_recommendation_params(data, [v.id for v in vibes], [a.id for a in amenities])

    def analyze_image_for_deepfake(self, image: str) -> DeepfakeResult:
        """Score how likely an image is AI-generated or manipulated."""
        system_prompt = (
            "You are a forensic image analyst. Judge whether the image is AI-generated, "
            "deepfaked or digitally manipulated. Reply with JSON only."
        )
        instructions = (
            "Return JSON with: score (0-100, likelihood the image is AI-made or manipulated), "
            "verdict (short Indonesian label), reason (one Indonesian sentence), "
            "flags (array of short Indonesian observations)."
        )
        data = self._json_completion(
            settings.openai_vision_model,
            [
                {"role": "system", "content": system_prompt},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": instructions},
                        {"type": "image_url", "image_url": {"url": image}},
                    ],
                },
            ],
        )
        return parse_deepfake_result(data)

    def generate_cafe_description(self, name: str, vibes: list[str]) -> str:
        prompt = (
            f'Create a short, catchy, and aesthetic description for a cafe in Palembang called "{name}". '
            f"The vibes are: {', '.join(vibes)}. Make it sound appealing to Gen Z."
        )
        try:
            response = self._client.chat.completions.create(
                model=settings.openai_response_model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.8,
            )
            return (response.choices[0].message.content or "").strip() or FALLBACK_DESCRIPTION
        except OpenAIError:
            logger.exception("Description generation failed for %s", name)
            return FALLBACK_DESCRIPTION


def offline_description(name: str, vibes: list[str]) -> str:
    return f"A beautiful cafe named {name} with vibes like {', '.join(vibes)}."


_llm_service_instance: LLMService | None = None


def get_llm_service() -> LLMService:
    """Lazy initialization of LLM service."""
    global _llm_service_instance
    if _llm_service_instance is None:
        _llm_service_instance = LLMService()
    return _llm_service_instance


class _LazyLLMService:
    """Defers client construction until the first AI call."""

    def __getattr__(self, name):
        return getattr(get_llm_service(), name)


llm_service = _LazyLLMService()
