"""Expose schemas for easier import."""

from nongkrongr.schemas.cafe import CafeCreate, CafeOut, CafeUpdate  # noqa: F401
from nongkrongr.schemas.review import ReviewCreate, ReviewOut  # noqa: F401
from nongkrongr.schemas.recommendation import (  # noqa: F401
    AiRecommendationParams,
    RecommendationRequest,
    RecommendationResponse,
)
from nongkrongr.schemas.factcheck import DeepfakeResult, NewsOut, TicketOut  # noqa: F401
