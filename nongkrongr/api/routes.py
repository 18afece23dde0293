"""Root API router."""

from fastapi import APIRouter

from nongkrongr.api.endpoints import (
    cafes,
    explore,
    factcheck,
    feedback,
    notifications,
    profiles,
    recommendations,
    reviews,
    vocabulary,
)

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "ok"}


router.include_router(cafes.router)
router.include_router(explore.router)
router.include_router(reviews.router)
router.include_router(vocabulary.router)
router.include_router(recommendations.router)
router.include_router(profiles.router)
router.include_router(feedback.router)
router.include_router(notifications.router)
router.include_router(factcheck.router)
