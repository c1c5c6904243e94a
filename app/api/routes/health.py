from fastapi import APIRouter
from pydantic import BaseModel

from app.grid import COMMON_ASPECT_RATIOS

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    aspect_ratios: int


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Check API health.

    Also reports how many canonical aspect ratios the geometric detector
    scores against.
    """
    return HealthResponse(
        status="healthy",
        aspect_ratios=len(COMMON_ASPECT_RATIOS),
    )
