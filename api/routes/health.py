"""
Health Route

Liveness probe for the sandbox service.
"""

from fastapi import APIRouter

from api import __version__
from api.models.responses import HealthResponse


router = APIRouter(tags=["health"])


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the service is up. Does not touch the devnet."""
    return HealthResponse(version=__version__)
