"""Health Probe - liveness endpoint for container orchestration.

Invariants:
    - GET /health always returns 200 if the process is up
    - No readiness probe: the service has no backing store to check
"""

import logging
from fastapi import APIRouter, Depends, status

from payinstruct.config import Settings, get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
    }
