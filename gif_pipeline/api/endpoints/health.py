"""
Health check endpoints for the Trending GIF Pipeline API.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from gif_pipeline.config import get_settings
from gif_pipeline.core.logging import logger
from gif_pipeline.dependencies import PipelineDependencies, get_dependencies

router = APIRouter()


@router.get("")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns service status and timestamp.
    """
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": get_settings().PROJECT_NAME,
        "version": "0.1.0",
    }


@router.get("/storage")
async def storage_health(
    dependencies: PipelineDependencies = Depends(get_dependencies),
) -> Dict[str, Any]:
    """
    Check health of the storage bucket.
    """
    result = await dependencies.storage_service.check_health()
    if result.get("status") != "ok":
        logger.error(f"Storage health check failed: {result}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage service is not healthy",
        )
    return result
