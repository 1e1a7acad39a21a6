"""
Main router for the Trending GIF Pipeline API.
"""

from fastapi import APIRouter

from gif_pipeline.api.endpoints import health, pipeline

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(pipeline.router, tags=["Pipeline"])
