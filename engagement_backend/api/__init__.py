"""
Backend API package initialization.

This package contains FastAPI router modules for the Engagement Analytics backend:
- predictive: Predictive analytics aggregate, summaries, alert/recommendation
  actions, on-demand series analysis and sentiment classification
"""

from fastapi import APIRouter

from engagement_backend.api.predictive import router as predictive_router

# Create main API router
api_router = APIRouter()

# predictive router has its own /predictive-analytics prefix
api_router.include_router(predictive_router)

__all__ = [
    "api_router",
    "predictive_router",
]
