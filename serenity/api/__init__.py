"""
API module for Serenity REST API.
"""
from .routes import router
from .schemas import (
    RecommendRequest,
    RecommendResponse,
    RecommendationItemResponse,
    HealthResponse,
    MoodsResponse
)

__all__ = [
    "router",
    "RecommendRequest",
    "RecommendResponse",
    "RecommendationItemResponse",
    "HealthResponse",
    "MoodsResponse"
]
