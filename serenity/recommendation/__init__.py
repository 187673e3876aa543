"""
Recommendation module for Serenity.

This module provides the recommendation data model, the daily affirmation
picker and request-level errors. The scatter-gather engine lives in
``serenity.recommendation.engine``.
"""

from .affirmation import AffirmationPicker, AFFIRMATIONS
from .errors import RecommendationError, UnauthenticatedError, InternalRecommendationError
from .schemas import (
    ItemType,
    RecommendationItem,
    MovieItem,
    VideoItem,
    TherapistItem,
    AffirmationItem,
    UserProfile,
    CallerIdentity,
    RecommendationRequest,
    SourceQuery,
    AggregatedResult
)

__all__ = [
    'AffirmationPicker',
    'AFFIRMATIONS',
    'RecommendationError',
    'UnauthenticatedError',
    'InternalRecommendationError',
    'ItemType',
    'RecommendationItem',
    'MovieItem',
    'VideoItem',
    'TherapistItem',
    'AffirmationItem',
    'UserProfile',
    'CallerIdentity',
    'RecommendationRequest',
    'SourceQuery',
    'AggregatedResult'
]
