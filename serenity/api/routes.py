"""
FastAPI routes for Serenity REST API.
"""
from typing import Optional
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .schemas import (
    RecommendRequest,
    RecommendResponse,
    HealthResponse,
    MoodsResponse,
    ErrorResponse
)
from .dependencies import (
    engine_unavailable,
    get_caller_identity,
    get_config,
    get_mood_mapper,
    get_recommendation_engine
)
from ..config.settings import AppConfig
from ..mood.mapper import MoodMapper
from ..recommendation.engine import RecommendationEngine
from ..recommendation.errors import RecommendationError, UnauthenticatedError
from ..recommendation.schemas import CallerIdentity, RecommendationRequest, UserProfile


router = APIRouter()


def _error_response(error: RecommendationError) -> JSONResponse:
    status_code = 401 if isinstance(error, UnauthenticatedError) else 500
    body = ErrorResponse(error=error.code, detail=error.message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Health check endpoint"
)
async def health_check(config: AppConfig = Depends(get_config)):
    """
    Check the health status of the API.

    Reports the API version and which upstream providers have credentials.
    """
    return HealthResponse(
        status="healthy",
        version=config.versioning.api_version,
        providers={
            "movies": bool(config.sources.tmdb_api_key),
            "videos": bool(config.sources.youtube_api_key),
            "therapists": bool(config.sources.yelp_api_key)
        }
    )


@router.post(
    "/recommendations",
    response_model=RecommendResponse,
    response_model_exclude_none=True,
    responses={
        401: {"model": ErrorResponse, "description": "Caller identity missing"},
        500: {"model": ErrorResponse, "description": "Unexpected failure during assembly"},
        503: {"model": ErrorResponse, "description": "Engine not initialized"}
    },
    tags=["Recommendations"],
    summary="Aggregate mood-based recommendations"
)
async def get_recommendations(
    request: RecommendRequest,
    identity: Optional[CallerIdentity] = Depends(get_caller_identity),
    engine: Optional[RecommendationEngine] = Depends(get_recommendation_engine)
):
    """
    Gather movies, videos and nearby therapists for the caller's mood.

    The list always holds up to three movies, then up to three videos, then
    up to three therapists, then exactly one daily affirmation. A provider
    that fails simply contributes nothing.

    **Example moods:** anxious, stressed, sad, verySad, happy, veryHappy,
    calm, tired. Any other value falls back to comedy movies and a guided
    meditation search.
    """
    # Unauthenticated callers are rejected before the engine is even looked at
    if identity is None:
        return _error_response(UnauthenticatedError())
    if engine is None:
        raise engine_unavailable()

    internal_request = RecommendationRequest(
        mood=request.mood,
        profile=UserProfile(location=request.user_profile.location)
    )

    try:
        result = await engine.recommend(internal_request, identity)
    except RecommendationError as e:
        return _error_response(e)

    return RecommendResponse.from_result(result)


@router.get(
    "/moods",
    response_model=MoodsResponse,
    tags=["Metadata"],
    summary="List mood to query mappings"
)
async def list_moods(mapper: MoodMapper = Depends(get_mood_mapper)):
    """
    Show the movie genre and video search used for each known mood,
    and the defaults applied to any other value.
    """
    return MoodsResponse(**mapper.describe())
