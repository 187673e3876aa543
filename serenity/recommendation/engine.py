"""
Recommendation engine for Serenity.
"""
import asyncio
import time
from enum import Enum
from typing import Callable, List, Optional, Sequence

import aiohttp

from ..config.settings import AppConfig
from ..mood.mapper import MoodMapper
from ..sources import MovieSource, TherapistSource, VideoSource
from ..sources.base import FetchResult, SourceClient
from ..utils.logging import StructuredLogger, get_logger
from .affirmation import AffirmationPicker
from .errors import InternalRecommendationError, UnauthenticatedError
from .schemas import (
    AggregatedResult,
    CallerIdentity,
    RecommendationItem,
    RecommendationRequest,
    SourceQuery
)

DEFAULT_LOCATION = "New York, NY"


class RequestPhase(Enum):
    REJECTED = "rejected"
    GATHERING = "gathering"
    ASSEMBLED = "assembled"


class RecommendationEngine:
    """Scatter-gather over the movie, video and therapist sources.

    Results are concatenated in a fixed order (movies, videos, therapists)
    with one affirmation appended last. The order never depends on which
    source answered first or on relevance scores.
    """

    def __init__(self,
                 movie_source: SourceClient,
                 video_source: SourceClient,
                 therapist_source: SourceClient,
                 mood_mapper: Optional[MoodMapper] = None,
                 affirmation_picker: Optional[AffirmationPicker] = None,
                 default_location: str = DEFAULT_LOCATION,
                 clock: Callable[[], float] = time.time,
                 logger: Optional[StructuredLogger] = None):
        """Initialize the recommendation engine.

        Args:
            movie_source: Source for movie items
            video_source: Source for video items
            therapist_source: Source for therapist items
            mood_mapper: Mood to query parameter mapper (optional)
            affirmation_picker: Picker for the trailing affirmation (optional)
            default_location: Locality used when the profile has none
            clock: Time source in seconds, used for the affirmation
            logger: Structured logger (optional)
        """
        self.movie_source = movie_source
        self.video_source = video_source
        self.therapist_source = therapist_source
        self.mood_mapper = mood_mapper or MoodMapper()
        self.affirmation_picker = affirmation_picker or AffirmationPicker()
        self.default_location = default_location
        self.clock = clock
        self.logger = logger or get_logger("serenity.recommendation")

    @classmethod
    def from_config(cls,
                    config: AppConfig,
                    session: aiohttp.ClientSession,
                    logger: Optional[StructuredLogger] = None) -> 'RecommendationEngine':
        """Wire the three provider sources around one shared HTTP session."""
        logger = logger or get_logger("serenity.recommendation",
                                      config.logging.level, config.logging.format)
        sources = config.sources
        return cls(
            movie_source=MovieSource(session, sources.tmdb_api_key, sources.tmdb_base_url,
                                     timeout=sources.timeout_seconds, logger=logger),
            video_source=VideoSource(session, sources.youtube_api_key, sources.youtube_base_url,
                                     timeout=sources.timeout_seconds, logger=logger),
            therapist_source=TherapistSource(session, sources.yelp_api_key, sources.yelp_base_url,
                                             timeout=sources.timeout_seconds, logger=logger),
            default_location=config.recommendation.default_location,
            logger=logger,
        )

    @property
    def sources(self) -> Sequence[SourceClient]:
        # Priority order of the merged result
        return (self.movie_source, self.video_source, self.therapist_source)

    def build_query(self, request: RecommendationRequest) -> SourceQuery:
        return SourceQuery(
            mood=request.mood,
            genre=self.mood_mapper.genre_for(request.mood),
            video_query=self.mood_mapper.video_query_for(request.mood),
            location=request.profile.resolved_location(self.default_location),
        )

    async def recommend(self,
                        request: RecommendationRequest,
                        identity: Optional[CallerIdentity]) -> AggregatedResult:
        """Generate the aggregated recommendations for one request.

        Args:
            request: Mood and profile of the caller
            identity: Verified caller identity, None when unauthenticated

        Returns:
            AggregatedResult with up to three items per source and one affirmation

        Raises:
            UnauthenticatedError: If no caller identity is present
            InternalRecommendationError: If assembly fails outside the source boundary
        """
        if identity is None or not identity.uid:
            self.logger.warning("Rejected unauthenticated recommendation request",
                                phase=RequestPhase.REJECTED.value)
            raise UnauthenticatedError()

        try:
            with self.logger.operation_context("RecommendationEngine", "recommend",
                                               uid=identity.uid, mood=request.mood) as log:
                query = self.build_query(request)
                log.debug("Gathering sources", phase=RequestPhase.GATHERING.value,
                          genre=int(query.genre), video_query=query.video_query,
                          location=query.location)

                results = await asyncio.gather(*(source.fetch(query) for source in self.sources))

                items = self._merge(results, log)
                items.append(self.affirmation_picker.pick(self.clock))
                log.metric("recommendations.total_items", len(items))
                log.debug("Assembled recommendations", phase=RequestPhase.ASSEMBLED.value)

                return AggregatedResult(items=tuple(items))
        except Exception as e:
            raise InternalRecommendationError() from e

    def _merge(self, results: Sequence[FetchResult], log: StructuredLogger) -> List[RecommendationItem]:
        items: List[RecommendationItem] = []
        for result in results:
            if not result.ok:
                log.warning(
                    f"Source {result.source} contributed no items",
                    source=result.source,
                    error_type=type(result.error).__name__,
                    error_message=str(result.error)
                )
            log.metric("recommendations.source_items", len(result.items),
                       tags={"source": result.source, "ok": str(result.ok).lower()})
            items.extend(result.items)
        return items
