"""
FastAPI dependency injection for Serenity.
"""
import logging
from functools import lru_cache
from typing import Optional

import aiohttp
from fastapi import Header, HTTPException, status

from ..config.settings import ConfigManager, AppConfig, DEFAULT_CONFIG_PATH
from ..mood.mapper import MoodMapper
from ..recommendation.engine import RecommendationEngine
from ..recommendation.schemas import CallerIdentity
from ..utils.logging import StructuredLogger


logger = logging.getLogger(__name__)


class AppState:
    """Process-wide state: configuration, the shared HTTP session and the engine."""

    def __init__(self):
        self.config_manager = ConfigManager()
        self.config: Optional[AppConfig] = None
        self.logger: Optional[StructuredLogger] = None
        self.session: Optional[aiohttp.ClientSession] = None
        self.recommendation_engine: Optional[RecommendationEngine] = None

    def load_config(self, config_path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
        if self.config is not None:
            return self.config

        try:
            self.config = self.config_manager.load(config_path)
        except Exception as e:
            logger.error(f"Failed to load Serenity configuration: {e}")
            raise

        self.logger = StructuredLogger(
            "serenity.api",
            level=self.config.logging.level,
            fmt=self.config.logging.format
        )
        self.logger.log_config(self.config.to_dict())
        return self.config

    async def startup(self, config_path: str = DEFAULT_CONFIG_PATH) -> None:
        """Open the shared HTTP session and wire the engine. Must run inside the event loop."""
        self.load_config(config_path)
        if self.session is None:
            self.session = aiohttp.ClientSession()
        self.recommendation_engine = RecommendationEngine.from_config(
            self.config,
            self.session
        )
        self.logger.info("Serenity API initialized")

    async def shutdown(self) -> None:
        if self.session is not None:
            await self.session.close()
            self.session = None
        self.recommendation_engine = None
        if self.logger is not None:
            self.logger.info("Serenity API shut down")


@lru_cache()
def get_app_state() -> AppState:
    """Get or create the application state singleton."""
    return AppState()


def get_recommendation_engine() -> Optional[RecommendationEngine]:
    """Dependency for getting the recommendation engine, None before startup.

    Routes decide how to answer a missing engine so that the caller
    identity check can run first.
    """
    return get_app_state().recommendation_engine


def engine_unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Recommendation engine not initialized"
    )


def get_config() -> AppConfig:
    """Dependency for getting the app configuration."""
    return get_app_state().load_config()


def get_mood_mapper() -> MoodMapper:
    return MoodMapper()


def get_caller_identity(
    x_user_id: Optional[str] = Header(default=None, alias="X-User-Id")
) -> Optional[CallerIdentity]:
    """Caller identity forwarded by the authenticating gateway.

    Identity verification happens upstream; a missing header means the
    caller is unauthenticated and the engine rejects the request.
    """
    if x_user_id is None or not x_user_id.strip():
        return None
    return CallerIdentity(uid=x_user_id.strip())
