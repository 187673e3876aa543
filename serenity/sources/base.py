"""
Shared plumbing for upstream content sources.

Every source follows the same boundary: build a request from the mapped
query, call the provider through the injected aiohttp session, normalize
the payload, and turn any failure into a failed FetchResult.
"""
import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import aiohttp

from ..recommendation.schemas import RecommendationItem, SourceQuery
from ..utils.logging import StructuredLogger, get_logger

MAX_ITEMS_PER_SOURCE = 3


class SourceError(Exception):
    """Raised inside a source when a provider call or payload is unusable."""
    pass


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one source fetch: items on success, the cause on failure."""
    source: str
    items: Tuple[RecommendationItem, ...] = ()
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, source: str, items) -> 'FetchResult':
        return cls(source=source, items=tuple(items))

    @classmethod
    def failure(cls, source: str, error: BaseException) -> 'FetchResult':
        return cls(source=source, items=(), error=error)


class SourceClient(ABC):
    """Base class for one upstream provider."""

    name: str = "source"

    def __init__(self,
                 session: aiohttp.ClientSession,
                 api_key: str,
                 base_url: str,
                 timeout: Optional[float] = None,
                 logger: Optional[StructuredLogger] = None):
        """Initialize the source client.

        Args:
            session: Shared HTTP session, owned by the caller
            api_key: Provider-issued credential
            base_url: Provider API root, without trailing slash
            timeout: Upper bound in seconds for one fetch, None for unbounded
            logger: Logger to report failures on
        """
        self.session = session
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.logger = logger or get_logger(f"serenity.sources.{self.name}")

    async def fetch(self, query: SourceQuery) -> FetchResult:
        """Fetch and normalize up to three items. Never raises, except on cancellation."""
        try:
            if self.timeout:
                payload = await asyncio.wait_for(self._request(query), timeout=self.timeout)
            else:
                payload = await self._request(query)
            items = self._normalize(payload)[:MAX_ITEMS_PER_SOURCE]
        except asyncio.TimeoutError as e:
            self.logger.warning(
                f"{self.name} source timed out",
                source=self.name,
                timeout_seconds=self.timeout
            )
            return FetchResult.failure(self.name, e)
        except Exception as e:
            self.logger.warning(
                f"{self.name} source failed",
                source=self.name,
                error_type=type(e).__name__,
                error_message=str(e)
            )
            return FetchResult.failure(self.name, e)
        return FetchResult.success(self.name, items)

    async def _get_json(self,
                        path: str,
                        params: Dict[str, Any],
                        headers: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.base_url}{path}"
        async with self.session.get(url, params=params, headers=headers) as response:
            if not 200 <= response.status < 300:
                raise SourceError(f"{self.name} request failed: HTTP {response.status}")
            return await response.json()

    @staticmethod
    def _require_list(payload: Any, key: str) -> List[Dict[str, Any]]:
        if not isinstance(payload, dict):
            raise SourceError(f"Expected a JSON object, got {type(payload).__name__}")
        entries = payload.get(key)
        if not isinstance(entries, list):
            raise SourceError(f"Response field '{key}' missing or not a list")
        return entries

    @abstractmethod
    async def _request(self, query: SourceQuery) -> Any:
        """Perform the provider call and return its decoded JSON payload."""

    @abstractmethod
    def _normalize(self, payload: Any) -> List[RecommendationItem]:
        """Map the provider payload onto recommendation items."""
