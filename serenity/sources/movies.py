"""
TMDB movie discovery source.
"""
from typing import Any, List, Optional

from ..recommendation.schemas import MovieItem, SourceQuery
from .base import MAX_ITEMS_PER_SOURCE, SourceClient, SourceError

IMAGE_BASE = "https://image.tmdb.org/t/p/w500"
MOVIE_PAGE_BASE = "https://www.themoviedb.org/movie"


def get_poster_url(poster_path: Optional[str]) -> Optional[str]:
    if not poster_path:
        return None
    return f"{IMAGE_BASE}{poster_path}"


class MovieSource(SourceClient):
    """Popular movies in the genre mapped from the caller's mood."""

    name = "movies"

    async def _request(self, query: SourceQuery) -> Any:
        params = {
            "api_key": self.api_key,
            "with_genres": int(query.genre),
            "sort_by": "popularity.desc",
            "page": 1,
        }
        return await self._get_json("/discover/movie", params)

    def _normalize(self, payload: Any) -> List[MovieItem]:
        items = []
        for movie in self._require_list(payload, "results")[:MAX_ITEMS_PER_SOURCE]:
            movie_id = movie["id"]
            # TMDB ids are integers; anything else is a malformed entry
            if isinstance(movie_id, bool) or not isinstance(movie_id, (int, str)):
                raise SourceError(f"Movie id must be an integer, got {type(movie_id).__name__}")
            items.append(MovieItem(
                id=str(movie_id),
                title=movie["title"],
                description=movie.get("overview") or "",
                image_url=get_poster_url(movie.get("poster_path")),
                action_url=f"{MOVIE_PAGE_BASE}/{movie_id}",
                relevance_score=float(movie.get("vote_average") or 0.0),
            ))
        return items
