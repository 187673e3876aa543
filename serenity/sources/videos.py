"""
YouTube video search source.
"""
from typing import Any, List

from ..recommendation.schemas import SourceQuery, VideoItem
from .base import MAX_ITEMS_PER_SOURCE, SourceClient

WATCH_URL = "https://www.youtube.com/watch?v="

# The search API exposes no numeric relevance, so every video gets the same score.
VIDEO_RELEVANCE_SCORE = 8.0


class VideoSource(SourceClient):
    """Videos matching the search phrase mapped from the caller's mood."""

    name = "videos"

    async def _request(self, query: SourceQuery) -> Any:
        params = {
            "part": "snippet",
            "q": query.video_query,
            "type": "video",
            "maxResults": MAX_ITEMS_PER_SOURCE,
            "key": self.api_key,
        }
        return await self._get_json("/search", params)

    def _normalize(self, payload: Any) -> List[VideoItem]:
        videos = []
        for video in self._require_list(payload, "items")[:MAX_ITEMS_PER_SOURCE]:
            video_id = video["id"]["videoId"]
            snippet = video["snippet"]
            thumbnail = (snippet.get("thumbnails") or {}).get("high") or {}
            videos.append(VideoItem(
                id=video_id,
                title=snippet["title"],
                description=snippet.get("description") or "",
                image_url=thumbnail.get("url"),
                action_url=f"{WATCH_URL}{video_id}",
                relevance_score=VIDEO_RELEVANCE_SCORE,
            ))
        return videos
