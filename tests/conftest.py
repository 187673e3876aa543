import asyncio

import pytest

from serenity.config.settings import AppConfig, SourcesConfig

TMDB_URL = "https://tmdb.test/3"
YOUTUBE_URL = "https://youtube.test/v3"
YELP_URL = "https://yelp.test/v3"

MOVIES_ENDPOINT = f"{TMDB_URL}/discover/movie"
VIDEOS_ENDPOINT = f"{YOUTUBE_URL}/search"
THERAPISTS_ENDPOINT = f"{YELP_URL}/businesses/search"


class FakeResponse:
    """Stand-in for an aiohttp response used as an async context manager."""

    def __init__(self, status=200, payload=None, delay=0.0, raises=None):
        self.status = status
        self._payload = payload
        self._delay = delay
        self._raises = raises

    async def __aenter__(self):
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._raises is not None:
            raise self._raises
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Records GET calls and answers them from a url -> FakeResponse table."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, params=None, headers=None):
        self.calls.append({"url": url, "params": params, "headers": headers})
        if url not in self.routes:
            return FakeResponse(status=404, payload={"error": "not found"})
        return self.routes[url]

    def calls_to(self, url):
        return [call for call in self.calls if call["url"] == url]


def tmdb_payload(count=4):
    return {
        "page": 1,
        "results": [
            {
                "id": 100 + i,
                "title": f"Movie {i}",
                "overview": f"Overview {i}",
                "poster_path": f"/poster{i}.jpg",
                "vote_average": 7.0 + i / 10,
            }
            for i in range(count)
        ],
    }


def youtube_payload(count=3):
    return {
        "items": [
            {
                "id": {"kind": "youtube#video", "videoId": f"vid{i}"},
                "snippet": {
                    "title": f"Video {i}",
                    "description": f"Description {i}",
                    "thumbnails": {"high": {"url": f"https://img.test/vid{i}.jpg"}},
                },
            }
            for i in range(count)
        ]
    }


def yelp_payload(count=3):
    return {
        "businesses": [
            {
                "id": f"biz-{i}",
                "name": f"Therapist {i}",
                "location": {"address1": f"{i} Main St"},
                "rating": 4.5,
                "review_count": 10 + i,
                "image_url": f"https://img.test/biz{i}.jpg",
                "url": f"https://yelp.test/biz/{i}",
            }
            for i in range(count)
        ]
    }


def healthy_routes(movie_delay=0.0, video_delay=0.0, therapist_delay=0.0):
    return {
        MOVIES_ENDPOINT: FakeResponse(payload=tmdb_payload(), delay=movie_delay),
        VIDEOS_ENDPOINT: FakeResponse(payload=youtube_payload(), delay=video_delay),
        THERAPISTS_ENDPOINT: FakeResponse(payload=yelp_payload(), delay=therapist_delay),
    }


@pytest.fixture
def app_config():
    return AppConfig(
        sources=SourcesConfig(
            tmdb_api_key="tmdb-key",
            youtube_api_key="yt-key",
            yelp_api_key="yelp-key",
            tmdb_base_url=TMDB_URL,
            youtube_base_url=YOUTUBE_URL,
            yelp_base_url=YELP_URL,
            timeout_seconds=1.0,
        )
    )


@pytest.fixture
def fixed_clock():
    # 1_700_000_000_002 ms -> index 2 of the five affirmations
    return lambda: 1_700_000_000.002
