import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from serenity.api.dependencies import get_config, get_recommendation_engine
from serenity.api.routes import router
from serenity.recommendation.engine import RecommendationEngine

from conftest import (
    MOVIES_ENDPOINT,
    THERAPISTS_ENDPOINT,
    FakeResponse,
    FakeSession,
    healthy_routes,
    yelp_payload
)


@pytest.fixture
def session():
    return FakeSession(healthy_routes())


@pytest.fixture
def client(app_config, session, fixed_clock):
    engine = RecommendationEngine.from_config(app_config, session)
    engine.clock = fixed_clock

    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_recommendation_engine] = lambda: engine
    app.dependency_overrides[get_config] = lambda: app_config
    return TestClient(app)


def test_recommendations_returns_ordered_list(client, session):
    r = client.post(
        "/recommendations",
        json={"mood": "anxious", "userProfile": {"location": "Boston, MA"}},
        headers={"X-User-Id": "user-1"},
    )
    assert r.status_code == 200

    items = r.json()["recommendations"]
    assert [item["type"] for item in items] == ["movie"] * 3 + ["video"] * 3 + ["therapist"] * 3 + ["affirmation"]
    assert session.calls_to(THERAPISTS_ENDPOINT)[0]["params"]["location"] == "Boston, MA"

    movie = items[0]
    assert set(movie) == {"id", "type", "title", "description", "imageUrl", "actionUrl", "relevanceScore"}
    therapist = items[6]
    assert therapist["subtitle"] == "0 Main St"
    affirmation = items[-1]
    assert affirmation == {
        "id": "affirmation_1700000000002",
        "type": "affirmation",
        "title": "Daily Affirmation",
        "description": "You deserve peace and happiness.",
        "relevanceScore": 9.0,
    }


def test_user_profile_is_optional(client, session):
    r = client.post("/recommendations", json={"mood": "unknown_value"}, headers={"X-User-Id": "u"})

    assert r.status_code == 200
    assert session.calls_to(THERAPISTS_ENDPOINT)[0]["params"]["location"] == "New York, NY"


def test_missing_identity_is_unauthenticated(client, session):
    r = client.post("/recommendations", json={"mood": "anxious"})

    assert r.status_code == 401
    assert r.json() == {"error": "unauthenticated", "detail": "User must be authenticated"}
    assert session.calls == []


def test_all_sources_down_still_succeeds(app_config, fixed_clock):
    engine = RecommendationEngine.from_config(app_config, FakeSession({}))
    engine.clock = fixed_clock
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_recommendation_engine] = lambda: engine

    r = TestClient(app).post("/recommendations", json={"mood": "sad"}, headers={"X-User-Id": "u"})

    assert r.status_code == 200
    assert [item["type"] for item in r.json()["recommendations"]] == ["affirmation"]


def test_internal_error_is_opaque():
    class BrokenEngine:
        async def recommend(self, request, identity):
            from serenity.recommendation.errors import InternalRecommendationError
            raise InternalRecommendationError()

    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_recommendation_engine] = lambda: BrokenEngine()

    r = TestClient(app).post("/recommendations", json={"mood": "sad"}, headers={"X-User-Id": "u"})

    assert r.status_code == 500
    assert r.json() == {"error": "internal", "detail": "Failed to fetch recommendations"}


def test_engine_not_started_is_unavailable():
    app = FastAPI()
    app.include_router(router)

    r = TestClient(app).post("/recommendations", json={"mood": "sad"}, headers={"X-User-Id": "u"})

    assert r.status_code == 503


def test_missing_mood_is_rejected(client):
    r = client.post("/recommendations", json={"userProfile": {}}, headers={"X-User-Id": "u"})

    assert r.status_code == 422


def test_health_reports_providers(client):
    r = client.get("/health")

    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "healthy"
    assert data["providers"] == {"movies": True, "videos": True, "therapists": True}


def test_moods_endpoint(client):
    r = client.get("/moods")

    assert r.status_code == 200
    data = r.json()
    assert data["moods"]["anxious"]["video_query"] == "calming meditation anxiety relief"
    assert data["defaults"]["genre_id"] == 35


def test_malformed_movie_entry_keeps_other_sources(app_config, fixed_clock):
    routes = healthy_routes()
    routes[MOVIES_ENDPOINT] = FakeResponse(payload={"results": [
        {"id": 1, "title": None, "overview": "o", "poster_path": None, "vote_average": 6.0}
    ]})
    engine = RecommendationEngine.from_config(app_config, FakeSession(routes))
    engine.clock = fixed_clock
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_recommendation_engine] = lambda: engine

    r = TestClient(app).post("/recommendations", json={"mood": "anxious"}, headers={"X-User-Id": "u"})

    assert r.status_code == 200
    assert [item["type"] for item in r.json()["recommendations"]] == \
        ["video"] * 3 + ["therapist"] * 3 + ["affirmation"]


def test_numeric_business_id_keeps_other_sources(app_config, fixed_clock):
    routes = healthy_routes()
    payload = yelp_payload()
    payload["businesses"][0]["id"] = 12345
    routes[THERAPISTS_ENDPOINT] = FakeResponse(payload=payload)
    engine = RecommendationEngine.from_config(app_config, FakeSession(routes))
    engine.clock = fixed_clock
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_recommendation_engine] = lambda: engine

    r = TestClient(app).post("/recommendations", json={"mood": "sad"}, headers={"X-User-Id": "u"})

    assert r.status_code == 200
    assert [item["type"] for item in r.json()["recommendations"]] == \
        ["movie"] * 3 + ["video"] * 3 + ["affirmation"]


def test_identity_is_checked_before_engine_availability():
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_recommendation_engine] = lambda: None

    r = TestClient(app).post("/recommendations", json={"mood": "sad"})

    assert r.status_code == 401
    assert r.json()["error"] == "unauthenticated"
