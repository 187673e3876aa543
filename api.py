"""
Serenity REST API Server

Run the server with:
    python api.py

Or with uvicorn directly:
    uvicorn api:app --reload --host 0.0.0.0 --port 8000
"""
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from serenity.api.routes import router
from serenity.api.dependencies import get_app_state
from serenity.config.settings import DEFAULT_CONFIG_PATH


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = get_app_state()
    try:
        await state.startup(os.getenv("SERENITY_CONFIG", DEFAULT_CONFIG_PATH))
    except Exception as e:
        print(f"Failed to initialize Serenity: {e}", file=sys.stderr)
        raise
    yield
    await state.shutdown()


app = FastAPI(
    title="Serenity",
    description="""
**Mood-based recommendation API**

Serenity turns a mood into a short, ordered list of things that might help:
popular movies, videos, nearby therapists, and a daily affirmation.

## Quick Start

1. Check API health: `GET /health`
2. Get recommendations: `POST /recommendations` with `{"mood": "anxious", "userProfile": {"location": "Boston, MA"}}`
   and the `X-User-Id` header set by your auth gateway
3. Explore the mood mappings: `GET /moods`
    """,
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v1")

# Also mount at root for convenience
app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
