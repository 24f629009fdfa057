"""
main.py
-------
Entry point for the StartupLaunch API.

Responsibilities:
    - Build the database pool, idea generator and rate limiter.
    - Mount every endpoint handler on a FastAPI application.
    - Open the pool on startup (optionally creating the schema) and close it on shutdown.
"""

from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request as HTTPRequest
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

import config
from ai.idea_generator import IdeaGenerator
from db.connection import Database
from db.init_db import create_tables
from handlers.generator_handler import generate_idea
from handlers.http import Request
from handlers.idea_handler import create_idea, delete_idea, get_ideas, update_idea
from handlers.profile_handler import create_profile, get_profile, update_profile
from handlers.schema_handler import init_db
from repositories.idea_repo import IdeaRepository
from repositories.profile_repo import ProfileRepository
from security.rate_limiter import RateLimiter
from utils.logger import get_logger

logger = get_logger(__name__)

# Handlers do their own verb checks so a wrong verb gets the JSON 405 envelope
ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# Paths used by clients built against the Netlify functions
LEGACY_PREFIX = "/.netlify/functions"


async def _to_request(http_request: HTTPRequest) -> Request:
    """Reduce a Starlette request to the handler envelope."""
    raw = await http_request.body()
    return Request(
        method=http_request.method,
        query=dict(http_request.query_params),
        body=raw.decode("utf-8", errors="replace") if raw else None,
        client=http_request.client.host if http_request.client else None,
    )


def _mount(app: FastAPI, name: str, handler: Callable, *deps) -> None:
    """Expose `handler` at /<name> and at the legacy functions path."""

    async def route(http_request: HTTPRequest) -> JSONResponse:
        request = await _to_request(http_request)
        response = await run_in_threadpool(handler, request, *deps)
        return JSONResponse(
            status_code=response.status_code,
            content=response.body,
            headers=response.headers,
        )

    route.__name__ = name
    for path in (f"/{name}", f"{LEGACY_PREFIX}/{name}"):
        app.add_api_route(path, route, methods=ROUTE_METHODS, include_in_schema=path == f"/{name}")


def create_app(
    db: Optional[Database] = None,
    generator: Optional[IdeaGenerator] = None,
    limiter: Optional[RateLimiter] = None,
    init_schema: bool = config.INIT_DB_ON_STARTUP,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Every collaborator can be injected, which is how tests swap in fakes.
    """
    db = db or Database(config.DATABASE_URL, config.DB_POOL_MIN, config.DB_POOL_MAX)
    generator = generator or IdeaGenerator(config.GEMINI_API_KEY, config.GEMINI_MODEL)
    limiter = limiter or RateLimiter(config.RATE_LIMIT_REQUESTS, config.RATE_LIMIT_WINDOW_SECONDS)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # ── 1. Database setup ─────────────────────────────
        logger.info("Initializing database...")
        db.open()
        if init_schema:
            create_tables(db)
        logger.info("StartupLaunch API is running.")
        yield
        # ── 2. Cleanup on shutdown ────────────────────────
        db.close()
        logger.info("StartupLaunch API stopped.")

    app = FastAPI(title="StartupLaunch API", version="0.1.0", lifespan=lifespan)

    # Answers CORS preflight requests; handlers add the header to real responses
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    ideas = IdeaRepository(db)
    profiles = ProfileRepository(db)

    _mount(app, "createIdea", create_idea, ideas)
    _mount(app, "getIdeas", get_ideas, ideas)
    _mount(app, "updateIdea", update_idea, ideas)
    _mount(app, "deleteIdea", delete_idea, ideas)
    _mount(app, "createProfile", create_profile, profiles)
    _mount(app, "getProfile", get_profile, profiles)
    _mount(app, "updateProfile", update_profile, profiles)
    _mount(app, "initDb", init_db, db)
    _mount(app, "generateIdea", generate_idea, generator, limiter)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    app.state.db = db
    app.state.limiter = limiter
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
