"""
Venuebook API - Main Application Entry Point

Event catalog, booking ledger and bookmarks for venues:
- Consumers browse, save and book events
- Hotel operators manage their events and confirm or reject bookings
- An admin provisions hotel operator accounts
- Live listings over Server-Sent Events, fed by an in-process or Redis change feed
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from venuebook.core.config import get_settings
from venuebook.core.errors import VenuebookError, venuebook_error_handler
from venuebook.core.logging import setup_logging, get_logger
from venuebook.core.metrics import metrics_endpoint
from venuebook.api.router import api_router
from venuebook.api.middleware import RequestLoggingMiddleware
from venuebook.db.session import create_engine, create_session_factory
from venuebook.infrastructure.redis_client import close_redis
from venuebook.repositories import Repositories
from venuebook.services.auth_service import ensure_bootstrap_admin
from venuebook.services.strategy_factory import build_change_feed, build_media_store

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the repositories once, then tear everything down on shutdown."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        change_feed=settings.CHANGE_FEED_BACKEND,
    )

    engine = create_engine()
    feed = build_change_feed()
    app.state.repositories = Repositories.build(create_session_factory(engine), feed)
    app.state.media_store = build_media_store()

    await ensure_bootstrap_admin(
        app.state.repositories,
        settings.BOOTSTRAP_ADMIN_EMAIL,
        settings.BOOTSTRAP_ADMIN_PASSWORD,
        settings.BOOTSTRAP_ADMIN_NAME,
    )

    yield

    await feed.close()
    await close_redis()
    await engine.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Venue event catalog and booking API with live listings",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)
app.add_exception_handler(VenuebookError, venuebook_error_handler)

app.include_router(api_router)

if settings.MEDIA_BACKEND == "local":
    # Uploaded images; a CDN or reverse proxy serves these in production
    app.mount("/media", StaticFiles(directory=settings.MEDIA_ROOT, check_dir=False), name="media")


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "change_feed": settings.CHANGE_FEED_BACKEND,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
