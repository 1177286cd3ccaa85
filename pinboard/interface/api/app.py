"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pinboard.config import Settings
from pinboard.interface.api.routes import (
    chats,
    feed,
    follows,
    health,
    notifications,
    threads,
    votes,
)
from pinboard.util.di.container import create_container, setup_di
from pinboard.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function; start_app.py
    does so in production.

    Args:
        container: DI container to use (tests pass one with mocked persistence)
    """
    settings = Settings()

    instrument_httpx()

    app_instance = FastAPI(
        title="Pinboard API",
        description="Engagement and notification API for Pinboard - votes, feeds, mentions, follows and direct messages",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(threads.router)
    app_instance.include_router(feed.router)
    app_instance.include_router(follows.router)
    app_instance.include_router(notifications.router)
    app_instance.include_router(chats.router)

    return app_instance
