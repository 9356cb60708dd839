"""FastAPI application factory."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatter.config import Settings
from chatter.interface.api.routes import comments, health, votes
from chatter.util.di.container import create_container, setup_di
from chatter.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the comments API.

    Logfire must already be configured (scripts/start_app.py does this)
    so that instrumentation attaches to it.

    Args:
        container: DI container to serve from (defaults to the production one)
    """
    settings = Settings()

    instrument_httpx()

    app = FastAPI(
        title="Chatter API",
        description="Threaded page comments with voting, moderation and polling",
        version="0.1.0",
    )
    instrument_fastapi(app)

    # Comment widgets run on the embedding sites' pages and send the
    # auth_token cookie cross-origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or [settings.api.base_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    if container is None:
        container = create_container()
    setup_di(app, container)

    app.include_router(health.router)
    app.include_router(comments.router)
    app.include_router(votes.router)

    return app
