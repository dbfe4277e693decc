"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from board.config import Settings
from board.interface.api.routes import comments, health, threads
from board.interface.error import register_error_handlers
from board.util.di.container import create_container, setup_di
from board.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)
from board.util.tasks import BackgroundTaskDispatcher


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """Flush background work and close the container on shutdown."""
    yield
    container = app_instance.state.dishka_container
    dispatcher = await container.get(BackgroundTaskDispatcher)
    await dispatcher.drain()
    await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        container: DI container to serve requests from (defaults to the
            production container)

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()

    # Instrument httpx for outbound push notification requests
    instrument_httpx()

    app_instance = FastAPI(
        title="Board API",
        description="Threaded comments with likes and cursor pagination",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(threads.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
