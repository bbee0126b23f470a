"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from git_source import __version__
from git_source.api.routers import health, notify, sources
from git_source.config import Settings, get_settings
from git_source.config.logging import configure_logging
from git_source.core.security import TransportSecurityPolicy
from git_source.notifications.registry import InMemorySourceRegistry
from git_source.notifications.scheduler import IndexingRequest, QueueIndexingScheduler
from git_source.services.notification import NotificationService
from git_source.services.sources import SourceService

logger = structlog.get_logger(__name__)


def _log_indexing_request(request: IndexingRequest) -> None:
    logger.info(
        "Indexing scheduled",
        owner=request.owner,
        source_id=request.source_id,
        origin=request.origin,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.is_production,
    )

    registry = InMemorySourceRegistry()
    source_service = SourceService(
        registry,
        transport_policy=TransportSecurityPolicy(fips_mode=settings.fips_mode),
    )
    source_service.load_file(settings.sources_file)

    scheduler = getattr(app.state, "indexing_scheduler", None)
    if scheduler is None:
        scheduler = QueueIndexingScheduler(
            handler=_log_indexing_request,
            maxsize=settings.indexing_queue_size,
        )
        app.state.indexing_scheduler = scheduler
    if hasattr(scheduler, "start"):
        scheduler.start()

    app.state.source_service = source_service
    app.state.notification_service = NotificationService.create(
        registry, scheduler, settings
    )

    yield

    # Cleanup
    if hasattr(scheduler, "stop"):
        scheduler.stop()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="git-source",
        description="Trait-composed git sources and push-notification routing",
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(notify.router, tags=["Notifications"])
    app.include_router(sources.router, prefix="/api/v1", tags=["Sources"])

    return app


# Create default app instance
app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "git_source.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        workers=settings.api_workers,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
