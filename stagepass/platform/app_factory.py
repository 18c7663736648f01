"""
Shared FastAPI App Factory

Provides common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from stagepass.platform.config.core_setting import settings
from stagepass.platform.exception.exception_handlers import register_exception_handlers
from stagepass.service.ticketing.driving_adapter.http_controller.concert_controller import (
    router as concert_router,
)
from stagepass.service.ticketing.driving_adapter.http_controller.reservation_controller import (
    router as reservation_router,
)
from stagepass.service.ticketing.driving_adapter.http_controller.user_controller import (
    router as user_router,
)
from stagepass.service.ticketing.driving_adapter.http_controller.venue_controller import (
    router as venue_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Concert catalog, venues and ticket reservations',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    # Legacy clients expect the flat /api/... paths
    app.include_router(user_router, prefix='/api', tags=['user'])
    app.include_router(concert_router, prefix='/api', tags=['concert'])
    app.include_router(reservation_router, prefix='/api', tags=['reservation'])
    app.include_router(venue_router, prefix='/api/venues', tags=['venue'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    """Register health and metrics endpoints."""

    @app.get('/health')
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @app.get('/metrics')
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
