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

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.catalog.driving_adapter.http_controller.admin_catalog_controller import (
    router as admin_catalog_router,
)
from src.service.catalog.driving_adapter.http_controller.catalog_controller import (
    router as catalog_router,
)
from src.service.inventory.driving_adapter.http_controller.admin_time_slot_controller import (
    router as admin_time_slot_router,
)
from src.service.inventory.driving_adapter.http_controller.availability_controller import (
    router as availability_router,
)
from src.service.ticketing.driving_adapter.http_controller.admin_booking_controller import (
    router as admin_booking_router,
)
from src.service.ticketing.driving_adapter.http_controller.admin_report_controller import (
    router as admin_report_router,
)
from src.service.ticketing.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.ticketing.driving_adapter.http_controller.cart_controller import (
    router as cart_router,
)
from src.service.ticketing.driving_adapter.http_controller.payment_controller import (
    router as payment_router,
)
from src.service.ticketing.driving_adapter.http_controller.ticket_controller import (
    router as ticket_router,
)
from src.service.ticketing.driving_adapter.http_controller.webhook_controller import (
    router as webhook_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Museum Ticketing',
    service_name: str = 'museum-ticketing',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description
        service_name: Service name for tracing

    Returns:
        Configured FastAPI application
    """
    title = f'{settings.PROJECT_NAME}{title_suffix}'

    app = FastAPI(
        title=title,
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Auto-instrument FastAPI (must be done before mounting routes)
    tracing_config = TracingConfig(service_name=service_name)
    tracing_config.instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    # Public catalog and availability
    app.include_router(catalog_router, prefix='/api', tags=['catalog'])
    app.include_router(availability_router, prefix='/api', tags=['availability'])

    # Visitor flows
    app.include_router(cart_router, prefix='/api/cart', tags=['cart'])
    app.include_router(booking_router, prefix='/api', tags=['booking'])
    app.include_router(payment_router, prefix='/api/payment', tags=['payment'])
    app.include_router(webhook_router, prefix='/api/webhooks', tags=['webhook'])
    app.include_router(ticket_router, prefix='/api/tickets', tags=['ticket'])

    # Admin
    app.include_router(admin_catalog_router, prefix='/api/admin', tags=['admin'])
    app.include_router(admin_time_slot_router, prefix='/api/admin', tags=['admin'])
    # Reports first: /bookings/export must not match /bookings/{booking_id}
    app.include_router(admin_report_router, prefix='/api/admin', tags=['admin'])
    app.include_router(admin_booking_router, prefix='/api/admin/bookings', tags=['admin'])

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
