"""
Production FastAPI Application

Catalog, capacity ledger, cart, payments and bookings in one process, plus the
background sweeper that returns expired cart reservations.

Serve with: granian src.main:app --interface asgi
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.ticketing.driven_adapter.background.expired_cart_sweeper import (
    ExpiredCartSweeper,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Museum Ticketing] Starting up...')

    tracing = TracingConfig(service_name='museum-ticketing')
    tracing.setup()
    Logger.base.info('📊 [Museum Ticketing] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Museum Ticketing] Dependency injection wired')

    engine = get_engine()
    tracing.instrument_sqlalchemy(engine=engine)
    Logger.base.info('🗄️  [Museum Ticketing] Database engine ready + instrumented')

    async with anyio.create_task_group() as tg:
        sweeper = ExpiredCartSweeper(
            release_expired=container.release_expired_cart_items_use_case(),
            uow_factory=container.unit_of_work,
            interval_seconds=settings.CART_SWEEP_INTERVAL_SECONDS,
        )
        await sweeper.start(task_group=tg)
        Logger.base.info('✅ [Museum Ticketing] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Museum Ticketing] Shutting down...')
        tg.cancel_scope.cancel()

    await dispose_engine()
    Logger.base.info('🗄️  [Museum Ticketing] Database engine disposed')

    tracing.shutdown()
    Logger.base.info('📊 [Museum Ticketing] Tracing shutdown complete')

    container.unwire()

    Logger.base.info('👋 [Museum Ticketing] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Museum Ticketing - exhibitions, time-slot capacity, cart, payments and tickets',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
