"""
Test Configuration and Fixtures

This module provides:
- A SQLite (aiosqlite) test database per xdist worker, created from the model
  metadata once per session and emptied before every non-unit test
- The session-scoped TestClient with the payment gateway replaced by an
  in-memory fake
- Bearer tokens for a visitor, a second visitor and an admin

Architecture:
- Unit tests (@pytest.mark.unit): mocks only, no database
- Integration tests: real database through the same engine manager the app uses
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read once at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')

    db_dir = Path(tempfile.gettempdir()) / 'museum_ticketing_test'
    db_dir.mkdir(exist_ok=True)
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_dir / f"test_{worker_id}.db"}'

    # The sweeper is exercised directly; the test app never starts it
    os.environ['CART_SWEEP_INTERVAL_SECONDS'] = '0'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.database.orm_db_setting import Base  # noqa: E402
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import (  # noqa: E402
    JwtAuth,
)
from test.constants import (  # noqa: E402
    ADMIN_EMAIL,
    ADMIN_USER_ID,
    ANOTHER_VISITOR_EMAIL,
    ANOTHER_VISITOR_USER_ID,
    VISITOR_EMAIL,
    VISITOR_USER_ID,
)
from test.fake_payment_gateway import FakePaymentGateway  # noqa: E402


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_sessionstart(session: pytest.Session) -> None:
    asyncio.run(_setup_test_database())


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            # First, so fixtures that seed rows run on the emptied database
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
def _get_test_database_url() -> str:
    return settings.DATABASE_URL_ASYNC


def _create_test_engine() -> Any:
    return create_async_engine(_get_test_database_url(), poolclass=NullPool)


async def _setup_test_database() -> None:
    import src.platform.database.model_registry  # noqa: F401  registers every model

    engine = _create_test_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


async def _clean_all_tables() -> None:
    engine = _create_test_engine()
    try:
        async with engine.begin() as conn:
            # Children first so foreign keys never point at deleted rows
            for table in reversed(Base.metadata.sorted_tables):
                await conn.execute(table.delete())
    finally:
        await engine.dispose()


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await _clean_all_tables()
    yield

    from src.platform.database.orm_db_setting import _engine_manager, dispose_engine

    if _engine_manager._loop is asyncio.get_running_loop():
        await dispose_engine()


@pytest.fixture(scope='session')
def fake_payment_gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture(autouse=True)
def reset_fake_payment_gateway(
    fake_payment_gateway: FakePaymentGateway,
) -> Generator[None, None, None]:
    yield
    fake_payment_gateway.reset()


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client(fake_payment_gateway: FakePaymentGateway) -> Generator[TestClient, None, None]:
    from test.test_main import app

    container.payment_gateway.override(providers.Object(fake_payment_gateway))
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        container.payment_gateway.reset_override()


@pytest.fixture(scope='session')
def jwt_auth() -> JwtAuth:
    return JwtAuth()


def _bearer(jwt_auth: JwtAuth, user_id: str, email: str) -> dict[str, str]:
    token = jwt_auth.create_jwt_token(user_id=user_id, email=email)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def visitor_headers(jwt_auth: JwtAuth) -> dict[str, str]:
    return _bearer(jwt_auth, VISITOR_USER_ID, VISITOR_EMAIL)


@pytest.fixture
def another_visitor_headers(jwt_auth: JwtAuth) -> dict[str, str]:
    return _bearer(jwt_auth, ANOTHER_VISITOR_USER_ID, ANOTHER_VISITOR_EMAIL)


@pytest.fixture
def admin_headers(
    jwt_auth: JwtAuth, execute_sql_statement: Callable[..., Any]
) -> dict[str, str]:
    """Admin role lives in user_profile, not in the token"""
    execute_sql_statement(
        'INSERT INTO user_profile (id, email, full_name, role) '
        "VALUES (:id, :email, 'Museum Admin', 'admin')",
        {'id': ADMIN_USER_ID, 'email': ADMIN_EMAIL},
    )
    return _bearer(jwt_auth, ADMIN_USER_ID, ADMIN_EMAIL)


@pytest.fixture
def execute_sql_statement() -> Callable[..., list[dict[str, Any]] | None]:
    """Raw SQL from sync tests (async tests use the repositories directly)"""

    def _execute(
        statement: str, params: dict[str, Any] | None = None, fetch: bool = False
    ) -> list[dict[str, Any]] | None:
        async def _run() -> list[dict[str, Any]] | None:
            engine = _create_test_engine()
            try:
                async with engine.begin() as conn:
                    result = await conn.execute(text(statement), params or {})
                    if fetch:
                        return [dict(row._mapping) for row in result]
                return None
            finally:
                await engine.dispose()

        return asyncio.run(_run())

    return _execute
