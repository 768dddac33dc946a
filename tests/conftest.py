"""
Test Configuration and Fixtures

Shared fixtures for the whole suite: settings, a throwaway SQLite database per
test, and HTTP clients for the gateway app.
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing the app.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from taskify.config import Settings  # noqa: E402
from taskify.db.client import build_engine, build_session_factory  # noqa: E402
from taskify.db.models import Base  # noqa: E402


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "api: API endpoint tests")
    config.addinivalue_line("markers", "integration: Gateway + in-process gRPC services")


def pytest_collection_modifyitems(config, items):
    """
    Auto-assign tier markers by directory:
    - tests/integration/** => integration
    - tests/api/**         => api
    - everything else      => unit
    """
    for item in items:
        path = str(getattr(item, "fspath", ""))
        if item.get_closest_marker("integration") or item.get_closest_marker("api") or item.get_closest_marker("unit"):
            continue
        if "/tests/integration/" in path:
            item.add_marker(pytest.mark.integration)
        elif "/tests/api/" in path:
            item.add_marker(pytest.mark.api)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a fresh SQLite file."""
    return Settings(
        environment="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'taskify.db'}",
        db_pool_mode="null",
        rpc_timeout_seconds=5.0,
        position_allocation_max_attempts=3,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def sessions(settings):
    """Session factory over a database with every table created."""
    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield build_session_factory(engine)
    finally:
        await engine.dispose()


# =============================================================================
# HTTP CLIENT FIXTURES
# =============================================================================


@pytest_asyncio.fixture
async def make_client():
    """Factory for async clients bound to an ASGI app."""
    clients: list[AsyncClient] = []

    def _make(app) -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()
