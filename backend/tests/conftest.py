"""
StoreGate API - Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.
Who:   Used by all test files in the tests/ directory.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── application: a new FastAPI app from create_app() (own cache, limiters, data)
    ├── test_client: HTTPX AsyncClient bound to `application`
    ├── auth_headers: Authorization header carrying the configured token
    └── make_client: builds clients for apps with custom settings/collaborators
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ.pop("API_TOKEN", None)
os.environ.pop("DEFAULT_LANGUAGE", None)

from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.main import create_app


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def application():
    """
    A fresh application instance.

    Every test gets its own response cache, rate limit counters and seeded
    collections, so tests never see each other's writes or hits.
    """
    return create_app()


@pytest_asyncio.fixture
async def test_client(application):
    """
    Provides an async HTTP test client for endpoint testing.

    How:     Uses ASGITransport to route requests directly to the app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {settings.api_token}"}


@pytest.fixture
def make_client():
    """
    Factory for clients bound to an arbitrary app.

    Usage:
        async with make_client(create_app(Settings(api_rate_limit_requests=2))) as client:
            ...

    raise_app_exceptions=False lets tests observe the 500 response produced
    by the catch-all handler instead of the re-raised exception.
    """

    @asynccontextmanager
    async def _make(app, raise_app_exceptions=True):
        transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    return _make
