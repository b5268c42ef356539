"""Pytest fixtures and configuration for cefleef tests.

Unit tests exercise the parsers directly; integration tests drive the HTTP
API in-process through httpx's ASGI transport.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cefleef.config import Settings, get_settings


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Override settings for testing."""
    return Settings(
        app_name="cefleef-test",
        debug=True,
        log_level="DEBUG",
        preserve_original=False,
        include_syslog=False,
        resolve_labels=False,
    )


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def app(test_settings) -> AsyncGenerator[FastAPI, None]:
    """Create test FastAPI application with overridden settings."""
    from cefleef.main import app as main_app

    def override_get_settings():
        return test_settings

    main_app.dependency_overrides[get_settings] = override_get_settings

    yield main_app

    main_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no I/O)")
    config.addinivalue_line("markers", "integration: HTTP API tests through the ASGI transport")
