"""
Pytest fixtures for meter access tests.

The metering backend is replaced by FakeBackend behind an
httpx.MockTransport; the FastAPI app is driven through ASGITransport.
"""

import httpx
import pytest
from httpx import AsyncClient, ASGITransport

from meter_access.client import BrowserClient, ServerClient, StaticCredentials
from meter_access.config import get_settings
from meter_access.logging import get_access_logger
from meter_access.main import create_app

from fake_backend import VALID_TOKEN, FakeBackend, user_json


BACKEND_URL = "http://backend.test"


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset cached settings and logger between tests for isolation."""
    monkeypatch.setenv("PUBLIC_BACKEND_URL", BACKEND_URL)
    get_settings.cache_clear()
    get_access_logger.cache_clear()
    yield
    get_settings.cache_clear()
    get_access_logger.cache_clear()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def http_client(backend: FakeBackend) -> httpx.AsyncClient:
    """Client pointed at the fake backend."""
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(backend.handler),
        base_url=BACKEND_URL,
    ) as client:
        yield client


@pytest.fixture
def server_client(http_client: httpx.AsyncClient) -> ServerClient:
    return ServerClient(http_client, token=VALID_TOKEN)


@pytest.fixture
def browser_client(http_client: httpx.AsyncClient) -> BrowserClient:
    return BrowserClient(http_client, StaticCredentials(VALID_TOKEN))


@pytest.fixture
def authenticated_backend(backend: FakeBackend) -> FakeBackend:
    """Backend that accepts VALID_TOKEN on /v1/me."""
    backend.on("GET", "/v1/me", json_body=user_json())
    return backend


@pytest.fixture
async def client(http_client: httpx.AsyncClient) -> AsyncClient:
    """Anonymous client for the application."""
    app = create_app(http_client=http_client)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def session_client(http_client: httpx.AsyncClient) -> AsyncClient:
    """Application client carrying the session cookie."""
    app = create_app(http_client=http_client)
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        cookies={"Authorization": VALID_TOKEN},
    ) as ac:
        yield ac
