# tests/routes/conftest.py
"""Pytest configuration and fixtures for route tests."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

from httpx import ASGITransport, AsyncClient
from pytest import fixture

from travel_buddy.clients.ai_client import AiClient
from travel_buddy.clients.credentials import (
    CredentialResolver,
    EnvironmentSource,
    ManualStorageSource,
)
from travel_buddy.main import app


@fixture
def ai_client(key_store: ManualStorageSource) -> AiClient:
    """AI client reading keys from a temporary store, with generation mocked."""
    client = AiClient(resolver=CredentialResolver([key_store, EnvironmentSource()]))
    client.generate = AsyncMock()
    client.test_connection = AsyncMock(return_value=True)
    return client


@fixture
async def client(ai_client: AiClient) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing FastAPI endpoints."""
    app.state.ai_client = ai_client
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.state.ai_client = None
