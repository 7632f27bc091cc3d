"""Shared test fixtures."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app


@pytest_asyncio.fixture
async def app_client() -> AsyncClient:
    """Async HTTP client for endpoints that never reach the marketplace."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
