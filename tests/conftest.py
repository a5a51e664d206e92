"""
Test Fixtures
=============

Every test gets a fresh in-memory store, an empty insight feed and a
Gemini service with no API key. Requests are authenticated as the
development user.
"""

from typing import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cortexia.core.security import Identity
from cortexia.dependencies import (
    DEV_USER_ID,
    get_current_user,
    get_insight_feed,
    get_store,
)
from cortexia.main import app
from cortexia.repositories.store import LifeStore
from cortexia.services.gemini_llm import GeminiLLMService, get_gemini_service
from cortexia.services.insights import InsightFeed


@pytest.fixture
def store() -> LifeStore:
    return LifeStore.in_memory()


@pytest.fixture
def insight_feed() -> InsightFeed:
    return InsightFeed()


@pytest.fixture
def gemini() -> GeminiLLMService:
    """Unconfigured service; tests patch its methods to simulate the model."""
    service = GeminiLLMService()
    service.api_key = ""
    return service


@pytest_asyncio.fixture
async def client(
    store: LifeStore,
    insight_feed: InsightFeed,
    gemini: GeminiLLMService,
) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_current_user] = lambda: Identity(user_id=DEV_USER_ID)
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_insight_feed] = lambda: insight_feed
    app.dependency_overrides[get_gemini_service] = lambda: gemini

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
