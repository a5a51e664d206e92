"""
Authentication Tests
====================

Bearer tokens are verified with the shared secret; the user id comes
from ``sub`` or the provider's ``id`` claim.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt

from cortexia.config import settings
from cortexia.core.security import decode_token, identity_from_payload
from cortexia.dependencies import get_insight_feed, get_store
from cortexia.main import app


def _token(claims: dict, secret: str = settings.JWT_SECRET) -> str:
    return jwt.encode(claims, secret, algorithm=settings.JWT_ALGORITHM)


@pytest_asyncio.fixture
async def anonymous_client(store, insight_feed):
    """Client that goes through real token verification."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_insight_feed] = lambda: insight_feed

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


class TestIdentity:

    def test_sub_claim(self):
        identity = identity_from_payload({"sub": "42", "email": "a@b.c"})
        assert identity.user_id == "42"
        assert identity.email == "a@b.c"

    def test_id_claim_fallback(self):
        assert identity_from_payload({"id": 7}).user_id == "7"

    def test_missing_subject(self):
        assert identity_from_payload({"email": "a@b.c"}) is None

    def test_wrong_secret(self):
        assert decode_token(_token({"sub": "1"}, secret="x" * 40)) is None


@pytest.mark.asyncio
async def test_missing_token_is_rejected(anonymous_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(settings, "DEV_AUTH_DISABLED", False)

    response = await anonymous_client.get("/api/tasks")

    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated", "code": "AUTH_001"}
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_invalid_token_is_rejected(anonymous_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(settings, "DEV_AUTH_DISABLED", False)

    response = await anonymous_client.get(
        "/api/tasks", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401
    assert response.json()["code"] == "AUTH_002"


@pytest.mark.asyncio
async def test_records_are_scoped_to_the_token_user(anonymous_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(settings, "DEV_AUTH_DISABLED", False)
    alice = {"Authorization": f"Bearer {_token({'sub': 'alice'})}"}
    bob = {"Authorization": f"Bearer {_token({'sub': 'bob'})}"}

    created = await anonymous_client.post("/api/tasks", json={"title": "Alice only"}, headers=alice)
    assert created.status_code == 201
    assert created.json()["task"]["userId"] == "alice"

    assert len((await anonymous_client.get("/api/tasks", headers=alice)).json()["tasks"]) == 1
    assert (await anonymous_client.get("/api/tasks", headers=bob)).json()["tasks"] == []
