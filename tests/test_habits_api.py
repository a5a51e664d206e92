"""
Habits API Tests
================

Tests for habit CRUD, check-ins and streak reporting.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from cortexia.utils.helpers import utc_today


async def _create_habit(client: AsyncClient) -> dict:
    response = await client.post("/api/habits", json={"name": "Meditate", "category": "mindfulness"})
    assert response.status_code == 201
    return response.json()["habit"]


@pytest.mark.asyncio
async def test_check_in_without_body_toggles_today(client: AsyncClient):
    habit = await _create_habit(client)
    url = f"/api/habits/{habit['id']}/check-in"

    first = (await client.post(url)).json()
    assert first["streak"] == 1
    assert first["habit"]["completions"] == [{"date": utc_today().isoformat(), "completed": True}]

    second = (await client.post(url)).json()
    assert second["streak"] == 0
    assert second["habit"]["completions"][0]["completed"] is False


@pytest.mark.asyncio
async def test_explicit_days_build_a_streak(client: AsyncClient):
    habit = await _create_habit(client)
    url = f"/api/habits/{habit['id']}/check-in"
    today = utc_today()

    for days_ago in (2, 1):
        day = (today - timedelta(days=days_ago)).isoformat()
        await client.post(url, json={"date": day, "completed": True})

    # Yesterday still anchors the streak before today is checked in
    listed = (await client.get("/api/habits")).json()["habits"]
    assert listed[0]["streak"] == 2

    result = (await client.post(url, json={"completed": True})).json()
    assert result["streak"] == 3
    assert [c["date"] for c in result["habit"]["completions"]] == sorted(
        c["date"] for c in result["habit"]["completions"]
    )


@pytest.mark.asyncio
async def test_inactive_habits_hidden_by_default(client: AsyncClient):
    habit = await _create_habit(client)
    await client.patch(f"/api/habits/{habit['id']}", json={"isActive": False})

    assert (await client.get("/api/habits")).json()["habits"] == []
    included = (await client.get("/api/habits", params={"includeInactive": "true"})).json()
    assert len(included["habits"]) == 1


@pytest.mark.asyncio
async def test_check_in_unknown_habit(client: AsyncClient):
    response = await client.post("/api/habits/99/check-in", json={"completed": True})

    assert response.status_code == 404
    assert response.json()["error"] == "Habit not found"


@pytest.mark.asyncio
async def test_null_required_fields_are_rejected(client: AsyncClient):
    habit = await _create_habit(client)

    response = await client.patch(f"/api/habits/{habit['id']}", json={"name": None, "isActive": None})

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    stored = (await client.get(f"/api/habits/{habit['id']}")).json()["habit"]
    assert stored["name"] == "Meditate"
    assert stored["isActive"] is True


@pytest.mark.asyncio
async def test_logs_are_newest_first_within_window(client: AsyncClient):
    habit = await _create_habit(client)
    url = f"/api/habits/{habit['id']}/check-in"
    today = utc_today()
    for days_ago in (40, 3, 0):
        day = (today - timedelta(days=days_ago)).isoformat()
        await client.post(url, json={"date": day, "completed": True})

    logs = (await client.get(f"/api/habits/{habit['id']}/logs")).json()["logs"]
    assert [log["date"] for log in logs] == [
        (today - timedelta(days=d)).isoformat() for d in (0, 3, 40)
    ]

    recent = (await client.get(f"/api/habits/{habit['id']}/logs", params={"days": 7})).json()["logs"]
    assert len(recent) == 2


@pytest.mark.asyncio
async def test_logs_unknown_habit(client: AsyncClient):
    response = await client.get("/api/habits/99/logs")

    assert response.status_code == 404
