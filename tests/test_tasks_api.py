"""
Tasks API Tests
===============
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from cortexia.utils.helpers import utc_today


async def _create_task(client: AsyncClient, **fields) -> dict:
    response = await client.post("/api/tasks", json={"title": "Write tests", **fields})
    assert response.status_code == 201
    return response.json()["task"]


@pytest.mark.asyncio
async def test_create_defaults(client: AsyncClient):
    task = await _create_task(client, subtasks=[{"title": "Outline"}])

    assert task["status"] == "todo"
    assert task["priority"] == "medium"
    assert task["completedAt"] is None
    assert task["subtasks"][0]["id"]
    assert task["subtasks"][0]["completed"] is False


@pytest.mark.asyncio
async def test_complete_sets_and_reopen_clears_completed_at(client: AsyncClient):
    task = await _create_task(client)

    completed = (await client.post(f"/api/tasks/{task['id']}/complete")).json()["task"]
    assert completed["status"] == "completed"
    assert completed["completedAt"] is not None

    reopened = (await client.patch(f"/api/tasks/{task['id']}", json={"status": "todo"})).json()["task"]
    assert reopened["completedAt"] is None
    assert reopened["title"] == "Write tests"


@pytest.mark.asyncio
async def test_filter_by_status(client: AsyncClient):
    first = await _create_task(client)
    await _create_task(client, title="Other", status="in_progress")

    response = await client.get("/api/tasks", params={"status": "todo"})

    assert [t["id"] for t in response.json()["tasks"]] == [first["id"]]


@pytest.mark.asyncio
async def test_stats_count_overdue(client: AsyncClient):
    yesterday = (utc_today() - timedelta(days=1)).isoformat()
    await _create_task(client, dueDate=yesterday, priority="high")
    await _create_task(client, title="Done", status="completed")

    stats = (await client.get("/api/tasks/stats")).json()

    assert stats["total"] == 2
    assert stats["completed"] == 1
    assert stats["pending"] == 1
    assert stats["overdue"] == 1
    assert stats["highPriority"] == 1
    assert stats["completedToday"] == 1


@pytest.mark.asyncio
async def test_unknown_task(client: AsyncClient):
    response = await client.get("/api/tasks/7")

    assert response.status_code == 404
    assert response.json() == {"error": "Task not found", "code": "TASK_001"}


@pytest.mark.asyncio
async def test_batch_update_sets_order_and_skips_unknown(client: AsyncClient):
    first = await _create_task(client, title="First")
    second = await _create_task(client, title="Second")
    assert first["order"] == 0

    response = await client.post("/api/tasks/batch-update", json={"updates": [
        {"id": first["id"], "order": 2},
        {"id": second["id"], "order": 1},
        {"id": 999, "order": 0},
    ]})

    assert response.status_code == 200
    assert response.json() == {"message": "Tasks updated successfully"}
    orders = {t["id"]: t["order"] for t in (await client.get("/api/tasks")).json()["tasks"]}
    assert orders == {first["id"]: 2, second["id"]: 1}
