"""
Finance API Tests
=================

Tests for transaction, stats and budget endpoints.
"""

import pytest
from httpx import AsyncClient

from cortexia.utils.helpers import utc_today


def _expense(amount: float = 45.0, category: str = "food") -> dict:
    return {
        "type": "expense",
        "amount": amount,
        "category": category,
        "description": "Lunch",
        "date": utc_today().isoformat(),
    }


@pytest.mark.asyncio
async def test_create_and_list_transaction(client: AsyncClient):
    response = await client.post("/api/finance/transactions", json=_expense())

    assert response.status_code == 201
    transaction = response.json()["transaction"]
    assert transaction["amount"] == 45.0
    assert transaction["userId"] == "1"

    response = await client.get("/api/finance/transactions")
    assert [t["id"] for t in response.json()["transactions"]] == [transaction["id"]]


@pytest.mark.asyncio
async def test_non_positive_amount_is_rejected(client: AsyncClient):
    response = await client.post("/api/finance/transactions", json=_expense(amount=0))

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"][0]["field"] == "amount"


@pytest.mark.asyncio
async def test_delete_transaction(client: AsyncClient):
    created = (await client.post("/api/finance/transactions", json=_expense())).json()["transaction"]

    response = await client.delete(f"/api/finance/transactions/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Transaction deleted successfully"}

    response = await client.delete(f"/api/finance/transactions/{created['id']}")
    assert response.status_code == 404
    assert response.json() == {"error": "Transaction not found", "code": "FINANCE_001"}


@pytest.mark.asyncio
async def test_create_then_delete_restores_the_list(client: AsyncClient):
    await client.post("/api/finance/transactions", json=_expense(12))
    before = (await client.get("/api/finance/transactions")).json()["transactions"]

    created = (await client.post("/api/finance/transactions", json=_expense(30))).json()["transaction"]
    during = (await client.get("/api/finance/transactions")).json()["transactions"]
    assert len(during) == len(before) + 1

    await client.delete(f"/api/finance/transactions/{created['id']}")
    after = (await client.get("/api/finance/transactions")).json()["transactions"]
    assert after == before


@pytest.mark.asyncio
async def test_stats_by_period(client: AsyncClient):

    await client.post("/api/finance/transactions", json=_expense(40))
    await client.post("/api/finance/transactions", json={
        "type": "income",
        "amount": 1000,
        "category": "salary",
        "date": utc_today().isoformat(),
    })

    response = await client.get("/api/finance/stats", params={"period": "week"})

    assert response.status_code == 200
    stats = response.json()
    assert stats["income"] == 1000
    assert stats["expenses"] == 40
    assert stats["balance"] == 960
    assert stats["byCategory"] == {"food": 40}
    assert stats["transactionCount"] == 2


@pytest.mark.asyncio
async def test_unknown_period_is_rejected(client: AsyncClient):
    response = await client.get("/api/finance/stats", params={"period": "year"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_budget_upsert_creates_then_updates(client: AsyncClient):
    response = await client.post("/api/finance/budgets", json={"category": "food", "limit": 200})
    assert response.status_code == 201
    budget_id = response.json()["budget"]["id"]

    response = await client.post("/api/finance/budgets", json={"category": "food", "limit": 300})
    assert response.status_code == 200
    assert response.json()["budget"]["id"] == budget_id
    assert response.json()["budget"]["limit"] == 300


@pytest.mark.asyncio
async def test_budget_status_tracks_spending(client: AsyncClient):
    await client.post("/api/finance/budgets", json={"category": "food", "limit": 100})
    await client.post("/api/finance/transactions", json=_expense(150))

    budgets = (await client.get("/api/finance/budgets")).json()["budgets"]

    assert len(budgets) == 1
    assert budgets[0]["spent"] == 150
    assert budgets[0]["percentage"] == 150
    assert budgets[0]["remaining"] == -50
