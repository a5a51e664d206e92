"""
Insights API Tests
==================

Tests for the life state, the insight feed lifecycle and the AI
summaries with their local fallbacks, including the weekly synthesis.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from cortexia.services.gemini_llm import AIResult
from cortexia.utils.helpers import utc_today


async def _overspend(client: AsyncClient) -> None:
    await client.post("/api/finance/transactions", json={
        "type": "expense",
        "amount": 650,
        "category": "shopping",
        "date": utc_today().isoformat(),
    })


@pytest.mark.asyncio
async def test_life_state_for_empty_account(client: AsyncClient):
    body = (await client.get("/api/insights/life-state")).json()

    assert body["score"] == 50
    assert body["state"]["key"] == "drifting"
    assert body["trend"] == "stable"
    assert body["trendValue"] == 0
    assert len(body["factors"]) == 4


@pytest.mark.asyncio
async def test_feed_is_empty_until_generated(client: AsyncClient):
    assert (await client.get("/api/insights")).json() == {"insights": []}


@pytest.mark.asyncio
async def test_generate_with_rules_then_clear(client: AsyncClient):
    await _overspend(client)

    generated = (await client.post("/api/insights/generate", params={"source": "rules"})).json()
    assert [i["title"] for i in generated["insights"]] == ["Spending Alert"]
    assert generated["insights"][0]["source"] == "rules"

    listed = (await client.get("/api/insights")).json()
    assert listed == generated

    response = await client.delete("/api/insights")
    assert response.json() == {"message": "Insights cleared"}
    assert (await client.get("/api/insights")).json() == {"insights": []}


@pytest.mark.asyncio
async def test_auto_falls_back_to_rules_without_api_key(client: AsyncClient):
    await _overspend(client)

    body = (await client.post("/api/insights/generate")).json()

    assert body["insights"][0]["source"] == "rules"


@pytest.mark.asyncio
async def test_ai_only_generation_reports_unavailable(client: AsyncClient):
    response = await client.post("/api/insights/generate", params={"source": "ai"})

    assert response.status_code == 503
    assert (await client.get("/api/insights")).json() == {"insights": []}


@pytest.mark.asyncio
async def test_ai_generation_replaces_feed(client: AsyncClient, gemini):
    gemini.generate_insights = AsyncMock(return_value=AIResult.success([{
        "type": "recommendation",
        "icon": "lightbulb",
        "severity": "info",
        "title": "Batch errands",
        "content": "Group your errands on Saturday mornings.",
        "actionable": True,
    }]))

    body = (await client.post("/api/insights/generate", params={"source": "ai"})).json()

    assert [i["title"] for i in body["insights"]] == ["Batch errands"]
    assert body["insights"][0]["source"] == "ai"


@pytest.mark.asyncio
async def test_unknown_source_is_rejected(client: AsyncClient):
    response = await client.post("/api/insights/generate", params={"source": "magic"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_morning_briefing_local_fallback(client: AsyncClient):
    body = (await client.get("/api/insights/morning-briefing")).json()

    assert body["source"] == "local"
    assert body["briefing"].startswith("Good morning! You have 0 tasks today.")


@pytest.mark.asyncio
async def test_morning_briefing_from_model(client: AsyncClient, gemini):
    gemini.morning_briefing = AsyncMock(return_value=AIResult.success("Good morning! Go."))

    body = (await client.get("/api/insights/morning-briefing")).json()

    assert body == {"briefing": "Good morning! Go.", "source": "ai"}


@pytest.mark.asyncio
async def test_score_explanation_local_fallback(client: AsyncClient):
    body = (await client.get("/api/insights/life-score/explanation")).json()

    assert body == {"score": 50, "explanation": "Keep up the good work!", "source": "local"}


@pytest.mark.asyncio
async def test_weekly_synthesis_local_fallback(client: AsyncClient):
    await _overspend(client)

    body = (await client.get("/api/insights/weekly-synthesis")).json()

    today = utc_today()
    assert body["source"] == "local"
    assert body["period"] == {"start": (today - timedelta(days=7)).isoformat(), "end": today.isoformat()}
    assert body["synthesis"].startswith("## Weekly Summary\n\n### Overview\nThis week you completed **0 tasks**")
    assert "- **Spending:** $650.00 in expenses" in body["synthesis"]
    assert body["generatedAt"]


@pytest.mark.asyncio
async def test_weekly_synthesis_from_model(client: AsyncClient, gemini):
    gemini.weekly_synthesis = AsyncMock(return_value=AIResult.success("## Executive Summary\nSolid week."))
    await client.post("/api/tasks", json={"title": "Done", "status": "completed"})

    body = (await client.get("/api/insights/weekly-synthesis")).json()

    assert body["synthesis"] == "## Executive Summary\nSolid week."
    assert body["source"] == "ai"
    facts = gemini.weekly_synthesis.await_args.args[0]
    assert facts["tasksCompleted"] == 1
    assert facts["tasksPending"] == 0
