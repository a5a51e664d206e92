"""
Insights API Endpoints
======================

Life state, the insight feed, the morning briefing, the life score
explanation and the weekly synthesis. Everything here is derived from
the user's records on each request.
"""

import logging

from fastapi import APIRouter, Query

from cortexia.core.errors import ServiceUnavailableError
from cortexia.dependencies import CurrentUser, Feed, Gemini, Store
from cortexia.services.dashboard import (
    briefing_facts,
    fallback_morning_briefing,
    fallback_score_explanation,
    fallback_weekly_synthesis,
    score_facts,
    synthesis_facts,
    synthesis_period,
)
from cortexia.services.gemini_llm import CONNECTION_ERROR_MESSAGE
from cortexia.services.insights import GenerationMode, InsightService
from cortexia.services.life_state import evaluate_life_state
from cortexia.utils.helpers import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/life-state")
async def get_life_state(current_user: CurrentUser, store: Store):
    """
    Life score (0-100), its named state, the task trend and the
    factors behind it.
    """
    snapshot = await store.snapshot(current_user.user_id)
    return evaluate_life_state(snapshot).to_api()


# =============================================================================
# Insight feed
# =============================================================================

@router.get("")
async def list_insights(current_user: CurrentUser, feed: Feed):
    return {"insights": [i.to_api() for i in feed.current(current_user.user_id)]}


@router.post("/generate")
async def generate_insights(
    current_user: CurrentUser,
    store: Store,
    feed: Feed,
    gemini: Gemini,
    source: GenerationMode = Query(default=GenerationMode.AUTO),
):
    """
    Regenerate the insight feed.

    - ``auto``: ask the AI, fall back to the rules if it fails
    - ``rules``: rules only
    - ``ai``: AI only; 503 if it fails
    """
    snapshot = await store.snapshot(current_user.user_id)
    result = await InsightService(gemini).generate(snapshot, source)
    if not result.ok:
        raise ServiceUnavailableError(message=CONNECTION_ERROR_MESSAGE)

    insights = feed.replace(current_user.user_id, result.value)
    return {"insights": [i.to_api() for i in insights]}


@router.delete("")
async def clear_insights(current_user: CurrentUser, feed: Feed):
    """Empty the feed. It stays empty until the next generate."""
    feed.clear(current_user.user_id)
    return {"message": "Insights cleared"}


# =============================================================================
# AI summaries with local fallback
# =============================================================================

@router.get("/morning-briefing")
async def get_morning_briefing(
    current_user: CurrentUser,
    store: Store,
    gemini: Gemini,
):
    snapshot = await store.snapshot(current_user.user_id)
    facts = briefing_facts(snapshot, utc_now().date())

    result = await gemini.morning_briefing(facts)
    if result.ok:
        return {"briefing": result.value, "source": "ai"}

    logger.warning("AI briefing unavailable (%s); using local briefing", result.error)
    return {"briefing": fallback_morning_briefing(facts), "source": "local"}


@router.get("/life-score/explanation")
async def get_life_score_explanation(
    current_user: CurrentUser,
    store: Store,
    gemini: Gemini,
):
    now = utc_now()
    snapshot = await store.snapshot(current_user.user_id)
    report = evaluate_life_state(snapshot, now)
    facts = score_facts(snapshot, report, now.date())

    result = await gemini.explain_life_score(facts)
    if result.ok:
        explanation, source = result.value, "ai"
    else:
        logger.warning("AI explanation unavailable (%s); using local explanation", result.error)
        explanation, source = fallback_score_explanation(facts), "local"

    return {"score": report.score, "explanation": explanation, "source": source}


@router.get("/weekly-synthesis")
async def get_weekly_synthesis(
    current_user: CurrentUser,
    store: Store,
    gemini: Gemini,
):
    """
    Markdown report on the last seven days.
    """
    now = utc_now()
    snapshot = await store.snapshot(current_user.user_id)
    facts = synthesis_facts(snapshot, now)
    start, end = synthesis_period(now.date())

    result = await gemini.weekly_synthesis(facts)
    if result.ok:
        synthesis, source = result.value, "ai"
    else:
        logger.warning("AI synthesis unavailable (%s); using local summary", result.error)
        synthesis, source = fallback_weekly_synthesis(facts), "local"

    return {
        "synthesis": synthesis,
        "period": {"start": start.isoformat(), "end": end.isoformat()},
        "generatedAt": now.isoformat(),
        "source": source,
    }
