"""
AI API Endpoints
================

Quick-capture parsing, task prioritization and free-form questions.

Parsing always answers: the remote model is tried first and the local
regex parser covers failures. Questions have no local fallback and
return 503 when the model cannot be reached.
"""

import logging

from fastapi import APIRouter

from cortexia.core.errors import ServiceUnavailableError, ValidationError
from cortexia.dependencies import CurrentUser, Gemini
from cortexia.schemas.insight import AskRequest, ParseRequest, PrioritizeRequest
from cortexia.services import aggregates
from cortexia.services.gemini_llm import CONNECTION_ERROR_MESSAGE
from cortexia.services.intent_parser import intent_from_ai, parse_intent
from cortexia.utils.helpers import utc_now, utc_today

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/parse")
async def parse_input(
    data: ParseRequest,
    current_user: CurrentUser,
    gemini: Gemini,
):
    """
    Classify quick-capture text as an expense, task, study session,
    habit completion or journal entry and extract its fields.
    """
    text = (data.input or "").strip()
    if not text:
        raise ValidationError("Input is required", field="input")

    today = utc_today()

    if gemini.configured:
        result = await gemini.parse_intent(text, today)
        if result.ok:
            intent = intent_from_ai(result.value)
            if intent is not None:
                return intent.to_api()
            logger.warning("AI parser returned unknown type %r; using local parser", result.value.get("type"))
        else:
            logger.warning("AI parser failed (%s); using local parser", result.error)

    return parse_intent(text, today).to_api()


@router.post("/ask")
async def ask(
    data: AskRequest,
    current_user: CurrentUser,
    gemini: Gemini,
):
    """
    Answer a question about the user's data, using the supplied context.
    """
    question = (data.question or "").strip()
    if not question:
        raise ValidationError("Question is required", field="question")

    result = await gemini.ask(question, data.context, data.system_prompt)
    if not result.ok:
        logger.warning("AI ask failed for user %s: %s", current_user.user_id, result.error)
        raise ServiceUnavailableError(message=CONNECTION_ERROR_MESSAGE)

    return {"response": result.value}


@router.post("/prioritize")
async def prioritize(
    data: PrioritizeRequest,
    current_user: CurrentUser,
):
    """
    Rank the supplied tasks by urgency. Each task comes back with an
    ``aiScore`` from 0 to 100, highest first.
    """
    tasks = data.tasks
    if not isinstance(tasks, list) or not all(isinstance(task, dict) for task in tasks):
        raise ValidationError("Tasks array is required", field="tasks")

    return {"tasks": aggregates.prioritize_tasks(tasks, utc_now())}
