"""
Gemini LLM Service
==================

Integration with Google Gemini via LangChain for:
- Free-form questions about the user's data
- Insight generation from a dashboard summary
- Natural-language capture parsing
- Morning briefings, life score explanations and weekly syntheses

Every call is a single attempt and returns an ``AIResult``. Transport
errors and unparseable responses become failures; callers decide
whether to fall back to local logic or surface an error.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Generic, Optional, TypeVar

from langchain_google_genai import ChatGoogleGenerativeAI

from cortexia.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONNECTION_ERROR_MESSAGE = (
    "I'm having trouble connecting right now. Please try again in a moment."
)

DEFAULT_SYSTEM_PROMPT = (
    "You are an AI life coach assistant for CorteXia, a personal life "
    "management app. Be concise, specific and actionable."
)


@dataclass(frozen=True)
class AIResult(Generic[T]):
    """Outcome of one AI call."""

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "AIResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "AIResult[T]":
        return cls(ok=False, error=error)


def _strip_code_fence(content: str) -> str:
    """Remove a surrounding markdown code block, if any."""
    content = content.strip()
    if content.startswith("```"):
        content = content.split("```")[1]
        if content.startswith("json"):
            content = content[4:]
    return content.strip()


class GeminiLLMService:
    """
    Service for LLM operations using Google Gemini via LangChain.
    """

    def __init__(self):
        self.api_key = settings.GOOGLE_GEMINI_API_KEY
        self.model_name = settings.GEMINI_MODEL
        self.timeout = settings.AI_TIMEOUT_SECONDS
        self._llm = None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def llm(self) -> ChatGoogleGenerativeAI:
        """Get or create LLM instance."""
        if self._llm is None:
            self._llm = ChatGoogleGenerativeAI(
                model=self.model_name,
                google_api_key=self.api_key,
                temperature=0.7,
                max_tokens=2048,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._llm

    # =========================================================================
    # Transport
    # =========================================================================

    async def complete(self, prompt: str) -> AIResult[str]:
        """Send one prompt and return the raw text response."""
        if not self.configured:
            return AIResult.failure("Gemini API not configured")

        try:
            response = await self.llm.ainvoke(prompt)
        except Exception as e:
            logger.warning("Gemini call failed: %s: %s", type(e).__name__, e)
            return AIResult.failure(str(e) or type(e).__name__)

        content = response.content
        if isinstance(content, list):
            content = "".join(
                part if isinstance(part, str) else part.get("text", "")
                for part in content
            )
        content = str(content).strip()
        if not content:
            return AIResult.failure("Empty response from model")
        return AIResult.success(content)

    async def complete_json(self, prompt: str) -> AIResult[Any]:
        """Send one prompt and parse the response as JSON."""
        result = await self.complete(prompt)
        if not result.ok:
            return result

        try:
            return AIResult.success(json.loads(_strip_code_fence(result.value)))
        except json.JSONDecodeError as e:
            logger.warning("Gemini returned invalid JSON: %s", e)
            return AIResult.failure(f"Invalid JSON from model: {e}")

    # =========================================================================
    # Operations
    # =========================================================================

    async def ask(
        self,
        question: str,
        context: Any = None,
        system_prompt: Optional[str] = None,
    ) -> AIResult[str]:
        """
        Answer a free-form question about the user's data.

        Args:
            question: The user's question
            context: JSON-serializable data the answer may draw on
            system_prompt: Overrides the default coaching persona

        Returns:
            AIResult with the answer text
        """
        prompt = f"""{system_prompt or DEFAULT_SYSTEM_PROMPT}

The user has asked: "{question}"

Here's their current data context:
{json.dumps(context, default=str, indent=2) if context is not None else "No context provided."}

Provide a helpful, actionable response based on their question. Keep it concise (2-4 sentences unless they ask for detail)."""

        return await self.complete(prompt)

    async def generate_insights(self, summary: dict[str, Any]) -> AIResult[list[dict]]:
        """
        Generate dashboard insights from a data summary.

        Returns:
            AIResult with a list of raw insight dicts
            (type, icon, severity, title, content, actionable)
        """
        prompt = f"""You are analysing a user's personal dashboard to surface useful observations.

Dashboard summary:
{json.dumps(summary, default=str, indent=2)}

Return 3 to 5 insights. For each insight provide:
1. type: One of achievement, warning, recommendation, pattern
2. icon: One of award, trending-up, alert, lightbulb, heart, clock
3. severity: One of success, info, warning
4. title: Short title (max 30 characters)
5. content: One or two sentences, specific to the numbers above
6. actionable: true if the user can act on it today

Respond ONLY with a valid JSON array. No additional text or explanation."""

        result = await self.complete_json(prompt)
        if not result.ok:
            return result
        if not isinstance(result.value, list):
            return AIResult.failure("Expected a JSON array of insights")
        return AIResult.success([item for item in result.value if isinstance(item, dict)])

    async def parse_intent(self, text: str, today: date) -> AIResult[dict]:
        """
        Classify a quick-capture sentence into a record type with fields.

        Returns:
            AIResult with ``{"type", "data", "confidence"}``
        """
        prompt = f"""Parse this quick-capture input from a life tracking app. Today is {today.isoformat()}.

Input: "{text}"

Classify it as exactly one of: expense, task, study_session, habit_completion, journal.
Extract the relevant fields:
- expense: amount (number), category (food, transport, entertainment or other), description
- task: title, dueDate (YYYY-MM-DD or null), priority (low, medium, high)
- study_session: subject, durationMinutes (number)
- habit_completion: habitName, completed (true)
- journal: content, mood (1-10)

Respond ONLY with valid JSON in this shape:
{{"type": "...", "data": {{...}}, "confidence": 0.0}}"""

        result = await self.complete_json(prompt)
        if not result.ok:
            return result
        if not isinstance(result.value, dict) or "type" not in result.value:
            return AIResult.failure("Expected a JSON object with a type")
        return result

    async def morning_briefing(self, facts: dict[str, Any]) -> AIResult[str]:
        """Short motivational briefing for the start of the day."""
        yesterday = facts.get("yesterdayMood")
        prompt = f"""Generate a brief, motivational morning briefing (2-3 sentences) based on:
- {facts["pendingTasks"]} pending tasks ({facts["urgentTasks"]} high priority)
- {facts["habitsToday"]} habits to complete today
- {facts["upcomingDeadlines"]} upcoming deadlines this week
{f"- Yesterday's mood: {yesterday}/10" if yesterday else ""}

Be encouraging but actionable. Start with 'Good morning!'"""

        return await self.complete(prompt)

    async def explain_life_score(self, facts: dict[str, Any]) -> AIResult[str]:
        """Two or three bullet observations behind the current life score."""
        prompt = f"""Generate a concise life status explanation (max 60 words) based on these metrics:

Overall Score: {facts["score"]}/100
Tasks: {facts["tasksCompleted"]} done, {facts["tasksPending"]} pending
Habits: {facts["habitsDone"]}/{facts["habitsTotal"]} completed today
Budget: ${facts["budgetSpent"]}/${facts["budgetLimit"]} this month
Goals: {facts["goalsOnTrack"]}/{facts["goalsTotal"]} on track

Format: Use bullet points (•) to list 2-3 key observations. Be specific and actionable.

Your explanation (no extra text, just the bullet points):"""

        return await self.complete(prompt)

    async def weekly_synthesis(self, facts: dict[str, Any]) -> AIResult[str]:
        """Markdown report on the last seven days."""
        mood = facts.get("averageMood")
        prompt = f"""Generate a comprehensive weekly synthesis report (300-500 words) based on this user's data:

TASKS:
- Completed: {facts["tasksCompleted"]}
- Pending: {facts["tasksPending"]}

HABITS:
- Total check-ins: {facts["habitCheckIns"]}

TIME DISTRIBUTION:
- Total logged: {facts["timeMinutes"]} minutes

SPENDING:
- Total: ${facts["totalSpent"]:.2f}

GOALS:
- Active goals: {facts["activeGoals"]}

JOURNAL:
- Entries: {facts["journalEntries"]}
- Average mood: {mood if mood is not None else "N/A"}

Format the report with:
1. **Executive Summary**: 2-3 sentences on overall week
2. **Key Wins**: 3-4 specific achievements
3. **Patterns Detected**: 2-3 behavioral patterns noticed
4. **Next Week Focus**: 2-3 recommendations

Use markdown formatting. Be specific, insightful, and actionable."""

        return await self.complete(prompt)


# Singleton instance

_gemini_service: Optional[GeminiLLMService] = None


def get_gemini_service() -> GeminiLLMService:
    """Get or create Gemini service instance."""
    global _gemini_service

    if _gemini_service is None:
        _gemini_service = GeminiLLMService()

    return _gemini_service
