"""
Insight Generation
==================

Rule-based insights over a user's snapshot, an AI-backed alternative,
and the per-user insight feed.

Rules are independent and evaluated in a fixed order; several can fire
at once and none suppresses another. Running the rules twice on the
same data yields the same insights (ids and timestamps aside).
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from cortexia.config import settings
from cortexia.models.goal import GoalStatus
from cortexia.repositories.store import LifeSnapshot
from cortexia.schemas.insight import Insight, InsightSeverity, InsightSource, InsightType
from cortexia.services import aggregates
from cortexia.services.dashboard import dashboard_summary
from cortexia.services.gemini_llm import AIResult, GeminiLLMService
from cortexia.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class GenerationMode(str, Enum):
    """
    Where insights come from.

    ``auto`` asks the AI and falls back to the rules on failure; ``ai``
    reports the failure instead.
    """
    AUTO = "auto"
    RULES = "rules"
    AI = "ai"


@dataclass(frozen=True)
class InsightRules:
    """
    Thresholds for the rule-based generator.

    ``sprint_window_days`` sets which completions the Productive Sprint
    rule counts: None counts every completed task ever, N counts tasks
    completed in the last N days.
    """

    habit_streak_threshold: int = 7
    sprint_task_threshold: int = 10
    sprint_window_days: Optional[int] = None
    weekly_spend_limit: float = 500.0
    slow_goal_progress: int = 25
    mood_window: int = 7
    low_mood_threshold: float = 5.0

    @classmethod
    def from_settings(cls) -> "InsightRules":
        return cls(sprint_window_days=settings.PRODUCTIVE_SPRINT_WINDOW_DAYS)


def _make_insight(
    now: datetime,
    *,
    type: InsightType,
    icon: str,
    severity: InsightSeverity,
    title: str,
    content: str,
    actionable: bool = False,
    source: InsightSource = InsightSource.RULES,
) -> Insight:
    return Insight(
        id=uuid.uuid4().hex,
        type=type,
        icon=icon,
        severity=severity,
        title=title,
        content=content,
        actionable=actionable,
        source=source,
        created_at=now,
    )


# =============================================================================
# Rules
# =============================================================================

def generate_rule_insights(
    snapshot: LifeSnapshot,
    rules: Optional[InsightRules] = None,
    now: Optional[datetime] = None,
) -> list[Insight]:
    """Evaluate every rule against ``snapshot`` in declaration order."""
    rules = rules or InsightRules()
    now = now or utc_now()
    today = now.date()
    insights: list[Insight] = []

    # Consistent Habits
    streaking = [
        habit for habit in aggregates.active_habits(snapshot.habits)
        if aggregates.habit_streak(habit, today) > rules.habit_streak_threshold
    ]
    if streaking:
        insights.append(_make_insight(
            now,
            type=InsightType.ACHIEVEMENT,
            icon="award",
            severity=InsightSeverity.SUCCESS,
            title="Consistent Habits",
            content=(
                f"You've maintained {len(streaking)} habit(s) with a "
                f"{rules.habit_streak_threshold}+ day streak. Excellent consistency!"
            ),
        ))

    # Productive Sprint
    window_start = (
        now - timedelta(days=rules.sprint_window_days)
        if rules.sprint_window_days is not None
        else None
    )
    completed = aggregates.completed_between(snapshot.tasks, window_start, now)
    if completed > rules.sprint_task_threshold:
        period = (
            f" in the last {rules.sprint_window_days} days"
            if rules.sprint_window_days is not None
            else ""
        )
        insights.append(_make_insight(
            now,
            type=InsightType.ACHIEVEMENT,
            icon="trending-up",
            severity=InsightSeverity.SUCCESS,
            title="Productive Sprint",
            content=f"You've completed {completed} tasks{period}. Keep the momentum going!",
        ))

    # Spending Alert
    week_spent = aggregates.weekly_spending(snapshot.transactions, today)
    if week_spent > rules.weekly_spend_limit:
        insights.append(_make_insight(
            now,
            type=InsightType.WARNING,
            icon="alert",
            severity=InsightSeverity.WARNING,
            title="Spending Alert",
            content=(
                f"You've spent ${week_spent:.2f} this week. "
                "Consider reviewing your budget."
            ),
            actionable=True,
        ))

    # Goal Acceleration
    slow_goals = [
        goal for goal in snapshot.goals
        if goal.status == GoalStatus.ACTIVE and goal.progress < rules.slow_goal_progress
    ]
    if slow_goals:
        insights.append(_make_insight(
            now,
            type=InsightType.RECOMMENDATION,
            icon="lightbulb",
            severity=InsightSeverity.INFO,
            title="Goal Acceleration",
            content=(
                f"You have {len(slow_goals)} goal(s) at less than "
                f"{rules.slow_goal_progress}% progress. "
                "Consider breaking them into smaller milestones."
            ),
            actionable=True,
        ))

    # Wellbeing Check
    if len(snapshot.journal_entries) >= rules.mood_window:
        mood = aggregates.recent_mood(snapshot.journal_entries, rules.mood_window)
        if mood is not None and mood < rules.low_mood_threshold:
            insights.append(_make_insight(
                now,
                type=InsightType.WARNING,
                icon="heart",
                severity=InsightSeverity.WARNING,
                title="Wellbeing Check",
                content=(
                    f"Your average mood this week is {mood:.1f}/10. "
                    "Consider activities that boost your mood."
                ),
                actionable=True,
            ))

    # Overdue Tasks
    overdue = aggregates.task_stats(snapshot.tasks, today).overdue
    if overdue > 0:
        insights.append(_make_insight(
            now,
            type=InsightType.WARNING,
            icon="clock",
            severity=InsightSeverity.WARNING,
            title="Overdue Tasks",
            content=(
                f"You have {overdue} overdue task(s). "
                "Reschedule or finish them to clear the backlog."
            ),
            actionable=True,
        ))

    return insights


# =============================================================================
# Insight service (rules + AI)
# =============================================================================

class InsightService:
    """
    Produces insights from rules, the AI, or the AI with rule fallback.
    """

    def __init__(self, gemini: GeminiLLMService, rules: Optional[InsightRules] = None):
        self.gemini = gemini
        self.rules = rules or InsightRules.from_settings()

    def _coerce(self, item: dict[str, Any], now: datetime) -> Optional[Insight]:
        """Turn one raw AI item into an Insight, or None if it is unusable."""
        try:
            return Insight.model_validate({
                "type": item.get("type"),
                "icon": item.get("icon") or "lightbulb",
                "severity": item.get("severity") or InsightSeverity.INFO.value,
                "title": item.get("title"),
                "content": item.get("content"),
                "actionable": bool(item.get("actionable", False)),
                "id": uuid.uuid4().hex,
                "source": InsightSource.AI.value,
                "created_at": now,
            })
        except PydanticValidationError as e:
            logger.debug("Skipping malformed AI insight %r: %s", item, e)
            return None

    async def from_ai(self, snapshot: LifeSnapshot, now: datetime) -> AIResult[list[Insight]]:
        result = await self.gemini.generate_insights(dashboard_summary(snapshot, now))
        if not result.ok:
            return result

        insights = [
            insight
            for insight in (self._coerce(item, now) for item in result.value)
            if insight is not None
        ]
        if not insights:
            return AIResult.failure("AI response contained no usable insights")
        return AIResult.success(insights)

    async def generate(
        self,
        snapshot: LifeSnapshot,
        mode: GenerationMode = GenerationMode.AUTO,
        now: Optional[datetime] = None,
    ) -> AIResult[list[Insight]]:
        """
        Generate insights for ``snapshot``.

        Returns:
            AIResult with the insight list. Only ``GenerationMode.AI``
            can return a failure.
        """
        now = now or utc_now()

        if mode == GenerationMode.RULES:
            return AIResult.success(generate_rule_insights(snapshot, self.rules, now))

        result = await self.from_ai(snapshot, now)
        if result.ok or mode == GenerationMode.AI:
            return result

        logger.warning("AI insights unavailable (%s); using rule-based insights", result.error)
        return AIResult.success(generate_rule_insights(snapshot, self.rules, now))


# =============================================================================
# Insight feed
# =============================================================================

class InsightFeed:
    """
    The insights currently shown to each user.

    Lives in memory for the lifetime of the application and is never
    persisted. After ``clear`` a user's feed stays empty until the next
    explicit ``replace``.
    """

    def __init__(self):
        self._feeds: dict[str, list[Insight]] = {}

    def current(self, user_id: str) -> list[Insight]:
        return list(self._feeds.get(user_id, []))

    def replace(self, user_id: str, insights: list[Insight]) -> list[Insight]:
        self._feeds[user_id] = list(insights)
        return self.current(user_id)

    def clear(self, user_id: str) -> None:
        self._feeds.pop(user_id, None)
