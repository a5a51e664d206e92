"""
Life State
==========

Combines the per-domain aggregates into one 0-100 life score, a named
state, a task momentum trend and the factors shown next to the score.

Score = 25% tasks + 25% habits + 25% finance + 25% wellbeing, plus a
streak bonus of up to 20 points, clamped to [0, 100]. Each sub-score
is a neutral 50 when its domain has no data, so an empty account
scores exactly 50.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from cortexia.repositories.store import LifeSnapshot
from cortexia.schemas.insight import (
    Factor,
    LifeStateLabel,
    LifeStateReport,
    ScoreBreakdown,
    Trend,
)
from cortexia.services import aggregates
from cortexia.utils.helpers import round_half_up, utc_now

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50.0
MAX_STREAK_BONUS = 20.0
MOOD_WINDOW = 7

# Ordered highest threshold first
LIFE_STATES: tuple[tuple[int, LifeStateLabel], ...] = (
    (80, LifeStateLabel(
        key="momentum",
        label="High Momentum",
        color="#10B981",
        description="Strong habit consistency + ahead on goals + controlled spending",
    )),
    (60, LifeStateLabel(
        key="ontrack",
        label="On Track",
        color="#3B82F6",
        description="Progressing well with balanced habits and sustainable focus",
    )),
    (40, LifeStateLabel(
        key="drifting",
        label="Drifting",
        color="#F59E0B",
        description="Some areas slipping but recovery is possible with focus",
    )),
    (0, LifeStateLabel(
        key="overloaded",
        label="Overloaded",
        color="#EF4444",
        description="Too many commitments, need to reduce scope and prioritize",
    )),
)


def classify_score(score: int) -> LifeStateLabel:
    for threshold, state in LIFE_STATES:
        if score >= threshold:
            return state
    return LIFE_STATES[-1][1]


# =============================================================================
# Sub-scores
# =============================================================================

def _task_score(snapshot: LifeSnapshot, today: date) -> float:
    stats = aggregates.task_stats(snapshot.tasks, today)
    if stats.total == 0:
        return NEUTRAL_SCORE
    return stats.completed / stats.total * 100


def _habit_score(habits, today: date) -> float:
    if not habits:
        return NEUTRAL_SCORE
    return aggregates.habits_completed_on(habits, today) / len(habits) * 100


def _finance_score(snapshot: LifeSnapshot, today: date) -> float:
    stats = aggregates.finance_stats(snapshot.transactions, "month", today)
    if stats.income <= 0:
        return NEUTRAL_SCORE
    return min(max(aggregates.savings_rate(stats) + 50, 0.0), 100.0)


def _wellbeing_score(snapshot: LifeSnapshot) -> float:
    mood = aggregates.recent_mood(snapshot.journal_entries, MOOD_WINDOW)
    return (mood if mood is not None else 5.0) * 10


def score_breakdown(snapshot: LifeSnapshot, today: date) -> ScoreBreakdown:
    habits = aggregates.active_habits(snapshot.habits)
    return ScoreBreakdown(
        task_score=_task_score(snapshot, today),
        habit_score=_habit_score(habits, today),
        finance_score=_finance_score(snapshot, today),
        wellbeing_score=_wellbeing_score(snapshot),
        streak_bonus=min(aggregates.average_streak(habits, today) * 2, MAX_STREAK_BONUS),
    )


def life_score(breakdown: ScoreBreakdown) -> int:
    """Weighted score, always an integer in [0, 100]."""
    weighted = (
        breakdown.task_score * 0.25
        + breakdown.habit_score * 0.25
        + breakdown.finance_score * 0.25
        + breakdown.wellbeing_score * 0.25
        + breakdown.streak_bonus
    )
    return min(max(round_half_up(weighted), 0), 100)


# =============================================================================
# Trend & factors
# =============================================================================

def task_trend(snapshot: LifeSnapshot, now: datetime) -> tuple[Trend, int]:
    """
    Completions in the last 7 days against the 7 days before.

    Returns the direction and the rounded percent change (0 when stable
    or when the earlier week had no completions).
    """
    week_ago = now - timedelta(days=7)
    two_weeks_ago = now - timedelta(days=14)

    recent = aggregates.completed_between(snapshot.tasks, week_ago, now)
    older = aggregates.completed_between(snapshot.tasks, two_weeks_ago, week_ago)

    diff = (recent - older) / older * 100 if older > 0 else 0
    if recent > older * 1.2:
        return Trend.UP, round_half_up(diff)
    if recent < older * 0.8:
        return Trend.DOWN, round_half_up(diff)
    return Trend.STABLE, 0


def contributing_factors(snapshot: LifeSnapshot, today: date) -> list[Factor]:
    habits = aggregates.active_habits(snapshot.habits)
    done_today = aggregates.habits_completed_on(habits, today)
    tasks = aggregates.task_stats(snapshot.tasks, today)
    rate = aggregates.savings_rate(
        aggregates.finance_stats(snapshot.transactions, "month", today)
    )
    mood = aggregates.recent_mood(snapshot.journal_entries, 3)
    mood = mood if mood is not None else 5.0

    return [
        Factor(
            label="Habits completed",
            value=f"{done_today}/{len(habits)}",
            positive=done_today >= len(habits) * 0.7,
            link="/habits",
        ),
        Factor(
            label="Tasks overdue" if tasks.overdue else "Tasks pending",
            value=str(tasks.overdue or tasks.pending),
            positive=tasks.overdue == 0,
            link="/tasks",
        ),
        Factor(
            label="Savings rate",
            value=f"{round_half_up(rate)}%",
            positive=rate > 20,
            link="/finance",
        ),
        Factor(
            label="Recent mood",
            value=f"{mood:.1f}/10",
            positive=mood >= 6,
            link="/journal",
        ),
    ]


def evaluate_life_state(snapshot: LifeSnapshot, now: Optional[datetime] = None) -> LifeStateReport:
    """Full life-state report for one user's snapshot."""
    now = now or utc_now()
    today = now.date()

    breakdown = score_breakdown(snapshot, today)
    score = life_score(breakdown)
    trend, trend_value = task_trend(snapshot, now)

    return LifeStateReport(
        score=score,
        state=classify_score(score),
        trend=trend,
        trend_value=trend_value,
        breakdown=breakdown,
        factors=contributing_factors(snapshot, today),
    )
