"""
Life State Tests
================

Tests for the life score, state classification, task trend and
contributing factors.
"""

from datetime import datetime, timedelta, timezone

import pytest

from cortexia.repositories.store import LifeSnapshot
from cortexia.schemas.finance import TransactionRecord
from cortexia.schemas.habit import HabitCompletion, HabitRecord
from cortexia.schemas.insight import ScoreBreakdown, Trend
from cortexia.schemas.journal import JournalEntryRecord
from cortexia.schemas.task import TaskRecord
from cortexia.services.life_state import (
    classify_score,
    evaluate_life_state,
    life_score,
    task_trend,
)


USER_ID = "1"
NOW = datetime(2026, 2, 10, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def _make_habit(streak_days: int, habit_id: int = 1) -> HabitRecord:
    """Habit completed today and the ``streak_days - 1`` days before."""
    return HabitRecord(
        id=habit_id,
        user_id=USER_ID,
        created_at=NOW - timedelta(days=60),
        name=f"Habit {habit_id}",
        category="health",
        completions=[HabitCompletion(date=TODAY - timedelta(days=d)) for d in range(streak_days)],
    )


def _make_completed_task(task_id: int, days_ago: float) -> TaskRecord:
    return TaskRecord(
        id=task_id,
        user_id=USER_ID,
        created_at=NOW - timedelta(days=30),
        title=f"Task {task_id}",
        status="completed",
        completed_at=NOW - timedelta(days=days_ago),
    )


def _make_journal(entry_id: int, mood: int) -> JournalEntryRecord:
    return JournalEntryRecord(
        id=entry_id,
        user_id=USER_ID,
        created_at=NOW - timedelta(hours=entry_id),
        content="Entry",
        mood=mood,
        energy=5,
    )


class TestLifeScore:

    def test_empty_account_scores_neutral_fifty(self):
        report = evaluate_life_state(LifeSnapshot(), NOW)

        assert report.score == 50
        assert report.state.key == "drifting"
        assert report.trend == Trend.STABLE
        assert report.trend_value == 0

    def test_habit_streaks_lift_the_score(self):
        """Two habits done today with 10-day streaks: 62.5 + 20 bonus."""
        snapshot = LifeSnapshot(habits=[_make_habit(10, 1), _make_habit(10, 2)])
        report = evaluate_life_state(snapshot, NOW)

        assert report.breakdown.habit_score == 100
        assert report.breakdown.streak_bonus == 20
        assert report.score == 83
        assert report.state.label == "High Momentum"

    def test_partial_habit_completion_weighs_a_quarter(self):
        """Three habits, two done today: habit score 66.67, contributing 16.67."""
        snapshot = LifeSnapshot(habits=[_make_habit(1, 1), _make_habit(1, 2), _make_habit(0, 3)])
        breakdown = evaluate_life_state(snapshot, NOW).breakdown

        assert breakdown.habit_score == pytest.approx(200 / 3)
        assert breakdown.habit_score * 0.25 == pytest.approx(16.67, abs=0.01)
        assert breakdown.streak_bonus == pytest.approx(4 / 3)
        assert breakdown.task_score == breakdown.finance_score == breakdown.wellbeing_score == 50

    def test_score_is_clamped_to_one_hundred(self):

        snapshot = LifeSnapshot(
            tasks=[_make_completed_task(1, 1)],
            habits=[_make_habit(15)],
            transactions=[
                TransactionRecord(
                    id=1, user_id=USER_ID, created_at=NOW,
                    type="income", amount=1000, category="salary", date=TODAY,
                )
            ],
            journal_entries=[_make_journal(1, 10)],
        )

        assert evaluate_life_state(snapshot, NOW).score == 100

    def test_rounds_half_up(self):
        breakdown = ScoreBreakdown(
            task_score=50, habit_score=50, finance_score=50, wellbeing_score=52, streak_bonus=0
        )
        assert life_score(breakdown) == 51

    def test_low_mood_pulls_wellbeing_down(self):
        snapshot = LifeSnapshot(journal_entries=[_make_journal(i, 2) for i in range(1, 8)])
        report = evaluate_life_state(snapshot, NOW)

        assert report.breakdown.wellbeing_score == 20
        assert report.score == 43


class TestClassifyScore:

    def test_thresholds(self):
        assert classify_score(100).key == "momentum"
        assert classify_score(80).key == "momentum"
        assert classify_score(79).key == "ontrack"
        assert classify_score(60).key == "ontrack"
        assert classify_score(59).key == "drifting"
        assert classify_score(40).key == "drifting"
        assert classify_score(39).key == "overloaded"
        assert classify_score(0).key == "overloaded"


class TestTaskTrend:

    def test_up(self):
        snapshot = LifeSnapshot(tasks=[
            _make_completed_task(1, 1),
            _make_completed_task(2, 2),
            _make_completed_task(3, 3),
            _make_completed_task(4, 10),
        ])
        assert task_trend(snapshot, NOW) == (Trend.UP, 200)

    def test_down(self):
        snapshot = LifeSnapshot(tasks=[
            _make_completed_task(1, 8),
            _make_completed_task(2, 9),
        ])
        assert task_trend(snapshot, NOW) == (Trend.DOWN, -100)

    def test_stable_within_twenty_percent(self):
        snapshot = LifeSnapshot(tasks=[
            _make_completed_task(1, 1),
            _make_completed_task(2, 10),
        ])
        assert task_trend(snapshot, NOW) == (Trend.STABLE, 0)

    def test_up_from_nothing_reports_zero_change(self):
        snapshot = LifeSnapshot(tasks=[_make_completed_task(1, 1)])
        assert task_trend(snapshot, NOW) == (Trend.UP, 0)


class TestFactors:

    def test_four_factors_with_links(self):
        report = evaluate_life_state(LifeSnapshot(habits=[_make_habit(3)]), NOW)

        assert [f.link for f in report.factors] == ["/habits", "/tasks", "/finance", "/journal"]
        habits = report.factors[0]
        assert habits.value == "1/1"
        assert habits.positive is True
        assert report.factors[3].value == "5.0/10"
