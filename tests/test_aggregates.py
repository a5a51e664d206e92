"""
Aggregate Tests
===============

Tests for the per-domain statistics:
- Habit streaks anchored on today or yesterday
- Finance period windows and budget consumption
- Daily and weekly time windows, focus split
- Task, goal, journal and study summaries
- Task urgency ranking
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from cortexia.models.finance import TransactionType
from cortexia.models.goal import GoalStatus
from cortexia.models.task import TaskPriority, TaskStatus
from cortexia.models.time_entry import FocusQuality, TimeCategory
from cortexia.schemas.finance import BudgetRecord, TransactionRecord
from cortexia.schemas.goal import GoalRecord, Milestone
from cortexia.schemas.habit import HabitCompletion, HabitRecord
from cortexia.schemas.journal import JournalEntryRecord
from cortexia.schemas.study import StudySessionRecord
from cortexia.schemas.task import TaskRecord
from cortexia.schemas.time_entry import TimeEntryRecord
from cortexia.services import aggregates


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

USER_ID = "1"
# Tuesday
NOW = datetime(2026, 2, 10, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def _make_habit(done_days: list[int], *, missed_days: tuple[int, ...] = (), habit_id: int = 1) -> HabitRecord:
    """Habit completed ``done_days`` days before TODAY (0 = today)."""
    completions = [HabitCompletion(date=TODAY - timedelta(days=d)) for d in done_days]
    completions += [HabitCompletion(date=TODAY - timedelta(days=d), completed=False) for d in missed_days]
    return HabitRecord(
        id=habit_id,
        user_id=USER_ID,
        created_at=NOW - timedelta(days=30),
        name="Gym",
        category="fitness",
        completions=completions,
    )


def _make_transaction(amount: float, day: date, *, type: str = "expense", category: str = "food", tx_id: int = 1):
    return TransactionRecord(
        id=tx_id,
        user_id=USER_ID,
        created_at=NOW,
        type=type,
        amount=amount,
        category=category,
        date=day,
    )


def _make_entry(minutes: int, start: datetime, focus: str = "moderate", category: str = "work", entry_id: int = 1):
    return TimeEntryRecord(
        id=entry_id,
        user_id=USER_ID,
        created_at=start,
        activity="Work",
        category=category,
        duration_minutes=minutes,
        start_time=start,
        end_time=start + timedelta(minutes=minutes),
        focus_quality=focus,
    )


def _make_task(status: str = "todo", *, due: date | None = None, priority: str = "medium",
               completed_at: datetime | None = None, task_id: int = 1) -> TaskRecord:
    return TaskRecord(
        id=task_id,
        user_id=USER_ID,
        created_at=NOW - timedelta(days=20),
        title=f"Task {task_id}",
        status=status,
        priority=priority,
        due_date=due,
        completed_at=completed_at,
    )


def _make_journal(mood: int, days_ago: int, *, entry_id: int = 1, stress: int | None = None, tags=()):
    return JournalEntryRecord(
        id=entry_id,
        user_id=USER_ID,
        created_at=NOW - timedelta(days=days_ago),
        content="Entry",
        mood=mood,
        energy=5,
        stress=stress,
        tags=list(tags),
    )


# ---------------------------------------------------------------------------
# Habits
# ---------------------------------------------------------------------------

class TestHabitStreak:
    """Tests for aggregates.habit_streak"""

    def test_counts_back_from_today(self):
        assert aggregates.habit_streak(_make_habit([0, 1, 2, 3]), TODAY) == 4

    def test_anchors_on_yesterday_when_today_not_done(self):
        """An unfinished today does not break a streak ending yesterday."""
        assert aggregates.habit_streak(_make_habit([1, 2, 3]), TODAY) == 3

    def test_gap_stops_the_count(self):
        assert aggregates.habit_streak(_make_habit([0, 2, 3, 4]), TODAY) == 1

    def test_zero_when_neither_today_nor_yesterday(self):
        assert aggregates.habit_streak(_make_habit([2, 3, 4]), TODAY) == 0

    def test_uncompleted_days_do_not_count(self):
        habit = _make_habit([0, 2], missed_days=(1,))
        assert aggregates.habit_streak(habit, TODAY) == 1

    def test_empty_log(self):
        assert aggregates.habit_streak(_make_habit([]), TODAY) == 0


class TestHabitStats:

    def test_summary(self):
        habits = [
            _make_habit([0, 1, 2], habit_id=1),
            _make_habit([1], habit_id=2),
        ]
        stats = aggregates.habit_stats(habits, TODAY)

        assert stats.total == 2
        assert stats.completed_today == 1
        assert stats.longest_streak == 3
        assert stats.avg_streak == 2

    def test_empty(self):
        assert aggregates.habit_stats([], TODAY).total == 0


# ---------------------------------------------------------------------------
# Finance
# ---------------------------------------------------------------------------

class TestFinanceStats:
    """Tests for aggregates.finance_stats"""

    def test_week_includes_six_days_back_and_excludes_seven(self):
        transactions = [
            _make_transaction(10, TODAY - timedelta(days=6), tx_id=1),
            _make_transaction(99, TODAY - timedelta(days=7), tx_id=2),
        ]
        stats = aggregates.finance_stats(transactions, "week", TODAY)

        assert stats.expenses == 10
        assert stats.transaction_count == 1

    def test_month_is_the_calendar_month(self):
        transactions = [
            _make_transaction(20, date(2026, 2, 1), tx_id=1),
            _make_transaction(30, date(2026, 2, 28), tx_id=2),
            _make_transaction(40, date(2026, 1, 31), tx_id=3),
        ]
        stats = aggregates.finance_stats(transactions, "month", TODAY)

        assert stats.expenses == 50

    def test_periods_are_open_ended(self):
        transactions = [
            _make_transaction(15, TODAY + timedelta(days=3), tx_id=1),
            _make_transaction(25, date(2026, 3, 2), tx_id=2),
        ]

        assert aggregates.finance_stats(transactions, "week", TODAY).expenses == 40
        assert aggregates.finance_stats(transactions, "month", TODAY).expenses == 40

    def test_income_expenses_balance_and_categories(self):

        transactions = [
            _make_transaction(1000, TODAY, type="income", category="salary", tx_id=1),
            _make_transaction(45.5, TODAY, category="food", tx_id=2),
            _make_transaction(4.5, TODAY, category="food", tx_id=3),
            _make_transaction(20, TODAY, category="transport", tx_id=4),
        ]
        stats = aggregates.finance_stats(transactions, "month", TODAY)

        assert stats.income == 1000
        assert stats.expenses == 70
        assert stats.balance == 930
        assert stats.by_category == {"food": 50.0, "transport": 20.0}
        assert stats.transaction_count == 4

    def test_empty(self):
        stats = aggregates.finance_stats([], "week", TODAY)
        assert stats.income == 0
        assert stats.by_category == {}

    def test_unknown_period(self):
        with pytest.raises(ValueError):
            aggregates.period_start("year", TODAY)

    def test_savings_rate(self):
        stats = aggregates.finance_stats(
            [
                _make_transaction(1000, TODAY, type="income", tx_id=1),
                _make_transaction(250, TODAY, tx_id=2),
            ],
            "month",
            TODAY,
        )
        assert aggregates.savings_rate(stats) == 75
        assert aggregates.savings_rate(aggregates.finance_stats([], "month", TODAY)) == 0


class TestBudgetStatuses:

    def _budget(self, category: str, limit: float, budget_id: int = 1) -> BudgetRecord:
        return BudgetRecord(id=budget_id, user_id=USER_ID, created_at=NOW, category=category, limit=limit)

    def test_exactly_at_limit(self):
        statuses = aggregates.budget_statuses(
            [self._budget("food", 500)],
            [_make_transaction(500, TODAY)],
            TODAY,
        )

        assert statuses[0].spent == 500
        assert statuses[0].percentage == 100
        assert statuses[0].remaining == 0

    def test_over_budget_is_not_clamped(self):
        statuses = aggregates.budget_statuses(
            [self._budget("food", 100)],
            [_make_transaction(150, TODAY)],
            TODAY,
        )

        assert statuses[0].percentage == 150
        assert statuses[0].remaining == -50

    def test_ignores_income_other_categories_and_last_month(self):
        transactions = [
            _make_transaction(100, TODAY, type="income", tx_id=1),
            _make_transaction(100, TODAY, category="transport", tx_id=2),
            _make_transaction(100, date(2026, 1, 31), tx_id=3),
            _make_transaction(25, TODAY, tx_id=4),
        ]
        statuses = aggregates.budget_statuses([self._budget("food", 100)], transactions, TODAY)

        assert statuses[0].spent == 25
        assert statuses[0].percentage == 25


# ---------------------------------------------------------------------------
# Time tracking
# ---------------------------------------------------------------------------

class TestTimeStats:

    def test_today_only_counts_entries_started_today(self):
        entries = [
            _make_entry(60, NOW - timedelta(hours=2), focus="deep", entry_id=1),
            _make_entry(30, NOW - timedelta(days=1), entry_id=2),
        ]
        stats = aggregates.time_stats_today(entries, NOW)

        assert stats.total_minutes == 60
        assert stats.deep_focus_minutes == 60
        assert stats.entries == 1
        assert stats.by_category == {"work": 60}

    def test_weekly_starts_monday_and_divides_by_seven(self):
        monday = datetime(2026, 2, 9, 9, 0, tzinfo=timezone.utc)
        sunday = datetime(2026, 2, 8, 9, 0, tzinfo=timezone.utc)
        entries = [
            _make_entry(70, monday, entry_id=1),
            _make_entry(70, NOW, category="study", entry_id=2),
            _make_entry(500, sunday, entry_id=3),
        ]
        stats = aggregates.time_stats_weekly(entries, NOW)

        assert stats.total_minutes == 140
        assert stats.entries == 2
        assert stats.avg_daily_minutes == 20
        assert stats.by_category == {"work": 70, "study": 70}

    def test_focus_breakdown(self):
        entries = [
            _make_entry(90, NOW, focus="deep", entry_id=1),
            _make_entry(30, NOW, focus="shallow", entry_id=2),
        ]
        breakdown = aggregates.focus_breakdown(entries)

        assert breakdown.deep.hours == 1.5
        assert breakdown.deep.percentage == 75
        assert breakdown.shallow.percentage == 25
        assert breakdown.moderate.hours == 0

    def test_focus_breakdown_empty(self):
        breakdown = aggregates.focus_breakdown([])
        assert breakdown.deep.percentage == 0


# ---------------------------------------------------------------------------
# Tasks, goals, journal, study
# ---------------------------------------------------------------------------

class TestTaskStats:

    def test_counts(self):
        tasks = [
            _make_task("todo", due=TODAY - timedelta(days=1), priority="high", task_id=1),
            _make_task("in_progress", due=TODAY, task_id=2),
            _make_task("completed", completed_at=NOW, task_id=3),
            _make_task("completed", due=TODAY - timedelta(days=5),
                       completed_at=NOW - timedelta(days=3), task_id=4),
        ]
        stats = aggregates.task_stats(tasks, TODAY)

        assert stats.total == 4
        assert stats.completed == 2
        assert stats.pending == 2
        assert stats.overdue == 1
        assert stats.completed_today == 1
        assert stats.high_priority == 1

    def test_completed_between(self):
        tasks = [
            _make_task("completed", completed_at=NOW - timedelta(days=1), task_id=1),
            _make_task("completed", completed_at=NOW - timedelta(days=10), task_id=2),
            _make_task("todo", task_id=3),
        ]

        assert aggregates.completed_between(tasks, NOW - timedelta(days=7), NOW) == 1
        assert aggregates.completed_between(tasks, None, NOW) == 2


class TestTaskUrgency:
    """Tests for aggregates.task_urgency_score and prioritize_tasks"""

    def test_neutral_task(self):
        assert aggregates.task_urgency_score({"title": "Anything"}, NOW) == 50

    @pytest.mark.parametrize("due, expected", [
        ("2026-02-09", 80),
        ("2026-02-10", 75),
        ("2026-02-12", 70),
        ("2026-02-17", 60),
        ("2026-02-20", 50),
        ("someday", 50),
    ])
    def test_due_date_windows(self, due, expected):
        assert aggregates.task_urgency_score({"dueDate": due}, NOW) == expected

    def test_priority_and_domain(self):
        task = {"priority": "high", "domain": "health", "dueDate": "2026-02-12"}
        assert aggregates.task_urgency_score(task, NOW) == 88
        assert aggregates.task_urgency_score({"priority": "low"}, NOW) == 40

    def test_clamped_to_one_hundred(self):
        task = {"priority": "urgent", "domain": "work", "dueDate": "2026-02-01"}
        assert aggregates.task_urgency_score(task, NOW) == 100

    def test_sorted_highest_first_keeping_fields(self):
        ranked = aggregates.prioritize_tasks(
            [
                {"id": 1, "priority": "low"},
                {"id": 2, "priority": "urgent"},
                {"id": 3},
            ],
            NOW,
        )

        assert [(t["id"], t["aiScore"]) for t in ranked] == [(2, 75), (3, 50), (1, 40)]
        assert ranked[2]["priority"] == "low"


class TestGoals:


    def test_milestone_progress_rounds_half_up(self):
        milestones = [
            Milestone(id="a", title="A", completed=True),
            Milestone(id="b", title="B"),
            Milestone(id="c", title="C"),
        ]
        assert aggregates.milestone_progress(milestones) == 33
        assert aggregates.milestone_progress(milestones[:2]) == 50
        assert aggregates.milestone_progress([]) is None

    def test_goal_stats(self):
        def goal(goal_id, status, progress):
            return GoalRecord(
                id=goal_id, user_id=USER_ID, created_at=NOW,
                title="Goal", category="health", status=status, progress=progress,
            )

        stats = aggregates.goal_stats([
            goal(1, GoalStatus.ACTIVE, 0),
            goal(2, GoalStatus.ACTIVE, 50),
            goal(3, GoalStatus.COMPLETED, 100),
        ])

        assert stats.total == 3
        assert stats.active == 2
        assert stats.completed == 1
        assert stats.in_progress == 1
        assert stats.avg_progress == 50


class TestJournal:

    def test_recent_mood_uses_latest_entries(self):
        entries = [_make_journal(2, days_ago=10, entry_id=1)] + [
            _make_journal(8, days_ago=d, entry_id=d + 2) for d in range(3)
        ]
        assert aggregates.recent_mood(entries, 3) == 8
        assert aggregates.recent_mood([], 7) is None

    def test_journal_stats_window(self):
        entries = [
            _make_journal(6, days_ago=1, entry_id=1, stress=4, tags=["work"]),
            _make_journal(8, days_ago=2, entry_id=2, tags=["work", "rest"]),
            _make_journal(1, days_ago=40, entry_id=3, stress=10),
        ]
        stats = aggregates.journal_stats(entries, 30, NOW)

        assert stats.total_entries == 2
        assert stats.avg_mood == 7.0
        assert stats.avg_stress == 4.0
        assert stats.top_tags[0].tag == "work"
        assert stats.top_tags[0].count == 2


class TestStudyStats:

    def test_groups_by_subject(self):
        def session(session_id, subject, minutes, hours_ago, focus=None):
            return StudySessionRecord(
                id=session_id, user_id=USER_ID, created_at=NOW,
                subject=subject, duration_minutes=minutes, pomodoros=minutes // 25,
                focus_quality=focus, start_time=NOW - timedelta(hours=hours_ago),
            )

        stats = aggregates.study_stats(
            [
                session(1, "Math", 50, 1, focus=4),
                session(2, "Math", 40, 30, focus=5),
                session(3, "Physics", 30, 2),
                session(4, "Physics", 60, 24 * 40),
            ],
            30,
            NOW,
        )

        assert stats.session_count == 3
        assert stats.total_minutes == 120
        assert stats.total_hours == 2.0
        assert stats.by_subject["Math"].minutes == 90
        assert stats.by_subject["Math"].sessions == 2
        assert stats.avg_focus_quality == 4.5
