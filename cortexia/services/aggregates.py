"""
Per-Domain Aggregates
=====================

Pure functions that reduce record collections to statistics:

- Task counts (pending, overdue, completed today) and urgency ranking
- Habit streaks and daily completion
- Finance totals per period and budget consumption
- Daily and weekly time tracking totals, focus quality split
- Goal, journal and study summaries

Every function takes an explicit ``today`` or ``now`` and recomputes
from scratch. Empty inputs produce zero-valued results, never errors.
"""

import math
from collections import Counter, defaultdict
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Literal, Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from cortexia.models.finance import TransactionType
from cortexia.models.goal import GoalStatus
from cortexia.models.task import TaskDomain, TaskPriority, TaskStatus
from cortexia.models.time_entry import FocusQuality
from cortexia.schemas.finance import BudgetRecord, TransactionRecord
from cortexia.schemas.goal import GoalRecord, Milestone
from cortexia.schemas.habit import HabitRecord
from cortexia.schemas.journal import JournalEntryRecord
from cortexia.schemas.stats import (
    BudgetStatus,
    FinanceStats,
    FocusBreakdown,
    FocusShare,
    GoalStats,
    HabitStats,
    JournalStats,
    StudyStats,
    SubjectStats,
    TagCount,
    TaskStats,
    TimeStats,
    WeeklyTimeStats,
)
from cortexia.schemas.study import StudySessionRecord
from cortexia.schemas.task import TaskRecord
from cortexia.schemas.time_entry import TimeEntryRecord
from cortexia.utils.helpers import (
    as_utc,
    round_half_up,
    round_to,
    start_of_day,
    start_of_month,
    start_of_week,
)

Period = Literal["week", "month"]


# =============================================================================
# Tasks
# =============================================================================

def task_stats(tasks: Iterable[TaskRecord], today: date) -> TaskStats:
    stats = TaskStats()
    for task in tasks:
        stats.total += 1
        if task.is_completed:
            stats.completed += 1
            if task.completed_at is not None and task.completed_at.date() == today:
                stats.completed_today += 1
            continue

        stats.pending += 1
        if task.due_date is not None and task.due_date < today:
            stats.overdue += 1
        if task.priority in (TaskPriority.HIGH, TaskPriority.URGENT):
            stats.high_priority += 1
    return stats


def completed_between(
    tasks: Iterable[TaskRecord],
    start: Optional[datetime],
    end: datetime,
) -> int:
    """
    Count tasks completed in ``(start, end]``.

    ``start=None`` counts every completion up to ``end``.
    """
    count = 0
    for task in tasks:
        if task.status != TaskStatus.COMPLETED or task.completed_at is None:
            continue
        if task.completed_at > end:
            continue
        if start is None or task.completed_at > start:
            count += 1
    return count


_DUE_DATE = TypeAdapter(datetime)

_PRIORITY_WEIGHT = {
    TaskPriority.URGENT.value: 25,
    TaskPriority.HIGH.value: 15,
    TaskPriority.LOW.value: -10,
}

_DOMAIN_WEIGHT = {
    TaskDomain.WORK.value: 5,
    TaskDomain.HEALTH.value: 3,
}


def _parse_due(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        return as_utc(_DUE_DATE.validate_python(value))
    except PydanticValidationError:
        return None


def task_urgency_score(task: dict[str, Any], now: datetime) -> int:
    """
    Score a client supplied task from 0 to 100.

    Starts at 50 and adds for nearness of ``dueDate`` (overdue +30,
    today +25, within 2 days +20, within a week +10), for ``priority``
    and for the ``work`` and ``health`` domains. Days until due round up.
    """
    score = 50

    due = _parse_due(task.get("dueDate"))
    if due is not None:
        days_until_due = math.ceil((due - now).total_seconds() / 86400)
        if days_until_due < 0:
            score += 30
        elif days_until_due == 0:
            score += 25
        elif days_until_due <= 2:
            score += 20
        elif days_until_due <= 7:
            score += 10

    score += _PRIORITY_WEIGHT.get(str(task.get("priority")), 0)
    score += _DOMAIN_WEIGHT.get(str(task.get("domain")), 0)
    return max(0, min(100, score))


def prioritize_tasks(tasks: Iterable[dict[str, Any]], now: datetime) -> list[dict[str, Any]]:
    """Copy each task with an ``aiScore`` and sort highest first; ties keep input order."""
    scored = [{**task, "aiScore": task_urgency_score(task, now)} for task in tasks]
    scored.sort(key=lambda task: task["aiScore"], reverse=True)
    return scored



# =============================================================================
# Habits
# =============================================================================

def active_habits(habits: Iterable[HabitRecord]) -> list[HabitRecord]:
    return [habit for habit in habits if habit.is_active]


def habit_streak(habit: HabitRecord, today: date) -> int:
    """
    Consecutive completed days ending today, or ending yesterday when
    today is not completed yet.

    Returns 0 when neither today nor yesterday is completed.
    """
    done = {c.date for c in habit.completions if c.completed}

    day = today if today in done else today - timedelta(days=1)
    streak = 0
    while day in done:
        streak += 1
        day -= timedelta(days=1)
    return streak


def habits_completed_on(habits: Iterable[HabitRecord], day: date) -> int:
    return sum(1 for habit in habits if habit.completed_on(day))


def average_streak(habits: list[HabitRecord], today: date) -> float:
    if not habits:
        return 0.0
    return sum(habit_streak(habit, today) for habit in habits) / len(habits)


def habit_stats(habits: list[HabitRecord], today: date) -> HabitStats:
    if not habits:
        return HabitStats()

    streaks = [habit_streak(habit, today) for habit in habits]
    return HabitStats(
        total=len(habits),
        completed_today=habits_completed_on(habits, today),
        avg_streak=round_half_up(sum(streaks) / len(streaks)),
        longest_streak=max(streaks),
    )


# =============================================================================
# Finance
# =============================================================================

def period_start(period: Period, today: date) -> date:
    """
    First day of a finance period.

    ``week`` starts 6 days before today; ``month`` starts on the first
    of the current month. Periods are open-ended, so a transaction
    dated after today still counts.
    """
    if period == "week":
        return today - timedelta(days=6)
    if period == "month":
        return start_of_month(today)
    raise ValueError(f"Unknown period: {period!r}")


def transactions_since(
    transactions: Iterable[TransactionRecord],
    start: date,
) -> list[TransactionRecord]:
    return [t for t in transactions if t.date >= start]


def finance_stats(
    transactions: Iterable[TransactionRecord],
    period: Period,
    today: date,
) -> FinanceStats:
    window = transactions_since(transactions, period_start(period, today))

    income = 0.0
    expenses = 0.0
    by_category: dict[str, float] = defaultdict(float)
    for transaction in window:
        if transaction.type == TransactionType.INCOME:
            income += transaction.amount
        else:
            expenses += transaction.amount
            by_category[transaction.category] += transaction.amount

    income = round(income, 2)
    expenses = round(expenses, 2)
    return FinanceStats(
        income=income,
        expenses=expenses,
        balance=round(income - expenses, 2),
        by_category={category: round(total, 2) for category, total in by_category.items()},
        transaction_count=len(window),
    )


def savings_rate(stats: FinanceStats) -> float:
    """Percent of income kept. 0 when there is no income."""
    if stats.income <= 0:
        return 0.0
    return (stats.income - stats.expenses) / stats.income * 100


def budget_statuses(
    budgets: Iterable[BudgetRecord],
    transactions: list[TransactionRecord],
    today: date,
) -> list[BudgetStatus]:
    """
    Spending against each budget for the current month.

    ``percentage`` is not clamped; above 100 means over budget.
    """
    start = period_start("month", today)
    spent_by_category: dict[str, float] = defaultdict(float)
    for transaction in transactions_since(transactions, start):
        if transaction.is_expense:
            spent_by_category[transaction.category] += transaction.amount

    statuses = []
    for budget in budgets:
        spent = round(spent_by_category.get(budget.category, 0.0), 2)
        statuses.append(
            BudgetStatus(
                id=budget.id,
                category=budget.category,
                limit=budget.limit,
                period=budget.period.value,
                spent=spent,
                percentage=round_half_up(spent / budget.limit * 100),
                remaining=round(budget.limit - spent, 2),
            )
        )
    return statuses


def weekly_spending(transactions: Iterable[TransactionRecord], today: date) -> float:
    return finance_stats(transactions, "week", today).expenses


# =============================================================================
# Time tracking
# =============================================================================

def _entries_since(entries: Iterable[TimeEntryRecord], start: datetime) -> list[TimeEntryRecord]:
    return [entry for entry in entries if entry.start_time >= start]


def _minutes_by_category(entries: Iterable[TimeEntryRecord]) -> dict[str, int]:
    totals: dict[str, int] = defaultdict(int)
    for entry in entries:
        totals[entry.category.value] += entry.duration_minutes
    return dict(totals)


def _deep_minutes(entries: Iterable[TimeEntryRecord]) -> int:
    return sum(e.duration_minutes for e in entries if e.focus_quality == FocusQuality.DEEP)


def time_stats_today(entries: Iterable[TimeEntryRecord], now: datetime) -> TimeStats:
    day_start = start_of_day(now.date())
    day_end = day_start + timedelta(days=1)
    todays = [e for e in entries if day_start <= e.start_time < day_end]

    return TimeStats(
        total_minutes=sum(e.duration_minutes for e in todays),
        deep_focus_minutes=_deep_minutes(todays),
        total_interruptions=sum(e.interruptions for e in todays),
        entries=len(todays),
        by_category=_minutes_by_category(todays),
    )


def time_stats_weekly(entries: Iterable[TimeEntryRecord], now: datetime) -> WeeklyTimeStats:
    """
    Totals since Monday 00:00 UTC.

    ``avg_daily_minutes`` always divides by 7, however many days have
    entries, so weeks compare against a full week.
    """
    week = _entries_since(entries, start_of_day(start_of_week(now.date())))
    total = sum(e.duration_minutes for e in week)

    return WeeklyTimeStats(
        total_minutes=total,
        deep_focus_minutes=_deep_minutes(week),
        entries=len(week),
        by_category=_minutes_by_category(week),
        avg_daily_minutes=round_half_up(total / 7),
    )


def focus_breakdown(entries: Iterable[TimeEntryRecord]) -> FocusBreakdown:
    minutes = {quality: 0 for quality in FocusQuality}
    for entry in entries:
        minutes[entry.focus_quality] += entry.duration_minutes
    total = sum(minutes.values())

    def share(quality: FocusQuality) -> FocusShare:
        if total == 0:
            return FocusShare()
        return FocusShare(
            hours=round_to(minutes[quality] / 60, 1),
            percentage=round_half_up(minutes[quality] / total * 100),
        )

    return FocusBreakdown(
        deep=share(FocusQuality.DEEP),
        moderate=share(FocusQuality.MODERATE),
        shallow=share(FocusQuality.SHALLOW),
    )


# =============================================================================
# Goals
# =============================================================================

def milestone_progress(milestones: list[Milestone]) -> Optional[int]:
    """Percent of completed milestones, or None when there are none."""
    if not milestones:
        return None
    done = sum(1 for m in milestones if m.completed)
    return round_half_up(done / len(milestones) * 100)


def goal_stats(goals: list[GoalRecord]) -> GoalStats:
    if not goals:
        return GoalStats()

    return GoalStats(
        total=len(goals),
        active=sum(1 for g in goals if g.status == GoalStatus.ACTIVE),
        completed=sum(1 for g in goals if g.status == GoalStatus.COMPLETED),
        in_progress=sum(
            1 for g in goals
            if g.status == GoalStatus.ACTIVE and 0 < g.progress < 100
        ),
        avg_progress=round_half_up(sum(g.progress for g in goals) / len(goals)),
    )


# =============================================================================
# Journal
# =============================================================================

def most_recent_entries(entries: Iterable[JournalEntryRecord], count: int) -> list[JournalEntryRecord]:
    ordered = sorted(entries, key=lambda e: (e.created_at, e.id), reverse=True)
    return ordered[:count]


def recent_mood(entries: Iterable[JournalEntryRecord], count: int = 7) -> Optional[float]:
    """Mean mood of the ``count`` most recent entries, or None without entries."""
    recent = most_recent_entries(entries, count)
    if not recent:
        return None
    return sum(e.mood for e in recent) / len(recent)


def journal_stats(
    entries: Iterable[JournalEntryRecord],
    days: int,
    now: datetime,
) -> JournalStats:
    window = [e for e in entries if e.created_at >= now - timedelta(days=days)]
    if not window:
        return JournalStats()

    stress_values = [e.stress for e in window if e.stress is not None]
    tags = Counter(tag for entry in window for tag in entry.tags)

    return JournalStats(
        total_entries=len(window),
        avg_mood=round_to(sum(e.mood for e in window) / len(window), 1),
        avg_energy=round_to(sum(e.energy for e in window) / len(window), 1),
        avg_stress=round_to(sum(stress_values) / len(stress_values), 1) if stress_values else 0.0,
        top_tags=[TagCount(tag=tag, count=count) for tag, count in tags.most_common(5)],
    )


# =============================================================================
# Study
# =============================================================================

def study_stats(
    sessions: Iterable[StudySessionRecord],
    days: int,
    now: datetime,
) -> StudyStats:
    window = [s for s in sessions if s.start_time >= now - timedelta(days=days)]
    if not window:
        return StudyStats()

    by_subject: dict[str, SubjectStats] = {}
    for session in window:
        subject = by_subject.setdefault(session.subject, SubjectStats())
        subject.minutes += session.duration_minutes
        subject.sessions += 1

    total_minutes = sum(s.duration_minutes for s in window)
    focus_values = [s.focus_quality for s in window if s.focus_quality is not None]

    return StudyStats(
        total_minutes=total_minutes,
        total_hours=round_to(total_minutes / 60, 1),
        total_pomodoros=sum(s.pomodoros for s in window),
        session_count=len(window),
        avg_focus_quality=round_to(sum(focus_values) / len(focus_values), 1) if focus_values else None,
        by_subject=by_subject,
    )
