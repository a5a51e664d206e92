"""
Dashboard Summaries
===================

Compact, JSON-safe views of a user's snapshot used as AI prompt
context, and the local text used when the AI is unavailable
(morning briefing, life score explanation, weekly synthesis).
"""

from datetime import date, datetime, timedelta
from typing import Any

from cortexia.models.goal import GoalStatus
from cortexia.models.task import TaskPriority
from cortexia.repositories.store import LifeSnapshot
from cortexia.schemas.insight import LifeStateReport
from cortexia.services import aggregates
from cortexia.utils.helpers import round_half_up, round_to, start_of_day

ON_TRACK_PROGRESS = 25


def dashboard_summary(snapshot: LifeSnapshot, now: datetime) -> dict[str, Any]:
    """Aggregates across every domain, keyed for a prompt."""
    today = now.date()
    habits = aggregates.active_habits(snapshot.habits)
    mood = aggregates.recent_mood(snapshot.journal_entries)

    return {
        "date": today.isoformat(),
        "tasks": aggregates.task_stats(snapshot.tasks, today).to_api(),
        "habits": {
            **aggregates.habit_stats(habits, today).to_api(),
            "names": [habit.name for habit in habits],
        },
        "finance": {
            "week": aggregates.finance_stats(snapshot.transactions, "week", today).to_api(),
            "month": aggregates.finance_stats(snapshot.transactions, "month", today).to_api(),
            "budgets": [
                status.to_api()
                for status in aggregates.budget_statuses(snapshot.budgets, snapshot.transactions, today)
            ],
        },
        "time": aggregates.time_stats_weekly(snapshot.time_entries, now).to_api(),
        "goals": {
            **aggregates.goal_stats(snapshot.goals).to_api(),
            "active": [
                {"title": goal.title, "progress": goal.progress}
                for goal in snapshot.goals
                if goal.status == GoalStatus.ACTIVE
            ],
        },
        "journal": {
            "entries": len(snapshot.journal_entries),
            "recentMood": round_to(mood, 1) if mood is not None else None,
        },
        "study": aggregates.study_stats(snapshot.study_sessions, 7, now).to_api(),
    }


# =============================================================================
# Morning briefing
# =============================================================================

def briefing_facts(snapshot: LifeSnapshot, today: date) -> dict[str, Any]:
    pending = [task for task in snapshot.tasks if not task.is_completed]
    urgent = [t for t in pending if t.priority in (TaskPriority.HIGH, TaskPriority.URGENT)]
    week_end = today + timedelta(days=7)
    upcoming = [t for t in pending if t.due_date is not None and today <= t.due_date <= week_end]

    yesterday = today - timedelta(days=1)
    yesterday_moods = [
        entry.mood for entry in snapshot.journal_entries
        if entry.created_at.date() == yesterday
    ]

    return {
        "pendingTasks": len(pending),
        "urgentTasks": len(urgent),
        "habitsToday": len(aggregates.active_habits(snapshot.habits)),
        "upcomingDeadlines": len(upcoming),
        "yesterdayMood": (
            round_to(sum(yesterday_moods) / len(yesterday_moods), 1) if yesterday_moods else None
        ),
    }


def fallback_morning_briefing(facts: dict[str, Any]) -> str:
    urgent = f" ({facts['urgentTasks']} urgent)" if facts["urgentTasks"] else ""
    return (
        f"Good morning! You have {facts['pendingTasks']} tasks today{urgent}. "
        f"{facts['habitsToday']} habits to track. Let's make it a great day!"
    )


# =============================================================================
# Life score explanation
# =============================================================================

def score_facts(snapshot: LifeSnapshot, report: LifeStateReport, today: date) -> dict[str, Any]:
    habits = aggregates.active_habits(snapshot.habits)
    tasks = aggregates.task_stats(snapshot.tasks, today)
    budgets = aggregates.budget_statuses(snapshot.budgets, snapshot.transactions, today)
    active_goals = [g for g in snapshot.goals if g.status == GoalStatus.ACTIVE]

    return {
        "score": report.score,
        "tasksCompleted": tasks.completed,
        "tasksPending": tasks.pending,
        "habitsDone": aggregates.habits_completed_on(habits, today),
        "habitsTotal": len(habits),
        "budgetSpent": round(sum(b.spent for b in budgets), 2),
        "budgetLimit": round(sum(b.limit for b in budgets), 2),
        "goalsOnTrack": sum(1 for g in active_goals if g.progress >= ON_TRACK_PROGRESS),
        "goalsTotal": len(active_goals),
    }


def fallback_score_explanation(facts: dict[str, Any]) -> str:
    observations: list[str] = []
    if facts["tasksPending"] > 5:
        observations.append(f"{facts['tasksPending']} pending tasks need attention")
    if facts["habitsDone"] < facts["habitsTotal"] / 2:
        observations.append("Habit completion below 50%")
    if facts["budgetLimit"] and facts["budgetSpent"] > facts["budgetLimit"] * 0.8:
        observations.append("Budget at 80%+ utilization")
    if facts["goalsTotal"] and facts["goalsOnTrack"] >= facts["goalsTotal"] / 2:
        observations.append(f"{facts['goalsOnTrack']}/{facts['goalsTotal']} goals on track")

    if not observations:
        return "Keep up the good work!"
    return "• " + " • ".join(observations)


# =============================================================================
# Weekly synthesis
# =============================================================================

SYNTHESIS_DAYS = 7


def synthesis_period(today: date) -> tuple[date, date]:
    return today - timedelta(days=SYNTHESIS_DAYS), today


def synthesis_facts(snapshot: LifeSnapshot, now: datetime) -> dict[str, Any]:
    """Totals for the last seven days; pending tasks are counted as of now."""
    start, today = synthesis_period(now.date())
    since = start_of_day(start)

    completed = aggregates.completed_between(snapshot.tasks, since, now)
    pending = sum(1 for task in snapshot.tasks if not task.is_completed)
    check_ins = sum(
        1
        for habit in aggregates.active_habits(snapshot.habits)
        for completion in habit.completions
        if completion.completed and start <= completion.date <= today
    )
    minutes = sum(
        entry.duration_minutes for entry in snapshot.time_entries if entry.start_time >= since
    )
    spent = sum(
        t.amount for t in aggregates.transactions_since(snapshot.transactions, start) if t.is_expense
    )
    moods = [entry.mood for entry in snapshot.journal_entries if entry.created_at >= since]

    return {
        "tasksCompleted": completed,
        "tasksPending": pending,
        "tasksTotal": completed + pending,
        "habitCheckIns": check_ins,
        "timeMinutes": minutes,
        "totalSpent": round(spent, 2),
        "activeGoals": sum(1 for g in snapshot.goals if g.status == GoalStatus.ACTIVE),
        "journalEntries": len(moods),
        "averageMood": round_to(sum(moods) / len(moods), 1) if moods else None,
    }


def fallback_weekly_synthesis(facts: dict[str, Any]) -> str:
    hours = round_half_up(facts["timeMinutes"] / 60)
    return (
        "## Weekly Summary\n"
        "\n"
        "### Overview\n"
        f"This week you completed **{facts['tasksCompleted']} tasks** and logged "
        f"**{hours} hours** of focused work.\n"
        "\n"
        "### Key Highlights\n"
        f"- **Tasks:** {facts['tasksCompleted']} completed out of {facts['tasksTotal']} total\n"
        f"- **Habits:** {facts['habitCheckIns']} check-ins\n"
        f"- **Spending:** ${facts['totalSpent']:.2f} in expenses\n"
        f"- **Goals:** {facts['activeGoals']} active goals\n"
        "\n"
        "### Recommendations\n"
        "1. Focus on completing remaining tasks\n"
        "2. Maintain habit consistency\n"
        "3. Review budget allocations"
    )
