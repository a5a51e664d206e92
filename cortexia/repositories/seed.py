"""
Demo Data
=========

Seeds an in-memory store with a small, realistic data set for the
development user so the dashboard has something to show without a
database. Dates are relative to ``now``.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from cortexia.repositories.store import LifeStore
from cortexia.utils.helpers import generate_id, utc_now

logger = logging.getLogger(__name__)


def _milestones(titles: list[str], completed: int, now: datetime) -> list[dict]:
    return [
        {
            "id": generate_id(),
            "title": title,
            "completed": index < completed,
            "completed_at": now - timedelta(days=7 * (completed - index)) if index < completed else None,
        }
        for index, title in enumerate(titles)
    ]


def _completions(today, days: int, *, include_today: bool) -> list[dict]:
    start = 0 if include_today else 1
    return [
        {"date": today - timedelta(days=offset), "completed": True}
        for offset in range(start, start + days)
    ]


async def seed_demo_data(store: LifeStore, user_id: str, now: Optional[datetime] = None) -> None:
    """Populate ``store`` for ``user_id``."""
    now = now or utc_now()
    today = now.date()

    # Tasks
    await store.tasks.add(user_id, {
        "title": "Complete project proposal",
        "description": "Write and submit Q1 project proposal",
        "status": "in_progress",
        "priority": "high",
        "domain": "work",
        "due_date": today + timedelta(days=2),
        "tags": ["important", "q1"],
    })
    await store.tasks.add(user_id, {
        "title": "Call dentist",
        "description": "Schedule 6-month checkup",
        "priority": "medium",
        "domain": "health",
    })
    await store.tasks.add(user_id, {
        "title": "Review pull requests",
        "description": "Code review for team members",
        "priority": "high",
        "domain": "work",
        "tags": ["code-review"],
    })

    # Habits
    await store.habits.add(user_id, {
        "name": "Morning Gym",
        "description": "1 hour workout at gym",
        "category": "fitness",
        "color": "#F97316",
        "completions": _completions(today, 12, include_today=False),
    })
    await store.habits.add(user_id, {
        "name": "Meditation",
        "description": "10 minutes mindfulness practice",
        "category": "mindfulness",
        "color": "#8B5CF6",
        "completions": _completions(today, 5, include_today=True),
    })
    await store.habits.add(user_id, {
        "name": "Read 10 Pages",
        "description": "Daily reading habit",
        "category": "learning",
        "color": "#10B981",
        "completions": _completions(today, 3, include_today=False),
    })

    # Finance
    for values in (
        {"type": "expense", "amount": 45.50, "category": "food",
         "description": "Grocery shopping", "merchant": "Whole Foods",
         "payment_method": "credit_card", "date": today},
        {"type": "expense", "amount": 120.00, "category": "transport",
         "description": "Monthly transit pass", "payment_method": "debit_card",
         "date": today - timedelta(days=2)},
        {"type": "income", "amount": 5000.00, "category": "salary",
         "description": "Monthly salary", "payment_method": "bank_transfer",
         "date": today - timedelta(days=5)},
        {"type": "expense", "amount": 15.99, "category": "entertainment",
         "description": "Netflix subscription", "merchant": "Netflix",
         "payment_method": "credit_card", "date": today - timedelta(days=7)},
    ):
        await store.transactions.add(user_id, values)

    for category, limit in (("food", 500), ("transport", 200), ("entertainment", 100)):
        await store.budgets.add(user_id, {"category": category, "limit": limit})

    # Time tracking
    for activity, category, minutes, focus, interruptions, hours_ago in (
        ("Project development", "work", 120, "deep", 2, 5),
        ("Email and slack", "work", 45, "shallow", 8, 3),
        ("Reading documentation", "study", 60, "moderate", 1, 2),
    ):
        start = now - timedelta(hours=hours_ago)
        await store.time_entries.add(user_id, {
            "activity": activity,
            "category": category,
            "duration_minutes": minutes,
            "focus_quality": focus,
            "interruptions": interruptions,
            "start_time": start,
            "end_time": start + timedelta(minutes=minutes),
        })

    # Goals (progress mirrors completed milestones)
    await store.goals.add(user_id, {
        "title": "Launch Side Project",
        "description": "Build and ship a small SaaS product",
        "category": "career",
        "type": "milestone",
        "priority": "high",
        "progress": 33,
        "target_date": today + timedelta(days=90),
        "milestones": _milestones(["Validate idea", "Build MVP", "Launch publicly"], 1, now),
    })
    await store.goals.add(user_id, {
        "title": "Run 5K",
        "description": "Run 5 kilometers without stopping",
        "category": "health",
        "type": "outcome",
        "priority": "medium",
        "progress": 20,
        "target_date": today + timedelta(days=60),
        "milestones": _milestones(["Run 1K", "Run 2K", "Run 3K", "Run 4K", "Run 5K"], 1, now),
    })
    await store.goals.add(user_id, {
        "title": "Learn Machine Learning",
        "description": "Complete an ML course and build two projects",
        "category": "education",
        "type": "milestone",
        "priority": "medium",
        "progress": 50,
        "target_date": today + timedelta(days=120),
        "milestones": _milestones(
            ["Finish course", "Linear models", "Neural networks", "Capstone project"], 2, now
        ),
    })

    # Journal
    for days_ago, title, content, mood, energy, stress, focus, tags in (
        (2, "Weekend Reset",
         "Took time to rest and plan the week ahead. Long walk in the park cleared my head.",
         7, 6, 3, 6, ["rest", "planning"]),
        (1, "Challenging but Growth",
         "Deployment pipeline broke and took hours to fix, but I learned a lot about Docker networking.",
         6, 5, 6, 7, ["challenges", "learning", "devops"]),
        (0, "Productive Day",
         "Finished the main feature and got positive feedback from the team. Feeling motivated.",
         8, 8, 3, 9, ["productive", "work", "learning"]),
    ):
        await store.journal_entries.add(user_id, {
            "title": title,
            "content": content,
            "mood": mood,
            "energy": energy,
            "stress": stress,
            "focus": focus,
            "tags": tags,
            "created_at": now - timedelta(days=days_ago),
        })

    # Study
    for subject, topic, minutes, pomodoros, difficulty, focus, hours_ago in (
        ("Machine Learning", "Neural Networks", 90, 3, "hard", 4, 3),
        ("TypeScript", "Advanced Types", 60, 2, "medium", 5, 24),
        ("System Design", "Distributed Systems", 45, 1, "hard", 3, 48),
    ):
        await store.study_sessions.add(user_id, {
            "subject": subject,
            "topic": topic,
            "duration_minutes": minutes,
            "pomodoros": pomodoros,
            "difficulty": difficulty,
            "focus_quality": focus,
            "start_time": now - timedelta(hours=hours_ago),
        })

    logger.info("Seeded demo data for user %s", user_id)
