"""
Aggregate Schemas
=================

Result types of the per-domain aggregators. These are derived values,
recomputed on every request and never stored.
"""

from typing import Optional

from pydantic import Field

from cortexia.schemas.common import CamelModel


class TaskStats(CamelModel):
    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    completed_today: int = 0
    high_priority: int = 0


class HabitStats(CamelModel):
    total: int = 0
    completed_today: int = 0
    avg_streak: int = 0
    longest_streak: int = 0


class FinanceStats(CamelModel):
    income: float = 0.0
    expenses: float = 0.0
    balance: float = 0.0
    by_category: dict[str, float] = Field(default_factory=dict)
    transaction_count: int = 0


class BudgetStatus(CamelModel):
    """A budget with its spending for the current month."""

    id: int
    category: str
    limit: float
    period: str
    spent: float
    percentage: int
    remaining: float


class TimeStats(CamelModel):
    total_minutes: int = 0
    deep_focus_minutes: int = 0
    total_interruptions: int = 0
    entries: int = 0
    by_category: dict[str, int] = Field(default_factory=dict)


class WeeklyTimeStats(CamelModel):
    total_minutes: int = 0
    deep_focus_minutes: int = 0
    entries: int = 0
    by_category: dict[str, int] = Field(default_factory=dict)
    avg_daily_minutes: int = 0


class FocusShare(CamelModel):
    hours: float = 0.0
    percentage: int = 0


class FocusBreakdown(CamelModel):
    deep: FocusShare = Field(default_factory=FocusShare)
    moderate: FocusShare = Field(default_factory=FocusShare)
    shallow: FocusShare = Field(default_factory=FocusShare)


class GoalStats(CamelModel):
    total: int = 0
    active: int = 0
    completed: int = 0
    in_progress: int = 0
    avg_progress: int = 0


class TagCount(CamelModel):
    tag: str
    count: int


class JournalStats(CamelModel):
    total_entries: int = 0
    avg_mood: float = 0.0
    avg_energy: float = 0.0
    avg_stress: float = 0.0
    top_tags: list[TagCount] = Field(default_factory=list)


class SubjectStats(CamelModel):
    minutes: int = 0
    sessions: int = 0


class StudyStats(CamelModel):
    total_minutes: int = 0
    total_hours: float = 0.0
    total_pomodoros: int = 0
    session_count: int = 0
    avg_focus_quality: Optional[float] = None
    by_subject: dict[str, SubjectStats] = Field(default_factory=dict)
