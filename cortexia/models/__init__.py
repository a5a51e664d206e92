"""
Database Models
===============

SQLAlchemy ORM models for all database entities.

All models are imported here to ensure they are registered
with SQLAlchemy's metadata for migrations.
"""

from cortexia.models.task import Task, TaskDomain, TaskPriority, TaskStatus
from cortexia.models.habit import Habit, HabitCategory, HabitFrequency
from cortexia.models.finance import Budget, BudgetPeriod, Transaction, TransactionType
from cortexia.models.time_entry import FocusQuality, TimeCategory, TimeEntry
from cortexia.models.goal import Goal, GoalCategory, GoalPriority, GoalStatus, GoalType
from cortexia.models.journal import JournalEntry
from cortexia.models.study import StudyDifficulty, StudySession

__all__ = [
    # Task
    "Task",
    "TaskDomain",
    "TaskPriority",
    "TaskStatus",
    # Habit
    "Habit",
    "HabitCategory",
    "HabitFrequency",
    # Finance
    "Budget",
    "BudgetPeriod",
    "Transaction",
    "TransactionType",
    # Time
    "FocusQuality",
    "TimeCategory",
    "TimeEntry",
    # Goal
    "Goal",
    "GoalCategory",
    "GoalPriority",
    "GoalStatus",
    "GoalType",
    # Journal
    "JournalEntry",
    # Study
    "StudyDifficulty",
    "StudySession",
]
