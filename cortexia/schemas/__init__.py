"""
Pydantic Schemas
================

Typed records, request bodies and derived result types.
"""

from cortexia.schemas.common import CamelModel, UserRecord
from cortexia.schemas.finance import BudgetRecord, TransactionRecord
from cortexia.schemas.goal import GoalRecord, Milestone
from cortexia.schemas.habit import HabitCompletion, HabitRecord
from cortexia.schemas.insight import Insight, LifeStateReport
from cortexia.schemas.journal import JournalEntryRecord
from cortexia.schemas.study import StudySessionRecord
from cortexia.schemas.task import Subtask, TaskRecord
from cortexia.schemas.time_entry import TimeEntryRecord

__all__ = [
    "CamelModel",
    "UserRecord",
    "BudgetRecord",
    "TransactionRecord",
    "GoalRecord",
    "Milestone",
    "HabitCompletion",
    "HabitRecord",
    "Insight",
    "LifeStateReport",
    "JournalEntryRecord",
    "StudySessionRecord",
    "Subtask",
    "TaskRecord",
    "TimeEntryRecord",
]
