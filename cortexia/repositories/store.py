"""
Life Store
==========

Bundle of the eight domain repositories handed to services, plus a
read-only snapshot of everything one user owns for the aggregators.
"""

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from cortexia.models import (
    Budget,
    Goal,
    Habit,
    JournalEntry,
    StudySession,
    Task,
    TimeEntry,
    Transaction,
)
from cortexia.repositories.base import InMemoryRepository, Repository
from cortexia.repositories.sql import SqlRepository
from cortexia.schemas.finance import BudgetRecord, TransactionRecord
from cortexia.schemas.goal import GoalRecord
from cortexia.schemas.habit import HabitRecord
from cortexia.schemas.journal import JournalEntryRecord
from cortexia.schemas.study import StudySessionRecord
from cortexia.schemas.task import TaskRecord
from cortexia.schemas.time_entry import TimeEntryRecord


@dataclass(frozen=True)
class LifeSnapshot:
    """Every record of one user at one moment. Input to the aggregators."""

    tasks: list[TaskRecord] = field(default_factory=list)
    habits: list[HabitRecord] = field(default_factory=list)
    transactions: list[TransactionRecord] = field(default_factory=list)
    budgets: list[BudgetRecord] = field(default_factory=list)
    time_entries: list[TimeEntryRecord] = field(default_factory=list)
    goals: list[GoalRecord] = field(default_factory=list)
    journal_entries: list[JournalEntryRecord] = field(default_factory=list)
    study_sessions: list[StudySessionRecord] = field(default_factory=list)


@dataclass
class LifeStore:
    """The domain repositories for one backend."""

    tasks: Repository[TaskRecord]
    habits: Repository[HabitRecord]
    transactions: Repository[TransactionRecord]
    budgets: Repository[BudgetRecord]
    time_entries: Repository[TimeEntryRecord]
    goals: Repository[GoalRecord]
    journal_entries: Repository[JournalEntryRecord]
    study_sessions: Repository[StudySessionRecord]

    @classmethod
    def in_memory(cls) -> "LifeStore":
        """Fresh, empty mock store."""
        return cls(
            tasks=InMemoryRepository(TaskRecord),
            habits=InMemoryRepository(HabitRecord),
            transactions=InMemoryRepository(TransactionRecord),
            budgets=InMemoryRepository(BudgetRecord),
            time_entries=InMemoryRepository(TimeEntryRecord),
            goals=InMemoryRepository(GoalRecord),
            journal_entries=InMemoryRepository(JournalEntryRecord),
            study_sessions=InMemoryRepository(StudySessionRecord),
        )

    @classmethod
    def for_session(cls, session: AsyncSession) -> "LifeStore":
        """Store bound to one database session."""
        return cls(
            tasks=SqlRepository(session, Task, TaskRecord),
            habits=SqlRepository(session, Habit, HabitRecord),
            transactions=SqlRepository(session, Transaction, TransactionRecord),
            budgets=SqlRepository(session, Budget, BudgetRecord),
            time_entries=SqlRepository(session, TimeEntry, TimeEntryRecord),
            goals=SqlRepository(session, Goal, GoalRecord),
            journal_entries=SqlRepository(session, JournalEntry, JournalEntryRecord),
            study_sessions=SqlRepository(session, StudySession, StudySessionRecord),
        )

    async def snapshot(self, user_id: str) -> LifeSnapshot:
        # One query at a time: AsyncSession does not allow concurrent use
        return LifeSnapshot(
            tasks=await self.tasks.list_records(user_id),
            habits=await self.habits.list_records(user_id),
            transactions=await self.transactions.list_records(user_id),
            budgets=await self.budgets.list_records(user_id),
            time_entries=await self.time_entries.list_records(user_id),
            goals=await self.goals.list_records(user_id),
            journal_entries=await self.journal_entries.list_records(user_id),
            study_sessions=await self.study_sessions.list_records(user_id),
        )
