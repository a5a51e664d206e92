"""
Habit Service
=============

Business logic for habits and their daily check-ins.

A habit keeps at most one completion per calendar day. Checking in on
a day that already has a completion updates it in place.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from cortexia.repositories.store import LifeStore
from cortexia.schemas.habit import (
    HabitCheckIn,
    HabitCompletion,
    HabitCreate,
    HabitRecord,
    HabitUpdate,
)
from cortexia.schemas.stats import HabitStats
from cortexia.services import aggregates
from cortexia.utils.helpers import utc_today

logger = logging.getLogger(__name__)


class HabitService:
    """Service for habit operations."""

    def __init__(self, store: LifeStore):
        self.store = store

    async def list_habits(self, user_id: str, include_inactive: bool = False) -> list[HabitRecord]:
        habits = await self.store.habits.list_records(user_id)
        return habits if include_inactive else aggregates.active_habits(habits)

    async def get_habit(self, user_id: str, habit_id: int) -> Optional[HabitRecord]:
        return await self.store.habits.get(user_id, habit_id)

    async def create_habit(self, user_id: str, data: HabitCreate) -> HabitRecord:
        habit = await self.store.habits.add(user_id, data.model_dump())
        logger.info("Created habit %s for user %s", habit.id, user_id)
        return habit

    async def update_habit(
        self,
        user_id: str,
        habit_id: int,
        data: HabitUpdate,
    ) -> Optional[HabitRecord]:
        habit = await self.store.habits.get(user_id, habit_id)
        if habit is None:
            return None

        habit = HabitRecord.model_validate(
            {**habit.model_dump(), **data.model_dump(exclude_unset=True)}
        )
        return await self.store.habits.save(habit)

    async def delete_habit(self, user_id: str, habit_id: int) -> bool:
        return await self.store.habits.delete(user_id, habit_id)

    async def check_in(
        self,
        user_id: str,
        habit_id: int,
        data: HabitCheckIn,
        today: Optional[date] = None,
    ) -> Optional[tuple[HabitRecord, int]]:
        """
        Record the completion state of one day.

        Returns:
            The updated habit and its current streak, or None if the
            habit does not exist
        """
        today = today or utc_today()
        habit = await self.store.habits.get(user_id, habit_id)
        if habit is None:
            return None

        day = data.date or today
        existing = habit.completion_on(day)
        if data.completed is not None:
            completed = data.completed
        else:
            completed = not (existing is not None and existing.completed)

        if existing is not None:
            existing.completed = completed
        else:
            habit.completions.append(HabitCompletion(date=day, completed=completed))
        habit.completions.sort(key=lambda c: c.date)

        saved = await self.store.habits.save(habit)
        if saved is None:
            return None
        return saved, aggregates.habit_streak(saved, today)

    async def completion_log(
        self,
        user_id: str,
        habit_id: int,
        days: int = 90,
        today: Optional[date] = None,
    ) -> Optional[list[HabitCompletion]]:
        """
        Completions dated within the last ``days`` days, newest first.

        Returns None if the habit does not exist.
        """
        habit = await self.store.habits.get(user_id, habit_id)
        if habit is None:
            return None

        since = (today or utc_today()) - timedelta(days=days)
        log = [c for c in habit.completions if c.date >= since]
        log.sort(key=lambda c: c.date, reverse=True)
        return log

    async def get_stats(self, user_id: str, today: Optional[date] = None) -> HabitStats:
        habits = await self.list_habits(user_id)
        return aggregates.habit_stats(habits, today or utc_today())
