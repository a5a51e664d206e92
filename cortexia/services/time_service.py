"""
Time Tracking Service
=====================

Business logic for logged time blocks and their daily, weekly and
focus-quality summaries.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from cortexia.models.time_entry import TimeCategory
from cortexia.repositories.store import LifeStore
from cortexia.schemas.stats import FocusBreakdown, TimeStats, WeeklyTimeStats
from cortexia.schemas.time_entry import TimeEntryCreate, TimeEntryRecord
from cortexia.services import aggregates
from cortexia.utils.helpers import as_utc, utc_now

logger = logging.getLogger(__name__)


class TimeService:
    """Service for time entry operations."""

    def __init__(self, store: LifeStore):
        self.store = store

    async def list_entries(
        self,
        user_id: str,
        days: int = 7,
        category: Optional[TimeCategory] = None,
        now: Optional[datetime] = None,
    ) -> list[TimeEntryRecord]:
        """Entries started within the last ``days`` days, most recent first."""
        since = (now or utc_now()) - timedelta(days=days)
        entries = [
            e for e in await self.store.time_entries.list_records(user_id)
            if e.start_time >= since and (category is None or e.category == category)
        ]
        entries.sort(key=lambda e: (e.start_time, e.id), reverse=True)
        return entries

    async def create_entry(
        self,
        user_id: str,
        data: TimeEntryCreate,
        now: Optional[datetime] = None,
    ) -> TimeEntryRecord:
        start = as_utc(data.date) if data.date is not None else (now or utc_now())
        entry = await self.store.time_entries.add(user_id, {
            "activity": data.activity,
            "category": data.category,
            "duration_minutes": data.duration,
            "start_time": start,
            "end_time": start + timedelta(minutes=data.duration),
            "focus_quality": data.focus_quality,
            "interruptions": data.interruptions,
            "notes": data.notes,
            "task_id": data.task_id,
        })
        logger.info(
            "Logged %d min of %s for user %s",
            entry.duration_minutes,
            entry.category.value,
            user_id,
        )
        return entry

    async def delete_entry(self, user_id: str, entry_id: int) -> bool:
        return await self.store.time_entries.delete(user_id, entry_id)

    async def today_stats(self, user_id: str, now: Optional[datetime] = None) -> TimeStats:
        entries = await self.store.time_entries.list_records(user_id)
        return aggregates.time_stats_today(entries, now or utc_now())

    async def weekly_stats(self, user_id: str, now: Optional[datetime] = None) -> WeeklyTimeStats:
        entries = await self.store.time_entries.list_records(user_id)
        return aggregates.time_stats_weekly(entries, now or utc_now())

    async def focus_stats(
        self,
        user_id: str,
        days: int = 7,
        now: Optional[datetime] = None,
    ) -> FocusBreakdown:
        return aggregates.focus_breakdown(await self.list_entries(user_id, days, now=now))
