"""
Journal Service
===============

Business logic for journal entries. Entries are written once and can
only be read or deleted afterwards.
"""

import logging
from datetime import datetime
from typing import Optional

from cortexia.repositories.store import LifeStore
from cortexia.schemas.journal import JournalEntryCreate, JournalEntryRecord
from cortexia.schemas.stats import JournalStats
from cortexia.services import aggregates
from cortexia.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class JournalService:
    """Service for journal operations."""

    def __init__(self, store: LifeStore):
        self.store = store

    async def list_entries(self, user_id: str, limit: Optional[int] = None) -> list[JournalEntryRecord]:
        entries = await self.store.journal_entries.list_records(user_id)
        return entries[:limit] if limit is not None else entries

    async def get_entry(self, user_id: str, entry_id: int) -> Optional[JournalEntryRecord]:
        return await self.store.journal_entries.get(user_id, entry_id)

    async def create_entry(self, user_id: str, data: JournalEntryCreate) -> JournalEntryRecord:
        entry = await self.store.journal_entries.add(user_id, data.model_dump())
        logger.info("Created journal entry %s for user %s", entry.id, user_id)
        return entry

    async def delete_entry(self, user_id: str, entry_id: int) -> bool:
        return await self.store.journal_entries.delete(user_id, entry_id)

    async def get_stats(
        self,
        user_id: str,
        days: int = 30,
        now: Optional[datetime] = None,
    ) -> JournalStats:
        entries = await self.store.journal_entries.list_records(user_id)
        return aggregates.journal_stats(entries, days, now or utc_now())
