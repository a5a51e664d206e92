"""
Study Service
=============

Business logic for study sessions.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from cortexia.repositories.store import LifeStore
from cortexia.schemas.stats import StudyStats
from cortexia.schemas.study import StudySessionCreate, StudySessionRecord
from cortexia.services import aggregates
from cortexia.utils.helpers import as_utc, utc_now

logger = logging.getLogger(__name__)

POMODORO_MINUTES = 25


class StudyService:
    """Service for study session operations."""

    def __init__(self, store: LifeStore):
        self.store = store

    async def list_sessions(
        self,
        user_id: str,
        days: Optional[int] = None,
        subject: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[StudySessionRecord]:
        since = (now or utc_now()) - timedelta(days=days) if days is not None else None
        sessions = [
            s for s in await self.store.study_sessions.list_records(user_id)
            if (since is None or s.start_time >= since)
            and (subject is None or s.subject == subject)
        ]
        sessions.sort(key=lambda s: (s.start_time, s.id), reverse=True)
        return sessions

    async def create_session(
        self,
        user_id: str,
        data: StudySessionCreate,
        now: Optional[datetime] = None,
    ) -> StudySessionRecord:
        """Log a session. Pomodoros default to one per started 25 minutes."""
        session = await self.store.study_sessions.add(user_id, {
            "subject": data.subject,
            "topic": data.topic,
            "duration_minutes": data.duration,
            "pomodoros": (
                data.pomodoros
                if data.pomodoros is not None
                else math.ceil(data.duration / POMODORO_MINUTES)
            ),
            "difficulty": data.difficulty,
            "focus_quality": data.focus_quality,
            "notes": data.notes,
            "start_time": as_utc(data.date) if data.date is not None else (now or utc_now()),
        })
        logger.info("Logged %d min of %s for user %s", session.duration_minutes, session.subject, user_id)
        return session

    async def delete_session(self, user_id: str, session_id: int) -> bool:
        return await self.store.study_sessions.delete(user_id, session_id)

    async def get_stats(
        self,
        user_id: str,
        days: int = 30,
        now: Optional[datetime] = None,
    ) -> StudyStats:
        sessions = await self.store.study_sessions.list_records(user_id)
        return aggregates.study_stats(sessions, days, now or utc_now())
