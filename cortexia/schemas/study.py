"""
Study Schemas
=============

Typed study session record and request body.
"""

import datetime as dt
from typing import Optional

from pydantic import Field

from cortexia.models.study import StudyDifficulty
from cortexia.schemas.common import CamelModel, UserRecord


class StudySessionRecord(UserRecord):
    subject: str
    topic: Optional[str] = None
    duration_minutes: int = Field(ge=1)
    pomodoros: int = 0
    difficulty: StudyDifficulty = StudyDifficulty.MEDIUM
    focus_quality: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None
    start_time: dt.datetime


class StudySessionCreate(CamelModel):
    """Request schema for logging a study session."""

    subject: str = Field(min_length=1, max_length=100)
    topic: Optional[str] = Field(None, max_length=200)
    duration: int = Field(ge=1, description="Minutes")
    pomodoros: Optional[int] = Field(None, ge=0, description="Defaults to one per started 25 minutes")
    difficulty: StudyDifficulty = StudyDifficulty.MEDIUM
    focus_quality: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None
    date: Optional[dt.datetime] = None
