"""
Time Tracking Schemas
=====================

Typed time entry record and request body.
"""

import datetime as dt
from typing import Optional

from pydantic import Field

from cortexia.models.time_entry import FocusQuality, TimeCategory
from cortexia.schemas.common import CamelModel, UserRecord


class TimeEntryRecord(UserRecord):
    """A logged block of time. ``end_time`` is start plus duration."""

    activity: str
    category: TimeCategory
    duration_minutes: int = Field(ge=1)
    start_time: dt.datetime
    end_time: dt.datetime
    focus_quality: FocusQuality = FocusQuality.MODERATE
    interruptions: int = 0
    notes: Optional[str] = None
    task_id: Optional[int] = None


class TimeEntryCreate(CamelModel):
    """
    Request schema for logging time.

    ``date`` is the start time of the block and defaults to now.
    """

    activity: str = Field(min_length=1, max_length=500)
    category: TimeCategory
    duration: int = Field(ge=1, description="Minutes")
    focus_quality: FocusQuality = FocusQuality.MODERATE
    interruptions: int = Field(default=0, ge=0)
    notes: Optional[str] = None
    task_id: Optional[int] = None
    date: Optional[dt.datetime] = None
