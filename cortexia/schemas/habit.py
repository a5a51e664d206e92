"""
Habit Schemas
=============

Typed habit record, completion log items and request bodies.
"""

import datetime as dt
from typing import Optional

from pydantic import Field

from cortexia.models.habit import HabitCategory, HabitFrequency
from cortexia.schemas.common import CamelModel, UserRecord


class HabitCompletion(CamelModel):
    """Completion state of a habit for one calendar day."""

    date: dt.date
    completed: bool = True


class HabitRecord(UserRecord):
    """A stored habit with its daily completion log."""

    name: str
    description: Optional[str] = None
    category: HabitCategory
    frequency: HabitFrequency = HabitFrequency.DAILY
    color: Optional[str] = None
    is_active: bool = True
    completions: list[HabitCompletion] = Field(default_factory=list)

    def completion_on(self, day: dt.date) -> Optional[HabitCompletion]:
        for completion in self.completions:
            if completion.date == day:
                return completion
        return None

    def completed_on(self, day: dt.date) -> bool:
        completion = self.completion_on(day)
        return completion is not None and completion.completed


# =============================================================================
# Request Schemas
# =============================================================================

class HabitCreate(CamelModel):
    """Request schema for creating a habit."""

    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    category: HabitCategory
    frequency: HabitFrequency = HabitFrequency.DAILY
    color: Optional[str] = Field(None, max_length=20)


class HabitUpdate(CamelModel):
    """Request schema for updating a habit."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    category: Optional[HabitCategory] = None
    frequency: Optional[HabitFrequency] = None
    color: Optional[str] = Field(None, max_length=20)
    is_active: Optional[bool] = None


class HabitCheckIn(CamelModel):
    """
    Check-in body.

    ``date`` defaults to today. Omitting ``completed`` toggles the day.
    """

    date: Optional[dt.date] = None
    completed: Optional[bool] = None
