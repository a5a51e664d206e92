"""
Time Tracking Models
====================

SQLAlchemy model and enums for logged time entries.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Enum as SQLEnum, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cortexia.db.base import Base, TimestampMixin, UserOwnedMixin


class TimeCategory(str, Enum):
    """Time entry categories."""
    WORK = "work"
    STUDY = "study"
    HEALTH = "health"
    PERSONAL = "personal"
    LEISURE = "leisure"


class FocusQuality(str, Enum):
    """Self-reported focus quality of a session."""
    DEEP = "deep"
    MODERATE = "moderate"
    SHALLOW = "shallow"


class TimeEntry(Base, UserOwnedMixin, TimestampMixin):
    """
    Time entry model.

    ``end_time`` is always ``start_time + duration_minutes``.
    """

    __tablename__ = "time_entries"

    activity: Mapped[str] = mapped_column(String(500), nullable=False)
    category: Mapped[TimeCategory] = mapped_column(
        SQLEnum(TimeCategory, name="timecategory", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    focus_quality: Mapped[FocusQuality] = mapped_column(
        SQLEnum(FocusQuality, name="focusquality", values_callable=lambda e: [m.value for m in e]),
        default=FocusQuality.MODERATE,
        nullable=False,
    )
    interruptions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    task_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        Index("idx_time_entries_user_start", "user_id", "start_time"),
    )
