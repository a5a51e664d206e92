"""
Study Models
============

SQLAlchemy model for study sessions.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Enum as SQLEnum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cortexia.db.base import Base, TimestampMixin, UserOwnedMixin


class StudyDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class StudySession(Base, UserOwnedMixin, TimestampMixin):
    """Study session model."""

    __tablename__ = "study_sessions"

    subject: Mapped[str] = mapped_column(String(100), nullable=False)
    topic: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    pomodoros: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    difficulty: Mapped[StudyDifficulty] = mapped_column(
        SQLEnum(StudyDifficulty, name="studydifficulty", values_callable=lambda e: [m.value for m in e]),
        default=StudyDifficulty.MEDIUM,
        nullable=False,
    )
    focus_quality: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
