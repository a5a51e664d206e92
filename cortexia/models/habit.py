"""
Habit Models
============

SQLAlchemy model and enums for habits and their daily completion log.
"""

from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, Enum as SQLEnum, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from cortexia.db.base import Base, TimestampMixin, UserOwnedMixin


class HabitCategory(str, Enum):
    """Habit categories."""
    HEALTH = "health"
    PRODUCTIVITY = "productivity"
    LEARNING = "learning"
    FITNESS = "fitness"
    MINDFULNESS = "mindfulness"
    SOCIAL = "social"


class HabitFrequency(str, Enum):
    """How often a habit is expected."""
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class Habit(Base, UserOwnedMixin, TimestampMixin):
    """
    Habit model.

    ``completions`` holds one ``{date, completed}`` item per calendar day.
    The streak is derived from it on every read and is never stored.
    """

    __tablename__ = "habits"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[HabitCategory] = mapped_column(
        SQLEnum(HabitCategory, name="habitcategory", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    frequency: Mapped[HabitFrequency] = mapped_column(
        SQLEnum(HabitFrequency, name="habitfrequency", values_callable=lambda e: [m.value for m in e]),
        default=HabitFrequency.DAILY,
        nullable=False,
    )
    color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    completions: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
