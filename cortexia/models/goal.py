"""
Goal Models
===========

SQLAlchemy model and enums for goals with inline milestones.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Date, DateTime, Enum as SQLEnum, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from cortexia.db.base import Base, TimestampMixin, UserOwnedMixin


class GoalCategory(str, Enum):
    """Goal categories."""
    PERSONAL = "personal"
    HEALTH = "health"
    CAREER = "career"
    FINANCIAL = "financial"
    EDUCATION = "education"
    FAMILY = "family"


class GoalType(str, Enum):
    """Kind of goal."""
    OUTCOME = "outcome"
    HABIT = "habit"
    MILESTONE = "milestone"


class GoalPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GoalStatus(str, Enum):
    """Goal lifecycle status."""
    ACTIVE = "active"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class Goal(Base, UserOwnedMixin, TimestampMixin):
    """
    Goal model.

    When milestones are present, ``progress`` mirrors the share of
    completed milestones.
    """

    __tablename__ = "goals"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[GoalCategory] = mapped_column(
        SQLEnum(GoalCategory, name="goalcategory", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    type: Mapped[GoalType] = mapped_column(
        SQLEnum(GoalType, name="goaltype", values_callable=lambda e: [m.value for m in e]),
        default=GoalType.OUTCOME,
        nullable=False,
    )
    priority: Mapped[GoalPriority] = mapped_column(
        SQLEnum(GoalPriority, name="goalpriority", values_callable=lambda e: [m.value for m in e]),
        default=GoalPriority.MEDIUM,
        nullable=False,
    )
    status: Mapped[GoalStatus] = mapped_column(
        SQLEnum(GoalStatus, name="goalstatus", values_callable=lambda e: [m.value for m in e]),
        default=GoalStatus.ACTIVE,
        nullable=False,
    )
    progress: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    target_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    milestones: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
