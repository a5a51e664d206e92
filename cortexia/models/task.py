"""
Task Models
===========

SQLAlchemy model and enums for tasks.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Date, DateTime, Enum as SQLEnum, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from cortexia.db.base import Base, TimestampMixin, UserOwnedMixin


# =============================================================================
# Enums
# =============================================================================

class TaskDomain(str, Enum):
    """Life domain a task belongs to."""
    WORK = "work"
    STUDY = "study"
    HEALTH = "health"
    FINANCE = "finance"
    PERSONAL = "personal"


class TaskStatus(str, Enum):
    """Task completion status."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority level."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# =============================================================================
# Models
# =============================================================================

class Task(Base, UserOwnedMixin, TimestampMixin):
    """
    Task model.

    ``completed_at`` is set exactly when ``status`` is completed.
    Subtasks are stored inline as a JSON list of ``{id, title, completed}``.
    """

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    domain: Mapped[TaskDomain] = mapped_column(
        SQLEnum(TaskDomain, name="taskdomain", values_callable=lambda e: [m.value for m in e]),
        default=TaskDomain.PERSONAL,
        nullable=False,
    )
    priority: Mapped[TaskPriority] = mapped_column(
        SQLEnum(TaskPriority, name="taskpriority", values_callable=lambda e: [m.value for m in e]),
        default=TaskPriority.MEDIUM,
        nullable=False,
    )
    status: Mapped[TaskStatus] = mapped_column(
        SQLEnum(TaskStatus, name="taskstatus", values_callable=lambda e: [m.value for m in e]),
        default=TaskStatus.TODO,
        nullable=False,
    )
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    subtasks: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
    tags: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.title[:30]}>"
