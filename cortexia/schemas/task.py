"""
Task Schemas
============

Typed task record and request bodies for task endpoints.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from cortexia.models.task import TaskDomain, TaskPriority, TaskStatus
from cortexia.schemas.common import CamelModel, UserRecord


class Subtask(CamelModel):
    id: str
    title: str
    completed: bool = False


class TaskRecord(UserRecord):
    """A stored task."""

    title: str
    description: Optional[str] = None
    domain: TaskDomain = TaskDomain.PERSONAL
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    due_date: Optional[date] = None
    completed_at: Optional[datetime] = None
    subtasks: list[Subtask] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    order: int = 0

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


# =============================================================================
# Request Schemas
# =============================================================================

class SubtaskCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)


class TaskCreate(CamelModel):
    """Request schema for creating a task."""

    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    domain: TaskDomain = TaskDomain.PERSONAL
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    due_date: Optional[date] = None
    subtasks: list[SubtaskCreate] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    order: int = 0


class TaskUpdate(CamelModel):
    """Request schema for updating a task. Only fields sent are applied."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    domain: Optional[TaskDomain] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[date] = None
    subtasks: Optional[list[Subtask]] = None
    tags: Optional[list[str]] = None
    order: Optional[int] = None


class TaskOrderUpdate(CamelModel):
    id: int
    order: int


class TaskBatchUpdate(CamelModel):
    """Request schema for reordering several tasks at once."""

    updates: list[TaskOrderUpdate] = Field(default_factory=list)
