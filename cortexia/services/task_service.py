"""
Task Service
============

Business logic for task management and completion tracking.
"""

import logging
from datetime import datetime
from typing import Optional

from cortexia.models.task import TaskDomain, TaskPriority, TaskStatus
from cortexia.repositories.store import LifeStore
from cortexia.schemas.stats import TaskStats
from cortexia.schemas.task import TaskBatchUpdate, TaskCreate, TaskRecord, TaskUpdate
from cortexia.services import aggregates
from cortexia.utils.helpers import generate_id, utc_now

logger = logging.getLogger(__name__)


def _sync_completed_at(task: TaskRecord, now: datetime) -> None:
    """Keep ``completed_at`` set exactly while the task is completed."""
    if task.status == TaskStatus.COMPLETED:
        if task.completed_at is None:
            task.completed_at = now
    else:
        task.completed_at = None


class TaskService:
    """Service for task operations."""

    def __init__(self, store: LifeStore):
        self.store = store

    # =========================================================================
    # Core CRUD
    # =========================================================================

    async def list_tasks(
        self,
        user_id: str,
        status: Optional[TaskStatus] = None,
        domain: Optional[TaskDomain] = None,
        priority: Optional[TaskPriority] = None,
    ) -> list[TaskRecord]:
        return [
            task for task in await self.store.tasks.list_records(user_id)
            if (status is None or task.status == status)
            and (domain is None or task.domain == domain)
            and (priority is None or task.priority == priority)
        ]

    async def get_task(self, user_id: str, task_id: int) -> Optional[TaskRecord]:
        return await self.store.tasks.get(user_id, task_id)

    async def create_task(
        self,
        user_id: str,
        data: TaskCreate,
        now: Optional[datetime] = None,
    ) -> TaskRecord:
        now = now or utc_now()
        values = data.model_dump(exclude={"subtasks"})
        values["subtasks"] = [
            {"id": generate_id(), "title": subtask.title, "completed": False}
            for subtask in data.subtasks
        ]
        values["completed_at"] = now if data.status == TaskStatus.COMPLETED else None

        task = await self.store.tasks.add(user_id, values)
        logger.info("Created task %s for user %s", task.id, user_id)
        return task

    async def update_task(
        self,
        user_id: str,
        task_id: int,
        data: TaskUpdate,
        now: Optional[datetime] = None,
    ) -> Optional[TaskRecord]:
        """Apply the fields present in ``data``. Returns None if the task is missing."""
        task = await self.store.tasks.get(user_id, task_id)
        if task is None:
            return None

        task = TaskRecord.model_validate(
            {**task.model_dump(), **data.model_dump(exclude_unset=True)}
        )
        _sync_completed_at(task, now or utc_now())

        return await self.store.tasks.save(task)

    async def complete_task(
        self,
        user_id: str,
        task_id: int,
        now: Optional[datetime] = None,
    ) -> Optional[TaskRecord]:
        task = await self.store.tasks.get(user_id, task_id)
        if task is None:
            return None

        task.status = TaskStatus.COMPLETED
        _sync_completed_at(task, now or utc_now())
        return await self.store.tasks.save(task)

    async def delete_task(self, user_id: str, task_id: int) -> bool:
        return await self.store.tasks.delete(user_id, task_id)

    async def reorder_tasks(self, user_id: str, data: TaskBatchUpdate) -> int:
        """Set ``order`` on each listed task. Unknown ids are skipped; returns the count updated."""
        updated = 0
        for update in data.updates:
            task = await self.store.tasks.get(user_id, update.id)
            if task is None:
                logger.debug("Skipping reorder of missing task %s for user %s", update.id, user_id)
                continue
            task.order = update.order
            await self.store.tasks.save(task)
            updated += 1
        return updated


    # =========================================================================
    # Stats
    # =========================================================================

    async def get_stats(self, user_id: str, now: Optional[datetime] = None) -> TaskStats:
        tasks = await self.store.tasks.list_records(user_id)
        return aggregates.task_stats(tasks, (now or utc_now()).date())
