"""
Tasks API Endpoints
===================

Handles task CRUD operations, completion and task statistics.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from cortexia.core.errors import ErrorCodes, NotFoundError
from cortexia.dependencies import CurrentUser, Store
from cortexia.models.task import TaskDomain, TaskPriority, TaskStatus
from cortexia.schemas.task import TaskBatchUpdate, TaskCreate, TaskUpdate
from cortexia.services.task_service import TaskService

router = APIRouter()


def _task_not_found() -> NotFoundError:
    return NotFoundError(code=ErrorCodes.TASK_NOT_FOUND, message="Task not found")


@router.get("")
async def list_tasks(
    current_user: CurrentUser,
    store: Store,
    task_status: Optional[TaskStatus] = Query(default=None, alias="status"),
    domain: Optional[TaskDomain] = Query(default=None),
    priority: Optional[TaskPriority] = Query(default=None),
):
    tasks = await TaskService(store).list_tasks(
        current_user.user_id,
        status=task_status,
        domain=domain,
        priority=priority,
    )
    return {"tasks": [t.to_api() for t in tasks]}


@router.get("/stats")
async def get_task_stats(current_user: CurrentUser, store: Store):
    stats = await TaskService(store).get_stats(current_user.user_id)
    return stats.to_api()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    current_user: CurrentUser,
    store: Store,
):
    task = await TaskService(store).create_task(current_user.user_id, data)
    return {"task": task.to_api()}


@router.post("/batch-update")
async def batch_update_tasks(
    data: TaskBatchUpdate,
    current_user: CurrentUser,
    store: Store,
):
    """
    Reorder tasks from a list of ``{id, order}`` pairs.
    """
    await TaskService(store).reorder_tasks(current_user.user_id, data)
    return {"message": "Tasks updated successfully"}


@router.get("/{task_id}")

async def get_task(
    task_id: int,
    current_user: CurrentUser,
    store: Store,
):
    task = await TaskService(store).get_task(current_user.user_id, task_id)
    if task is None:
        raise _task_not_found()

    return {"task": task.to_api()}


@router.patch("/{task_id}")
async def update_task(
    task_id: int,
    data: TaskUpdate,
    current_user: CurrentUser,
    store: Store,
):
    """
    Update a task. Moving it out of ``completed`` clears ``completedAt``.
    """
    task = await TaskService(store).update_task(current_user.user_id, task_id, data)
    if task is None:
        raise _task_not_found()

    return {"task": task.to_api()}


@router.post("/{task_id}/complete")
async def complete_task(
    task_id: int,
    current_user: CurrentUser,
    store: Store,
):
    task = await TaskService(store).complete_task(current_user.user_id, task_id)
    if task is None:
        raise _task_not_found()

    return {"task": task.to_api()}


@router.delete("/{task_id}")
async def delete_task(
    task_id: int,
    current_user: CurrentUser,
    store: Store,
):
    if not await TaskService(store).delete_task(current_user.user_id, task_id):
        raise _task_not_found()

    return {"message": "Task deleted successfully"}
