"""
Goals API Endpoints
===================

Handles goal CRUD operations and milestone completion.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from cortexia.core.errors import ErrorCodes, NotFoundError
from cortexia.dependencies import CurrentUser, Store
from cortexia.models.goal import GoalCategory, GoalStatus
from cortexia.schemas.goal import GoalCreate, GoalUpdate
from cortexia.services.goal_service import GoalService, MilestoneNotFound

router = APIRouter()


def _goal_not_found() -> NotFoundError:
    return NotFoundError(code=ErrorCodes.GOAL_NOT_FOUND, message="Goal not found")


@router.get("")
async def list_goals(
    current_user: CurrentUser,
    store: Store,
    goal_status: Optional[GoalStatus] = Query(default=None, alias="status"),
    category: Optional[GoalCategory] = Query(default=None),
):
    goals = await GoalService(store).list_goals(
        current_user.user_id,
        status=goal_status,
        category=category,
    )
    return {"goals": [g.to_api() for g in goals]}


@router.get("/stats/summary")
async def get_goal_stats(current_user: CurrentUser, store: Store):
    stats = await GoalService(store).get_stats(current_user.user_id)
    return stats.to_api()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_goal(
    data: GoalCreate,
    current_user: CurrentUser,
    store: Store,
):
    goal = await GoalService(store).create_goal(current_user.user_id, data)
    return {"goal": goal.to_api()}


@router.get("/{goal_id}")
async def get_goal(
    goal_id: int,
    current_user: CurrentUser,
    store: Store,
):
    goal = await GoalService(store).get_goal(current_user.user_id, goal_id)
    if goal is None:
        raise _goal_not_found()

    return {"goal": goal.to_api()}


@router.patch("/{goal_id}")
async def update_goal(
    goal_id: int,
    data: GoalUpdate,
    current_user: CurrentUser,
    store: Store,
):
    """
    Update a goal. Setting ``status`` to ``completed`` stamps
    ``completedAt``.
    """
    goal = await GoalService(store).update_goal(current_user.user_id, goal_id, data)
    if goal is None:
        raise _goal_not_found()

    return {"goal": goal.to_api()}


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: int,
    current_user: CurrentUser,
    store: Store,
):
    if not await GoalService(store).delete_goal(current_user.user_id, goal_id):
        raise _goal_not_found()

    return {"message": "Goal deleted successfully"}


@router.post("/{goal_id}/milestones/{milestone_id}/complete")
async def toggle_milestone(
    goal_id: int,
    milestone_id: str,
    current_user: CurrentUser,
    store: Store,
):
    """
    Toggle a milestone and recompute the goal's progress.
    """
    try:
        goal = await GoalService(store).toggle_milestone(
            current_user.user_id,
            goal_id,
            milestone_id,
        )
    except MilestoneNotFound:
        raise NotFoundError(code=ErrorCodes.MILESTONE_NOT_FOUND, message="Milestone not found")

    if goal is None:
        raise _goal_not_found()

    return {"goal": goal.to_api()}
