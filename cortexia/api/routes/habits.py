"""
Habits API Endpoints
====================

Handles habit CRUD operations and daily check-ins.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from cortexia.core.errors import ErrorCodes, NotFoundError
from cortexia.dependencies import CurrentUser, Store
from cortexia.schemas.habit import HabitCheckIn, HabitCreate, HabitUpdate
from cortexia.services import aggregates
from cortexia.services.habit_service import HabitService
from cortexia.utils.helpers import utc_today

router = APIRouter()


def _habit_not_found() -> NotFoundError:
    return NotFoundError(code=ErrorCodes.HABIT_NOT_FOUND, message="Habit not found")


@router.get("")
async def list_habits(
    current_user: CurrentUser,
    store: Store,
    include_inactive: bool = Query(default=False, alias="includeInactive"),
):
    """
    List habits, each with its current streak.
    """
    today = utc_today()
    habits = await HabitService(store).list_habits(current_user.user_id, include_inactive)
    return {
        "habits": [
            {**habit.to_api(), "streak": aggregates.habit_streak(habit, today)}
            for habit in habits
        ]
    }


@router.get("/stats/summary")
async def get_habit_stats(current_user: CurrentUser, store: Store):
    stats = await HabitService(store).get_stats(current_user.user_id)
    return stats.to_api()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_habit(
    data: HabitCreate,
    current_user: CurrentUser,
    store: Store,
):
    habit = await HabitService(store).create_habit(current_user.user_id, data)
    return {"habit": habit.to_api()}


@router.get("/{habit_id}")
async def get_habit(
    habit_id: int,
    current_user: CurrentUser,
    store: Store,
):
    habit = await HabitService(store).get_habit(current_user.user_id, habit_id)
    if habit is None:
        raise _habit_not_found()

    return {"habit": habit.to_api(), "streak": aggregates.habit_streak(habit, utc_today())}


@router.patch("/{habit_id}")
async def update_habit(
    habit_id: int,
    data: HabitUpdate,
    current_user: CurrentUser,
    store: Store,
):
    habit = await HabitService(store).update_habit(current_user.user_id, habit_id, data)
    if habit is None:
        raise _habit_not_found()

    return {"habit": habit.to_api()}


@router.delete("/{habit_id}")
async def delete_habit(
    habit_id: int,
    current_user: CurrentUser,
    store: Store,
):
    if not await HabitService(store).delete_habit(current_user.user_id, habit_id):
        raise _habit_not_found()

    return {"message": "Habit deleted successfully"}


@router.get("/{habit_id}/logs")
async def get_habit_logs(
    habit_id: int,
    current_user: CurrentUser,
    store: Store,
    days: int = Query(default=90, ge=1, le=3650),
):
    """Check-in history of the last ``days`` days, newest first."""
    logs = await HabitService(store).completion_log(current_user.user_id, habit_id, days)
    if logs is None:
        raise _habit_not_found()

    return {"logs": [c.to_api() for c in logs]}


@router.post("/{habit_id}/check-in")
async def check_in_habit(
    habit_id: int,
    current_user: CurrentUser,
    store: Store,
    data: Optional[HabitCheckIn] = None,
):
    """
    Mark a day (default today) done or not done.

    Sending no ``completed`` flag toggles the day's current state.
    """
    result = await HabitService(store).check_in(
        current_user.user_id, habit_id, data or HabitCheckIn()
    )
    if result is None:
        raise _habit_not_found()

    habit, streak = result
    return {"habit": habit.to_api(), "streak": streak}
