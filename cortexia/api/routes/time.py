"""
Time Tracking API Endpoints
===========================

Handles logged time blocks and daily, weekly and focus summaries.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from cortexia.core.errors import ErrorCodes, NotFoundError
from cortexia.dependencies import CurrentUser, Store
from cortexia.models.time_entry import TimeCategory
from cortexia.schemas.time_entry import TimeEntryCreate
from cortexia.services.time_service import TimeService

router = APIRouter()


@router.get("")
async def list_time_entries(
    current_user: CurrentUser,
    store: Store,
    days: int = Query(default=7, ge=1, le=365),
    category: Optional[TimeCategory] = Query(default=None),
):
    entries = await TimeService(store).list_entries(
        current_user.user_id,
        days=days,
        category=category,
    )
    return {"entries": [e.to_api() for e in entries]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_time_entry(
    data: TimeEntryCreate,
    current_user: CurrentUser,
    store: Store,
):
    """
    Log a block of time.

    ``date`` is the start of the block (defaults to now); the end time
    is start plus ``duration`` minutes.
    """
    entry = await TimeService(store).create_entry(current_user.user_id, data)
    return {"entry": entry.to_api()}


@router.delete("/{entry_id}")
async def delete_time_entry(
    entry_id: int,
    current_user: CurrentUser,
    store: Store,
):
    deleted = await TimeService(store).delete_entry(current_user.user_id, entry_id)
    if not deleted:
        raise NotFoundError(code=ErrorCodes.TIME_ENTRY_NOT_FOUND, message="Entry not found")

    return {"message": "Entry deleted successfully"}


# =============================================================================
# Stats
# =============================================================================

@router.get("/stats/today")
async def get_today_stats(current_user: CurrentUser, store: Store):
    stats = await TimeService(store).today_stats(current_user.user_id)
    return stats.to_api()


@router.get("/stats/weekly")
async def get_weekly_stats(current_user: CurrentUser, store: Store):
    """Totals since Monday; the daily average always divides by 7."""
    stats = await TimeService(store).weekly_stats(current_user.user_id)
    return stats.to_api()


@router.get("/stats/focus")
async def get_focus_stats(
    current_user: CurrentUser,
    store: Store,
    days: int = Query(default=7, ge=1, le=365),
):
    breakdown = await TimeService(store).focus_stats(current_user.user_id, days)
    return breakdown.to_api()
