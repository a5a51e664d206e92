"""
Journal API Endpoints
=====================

Handles journal entries and mood statistics.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from cortexia.core.errors import ErrorCodes, NotFoundError
from cortexia.dependencies import CurrentUser, Store
from cortexia.schemas.journal import JournalEntryCreate
from cortexia.services.journal_service import JournalService

router = APIRouter()


@router.get("/entries")
async def list_journal_entries(
    current_user: CurrentUser,
    store: Store,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
):
    entries = await JournalService(store).list_entries(current_user.user_id, limit)
    return {"entries": [e.to_api() for e in entries]}


@router.post("/entries", status_code=status.HTTP_201_CREATED)
async def create_journal_entry(
    data: JournalEntryCreate,
    current_user: CurrentUser,
    store: Store,
):
    entry = await JournalService(store).create_entry(current_user.user_id, data)
    return {"entry": entry.to_api()}


@router.get("/entries/{entry_id}")
async def get_journal_entry(
    entry_id: int,
    current_user: CurrentUser,
    store: Store,
):
    entry = await JournalService(store).get_entry(current_user.user_id, entry_id)
    if entry is None:
        raise NotFoundError(code=ErrorCodes.JOURNAL_NOT_FOUND, message="Journal entry not found")

    return {"entry": entry.to_api()}


@router.delete("/entries/{entry_id}")
async def delete_journal_entry(
    entry_id: int,
    current_user: CurrentUser,
    store: Store,
):
    if not await JournalService(store).delete_entry(current_user.user_id, entry_id):
        raise NotFoundError(code=ErrorCodes.JOURNAL_NOT_FOUND, message="Journal entry not found")

    return {"message": "Journal entry deleted successfully"}


@router.get("/stats")
async def get_journal_stats(
    current_user: CurrentUser,
    store: Store,
    days: int = Query(default=30, ge=1, le=365),
):
    """Mood, energy and stress averages plus the top tags over ``days``."""
    stats = await JournalService(store).get_stats(current_user.user_id, days)
    return stats.to_api()
