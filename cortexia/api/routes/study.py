"""
Study API Endpoints
===================

Handles study sessions and study statistics.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from cortexia.core.errors import ErrorCodes, NotFoundError
from cortexia.dependencies import CurrentUser, Store
from cortexia.schemas.study import StudySessionCreate
from cortexia.services.study_service import StudyService

router = APIRouter()


@router.get("/sessions")
async def list_study_sessions(
    current_user: CurrentUser,
    store: Store,
    days: Optional[int] = Query(default=None, ge=1, le=3650),
    subject: Optional[str] = Query(default=None),
):
    sessions = await StudyService(store).list_sessions(
        current_user.user_id,
        days=days,
        subject=subject,
    )
    return {"sessions": [s.to_api() for s in sessions]}


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def create_study_session(
    data: StudySessionCreate,
    current_user: CurrentUser,
    store: Store,
):
    session = await StudyService(store).create_session(current_user.user_id, data)
    return {"session": session.to_api()}


@router.delete("/sessions/{session_id}")
async def delete_study_session(
    session_id: int,
    current_user: CurrentUser,
    store: Store,
):
    if not await StudyService(store).delete_session(current_user.user_id, session_id):
        raise NotFoundError(code=ErrorCodes.STUDY_SESSION_NOT_FOUND, message="Study session not found")

    return {"message": "Study session deleted successfully"}


@router.get("/stats")
async def get_study_stats(
    current_user: CurrentUser,
    store: Store,
    days: int = Query(default=30, ge=1, le=365),
):
    stats = await StudyService(store).get_stats(current_user.user_id, days)
    return stats.to_api()
