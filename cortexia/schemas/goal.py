"""
Goal Schemas
============

Typed goal record with milestones, and request bodies.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from cortexia.models.goal import GoalCategory, GoalPriority, GoalStatus, GoalType
from cortexia.schemas.common import CamelModel, UserRecord


class Milestone(CamelModel):
    id: str
    title: str
    completed: bool = False
    target_date: Optional[date] = None
    completed_at: Optional[datetime] = None


class GoalRecord(UserRecord):
    """A stored goal."""

    title: str
    description: Optional[str] = None
    category: GoalCategory
    type: GoalType = GoalType.OUTCOME
    priority: GoalPriority = GoalPriority.MEDIUM
    status: GoalStatus = GoalStatus.ACTIVE
    progress: int = Field(default=0, ge=0, le=100)
    target_date: Optional[date] = None
    completed_at: Optional[datetime] = None
    milestones: list[Milestone] = Field(default_factory=list)


# =============================================================================
# Request Schemas
# =============================================================================

class MilestoneCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    target_date: Optional[date] = None


class GoalCreate(CamelModel):
    """Request schema for creating a goal."""

    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    category: GoalCategory
    type: GoalType = GoalType.OUTCOME
    priority: GoalPriority = GoalPriority.MEDIUM
    target_date: Optional[date] = None
    progress: int = Field(default=0, ge=0, le=100)
    milestones: list[MilestoneCreate] = Field(default_factory=list)


class GoalUpdate(CamelModel):
    """Request schema for updating a goal."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[GoalCategory] = None
    type: Optional[GoalType] = None
    priority: Optional[GoalPriority] = None
    status: Optional[GoalStatus] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    target_date: Optional[date] = None
