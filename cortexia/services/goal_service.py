"""
Goal Service
============

Business logic for goals and their milestones.

When a goal has milestones its ``progress`` follows them: toggling a
milestone recomputes the percentage of completed milestones, and a
``progress`` sent in an update is ignored.
"""

import logging
from datetime import datetime
from typing import Optional

from cortexia.models.goal import GoalCategory, GoalStatus
from cortexia.repositories.store import LifeStore
from cortexia.schemas.goal import GoalCreate, GoalRecord, GoalUpdate
from cortexia.schemas.stats import GoalStats
from cortexia.services import aggregates
from cortexia.utils.helpers import generate_id, utc_now

logger = logging.getLogger(__name__)


class MilestoneNotFound(LookupError):
    """The goal exists but has no milestone with the requested id."""


def _sync_completed_at(goal: GoalRecord, now: datetime) -> None:
    if goal.status == GoalStatus.COMPLETED:
        if goal.completed_at is None:
            goal.completed_at = now
    else:
        goal.completed_at = None


class GoalService:
    """Service for goal operations."""

    def __init__(self, store: LifeStore):
        self.store = store

    async def list_goals(
        self,
        user_id: str,
        status: Optional[GoalStatus] = None,
        category: Optional[GoalCategory] = None,
    ) -> list[GoalRecord]:
        return [
            goal for goal in await self.store.goals.list_records(user_id)
            if (status is None or goal.status == status)
            and (category is None or goal.category == category)
        ]

    async def get_goal(self, user_id: str, goal_id: int) -> Optional[GoalRecord]:
        return await self.store.goals.get(user_id, goal_id)

    async def create_goal(self, user_id: str, data: GoalCreate) -> GoalRecord:
        values = data.model_dump(exclude={"milestones"})
        values["milestones"] = [
            {
                "id": generate_id(),
                "title": milestone.title,
                "completed": False,
                "target_date": milestone.target_date,
            }
            for milestone in data.milestones
        ]
        if values["milestones"]:
            values["progress"] = 0

        goal = await self.store.goals.add(user_id, values)
        logger.info("Created goal %s for user %s", goal.id, user_id)
        return goal

    async def update_goal(
        self,
        user_id: str,
        goal_id: int,
        data: GoalUpdate,
        now: Optional[datetime] = None,
    ) -> Optional[GoalRecord]:
        goal = await self.store.goals.get(user_id, goal_id)
        if goal is None:
            return None

        goal = GoalRecord.model_validate(
            {**goal.model_dump(), **data.model_dump(exclude_unset=True)}
        )
        if goal.milestones:
            goal.progress = aggregates.milestone_progress(goal.milestones)
        _sync_completed_at(goal, now or utc_now())
        return await self.store.goals.save(goal)

    async def delete_goal(self, user_id: str, goal_id: int) -> bool:
        return await self.store.goals.delete(user_id, goal_id)

    async def toggle_milestone(
        self,
        user_id: str,
        goal_id: int,
        milestone_id: str,
        now: Optional[datetime] = None,
    ) -> Optional[GoalRecord]:
        """
        Flip one milestone and recompute the goal's progress.

        Returns:
            The updated goal, or None if the goal does not exist

        Raises:
            MilestoneNotFound: If the goal has no such milestone
        """
        now = now or utc_now()
        goal = await self.store.goals.get(user_id, goal_id)
        if goal is None:
            return None

        milestone = next((m for m in goal.milestones if m.id == milestone_id), None)
        if milestone is None:
            raise MilestoneNotFound(milestone_id)

        milestone.completed = not milestone.completed
        milestone.completed_at = now if milestone.completed else None
        goal.progress = aggregates.milestone_progress(goal.milestones)

        return await self.store.goals.save(goal)

    async def get_stats(self, user_id: str) -> GoalStats:
        return aggregates.goal_stats(await self.store.goals.list_records(user_id))
