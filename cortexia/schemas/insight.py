"""
Insight & Life State Schemas
============================

Derived insight records, the life-state report, and AI request bodies.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import Field

from cortexia.schemas.common import CamelModel


# =============================================================================
# Enums
# =============================================================================

class InsightType(str, Enum):
    ACHIEVEMENT = "achievement"
    WARNING = "warning"
    RECOMMENDATION = "recommendation"
    PATTERN = "pattern"


class InsightSeverity(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"


class InsightSource(str, Enum):
    RULES = "rules"
    AI = "ai"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


# =============================================================================
# Insights
# =============================================================================

class Insight(CamelModel):
    """A human readable observation about the user's current data."""

    id: str
    type: InsightType
    icon: str
    severity: InsightSeverity
    title: str
    content: str
    actionable: bool = False
    source: InsightSource = InsightSource.RULES
    created_at: datetime

    def content_key(self) -> dict[str, Any]:
        """Everything except identity and timestamp; equal for equal observations."""
        return self.model_dump(exclude={"id", "created_at"})


# =============================================================================
# Life State
# =============================================================================

class LifeStateLabel(CamelModel):
    key: str
    label: str
    color: str
    description: str


class ScoreBreakdown(CamelModel):
    """The sub-scores feeding the life score."""

    task_score: float
    habit_score: float
    finance_score: float
    wellbeing_score: float
    streak_bonus: float


class Factor(CamelModel):
    label: str
    value: str
    positive: bool
    link: str


class LifeStateReport(CamelModel):
    score: int
    state: LifeStateLabel
    trend: Trend
    trend_value: int
    breakdown: ScoreBreakdown
    factors: list[Factor] = Field(default_factory=list)


# =============================================================================
# AI Request Schemas
# =============================================================================

class ParseRequest(CamelModel):
    input: Optional[str] = None


class AskRequest(CamelModel):
    question: Optional[str] = None
    context: Optional[Any] = None
    system_prompt: Optional[str] = None


class PrioritizeRequest(CamelModel):
    tasks: Optional[Any] = None
