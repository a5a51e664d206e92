"""
Finance Schemas
===============

Typed transaction and budget records plus request bodies.
"""

import datetime as dt
from typing import Optional

from pydantic import Field

from cortexia.models.finance import BudgetPeriod, TransactionType
from cortexia.schemas.common import CamelModel, UserRecord


class TransactionRecord(UserRecord):
    """A stored transaction. Never updated in place."""

    type: TransactionType
    amount: float = Field(gt=0)
    category: str
    description: Optional[str] = None
    date: dt.date
    merchant: Optional[str] = None
    payment_method: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class BudgetRecord(UserRecord):
    """A stored monthly budget for one category."""

    category: str
    limit: float = Field(gt=0)
    period: BudgetPeriod = BudgetPeriod.MONTHLY


# =============================================================================
# Request Schemas
# =============================================================================

class TransactionCreate(CamelModel):
    """Request schema for creating a transaction."""

    type: TransactionType
    amount: float = Field(gt=0, description="Strictly positive; direction comes from type")
    category: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=500)
    date: dt.date
    merchant: Optional[str] = Field(None, max_length=100)
    payment_method: Optional[str] = Field(None, max_length=50)
    tags: list[str] = Field(default_factory=list)


class BudgetUpsert(CamelModel):
    """Request schema for creating or replacing the budget of a category."""

    category: str = Field(min_length=1, max_length=50)
    limit: float = Field(gt=0)
    period: BudgetPeriod = BudgetPeriod.MONTHLY
