"""
Finance Service
===============

Business logic for transactions and monthly budgets.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from cortexia.models.finance import TransactionType
from cortexia.repositories.store import LifeStore
from cortexia.schemas.finance import BudgetRecord, BudgetUpsert, TransactionCreate, TransactionRecord
from cortexia.schemas.stats import BudgetStatus, FinanceStats
from cortexia.services import aggregates
from cortexia.utils.helpers import utc_today

logger = logging.getLogger(__name__)


class FinanceService:
    """Service for finance operations."""

    def __init__(self, store: LifeStore):
        self.store = store

    # =========================================================================
    # Transactions
    # =========================================================================

    async def list_transactions(
        self,
        user_id: str,
        days: int = 30,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        today: Optional[date] = None,
    ) -> list[TransactionRecord]:
        """Transactions dated within the last ``days`` days, newest first."""
        today = today or utc_today()
        since = today - timedelta(days=days)

        transactions = [
            t for t in await self.store.transactions.list_records(user_id)
            if t.date >= since
            and (type is None or t.type == type)
            and (category is None or t.category == category)
        ]
        transactions.sort(key=lambda t: (t.date, t.created_at, t.id), reverse=True)
        return transactions

    async def create_transaction(
        self,
        user_id: str,
        data: TransactionCreate,
    ) -> TransactionRecord:
        transaction = await self.store.transactions.add(user_id, data.model_dump())
        logger.info(
            "Created %s transaction %s (%s %.2f) for user %s",
            transaction.type.value,
            transaction.id,
            transaction.category,
            transaction.amount,
            user_id,
        )
        return transaction

    async def delete_transaction(self, user_id: str, transaction_id: int) -> bool:
        return await self.store.transactions.delete(user_id, transaction_id)

    async def get_stats(
        self,
        user_id: str,
        period: aggregates.Period,
        today: Optional[date] = None,
    ) -> FinanceStats:
        transactions = await self.store.transactions.list_records(user_id)
        return aggregates.finance_stats(transactions, period, today or utc_today())

    # =========================================================================
    # Budgets
    # =========================================================================

    async def list_budgets(
        self,
        user_id: str,
        today: Optional[date] = None,
    ) -> list[BudgetStatus]:
        """Every budget with this month's spending in its category."""
        budgets = await self.store.budgets.list_records(user_id)
        transactions = await self.store.transactions.list_records(user_id)
        return aggregates.budget_statuses(budgets, transactions, today or utc_today())

    async def upsert_budget(
        self,
        user_id: str,
        data: BudgetUpsert,
    ) -> tuple[BudgetRecord, bool]:
        """
        Create the budget for a category, or replace its limit.

        Returns:
            The stored budget and whether it was newly created
        """
        for budget in await self.store.budgets.list_records(user_id):
            if budget.category == data.category:
                budget.limit = data.limit
                budget.period = data.period
                saved = await self.store.budgets.save(budget)
                if saved is not None:
                    return saved, False

        budget = await self.store.budgets.add(user_id, data.model_dump())
        logger.info("Created budget %s for %s (user %s)", budget.id, budget.category, user_id)
        return budget, True
