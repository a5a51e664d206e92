"""
Finance API Endpoints
=====================

Handles transactions, period statistics and monthly budgets.
"""

from typing import Optional

from fastapi import APIRouter, Query, Response, status

from cortexia.core.errors import ErrorCodes, NotFoundError
from cortexia.dependencies import CurrentUser, Store
from cortexia.models.finance import TransactionType
from cortexia.schemas.finance import BudgetUpsert, TransactionCreate
from cortexia.services.aggregates import Period
from cortexia.services.finance_service import FinanceService

router = APIRouter()


# =============================================================================
# Transactions
# =============================================================================

@router.get("/transactions")
async def list_transactions(
    current_user: CurrentUser,
    store: Store,
    days: int = Query(default=30, ge=1, le=3650),
    type: Optional[TransactionType] = Query(default=None),
    category: Optional[str] = Query(default=None),
):
    """
    List transactions dated within the last ``days`` days.
    """
    transactions = await FinanceService(store).list_transactions(
        current_user.user_id,
        days=days,
        type=type,
        category=category,
    )
    return {"transactions": [t.to_api() for t in transactions]}


@router.post("/transactions", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    data: TransactionCreate,
    current_user: CurrentUser,
    store: Store,
):
    """
    Record an income or expense.
    """
    transaction = await FinanceService(store).create_transaction(current_user.user_id, data)
    return {"transaction": transaction.to_api()}


@router.delete("/transactions/{transaction_id}")
async def delete_transaction(
    transaction_id: int,
    current_user: CurrentUser,
    store: Store,
):
    deleted = await FinanceService(store).delete_transaction(current_user.user_id, transaction_id)
    if not deleted:
        raise NotFoundError(code=ErrorCodes.TRANSACTION_NOT_FOUND, message="Transaction not found")

    return {"message": "Transaction deleted successfully"}


@router.get("/stats")
async def get_finance_stats(
    current_user: CurrentUser,
    store: Store,
    period: Period = Query(default="month"),
):
    """
    Income, expenses, balance and per-category spending for the last
    7 days (``week``) or the current calendar month (``month``).
    """
    stats = await FinanceService(store).get_stats(current_user.user_id, period)
    return stats.to_api()


# =============================================================================
# Budgets
# =============================================================================

@router.get("/budgets")
async def list_budgets(
    current_user: CurrentUser,
    store: Store,
):
    """
    List budgets with this month's spending, percentage used and
    remaining amount.
    """
    budgets = await FinanceService(store).list_budgets(current_user.user_id)
    return {"budgets": [b.to_api() for b in budgets]}


@router.post("/budgets", status_code=status.HTTP_201_CREATED)
async def upsert_budget(
    data: BudgetUpsert,
    current_user: CurrentUser,
    store: Store,
    response: Response,
):
    """
    Create the budget of a category, or update it when one exists.

    Returns 201 when created and 200 when an existing budget changed.
    """
    budget, created = await FinanceService(store).upsert_budget(current_user.user_id, data)
    if not created:
        response.status_code = status.HTTP_200_OK

    return {"budget": budget.to_api()}
