"""
Finance Models
==============

SQLAlchemy models for transactions and monthly budgets.
"""

import datetime as dt
from enum import Enum
from typing import Optional

from sqlalchemy import Date, Enum as SQLEnum, Float, Index, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from cortexia.db.base import Base, TimestampMixin, UserOwnedMixin


class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class BudgetPeriod(str, Enum):
    """Budget period. Only monthly budgets are tracked."""
    MONTHLY = "monthly"


class Transaction(Base, UserOwnedMixin, TimestampMixin):
    """
    Transaction model.

    Amounts are strictly positive; ``type`` carries the direction and is
    never changed after creation.
    """

    __tablename__ = "transactions"

    type: Mapped[TransactionType] = mapped_column(
        SQLEnum(TransactionType, name="transactiontype", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    merchant: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    tags: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)

    __table_args__ = (
        Index("idx_transactions_user_date", "user_id", "date"),
    )


class Budget(Base, UserOwnedMixin, TimestampMixin):
    """
    Budget model.

    One budget per (user, category).
    """

    __tablename__ = "budgets"

    category: Mapped[str] = mapped_column(String(50), nullable=False)
    limit: Mapped[float] = mapped_column(Float, nullable=False)
    period: Mapped[BudgetPeriod] = mapped_column(
        SQLEnum(BudgetPeriod, name="budgetperiod", values_callable=lambda e: [m.value for m in e]),
        default=BudgetPeriod.MONTHLY,
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "category", name="uq_budgets_user_category"),
    )
