"""Create life tracking tables

Revision ID: c0a1e5f7b2d4
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "c0a1e5f7b2d4"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ENUMS = {
    "taskdomain": ("work", "study", "health", "finance", "personal"),
    "taskpriority": ("low", "medium", "high", "urgent"),
    "taskstatus": ("todo", "in_progress", "completed"),
    "habitcategory": ("health", "productivity", "learning", "fitness", "mindfulness", "social"),
    "habitfrequency": ("daily", "weekly", "custom"),
    "transactiontype": ("income", "expense"),
    "budgetperiod": ("monthly",),
    "timecategory": ("work", "study", "health", "personal", "leisure"),
    "focusquality": ("deep", "moderate", "shallow"),
    "goalcategory": ("personal", "health", "career", "financial", "education", "family"),
    "goaltype": ("outcome", "habit", "milestone"),
    "goalpriority": ("low", "medium", "high"),
    "goalstatus": ("active", "on-hold", "completed", "abandoned"),
    "studydifficulty": ("easy", "medium", "hard"),
}

TABLES = (
    "tasks",
    "habits",
    "transactions",
    "budgets",
    "time_entries",
    "goals",
    "journal_entries",
    "study_sessions",
)


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _owned_columns() -> list[sa.Column]:
    """id, user_id and timestamps shared by every table."""
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def _json_list(name: str) -> sa.Column:
    return sa.Column(name, postgresql.JSONB(astext_type=sa.Text()), server_default="[]", nullable=False)


def upgrade() -> None:
    """Upgrade database schema."""

    # ------------------------------------------------------------------
    # 1. Enum types
    # ------------------------------------------------------------------
    bind = op.get_bind()
    for name, values in ENUMS.items():
        postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    # ------------------------------------------------------------------
    # 2. Tables
    # ------------------------------------------------------------------
    op.create_table(
        "tasks",
        *_owned_columns(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("domain", _enum("taskdomain"), nullable=False),
        sa.Column("priority", _enum("taskpriority"), nullable=False),
        sa.Column("status", _enum("taskstatus"), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        _json_list("subtasks"),
        _json_list("tags"),
    )

    op.create_table(
        "habits",
        *_owned_columns(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", _enum("habitcategory"), nullable=False),
        sa.Column("frequency", _enum("habitfrequency"), nullable=False),
        sa.Column("color", sa.String(length=20), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        _json_list("completions"),
    )

    op.create_table(
        "transactions",
        *_owned_columns(),
        sa.Column("type", _enum("transactiontype"), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("merchant", sa.String(length=100), nullable=True),
        sa.Column("payment_method", sa.String(length=50), nullable=True),
        _json_list("tags"),
    )
    op.create_index("idx_transactions_user_date", "transactions", ["user_id", "date"])

    op.create_table(
        "budgets",
        *_owned_columns(),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("limit", sa.Float(), nullable=False),
        sa.Column("period", _enum("budgetperiod"), nullable=False),
        sa.UniqueConstraint("user_id", "category", name="uq_budgets_user_category"),
    )

    op.create_table(
        "time_entries",
        *_owned_columns(),
        sa.Column("activity", sa.String(length=500), nullable=False),
        sa.Column("category", _enum("timecategory"), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("focus_quality", _enum("focusquality"), nullable=False),
        sa.Column("interruptions", sa.Integer(), server_default="0", nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("task_id", sa.Integer(), nullable=True),
    )
    op.create_index("idx_time_entries_user_start", "time_entries", ["user_id", "start_time"])

    op.create_table(
        "goals",
        *_owned_columns(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", _enum("goalcategory"), nullable=False),
        sa.Column("type", _enum("goaltype"), nullable=False),
        sa.Column("priority", _enum("goalpriority"), nullable=False),
        sa.Column("status", _enum("goalstatus"), nullable=False),
        sa.Column("progress", sa.Integer(), server_default="0", nullable=False),
        sa.Column("target_date", sa.Date(), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        _json_list("milestones"),
    )

    op.create_table(
        "journal_entries",
        *_owned_columns(),
        sa.Column("title", sa.String(length=200), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("mood", sa.Integer(), nullable=False),
        sa.Column("energy", sa.Integer(), nullable=False),
        sa.Column("stress", sa.Integer(), nullable=True),
        sa.Column("focus", sa.Integer(), nullable=True),
        _json_list("tags"),
        sa.CheckConstraint("mood BETWEEN 1 AND 10", name="ck_journal_mood_range"),
        sa.CheckConstraint("energy BETWEEN 1 AND 10", name="ck_journal_energy_range"),
    )

    op.create_table(
        "study_sessions",
        *_owned_columns(),
        sa.Column("subject", sa.String(length=100), nullable=False),
        sa.Column("topic", sa.String(length=200), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("pomodoros", sa.Integer(), server_default="0", nullable=False),
        sa.Column("difficulty", _enum("studydifficulty"), nullable=False),
        sa.Column("focus_quality", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
    )

    # ------------------------------------------------------------------
    # 3. Owner indexes
    # ------------------------------------------------------------------
    for table in TABLES:
        op.create_index(f"ix_{table}_user_id", table, ["user_id"])


def downgrade() -> None:
    """Downgrade database schema."""
    for table in reversed(TABLES):
        op.drop_table(table)

    bind = op.get_bind()
    for name in reversed(list(ENUMS)):
        postgresql.ENUM(name=name).drop(bind, checkfirst=True)
