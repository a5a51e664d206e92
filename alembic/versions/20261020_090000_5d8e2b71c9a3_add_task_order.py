"""Add manual sort order to tasks

Revision ID: 5d8e2b71c9a3
Revises: c0a1e5f7b2d4
Create Date: 2026-10-20 09:00:00.000000+00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5d8e2b71c9a3"
down_revision: Union[str, None] = "c0a1e5f7b2d4"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade database schema."""

    # ------------------------------------------------------------------
    # 1. Position of a task in the user's manual ordering
    # ------------------------------------------------------------------
    op.add_column(
        "tasks",
        sa.Column("order", sa.Integer(), server_default="0", nullable=False),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_column("tasks", "order")
