"""
Journal Models
==============

SQLAlchemy model for journal entries.
"""

from typing import Optional

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from cortexia.db.base import Base, TimestampMixin, UserOwnedMixin


class JournalEntry(Base, UserOwnedMixin, TimestampMixin):
    """
    Journal entry model.

    Mood, energy, stress and focus are 1-10 self ratings.
    """

    __tablename__ = "journal_entries"

    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    mood: Mapped[int] = mapped_column(Integer, nullable=False)
    energy: Mapped[int] = mapped_column(Integer, nullable=False)
    stress: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    focus: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    tags: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)

    __table_args__ = (
        CheckConstraint("mood BETWEEN 1 AND 10", name="ck_journal_mood_range"),
        CheckConstraint("energy BETWEEN 1 AND 10", name="ck_journal_energy_range"),
    )
