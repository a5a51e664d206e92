"""
Journal Schemas
===============

Typed journal entry record and request body.
"""

from typing import Optional

from pydantic import Field

from cortexia.schemas.common import CamelModel, UserRecord


class JournalEntryRecord(UserRecord):
    """A stored journal entry. Content is not edited once written."""

    title: Optional[str] = None
    content: str
    mood: int = Field(ge=1, le=10)
    energy: int = Field(ge=1, le=10)
    stress: Optional[int] = Field(None, ge=1, le=10)
    focus: Optional[int] = Field(None, ge=1, le=10)
    tags: list[str] = Field(default_factory=list)


class JournalEntryCreate(CamelModel):
    """Request schema for writing a journal entry."""

    title: Optional[str] = Field(None, max_length=200)
    content: str = Field(min_length=1, max_length=10000)
    mood: int = Field(ge=1, le=10)
    energy: int = Field(default=5, ge=1, le=10)
    stress: Optional[int] = Field(None, ge=1, le=10)
    focus: Optional[int] = Field(None, ge=1, le=10)
    tags: list[str] = Field(default_factory=list)
