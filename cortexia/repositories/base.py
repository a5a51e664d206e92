"""
Record Repositories
===================

The storage interface every domain service talks to, plus the
in-memory backend used when no database is configured.

A repository stores one record type for many users. Every read and
delete is scoped by ``user_id``; records never leak across owners.
"""

from typing import Any, Generic, Optional, Protocol, TypeVar

from cortexia.schemas.common import UserRecord
from cortexia.utils.helpers import utc_now

RecordT = TypeVar("RecordT", bound=UserRecord)


class Repository(Protocol[RecordT]):
    """CRUD interface over one record type."""

    async def list_records(self, user_id: str) -> list[RecordT]:
        """All records of ``user_id``, newest first."""
        ...

    async def get(self, user_id: str, record_id: int) -> Optional[RecordT]:
        ...

    async def add(self, user_id: str, values: dict[str, Any]) -> RecordT:
        """Validate ``values`` into a new record, assign its id and store it."""
        ...

    async def save(self, record: RecordT) -> Optional[RecordT]:
        """Persist changes to an existing record. Returns None if it is gone."""
        ...

    async def delete(self, user_id: str, record_id: int) -> bool:
        """Remove a record. Returns False if it did not exist for this user."""
        ...


class InMemoryRepository(Generic[RecordT]):
    """
    Repository backed by a dict held on the application instance.

    Callers always receive copies, so mutating a returned record has no
    effect until it is passed to ``save``.
    """

    def __init__(self, record_type: type[RecordT]):
        self.record_type = record_type
        self._rows: dict[int, RecordT] = {}
        self._next_id = 1

    async def list_records(self, user_id: str) -> list[RecordT]:
        rows = [row for row in self._rows.values() if row.user_id == user_id]
        rows.sort(key=lambda row: (row.created_at, row.id), reverse=True)
        return [row.model_copy(deep=True) for row in rows]

    async def get(self, user_id: str, record_id: int) -> Optional[RecordT]:
        row = self._rows.get(record_id)
        if row is None or row.user_id != user_id:
            return None
        return row.model_copy(deep=True)

    async def add(self, user_id: str, values: dict[str, Any]) -> RecordT:
        data = {"created_at": utc_now(), **values}
        data.update(id=self._next_id, user_id=user_id)
        record = self.record_type.model_validate(data)

        self._rows[record.id] = record
        self._next_id += 1
        return record.model_copy(deep=True)

    async def save(self, record: RecordT) -> Optional[RecordT]:
        existing = self._rows.get(record.id)
        if existing is None or existing.user_id != record.user_id:
            return None
        self._rows[record.id] = record.model_copy(deep=True)
        return record

    async def delete(self, user_id: str, record_id: int) -> bool:
        row = self._rows.get(record_id)
        if row is None or row.user_id != user_id:
            return False
        del self._rows[record_id]
        return True
