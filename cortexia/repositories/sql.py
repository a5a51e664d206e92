"""
SQL Repository
==============

Repository backend over an ``AsyncSession``. One instance is bound to
the session of a single request; nothing is shared between requests.
"""

import logging
from typing import Any, Generic, Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from cortexia.db.base import Base
from cortexia.repositories.base import RecordT
from cortexia.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class SqlRepository(Generic[RecordT]):
    """Maps typed records onto one ORM model."""

    def __init__(
        self,
        session: AsyncSession,
        model: type[Base],
        record_type: type[RecordT],
    ):
        self.session = session
        self.model = model
        self.record_type = record_type
        # Nested lists (milestones, completions, ...) go to JSONB as plain JSON
        self._json_fields = {
            column.key
            for column in model.__table__.columns
            if isinstance(column.type, JSONB)
        }

    def _to_record(self, row) -> RecordT:
        return self.record_type.model_validate(row)

    def _column_values(self, record: RecordT) -> dict[str, Any]:
        values = record.model_dump(exclude={"id", "user_id", "created_at"})
        values.update(record.model_dump(mode="json", include=self._json_fields))
        return values

    async def _get_row(self, user_id: str, record_id: int):
        row = await self.session.get(self.model, record_id)
        if row is None or row.user_id != user_id:
            return None
        return row

    async def list_records(self, user_id: str) -> list[RecordT]:
        result = await self.session.execute(
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
        )
        return [self._to_record(row) for row in result.scalars().all()]

    async def get(self, user_id: str, record_id: int) -> Optional[RecordT]:
        row = await self._get_row(user_id, record_id)
        return self._to_record(row) if row is not None else None

    async def add(self, user_id: str, values: dict[str, Any]) -> RecordT:
        # Validate through the record type first so both backends accept
        # exactly the same input
        draft = self.record_type.model_validate(
            {"created_at": utc_now(), **values, "id": 0, "user_id": user_id}
        )
        row = self.model(
            user_id=user_id,
            created_at=draft.created_at,
            **self._column_values(draft),
        )
        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row)
        return self._to_record(row)

    async def save(self, record: RecordT) -> Optional[RecordT]:
        row = await self._get_row(record.user_id, record.id)
        if row is None:
            return None

        for key, value in self._column_values(record).items():
            setattr(row, key, value)
        await self.session.flush()
        await self.session.refresh(row)
        return self._to_record(row)

    async def delete(self, user_id: str, record_id: int) -> bool:
        row = await self._get_row(user_id, record_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.flush()
        logger.debug("Deleted %s %s for user %s", self.model.__tablename__, record_id, user_id)
        return True
