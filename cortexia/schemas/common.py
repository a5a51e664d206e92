"""
Common Schemas
==============

Shared Pydantic base classes used across the application.

All API payloads use camelCase keys; Python code uses snake_case
attribute names. ``CamelModel`` accepts either on input and the routes
serialize with ``by_alias=True``.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_api(self, **kwargs: Any) -> dict[str, Any]:
        """JSON-safe dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)


class UserRecord(CamelModel):
    """
    Base for stored records.

    ``id`` is assigned by the store; ``user_id`` scopes every record to
    one owner.
    """

    id: int
    user_id: str
    created_at: datetime
