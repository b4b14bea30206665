"""
Selection Models.

Pydantic model for a broker's curated property selection.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Selection(BaseModel):
    """
    Broker selection record, as handed over by the persistence layer.

    property_ids is kept as-is: checking that it is a proper ordered list
    of identifiers is the resolver's job, so malformed data can be told
    apart from an empty selection.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = None
    name: str = "Property Selection"
    token: str | None = None
    description: str = ""
    property_ids: Any = None
    broker_name: str | None = None
    broker_phone: str | None = None
    expires_at: datetime | None = None

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v: Any) -> str:
        """Empty name falls back to the default title."""
        return str(v) if v else "Property Selection"

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str | None:
        """Accept numeric primary keys."""
        return None if v is None else str(v)

    def is_expired(self, now: datetime | None = None) -> bool:
        """
        Check whether the selection link has expired.

        Naive expiry times are treated as UTC.
        """
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return expires_at < now
