"""Core Pydantic models for recordstore."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


class StoreKind(str, Enum):
    """Record variants a store can hold."""

    simple = "simple"
    timestamped = "timestamped"

    @classmethod
    def from_setting(cls, value: str | None) -> StoreKind:
        """``"simple"`` selects bare values; anything else is timestamped."""
        if value == cls.simple.value:
            return cls.simple
        return cls.timestamped


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampedRecord(BaseModel):
    """A stored value with creation and last-update instants."""

    id: int
    value: str
    created: datetime = Field(default_factory=utcnow)
    updated: datetime = Field(default_factory=utcnow)


# Plain stores hold the bare string.
Record = Union[str, TimestampedRecord]
