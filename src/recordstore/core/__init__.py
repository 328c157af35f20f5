"""recordstore core types."""

from recordstore.core.types import Record, StoreKind, TimestampedRecord

__all__ = ["Record", "StoreKind", "TimestampedRecord"]
