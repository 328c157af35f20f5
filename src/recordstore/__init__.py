"""recordstore — a minimal key-value record service."""

__version__ = "0.1.0"

from recordstore.config import Settings
from recordstore.core.types import StoreKind, TimestampedRecord
from recordstore.storage import PlainValueStore, TimestampedValueStore, ValueStore, create_store

__all__ = [
    "Settings",
    "StoreKind",
    "TimestampedRecord",
    "ValueStore",
    "PlainValueStore",
    "TimestampedValueStore",
    "create_store",
]
