"""Storage backends."""

from __future__ import annotations

import logging

from recordstore.core.types import StoreKind
from recordstore.storage.base import ValueStore
from recordstore.storage.memory import PlainValueStore, TimestampedValueStore

__all__ = ["ValueStore", "PlainValueStore", "TimestampedValueStore", "create_store"]

log = logging.getLogger(__name__)


def create_store(kind: StoreKind | str) -> ValueStore:
    """Build the store for *kind*. The variant is fixed for the store's lifetime."""
    if not isinstance(kind, StoreKind):
        kind = StoreKind.from_setting(kind)
    store: ValueStore
    if kind is StoreKind.simple:
        store = PlainValueStore()
    else:
        store = TimestampedValueStore()
    log.info("Using %s value store", kind.value)
    return store
