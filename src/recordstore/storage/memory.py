"""In-memory value store backends."""

from __future__ import annotations

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Generic, TypeVar

from recordstore.core.types import StoreKind, TimestampedRecord, utcnow

log = logging.getLogger(__name__)

_TICK = timedelta(microseconds=1)

R = TypeVar("R")


class _LockedStore(ABC, Generic[R]):
    """Identifier sequence plus a record mapping guarded by a single lock."""

    kind: StoreKind

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._records: dict[int, R] = {}

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _new_record(self, record_id: int, value: str) -> R:
        """Build the record stored for a newly issued *record_id*."""

    @abstractmethod
    def _replace(self, record: R, value: str) -> R:
        """Return *record* carrying *value*."""

    def _export(self, record: R) -> R:
        return record

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create(self, value: str) -> int:
        with self._lock:
            record_id = next(self._ids)
            self._records[record_id] = self._new_record(record_id, value)
        log.info("Created record %d", record_id)
        return record_id

    def read(self, record_id: int) -> R | None:
        with self._lock:
            record = self._records.get(record_id)
            return None if record is None else self._export(record)

    def read_all(self) -> dict[int, R]:
        with self._lock:
            return {rid: self._export(rec) for rid, rec in self._records.items()}

    def update(self, record_id: int, value: str) -> bool:
        with self._lock:
            existing = self._records.get(record_id)
            if existing is None:
                return False
            self._records[record_id] = self._replace(existing, value)
        log.debug("Updated record %d", record_id)
        return True

    def delete(self, record_id: int) -> bool:
        with self._lock:
            removed = self._records.pop(record_id, None) is not None
        if removed:
            log.info("Deleted record %d", record_id)
        return removed

    def count(self) -> int:
        with self._lock:
            return len(self._records)


class PlainValueStore(_LockedStore[str]):
    """Stores bare string values."""

    kind = StoreKind.simple

    def _new_record(self, record_id: int, value: str) -> str:
        return value

    def _replace(self, record: str, value: str) -> str:
        return value


class TimestampedValueStore(_LockedStore[TimestampedRecord]):
    """Stores values with ``created``/``updated`` instants (UTC)."""

    kind = StoreKind.timestamped

    def _new_record(self, record_id: int, value: str) -> TimestampedRecord:
        now = utcnow()
        return TimestampedRecord(id=record_id, value=value, created=now, updated=now)

    def _replace(self, record: TimestampedRecord, value: str) -> TimestampedRecord:
        # updated must move forward even when the clock has not ticked
        now = max(utcnow(), record.updated + _TICK)
        record.value = value
        record.updated = now
        return record

    def _export(self, record: TimestampedRecord) -> TimestampedRecord:
        return record.model_copy()
