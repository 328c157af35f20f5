"""Value store protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from recordstore.core.types import Record, StoreKind


@runtime_checkable
class ValueStore(Protocol):
    """Interface shared by every value store backend.

    Missing identifiers are reported through the return value (``None`` or
    ``False``), never by raising.
    """

    kind: StoreKind

    def create(self, value: str) -> int:
        """Store *value* under the next identifier and return it."""
        ...

    def read(self, record_id: int) -> Record | None:
        """Fetch a single record, or ``None`` if absent."""
        ...

    def read_all(self) -> dict[int, Record]:
        """Snapshot of every live record."""
        ...

    def update(self, record_id: int, value: str) -> bool:
        """Replace the value in place. Return ``True`` if found."""
        ...

    def delete(self, record_id: int) -> bool:
        """Delete by id. Return ``True`` if found."""
        ...

    def count(self) -> int:
        """Number of live records."""
        ...
