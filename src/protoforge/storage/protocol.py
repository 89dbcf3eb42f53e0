"""Store protocol for swappable record tables.

The store is owned by the host environment. The core only reads records
(`get`, `iterate`), overwrites them (`put`) and deletes them (`delete`).

Usage:
    store = LocalStore()
    tech = Technology.load(store, "electronics")
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from protoforge.core.types import Record


@runtime_checkable
class PrototypeStore(Protocol):
    """Abstract record table keyed by (kind, name)."""

    def get(self, kind: str, name: str) -> Record | None:
        """Get a record, or None if absent."""
        ...

    def put(self, kind: str, name: str, record: Record) -> None:
        """Insert or overwrite a record."""
        ...

    def delete(self, kind: str, name: str) -> None:
        """Delete a record. Deleting an absent record is a no-op."""
        ...

    def iterate(self, kind: str) -> Iterator[Record]:
        """Iterate all records of a kind."""
        ...
