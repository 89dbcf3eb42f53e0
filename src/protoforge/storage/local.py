"""Local in-memory store implementation.

Simple dict-based store suitable for single-process use and testing.

Usage:
    store = LocalStore()
    store.extend([{"type": "recipe", "name": "iron-gear-wheel", ...}])
"""

from __future__ import annotations

import copy as cp
from collections.abc import Iterable, Iterator

from protoforge.core.errors import InvalidArgumentError
from protoforge.core.types import Copy, Record


class LocalStore:
    """In-memory store using nested dicts.

    Structure:
        _records[kind][name] = record
    """

    def __init__(self, records: Iterable[Record] | None = None):
        """Initialize local store.

        Args:
            records: Optional records to insert, keyed by their type and name.
        """
        self._records: dict[str, dict[str, Record]] = {}
        if records is not None:
            self.extend(records)

    def get(self, kind: str, name: str, copy: bool = True) -> Copy[Record] | Record | None:
        """Get a record.

        Args:
            kind: Record kind (e.g. "technology").
            name: Record name.
            copy: Whether to return a deep copy of the record (default True).

        Returns:
            Record or None if not present.
        """
        record = self._records.get(kind, {}).get(name)
        if record is None:
            return None
        return cp.deepcopy(record) if copy else record

    def put(self, kind: str, name: str, record: Record) -> None:
        """Insert or overwrite a record.

        Args:
            kind: Record kind.
            name: Record name.
            record: Record to store (stored as a deep copy).
        """
        self._records.setdefault(kind, {})[name] = cp.deepcopy(record)

    def delete(self, kind: str, name: str) -> None:
        """Delete a record if present.

        Args:
            kind: Record kind.
            name: Record name.
        """
        table = self._records.get(kind)
        if table is not None:
            table.pop(name, None)

    def iterate(self, kind: str, copy: bool = False) -> Iterator[Record]:
        """Iterate all records of a kind in insertion order.

        Args:
            kind: Record kind.
            copy: Whether to yield deep copies (default False).

        Yields:
            Each stored record of that kind.
        """
        for record in list(self._records.get(kind, {}).values()):
            yield cp.deepcopy(record) if copy else record

    def extend(self, records: Iterable[Record]) -> None:
        """Insert records keyed by their own ``type`` and ``name`` fields.

        Existing records with the same key are overwritten.

        Args:
            records: Records to insert.

        Raises:
            InvalidArgumentError: If a record lacks a string type or name.
        """
        for record in records:
            kind = record.get("type")
            name = record.get("name")
            if not isinstance(kind, str) or not isinstance(name, str):
                raise InvalidArgumentError(
                    f"record must have string type and name fields, got {kind!r}/{name!r}"
                )
            self.put(kind, name, record)

    def kinds(self) -> frozenset[str]:
        """Get all kinds that currently hold at least one record."""
        return frozenset(kind for kind, table in self._records.items() if table)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        kind, name = key
        return name in self._records.get(kind, {})

    def __len__(self) -> int:
        return sum(len(table) for table in self._records.values())
