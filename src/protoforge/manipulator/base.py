"""Manipulator base: an isolated, deep-copied working record with explicit commit.

A manipulator wraps one named record of a fixed kind. All edits happen on a
private working copy; the store only sees them when `commit()` is called.
Until then the original store entry stays untouched and queryable, which
lets replacement functions read sibling values that were already removed
from the working copy.

Usage:
    store = LocalStore(records)

    tech = Technology.load(store, "electronics")
    tech.copy("electronics-2").add_prerequisite("automation").commit()

    # New records are loaded from a table and must not already exist
    Technology.load(store, {"name": "solder", "prerequisites": []}).commit()
"""

from __future__ import annotations

import copy
import warnings
from collections.abc import Callable, Iterator, Mapping
from enum import Enum, auto
from typing import Any, ClassVar, Self

from protoforge.config import ManipulatorSettings
from protoforge.core.errors import (
    AlreadyExistsError,
    InvalidArgumentError,
    ManipulatorCommittedError,
    NotFoundError,
)
from protoforge.core.types import Copy, Record
from protoforge.storage.protocol import PrototypeStore

IMMUTABLE_FIELDS = frozenset({"name", "type"})


class Origin(Enum):
    """Where a manipulator's working copy came from."""

    LOADED = auto()
    """Copied from an existing store entry."""

    NEW = auto()
    """Copied from a caller-supplied table not yet in the store."""


class LifecycleState(Enum):
    """Whether a manipulator's working copy can still be edited."""

    PENDING = auto()
    """Private working copy, mutable, invisible to the store."""

    COMMITTED = auto()
    """Published to the store. Further mutation is rejected."""


class StaleCommitWarning(UserWarning):
    """Emitted when commit() overwrites a store entry changed since load."""

    pass


def deep_merge(target: dict[str, Any], fields: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge `fields` into a copy of `target`.

    Nested mappings are merged key by key. Any other value, lists included,
    replaces the existing one. A None value removes the field.

    Args:
        target: Base mapping (not mutated).
        fields: Overrides to apply.

    Returns:
        Merged mapping.
    """
    merged = copy.deepcopy(target)
    for key, value in fields.items():
        if value is None:
            merged.pop(key, None)
        elif isinstance(value, Mapping):
            base = merged.get(key)
            merged[key] = deep_merge(base if isinstance(base, dict) else {}, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class Manipulator:
    """Builder holding an isolated working copy of one record.

    Subclasses set `kind` and add field-specific helpers. Instances are created
    through `load()` (or `copy()`), never directly.

    Args:
        store: Store the record is read from and committed to.
        record: Working copy (already deep-copied, kind already set).
        origin: Whether the record was loaded or is new.
        settings: Manipulator settings.
    """

    kind: ClassVar[str] = ""

    def __init__(
        self,
        store: PrototypeStore,
        record: Record,
        origin: Origin,
        settings: ManipulatorSettings | None = None,
    ):
        """Initialize manipulator. Use `load()` instead of calling this directly."""
        self._store = store
        self._record = record
        self._origin = origin
        self._state = LifecycleState.PENDING
        self._settings = settings if settings is not None else ManipulatorSettings()
        self._removed = False

        self._baseline: Record | None = None
        """Store entry as it was at load time; only kept for stale-commit checks."""
        if origin is Origin.LOADED and self._settings.warn_on_overwrite:
            self._baseline = copy.deepcopy(record)

    # Construction

    @classmethod
    def load(
        cls,
        store: PrototypeStore,
        source: str | Mapping[str, Any],
        settings: ManipulatorSettings | None = None,
    ) -> Self:
        """Create a manipulator for an existing record or a new one.

        Args:
            store: Store holding records of this kind.
            source: Name of an existing record, or a table describing a new record.
            settings: Manipulator settings (default: ManipulatorSettings()).

        Returns:
            Pending manipulator with a private deep copy of the record.

        Raises:
            NotFoundError: If `source` is a name with no store entry.
            AlreadyExistsError: If `source` is a table whose name is already taken.
            InvalidArgumentError: If `source` is malformed or of the wrong type.
        """
        if isinstance(source, str):
            record = store.get(cls.kind, source)
            if record is None:
                raise NotFoundError(f"No such {cls.kind}: {source}")
            return cls(store, copy.deepcopy(record), Origin.LOADED, settings)

        if not isinstance(source, Mapping):
            raise InvalidArgumentError(
                f"{cls.kind} parameter: Expected string or mapping, got {type(source).__name__}"
            )

        declared = source.get("type")
        if declared is not None and not isinstance(declared, str):
            raise InvalidArgumentError(f"{cls.kind} table type field should be a string if set")
        if declared is not None and declared != cls.kind:
            raise InvalidArgumentError(f"{cls.kind} table type field should be '{cls.kind}' if set")

        name = source.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"{cls.kind} table must have a non-empty string name field")
        if store.get(cls.kind, name) is not None:
            raise AlreadyExistsError(f"A {cls.kind} with the name {name} already exists")

        record = copy.deepcopy(dict(source))
        record["type"] = cls.kind
        return cls(store, record, Origin.NEW, settings)

    # Discovery

    @classmethod
    def exists(cls, store: PrototypeStore, name: str) -> bool:
        """Check whether a record of this kind exists in the store.

        Raises:
            InvalidArgumentError: If name is not a string.
        """
        if not isinstance(name, str):
            raise InvalidArgumentError(
                f"name parameter: Expected string, got {type(name).__name__}"
            )
        return store.get(cls.kind, name) is not None

    @classmethod
    def find(cls, store: PrototypeStore, predicate: Callable[[Record], bool]) -> list[str]:
        """Find names of all records of this kind matching a predicate.

        O(n) scan. The predicate receives a deep copy of each record. Records
        without a string name are skipped.

        Args:
            store: Store to scan.
            predicate: Filter function taking a record.

        Returns:
            Names of matching records, in store iteration order.

        Raises:
            InvalidArgumentError: If predicate is not callable.
        """
        if not callable(predicate):
            raise InvalidArgumentError(
                f"predicate parameter: Expected function, got {type(predicate).__name__}"
            )
        names = []
        for record in store.iterate(cls.kind):
            name = record.get("name")
            if isinstance(name, str) and predicate(copy.deepcopy(record)):
                names.append(name)
        return names

    # State

    @property
    def name(self) -> str:
        """Record name (immutable)."""
        return str(self._record["name"])

    @property
    def origin(self) -> Origin:
        return self._origin

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def settings(self) -> ManipulatorSettings:
        return self._settings

    @property
    def store(self) -> PrototypeStore:
        return self._store

    def _require_pending(self) -> None:
        if self._state is LifecycleState.COMMITTED:
            raise ManipulatorCommittedError(
                f"{self.describe()} was already committed; load it again to make further changes"
            )

    # Basic manipulation

    def get(self) -> Copy[Record]:
        """Return a deep copy of the working record."""
        return copy.deepcopy(self._record)

    def set(self, fields: Mapping[str, Any]) -> Self:
        """Recursively merge fields into the working record.

        Args:
            fields: Fields to merge. A None value removes the field.

        Returns:
            Self for chaining.

        Raises:
            InvalidArgumentError: If fields is not a mapping or touches name/type.
            ManipulatorCommittedError: If already committed.
        """
        self._require_pending()
        if not isinstance(fields, Mapping):
            raise InvalidArgumentError(
                f"fields parameter: Expected mapping, got {type(fields).__name__}"
            )
        if "type" in fields:
            raise InvalidArgumentError(f"Cannot change the type of a {self.kind}.")
        if "name" in fields:
            raise InvalidArgumentError(
                f"Cannot change the name of a {self.kind} using set(). "
                f"Use copy() to create a new {self.kind} with a different name."
            )
        self._record = deep_merge(self._record, fields)
        return self

    def copy(self, new_name: str) -> Self:
        """Create a new pending manipulator from this working copy under another name.

        Args:
            new_name: Name of the new record.

        Returns:
            New manipulator in NEW origin.

        Raises:
            AlreadyExistsError: If new_name is already in the store.
            InvalidArgumentError: If new_name is not a non-empty string.
        """
        record = self.get()
        record["name"] = new_name
        return type(self).load(self._store, record, self._settings)

    def commit(self) -> Self:
        """Publish the working copy, overwriting any same-named store entry.

        Returns:
            Self for chaining.

        Raises:
            ManipulatorCommittedError: If already committed.
        """
        self._require_pending()
        if self._baseline is not None and not self._removed:
            current = self._store.get(self.kind, self.name)
            if current != self._baseline:
                warnings.warn(
                    f"{self.describe()} changed in the store after it was loaded. "
                    f"Committing overwrites those changes.",
                    StaleCommitWarning,
                    stacklevel=2,
                )
        self._store.put(self.kind, self.name, self.get())
        self._state = LifecycleState.COMMITTED
        self._after_commit()
        return self

    def _after_commit(self) -> None:
        """Hook for subclasses publishing related records alongside this one."""
        pass

    def remove(self) -> Self:
        """Delete the store entry for this record immediately.

        Unlike other mutators this is not deferred, so remove() followed by
        commit() replaces the entry.

        Returns:
            Self for chaining.
        """
        self._store.delete(self.kind, self.name)
        self._removed = True
        return self

    # Comparison, merge and description

    def equals(self, other: object) -> bool:
        """Check whether other manipulates a record of the same kind and name."""
        if not isinstance(other, Manipulator):
            return False
        return self.kind == other.kind and self.name == other.name

    def merge_from(self, other: Manipulator) -> Self:
        """Merge another manipulator's working copy into this one, except name/type.

        Equivalent to calling `set()` with the other record's fields.

        Raises:
            InvalidArgumentError: If other is not a manipulator of the same class.
            ManipulatorCommittedError: If already committed.
        """
        if not isinstance(other, type(self)):
            raise InvalidArgumentError(
                f"Can only merge with another {type(self).__name__}, got {type(other).__name__}"
            )
        fields = other.get()
        for field_name in IMMUTABLE_FIELDS:
            fields.pop(field_name, None)
        return self.set(fields)

    def describe(self) -> str:
        """Short human-readable label."""
        return f"[{self.kind}: {self.name}]"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Manipulator):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.kind, self.name))

    def __add__(self, other: Manipulator) -> Self:
        return self.merge_from(other)

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, state={self._state.name})"

    # Field access used by sub-list bindings

    def _read_path(self, path: tuple[str, ...]) -> Any:
        """Read a nested field of the working copy, or None if any step is absent."""
        node: Any = self._record
        for part in path:
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def _write_path(self, path: tuple[str, ...], value: Any) -> None:
        """Write a nested field of the working copy, creating parent mappings."""
        self._require_pending()
        node = self._record
        for part in path[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[path[-1]] = value

    def _iter_path(self, path: tuple[str, ...]) -> Iterator[Any]:
        """Iterate the elements of a nested list field without copying."""
        yield from self._read_path(path) or []
