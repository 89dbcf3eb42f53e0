"""Binding of a record's sub-list field to the list engine.

A SubListField describes where a list lives inside a record, what a scalar
comparator matches against, and whether the list is unique-by-key or
duplicate-permitting. Domain manipulators expose one set of named methods per
field and delegate to these bindings.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from protoforge.core import listops
from protoforge.core.compare import ElementKey, RawComparator
from protoforge.core.errors import InvalidArgumentError
from protoforge.core.listops import AddOptions, MatchOptions

if TYPE_CHECKING:
    from protoforge.manipulator.base import Manipulator

Validator = Callable[[Any], None]
"""Signature: (element) -> None, raising InvalidArgumentError on a bad shape."""

Identity = Callable[[Any], RawComparator]
"""Signature: (new_element) -> comparator matching existing duplicates of it."""


@dataclass(frozen=True, slots=True)
class SubListField:
    """An ordered list nested inside a manipulator's working record."""

    path: tuple[str, ...]
    """Field path from the record root, e.g. ("unit", "ingredients")."""

    key: ElementKey = None
    """What scalar comparators are matched against."""

    identity: Identity | None = None
    """Duplicate detector for unique-by-key lists. None = duplicate-permitting."""

    validate: Validator | None = None
    """Element shape check, applied when settings.validate_elements is on."""

    @property
    def label(self) -> str:
        return ".".join(self.path)

    def _check(self, owner: Manipulator, element: Any) -> None:
        if self.validate is not None and owner.settings.validate_elements:
            self.validate(element)

    def get(self, owner: Manipulator) -> list[Any]:
        return copy.deepcopy(list(owner._read_path(self.path) or []))

    def set(self, owner: Manipulator, values: Sequence[Any]) -> None:
        if isinstance(values, str | bytes | Mapping) or not isinstance(values, Sequence):
            raise InvalidArgumentError(
                f"{self.label} parameter: Expected list, got {type(values).__name__}"
            )
        for value in values:
            self._check(owner, value)
        owner._write_path(self.path, copy.deepcopy(list(values)))

    def count(self, owner: Manipulator) -> int:
        return len(owner._read_path(self.path) or [])

    def has(self, owner: Manipulator, compare: RawComparator | None) -> bool:
        return listops.has(owner._read_path(self.path), compare, self.key)

    def add(
        self,
        owner: Manipulator,
        item: Any,
        options: AddOptions | Mapping[str, bool] | None = None,
        compare: RawComparator | None = None,
    ) -> None:
        """Append an element.

        Unique lists skip the item when an element with the same identity exists,
        unless duplicates are allowed. Duplicate-permitting lists always append,
        unless the caller passes an explicit comparator to guard against.
        """
        owner._require_pending()
        opts = AddOptions.coerce(options)
        self._check(owner, item)
        if compare is None and self.identity is not None and not opts.allow_duplicates:
            compare = self.identity(item)
        if compare is None:
            opts = AddOptions(allow_duplicates=True)
        owner._write_path(
            self.path, listops.add(owner._read_path(self.path), item, compare, opts, self.key)
        )

    def remove(
        self,
        owner: Manipulator,
        compare: RawComparator,
        options: MatchOptions | Mapping[str, bool] | None = None,
    ) -> None:
        owner._require_pending()
        owner._write_path(
            self.path, listops.remove(owner._read_path(self.path), compare, options, self.key)
        )

    def replace(
        self,
        owner: Manipulator,
        compare: RawComparator,
        new_item: Any,
        options: MatchOptions | Mapping[str, bool] | None = None,
    ) -> None:
        owner._require_pending()
        if callable(new_item):
            transform = new_item

            def replacement(existing: Any) -> Any:
                value = transform(existing)
                self._check(owner, value)
                return value

            items = listops.replace(
                owner._read_path(self.path), replacement, compare, options, self.key
            )
        else:
            self._check(owner, new_item)
            items = listops.replace(
                owner._read_path(self.path), new_item, compare, options, self.key
            )
        owner._write_path(self.path, items)

    def clear(self, owner: Manipulator) -> None:
        owner._write_path(self.path, [])

    def count_matching(self, owner: Manipulator, compare: RawComparator) -> int:
        return listops.count(owner._read_path(self.path), compare, self.key)

    def select(self, owner: Manipulator, compare: RawComparator) -> list[Any]:
        return listops.select(owner._read_path(self.path), compare, self.key)


# Element validators


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def validate_string(parameter: str) -> Validator:
    """Build a validator requiring a plain string element."""

    def check(value: Any) -> None:
        if not isinstance(value, str):
            raise InvalidArgumentError(
                f"{parameter} parameter: Expected string, got {type(value).__name__}"
            )

    return check


def validate_typed_entry(parameter: str) -> Validator:
    """Build a validator for ``{"type": str, "name": str, "amount": number}`` entries."""

    def check(value: Any) -> None:
        if not isinstance(value, Mapping):
            raise InvalidArgumentError(
                f"{parameter} parameter: Expected mapping, got {type(value).__name__}"
            )
        for field_name in ("type", "name"):
            if not isinstance(value.get(field_name), str):
                raise InvalidArgumentError(
                    f"{parameter} parameter: Must have a {field_name} field of type string"
                )
        if not _is_number(value.get("amount")):
            raise InvalidArgumentError(
                f"{parameter} parameter: Must have an amount field of type number"
            )

    return check


def validate_effect(parameter: str) -> Validator:
    """Build a validator for effect mappings carrying a string ``type``."""

    def check(value: Any) -> None:
        if not isinstance(value, Mapping):
            raise InvalidArgumentError(
                f"{parameter} parameter: Expected mapping, got {type(value).__name__}"
            )
        if not isinstance(value.get("type"), str):
            raise InvalidArgumentError(
                f"{parameter} parameter: Must have a type field of type string"
            )

    return check


def validate_pack(parameter: str) -> Validator:
    """Build a validator for ``[name, amount]`` science pack entries."""

    def check(value: Any) -> None:
        if not isinstance(value, list | tuple):
            raise InvalidArgumentError(
                f"{parameter} parameter: Expected list, got {type(value).__name__}"
            )
        if len(value) < 1 or not isinstance(value[0], str):
            raise InvalidArgumentError(
                f"{parameter} parameter: Missing science pack name at index 0"
            )
        if len(value) < 2 or not _is_number(value[1]):
            raise InvalidArgumentError(
                f"{parameter} parameter: Missing science pack amount at index 1"
            )

    return check
