"""Option models for list operations.

Options are explicit per-call configuration. Callers may pass the dataclass,
a plain mapping with the same field names, or None for the defaults.

Usage:
    remove(items, "iron-plate", MatchOptions(all=True))
    remove(items, "iron-plate", {"all": True})
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Self

from protoforge.core.errors import InvalidArgumentError


def _coerce(cls: type[Any], options: Any) -> Any:
    if options is None:
        return cls()
    if isinstance(options, cls):
        return options
    if not isinstance(options, Mapping):
        raise InvalidArgumentError(
            f"options parameter: Expected {cls.__name__}, mapping or None, "
            f"got {type(options).__name__}"
        )
    known = {f.name for f in fields(cls)}
    unknown = set(options) - known
    if unknown:
        raise InvalidArgumentError(
            f"options parameter: Unknown option(s) {', '.join(sorted(map(str, unknown)))}"
        )
    for name, value in options.items():
        if not isinstance(value, bool):
            raise InvalidArgumentError(
                f"options parameter: {name} must be a bool, got {type(value).__name__}"
            )
    return cls(**options)


@dataclass(frozen=True, slots=True)
class AddOptions:
    """Options for `add`."""

    allow_duplicates: bool = False
    """Append unconditionally, ignoring the comparator."""

    @classmethod
    def coerce(cls, options: AddOptions | Mapping[str, bool] | None) -> Self:
        """Build options from a dataclass, mapping or None.

        Raises:
            InvalidArgumentError: If options is not a mapping or names unknown fields.
        """
        return _coerce(cls, options)  # type: ignore[no-any-return]


@dataclass(frozen=True, slots=True)
class MatchOptions:
    """Options for `remove` and `replace`."""

    all: bool = False
    """Act on every match instead of only the first."""

    @classmethod
    def coerce(cls, options: MatchOptions | Mapping[str, bool] | None) -> Self:
        """Build options from a dataclass, mapping or None.

        Raises:
            InvalidArgumentError: If options is not a mapping or names unknown fields.
        """
        return _coerce(cls, options)  # type: ignore[no-any-return]
