"""Comparator models.

A comparator selects elements of a sub-list. Callers pass either a scalar
(matched by equality against an element key) or a one-argument predicate;
both are represented by a tagged variant so the rest of the engine only ever
deals with a single predicate type.

Usage:
    LiteralMatch("iron-plate")
    PredicateMatch(lambda item: item["amount"] > 5)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

Scalar = str | int | float | bool
"""Values accepted as literal comparators."""

Predicate = Callable[[Any], bool]
"""Signature: (element) -> matches"""

ElementKey = str | int | None
"""Where a literal comparator looks inside an element.

None compares the element itself, a str reads a mapping field and an int
reads a sequence position.
"""


@dataclass(frozen=True, slots=True)
class LiteralMatch:
    """Match elements whose key equals `value`."""

    value: Scalar


@dataclass(frozen=True, slots=True)
class PredicateMatch:
    """Match elements for which `fn(element)` is true."""

    fn: Predicate


Comparator = LiteralMatch | PredicateMatch

RawComparator = Scalar | Predicate | Comparator
"""Anything `as_comparator` accepts."""
