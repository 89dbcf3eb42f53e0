"""Pure functions resolving comparators into predicates."""

from __future__ import annotations

from typing import Any

from protoforge.core.compare.models import (
    Comparator,
    ElementKey,
    LiteralMatch,
    Predicate,
    PredicateMatch,
)
from protoforge.core.errors import InvalidArgumentError, MissingArgumentError

_MISSING = object()


def is_scalar(value: Any) -> bool:
    """Check whether a value can be used as a literal comparator.

    Args:
        value: Candidate comparator.

    Returns:
        True for str, int, float and bool values.
    """
    return isinstance(value, str | int | float | bool)


def as_comparator(compare: Any) -> Comparator:
    """Wrap a raw comparator argument in its tagged variant.

    Args:
        compare: Scalar, callable, or an existing LiteralMatch/PredicateMatch.

    Returns:
        The tagged comparator.

    Raises:
        MissingArgumentError: If compare is None.
        InvalidArgumentError: If compare is neither scalar nor callable.
    """
    if compare is None:
        raise MissingArgumentError("compare parameter is required")
    if isinstance(compare, LiteralMatch | PredicateMatch):
        return compare
    if is_scalar(compare):
        return LiteralMatch(compare)
    if callable(compare):
        return PredicateMatch(compare)
    raise InvalidArgumentError(
        f"compare parameter: Expected scalar or function, got {type(compare).__name__}"
    )


def element_key(element: Any, key: ElementKey) -> Any:
    """Read the match key of an element.

    Returns a private sentinel when the element has no such key, so that a
    literal comparator never matches it.
    """
    if key is None:
        return element
    if isinstance(key, str):
        if isinstance(element, dict):
            return element.get(key, _MISSING)
        return _MISSING
    if isinstance(element, list | tuple) and -len(element) <= key < len(element):
        return element[key]
    return _MISSING


def normalize(compare: Any, key: ElementKey = None) -> Predicate:
    """Turn a scalar-or-predicate argument into a single predicate.

    Args:
        compare: Raw or tagged comparator.
        key: Element key a literal comparator is matched against.

    Returns:
        One-argument predicate. Predicates are returned unchanged.

    Raises:
        MissingArgumentError: If compare is None.
        InvalidArgumentError: If compare is neither scalar nor callable.
    """
    comparator = as_comparator(compare)
    if isinstance(comparator, PredicateMatch):
        return comparator.fn

    value = comparator.value

    def matches(element: Any) -> bool:
        candidate = element_key(element, key)
        # bool is an int subclass; True must not match 1
        return type(candidate) is type(value) and candidate == value

    return matches
