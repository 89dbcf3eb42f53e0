"""Pure list operations parameterized by a comparator.

None of these functions mutate the list they are given; each returns a new
list which the caller treats as authoritative. An absent list (None) is
treated as empty. Every inserted value is deep-copied so caller-owned
objects are never aliased into the result.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any

from protoforge.core.compare import ElementKey, normalize
from protoforge.core.listops.models import AddOptions, MatchOptions


def has(items: Sequence[Any] | None, compare: Any, key: ElementKey = None) -> bool:
    """Check if any element matches the comparator.

    Short-circuits at the first match. A missing comparator matches nothing.

    Args:
        items: List to search (None is treated as empty).
        compare: Scalar, predicate or tagged comparator.
        key: Element key a scalar comparator is matched against.

    Returns:
        True if at least one element matches.

    Raises:
        InvalidArgumentError: If compare is neither scalar nor callable.
    """
    if compare is None:
        return False
    predicate = normalize(compare, key)
    return any(predicate(item) for item in items or [])


def add(
    items: Sequence[Any] | None,
    item: Any,
    compare: Any = None,
    options: AddOptions | Mapping[str, bool] | None = None,
    key: ElementKey = None,
) -> list[Any]:
    """Append a deep copy of `item` unless a matching element already exists.

    Args:
        items: List to add to (None creates a new list).
        item: Element to append.
        compare: Duplicate detector. Required unless duplicates are allowed.
        options: AddOptions, mapping or None.
        key: Element key a scalar comparator is matched against.

    Returns:
        New list, with `item` appended unless a duplicate was found.

    Raises:
        MissingArgumentError: If compare is None and duplicates are not allowed.
        InvalidArgumentError: If compare or options are malformed.
    """
    opts = AddOptions.coerce(options)
    result = list(items or [])
    if not opts.allow_duplicates:
        predicate = normalize(compare, key)
        if any(predicate(existing) for existing in result):
            return result
    result.append(copy.deepcopy(item))
    return result


def remove(
    items: Sequence[Any] | None,
    compare: Any,
    options: MatchOptions | Mapping[str, bool] | None = None,
    key: ElementKey = None,
) -> list[Any]:
    """Remove the first matching element, or all of them.

    Args:
        items: List to remove from (None yields an empty list).
        compare: Scalar, predicate or tagged comparator.
        options: MatchOptions, mapping or None.
        key: Element key a scalar comparator is matched against.

    Returns:
        New list without the removed element(s).

    Raises:
        MissingArgumentError: If compare is None.
        InvalidArgumentError: If compare or options are malformed.
    """
    opts = MatchOptions.coerce(options)
    predicate = normalize(compare, key)
    result = list(items or [])

    if opts.all:
        return [existing for existing in result if not predicate(existing)]

    for index, existing in enumerate(result):
        if predicate(existing):
            del result[index]
            break
    return result


def replace(
    items: Sequence[Any] | None,
    new_item: Any,
    compare: Any,
    options: MatchOptions | Mapping[str, bool] | None = None,
    key: ElementKey = None,
) -> list[Any]:
    """Overwrite the first matching element, or all of them.

    If `new_item` is callable it is treated as a transformation: it receives a
    deep copy of the matched element and its return value is stored instead.

    Args:
        items: List to modify (None yields an empty list).
        new_item: Replacement value, or a function of the matched element.
        compare: Scalar, predicate or tagged comparator.
        options: MatchOptions, mapping or None.
        key: Element key a scalar comparator is matched against.

    Returns:
        New list of the same length with matched slots replaced.

    Raises:
        MissingArgumentError: If compare is None.
        InvalidArgumentError: If compare or options are malformed.
    """
    opts = MatchOptions.coerce(options)
    predicate = normalize(compare, key)
    result = list(items or [])

    for index, existing in enumerate(result):
        if not predicate(existing):
            continue
        if callable(new_item):
            result[index] = copy.deepcopy(new_item(copy.deepcopy(existing)))
        else:
            result[index] = copy.deepcopy(new_item)
        if not opts.all:
            break
    return result


def count(items: Sequence[Any] | None, compare: Any, key: ElementKey = None) -> int:
    """Count matching elements.

    Raises:
        MissingArgumentError: If compare is None.
        InvalidArgumentError: If compare is neither scalar nor callable.
    """
    predicate = normalize(compare, key)
    return sum(1 for item in items or [] if predicate(item))


def select(items: Sequence[Any] | None, compare: Any, key: ElementKey = None) -> list[Any]:
    """Return deep copies of all matching elements, in list order.

    Raises:
        MissingArgumentError: If compare is None.
        InvalidArgumentError: If compare is neither scalar nor callable.
    """
    predicate = normalize(compare, key)
    return [copy.deepcopy(item) for item in items or [] if predicate(item)]
