"""Comparator normalization: tagged comparator models and predicate resolution."""

from protoforge.core.compare.models import (
    Comparator,
    ElementKey,
    LiteralMatch,
    Predicate,
    PredicateMatch,
    RawComparator,
    Scalar,
)
from protoforge.core.compare.operations import as_comparator, element_key, is_scalar, normalize

__all__ = [
    # Models
    "Comparator",
    "ElementKey",
    "LiteralMatch",
    "Predicate",
    "PredicateMatch",
    "RawComparator",
    "Scalar",
    # Operations
    "as_comparator",
    "element_key",
    "is_scalar",
    "normalize",
]
