"""Core functionalities: stateless comparators, list operations and errors.

Architecture Note:
    core/ contains pure, stateless building blocks with no store access.
    For stateful record editing, see manipulator/ and storage/.
"""

from protoforge.core.compare import (
    Comparator,
    LiteralMatch,
    PredicateMatch,
    as_comparator,
    normalize,
)
from protoforge.core.errors import (
    AlreadyExistsError,
    InvalidArgumentError,
    ManipulatorCommittedError,
    MissingArgumentError,
    NotFoundError,
    ProtoforgeError,
)
from protoforge.core.listops import AddOptions, MatchOptions
from protoforge.core.types import Copy, Record

__all__ = [
    # Types
    "Copy",
    "Record",
    # Errors
    "ProtoforgeError",
    "InvalidArgumentError",
    "MissingArgumentError",
    "NotFoundError",
    "AlreadyExistsError",
    "ManipulatorCommittedError",
    # Compare
    "Comparator",
    "LiteralMatch",
    "PredicateMatch",
    "as_comparator",
    "normalize",
    # List options
    "AddOptions",
    "MatchOptions",
]
