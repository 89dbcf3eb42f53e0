"""protoforge: builders for editing game-content prototype records.

Usage:
    from protoforge import LocalStore, Recipe, Technology

    store = LocalStore(records)

    (
        Technology.load(store, "electronics")
        .add_prerequisite("automation")
        .replace_science_pack("logistic-science-pack", ["automation-science-pack", 1])
        .commit()
    )

    Recipe.load(store, {"name": "solder", "ingredients": []}).add_unlock("electronics").commit()
"""

__version__ = "0.1.0"

# Configuration
from protoforge.config import ManipulatorSettings

# Core primitives
from protoforge.core import (
    AddOptions,
    AlreadyExistsError,
    Comparator,
    InvalidArgumentError,
    LiteralMatch,
    ManipulatorCommittedError,
    MatchOptions,
    MissingArgumentError,
    NotFoundError,
    PredicateMatch,
    ProtoforgeError,
    Record,
    normalize,
)

# Manipulators
from protoforge.manipulator import (
    LifecycleState,
    Manipulator,
    Origin,
    Recipe,
    StaleCommitWarning,
    Technology,
)

# Storage
from protoforge.storage import LocalStore, PrototypeStore

__all__ = [
    # Version
    "__version__",
    # Core
    "Record",
    "Comparator",
    "LiteralMatch",
    "PredicateMatch",
    "normalize",
    "AddOptions",
    "MatchOptions",
    # Errors
    "ProtoforgeError",
    "InvalidArgumentError",
    "MissingArgumentError",
    "NotFoundError",
    "AlreadyExistsError",
    "ManipulatorCommittedError",
    # Manipulators
    "Manipulator",
    "Origin",
    "LifecycleState",
    "StaleCommitWarning",
    "Technology",
    "Recipe",
    # Storage
    "PrototypeStore",
    "LocalStore",
    # Config
    "ManipulatorSettings",
]
