"""Record manipulators: isolated working copies with explicit commit."""

from protoforge.manipulator.base import (
    LifecycleState,
    Manipulator,
    Origin,
    StaleCommitWarning,
    deep_merge,
)
from protoforge.manipulator.fields import SubListField
from protoforge.manipulator.recipe import Recipe
from protoforge.manipulator.technology import UNLOCK_RECIPE, Technology

__all__ = [
    # Base
    "Manipulator",
    "Origin",
    "LifecycleState",
    "StaleCommitWarning",
    "deep_merge",
    "SubListField",
    # Kinds
    "Technology",
    "Recipe",
    "UNLOCK_RECIPE",
]
