"""List engine: pure has/add/remove/replace operations over ordered sequences."""

from protoforge.core.listops.models import AddOptions, MatchOptions
from protoforge.core.listops.operations import add, count, has, remove, replace, select

__all__ = [
    # Models
    "AddOptions",
    "MatchOptions",
    # Operations
    "has",
    "add",
    "remove",
    "replace",
    "count",
    "select",
]
