"""Core type definitions for protoforge."""

from typing import Any

type Record = dict[str, Any]
"""A prototype record: a mapping with at least ``type`` and ``name`` fields."""

type Copy[T] = T
"""Type alias indicating a value is a deep copy that won't auto-persist.

When you see `Copy[T]` in a return type, mutating the returned value does NOT
affect the manipulator's working copy or the store. To persist changes, write
them back through the manipulator and call `commit()`.
"""
