"""Store backends."""

from protoforge.storage.local import LocalStore
from protoforge.storage.protocol import PrototypeStore

__all__ = [
    "PrototypeStore",
    "LocalStore",
]
