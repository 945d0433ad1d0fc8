"""
Services Package

External collaborators of the ledger. Currently only storage.
"""

from money_manager.services.storage import (
    CorruptStateError,
    InMemoryStateStorage,
    JsonFileStateStorage,
    StateStorageInterface,
    StorageError,
)

__all__ = [
    "CorruptStateError",
    "InMemoryStateStorage",
    "JsonFileStateStorage",
    "StateStorageInterface",
    "StorageError",
]
