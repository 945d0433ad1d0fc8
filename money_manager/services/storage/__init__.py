"""
Storage Services Package

Provides the abstract state-storage interface and its implementations.
The JSON file backend is the default; in-memory storage serves tests.
"""

from money_manager.services.storage.interface import (
    CorruptStateError,
    StateStorageInterface,
    StorageError,
)
from money_manager.services.storage.json_file import JsonFileStateStorage
from money_manager.services.storage.memory import InMemoryStateStorage

__all__ = [
    # Interface
    "StateStorageInterface",
    # Exceptions
    "CorruptStateError",
    "StorageError",
    # Implementations
    "InMemoryStateStorage",
    "JsonFileStateStorage",
]
