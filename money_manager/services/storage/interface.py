"""
Abstract Storage Interface

DESIGN DECISION: The whole state document is the unit of persistence.
There is no per-entity storage, so the interface is just load and save.
This allows us to:
1. Keep the JSON file backend for local use
2. Use in-memory storage for testing
3. Swap in another durable store later without touching the ledger
"""

from abc import ABC, abstractmethod
from typing import Optional

from money_manager.models.ledger import LedgerState


class StateStorageInterface(ABC):
    """
    Abstract interface for state document storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> Optional[LedgerState]:
        """
        Read the stored document.

        Returns:
            The document, or None if nothing has been stored yet

        Raises:
            CorruptStateError: If stored data cannot be parsed
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, state: LedgerState) -> None:
        """
        Replace the stored document with `state`.

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptStateError(StorageError):
    """Stored data exists but is not a valid state document."""
    pass
