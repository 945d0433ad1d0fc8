"""
In-Memory Storage Implementation

Holds a serialized snapshot rather than the live object, so later
mutations of the session's document never leak into "stored" data.
Used by tests and by hosts that persist elsewhere.
"""

from typing import Optional

from pydantic import ValidationError

from money_manager.ledger.backup import export_state
from money_manager.models.ledger import LedgerState
from money_manager.services.storage.interface import (
    CorruptStateError,
    StateStorageInterface,
)


class InMemoryStateStorage(StateStorageInterface):
    """State storage that keeps the last saved snapshot in memory."""

    def __init__(self, snapshot: Optional[str] = None):
        self._snapshot = snapshot
        self.save_count = 0

    @property
    def snapshot(self) -> Optional[str]:
        """The raw JSON of the last save."""
        return self._snapshot

    def load(self) -> Optional[LedgerState]:
        if self._snapshot is None:
            return None
        try:
            return LedgerState.model_validate_json(self._snapshot)
        except ValidationError as e:
            raise CorruptStateError(
                f"Stored snapshot is not a valid document: {e.error_count()} errors"
            ) from e

    def save(self, state: LedgerState) -> None:
        self._snapshot = export_state(state)
        self.save_count += 1
