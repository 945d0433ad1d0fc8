"""
JSON File Storage Implementation

Keeps the state document in a single JSON file, in exactly the backup
wire format, so the file can be inspected or imported elsewhere.

Writes go to a sibling temp file first and are then moved over the real
file, so a crash mid-write never leaves a half-written document.
"""

import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from money_manager.ledger.backup import export_state
from money_manager.models.ledger import LedgerState
from money_manager.services.storage.interface import (
    CorruptStateError,
    StateStorageInterface,
    StorageError,
)


class JsonFileStateStorage(StateStorageInterface):
    """State storage backed by one JSON file on disk."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[LedgerState]:
        try:
            data = self._path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e

        try:
            raw = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptStateError(f"Stored state in {self._path} is not UTF-8 text") from e

        try:
            return LedgerState.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptStateError(
                f"Stored state in {self._path} is not a valid document: "
                f"{e.error_count()} errors"
            ) from e

    def save(self, state: LedgerState) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(export_state(state), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e
