"""
Tests for state document storage backends.
"""

import json
from decimal import Decimal

import pytest

from money_manager.models.ledger import Account, LedgerState, Theme, Transaction, TransactionType
from money_manager.services.storage import (
    CorruptStateError,
    InMemoryStateStorage,
    JsonFileStateStorage,
    StorageError,
)


@pytest.fixture
def state() -> LedgerState:
    return LedgerState(
        accounts=[Account(id="a1", name="Bank", balance=Decimal("1000"))],
        transactions=[Transaction(
            id="t1", type=TransactionType.EXPENSE, amount=Decimal("250"), account_id="a1",
        )],
        theme=Theme.LIGHT,
    )


class TestJsonFileStateStorage:
    """Tests for the JSON file backend."""

    def test_missing_file_loads_none(self, tmp_path):
        storage = JsonFileStateStorage(tmp_path / "state.json")
        assert storage.load() is None

    def test_save_and_load(self, tmp_path, state):
        storage = JsonFileStateStorage(tmp_path / "state.json")
        storage.save(state)

        assert storage.load() == state

    def test_file_uses_wire_format(self, tmp_path, state):
        path = tmp_path / "state.json"
        JsonFileStateStorage(path).save(state)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["transactions"][0]["accountId"] == "a1"
        assert data["theme"] == "light"

    def test_creates_parent_directories(self, tmp_path, state):
        path = tmp_path / "nested" / "dir" / "state.json"
        JsonFileStateStorage(path).save(state)
        assert path.exists()

    def test_no_temp_file_left_behind(self, tmp_path, state):
        JsonFileStateStorage(tmp_path / "state.json").save(state)
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]

    def test_overwrites_previous_document(self, tmp_path, state):
        storage = JsonFileStateStorage(tmp_path / "state.json")
        storage.save(state)
        storage.save(LedgerState())

        assert storage.load().accounts == []

    @pytest.mark.parametrize("contents", [
        b"{oops",
        b'{"accounts": 5}',
        b"[]",
        b'{"accounts": [], "transactions": [\xff]}',
    ])
    def test_corrupt_file_raises(self, tmp_path, contents):
        path = tmp_path / "state.json"
        path.write_bytes(contents)

        with pytest.raises(CorruptStateError):
            JsonFileStateStorage(path).load()

    def test_corrupt_is_a_storage_error(self):
        assert issubclass(CorruptStateError, StorageError)

    def test_unreadable_path_raises_storage_error(self, tmp_path):
        directory = tmp_path / "state.json"
        directory.mkdir()
        with pytest.raises(StorageError):
            JsonFileStateStorage(directory).load()


class TestInMemoryStateStorage:
    """Tests for the in-memory backend."""

    def test_empty_loads_none(self):
        assert InMemoryStateStorage().load() is None

    def test_snapshot_is_detached(self, state):
        """Test later mutations do not leak into stored data."""
        storage = InMemoryStateStorage()
        storage.save(state)
        state.accounts.clear()

        assert len(storage.load().accounts) == 1
        assert storage.save_count == 1

    def test_corrupt_snapshot_raises(self):
        with pytest.raises(CorruptStateError):
            InMemoryStateStorage(snapshot="not json").load()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
