"""
Tests for backup export and import.
"""

import json
from datetime import date
from decimal import Decimal

import pytest

from money_manager.ledger.backup import (
    MalformedImportError,
    backup_filename,
    export_state,
    import_state,
)
from money_manager.ledger.engine import add_account, add_emi, add_transaction
from money_manager.ledger.presets import add_custom_preset
from money_manager.models.ledger import (
    AccountType,
    LedgerState,
    NewAccount,
    NewEmi,
    NewTransaction,
    Preset,
    Theme,
    TransactionType,
)


OLD_BACKUP = {
    "accounts": [
        {"id": "a1", "name": "Bank", "type": "bank", "balance": 1000},
    ],
    "transactions": [
        {
            "id": "t1",
            "type": "expense",
            "amount": 200,
            "description": "Groceries",
            "accountId": "a1",
            "date": "2024-01-05T10:00:00.000Z",
        },
    ],
    "theme": "light",
}


@pytest.fixture
def state() -> LedgerState:
    state = LedgerState(theme=Theme.DARK)
    bank = add_account(state, NewAccount(name="Bank", type=AccountType.BANK, balance=500))
    card = add_account(
        state, NewAccount(name="Card", type=AccountType.CREDIT, balance=300, limit=1000),
    )
    add_transaction(state, NewTransaction(
        type=TransactionType.EXPENSE, amount=Decimal("19.5"), category="Food",
        description="Lunch", account_id=bank.id,
    ))
    add_emi(state, NewEmi(description="Phone", amount=100, account_id=card.id))
    add_custom_preset(state, Preset(name="Coffee", icon="cafe-outline", type=TransactionType.EXPENSE))
    return state


class TestExport:
    def test_wire_shape(self, state):
        data = json.loads(export_state(state))

        assert set(data) == {"accounts", "transactions", "emis", "customPresets", "theme"}
        assert data["theme"] == "dark"
        assert data["accounts"][1]["balance"] == -300
        assert data["accounts"][1]["limit"] == 1000
        assert data["transactions"][0]["accountId"] == state.accounts[0].id
        assert data["emis"][0]["accountId"] == state.accounts[1].id
        assert data["customPresets"][0] == {
            "name": "Coffee", "icon": "cafe-outline", "type": "expense",
        }

    def test_export_then_import_keeps_document(self, state):
        restored = import_state(LedgerState(theme=Theme.DARK), export_state(state))
        assert restored == state


class TestImport:
    def test_old_backup_is_accepted(self):
        """Test missing customPresets/emis and category are defaulted."""
        restored = import_state(LedgerState(), json.dumps(OLD_BACKUP))

        assert restored.custom_presets == []
        assert restored.emis == []
        assert restored.transactions[0].category == "Other"
        assert restored.transactions[0].account_id == "a1"

    def test_keeps_current_theme(self):
        current = LedgerState(theme=Theme.DARK)
        assert import_state(current, OLD_BACKUP).theme == Theme.DARK

    def test_accepts_bytes(self):
        restored = import_state(LedgerState(), json.dumps(OLD_BACKUP).encode("utf-8"))
        assert len(restored.accounts) == 1

    def test_returns_new_document(self, state):
        before = export_state(state)
        restored = import_state(state, OLD_BACKUP)

        assert restored is not state
        assert export_state(state) == before

    @pytest.mark.parametrize("payload", [
        "{not json",
        b"\xff\xfe\x00",
        "[]",
        "null",
        json.dumps({"transactions": []}),
        json.dumps({"accounts": [], "transactions": "nope"}),
        json.dumps({"accounts": {"a1": {}}, "transactions": []}),
        json.dumps({"accounts": [], "transactions": [], "emis": "nope"}),
    ])
    def test_malformed_payload_rejected(self, payload):
        with pytest.raises(MalformedImportError):
            import_state(LedgerState(), payload)

    def test_invalid_record_rejected(self):
        payload = dict(OLD_BACKUP, transactions=[{"type": "refund", "amount": 1, "accountId": "a1"}])
        with pytest.raises(MalformedImportError, match="invalid records"):
            import_state(LedgerState(), payload)

    def test_unknown_account_type_imported_as_bank(self):
        payload = {
            "accounts": [{"id": "a1", "name": "UPI", "type": "upi", "balance": 5}],
            "transactions": [],
        }
        restored = import_state(LedgerState(), payload)

        assert restored.accounts[0].type == AccountType.BANK
        assert restored.accounts[0].balance == Decimal("5")

    def test_non_string_account_type_rejected(self):
        payload = dict(OLD_BACKUP, accounts=[{"id": "a1", "name": "X", "type": 7, "balance": 1}])
        with pytest.raises(MalformedImportError):
            import_state(LedgerState(), payload)

    def test_rejected_import_leaves_state_unchanged(self, state):
        """Test the prior document stays byte-for-byte the same."""
        before = export_state(state)
        with pytest.raises(MalformedImportError):
            import_state(state, {"accounts": "not a list", "transactions": []})
        assert export_state(state) == before


class TestBackupFilename:
    def test_dated_name(self):
        assert backup_filename(date(2024, 12, 31)) == "money_manager_backup_2024-12-31.json"

    def test_custom_prefix(self):
        assert backup_filename(date(2025, 1, 2), prefix="ledger") == "ledger_2025-01-02.json"

    def test_prefix_from_environment(self, monkeypatch):
        monkeypatch.setenv("MONEY_MANAGER_BACKUP_FILENAME_PREFIX", "mine")
        assert backup_filename(date(2025, 1, 2)) == "mine_2025-01-02.json"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
