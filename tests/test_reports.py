"""
Tests for the read-only ledger views.
"""

from decimal import Decimal

import pytest

from money_manager.ledger.engine import add_account, add_transaction, delete_account
from money_manager.ledger.reports import (
    UNKNOWN_ACCOUNT,
    account_balances,
    cash_flow,
    transaction_feed,
)
from money_manager.models.ledger import (
    AccountType,
    LedgerState,
    NewAccount,
    NewTransaction,
    Transaction,
    TransactionType,
)


@pytest.fixture
def state() -> LedgerState:
    state = LedgerState()
    bank = add_account(state, NewAccount(name="Bank", type=AccountType.BANK, balance=1000))
    cash = add_account(state, NewAccount(name="Cash", type=AccountType.CASH, balance=100))
    for tx_type, amount, account in [
        (TransactionType.INCOME, 500, bank),
        (TransactionType.EXPENSE, 200, bank),
        (TransactionType.EXPENSE, 40, cash),
    ]:
        add_transaction(state, NewTransaction(
            type=tx_type, amount=amount, description=f"{tx_type.value} {amount}",
            account_id=account.id,
        ))
    return state


class TestTransactionFeed:
    def test_newest_first(self, state):
        feed = transaction_feed(state)
        assert [e.transaction.id for e in feed] == [t.id for t in reversed(state.transactions)]

    def test_signed_amounts_and_names(self, state):
        feed = transaction_feed(state)
        assert [e.signed_amount for e in feed] == [Decimal("-40"), Decimal("-200"), Decimal("500")]
        assert [e.account_name for e in feed] == ["Cash", "Bank", "Bank"]

    def test_limit(self, state):
        feed = transaction_feed(state, limit=2)
        assert len(feed) == 2
        assert feed[0].transaction.description == "expense 40"

    def test_unknown_account_label(self):
        state = LedgerState(transactions=[
            Transaction(type=TransactionType.INCOME, amount=1, account_id="gone"),
        ])
        assert transaction_feed(state)[0].account_name == UNKNOWN_ACCOUNT

    def test_log_is_not_reordered(self, state):
        before = list(state.transactions)
        transaction_feed(state)
        assert state.transactions == before


class TestCashFlow:
    def test_totals(self, state):
        flow = cash_flow(state)
        assert flow.income == Decimal("500")
        assert flow.expense == Decimal("240")
        assert flow.balance == Decimal("1360")

    def test_balance_follows_cascade_delete(self, state):
        delete_account(state, state.accounts[1].id)
        flow = cash_flow(state)
        assert flow.expense == Decimal("200")
        assert flow.balance == Decimal("1300")


class TestAccountBalances:
    def test_insertion_order_with_running_balances(self, state):
        rows = account_balances(state)
        assert [r.account.name for r in rows] == ["Bank", "Cash"]
        assert [r.balance for r in rows] == [Decimal("1300"), Decimal("60")]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
