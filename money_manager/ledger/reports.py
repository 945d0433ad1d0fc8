"""
Read-only views over the ledger for display.

Nothing here mutates the document.
"""

from decimal import Decimal
from typing import Optional

from money_manager.ledger.engine import ZERO, compute_balance
from money_manager.models.ledger import (
    AccountBalance,
    CashFlow,
    FeedEntry,
    LedgerState,
    TransactionType,
)


UNKNOWN_ACCOUNT = "Unknown Account"


def account_balances(state: LedgerState) -> list[AccountBalance]:
    """Accounts in display (insertion) order with their running balances."""
    return [
        AccountBalance(account=account, balance=compute_balance(state, account.id))
        for account in state.accounts
    ]


def transaction_feed(
    state: LedgerState,
    limit: Optional[int] = None,
) -> list[FeedEntry]:
    """
    Transactions newest first.

    The log is append-only, so reversing it gives recency order. Entries
    whose account no longer resolves are labelled "Unknown Account".
    """
    names = {a.id: a.name for a in state.accounts}
    newest_first = list(reversed(state.transactions))
    if limit is not None:
        newest_first = newest_first[:limit]

    entries = []
    for tx in newest_first:
        signed = tx.amount if tx.type == TransactionType.INCOME else -tx.amount
        entries.append(FeedEntry(
            transaction=tx,
            account_name=names.get(tx.account_id, UNKNOWN_ACCOUNT),
            signed_amount=signed,
        ))
    return entries


def cash_flow(state: LedgerState) -> CashFlow:
    income: Decimal = ZERO
    expense: Decimal = ZERO
    for tx in state.transactions:
        if tx.type == TransactionType.INCOME:
            income += tx.amount
        else:
            expense += tx.amount

    balance = sum(
        (compute_balance(state, account.id) for account in state.accounts),
        ZERO,
    )
    return CashFlow(income=income, expense=expense, balance=balance)
