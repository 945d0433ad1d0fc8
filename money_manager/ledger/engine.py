"""
Ledger Engine

The derivation rules and every mutation of the state document.

DESIGN DECISION: The engine is a plain module of functions. Each one takes
the document it works on as its first argument; nothing here keeps state
of its own. Persisting the document and telling the UI to re-render is the
caller's job (see money_manager.session).

GUARANTEES:
- Running balances and totals are recomputed from scratch on every call.
- A rejected operation raises before touching the document.
- Compound mutations (cascade delete, repayment) become visible all at once.
"""

from decimal import Decimal
from typing import Optional

from money_manager.models.ledger import (
    Account,
    AccountType,
    Emi,
    LedgerState,
    LedgerTotals,
    NewAccount,
    NewEmi,
    NewTransaction,
    Repayment,
    Theme,
    Transaction,
    TransactionType,
)


DEBT_REPAYMENT_CATEGORY = "Debt Repayment"
REPAYMENT_CATEGORY = "Repayment"

ZERO = Decimal("0")


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class PreconditionError(LedgerError):
    """The operation cannot run against the current document. Nothing changed."""
    pass


# =============================================================================
# DERIVATION
# =============================================================================

def find_account(state: LedgerState, account_id: str) -> Optional[Account]:
    """Return the account with this id, or None."""
    return next((a for a in state.accounts if a.id == account_id), None)


def compute_balance(state: LedgerState, account_id: str) -> Decimal:
    """
    Running balance of one account.

    initial balance + income on the account - expense on the account.
    An unknown id yields zero: rendering code may ask about an account
    that was deleted a moment ago.
    """
    account = find_account(state, account_id)
    if account is None:
        return ZERO

    balance = account.balance
    for tx in state.transactions:
        if tx.account_id != account_id:
            continue
        if tx.type == TransactionType.INCOME:
            balance += tx.amount
        else:
            balance -= tx.amount
    return balance


def compute_totals(state: LedgerState) -> LedgerTotals:
    """
    Aggregate figures over the whole document.

    NOTE: A negative investment balance is counted in `debt` AND added
    (signed) to `investments`. This asymmetry is the documented rule and
    is kept as-is pending product sign-off.
    """
    gross_assets = ZERO
    debt = ZERO
    investments = ZERO

    for account in state.accounts:
        balance = compute_balance(state, account.id)
        is_investment = account.type == AccountType.INVESTMENT

        if balance > 0:
            gross_assets += balance
            if is_investment:
                investments += balance
        elif balance < 0:
            debt += abs(balance)
            if is_investment:
                investments += balance

    net_worth = gross_assets - debt
    emis = sum((emi.amount for emi in state.emis), ZERO)

    return LedgerTotals(
        spendable=net_worth - investments - emis,
        net_worth=net_worth,
        investments=investments,
        debt=debt,
        emis=emis,
    )


def eligible_repayment_sources(state: LedgerState) -> list[Account]:
    """Accounts that may fund a debt repayment (liquid, non-investment)."""
    return [a for a in state.accounts if a.type.is_liquid]


# =============================================================================
# MUTATIONS
# =============================================================================

def add_account(state: LedgerState, request: NewAccount) -> Account:
    """
    Open an account.

    Credit accounts store the entered outstanding amount negated, so that
    a negative balance always means money owed. `limit` is kept for credit
    accounts only.
    """
    if request.type == AccountType.CREDIT:
        account = Account(
            name=request.name,
            type=request.type,
            balance=ZERO - request.balance,
            limit=request.limit,
        )
    else:
        account = Account(
            name=request.name,
            type=request.type,
            balance=request.balance,
        )

    state.accounts.append(account)
    return account


def delete_account(state: LedgerState, account_id: str) -> None:
    """Remove an account together with its transactions and EMIs."""
    accounts = [a for a in state.accounts if a.id != account_id]
    transactions = [t for t in state.transactions if t.account_id != account_id]
    emis = [e for e in state.emis if e.account_id != account_id]

    # Swap all three in one go so no orphan is ever observable
    state.accounts, state.transactions, state.emis = accounts, transactions, emis


def add_transaction(state: LedgerState, request: NewTransaction) -> Transaction:
    """Append an income or expense to the log."""
    if not state.accounts:
        raise PreconditionError("Please create an account first.")

    transaction = Transaction(
        type=request.type,
        amount=request.amount,
        category=request.category,
        description=request.description,
        account_id=request.account_id,
    )
    state.transactions.append(transaction)
    return transaction


def delete_transaction(state: LedgerState, transaction_id: str) -> None:
    state.transactions = [t for t in state.transactions if t.id != transaction_id]


def add_emi(state: LedgerState, request: NewEmi) -> Emi:
    """Start tracking a monthly installment against an account."""
    if not state.accounts:
        raise PreconditionError("Please create an account first.")

    emi = Emi(
        description=request.description,
        amount=request.amount,
        account_id=request.account_id,
    )
    state.emis.append(emi)
    return emi


def delete_emi(state: LedgerState, emi_id: str) -> None:
    state.emis = [e for e in state.emis if e.id != emi_id]


def repay_debt(
    state: LedgerState,
    request: Repayment,
) -> tuple[Transaction, Transaction]:
    """
    Move money from a liquid account onto a credit account.

    Posts an expense on the source and an income on the credit account.
    Both postings are appended together, or not at all. Paying more than
    is owed is allowed and leaves the credit account positive.

    Returns:
        (source_expense, credit_income)
    """
    if request.amount <= 0:
        raise PreconditionError("Repayment amount must be greater than zero.")

    credit = find_account(state, request.credit_account_id)
    if credit is None or credit.type != AccountType.CREDIT:
        raise PreconditionError("Choose a credit account to repay.")

    source = find_account(state, request.source_account_id)
    if source is None or not source.type.is_liquid:
        raise PreconditionError(
            "Repayments must come from a bank or cash account."
        )

    description = f"Repayment: {credit.name}"
    source_expense = Transaction(
        type=TransactionType.EXPENSE,
        amount=request.amount,
        category=DEBT_REPAYMENT_CATEGORY,
        description=description,
        account_id=source.id,
    )
    credit_income = Transaction(
        type=TransactionType.INCOME,
        amount=request.amount,
        category=REPAYMENT_CATEGORY,
        description=description,
        account_id=credit.id,
    )

    state.transactions.extend((source_expense, credit_income))
    return source_expense, credit_income


def toggle_theme(state: LedgerState) -> Theme:
    state.theme = Theme.LIGHT if state.theme == Theme.DARK else Theme.DARK
    return state.theme
