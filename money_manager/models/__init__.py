"""
Data Models Package

This package contains all Pydantic models used in Money Manager.
The state document and everything flowing in or out of the ledger
engine must conform to these schemas.
"""

from money_manager.models.ledger import (
    OTHER_CATEGORY,
    Account,
    AccountBalance,
    AccountType,
    CashFlow,
    Emi,
    FeedEntry,
    LedgerState,
    LedgerTotals,
    NewAccount,
    NewEmi,
    NewTransaction,
    Preset,
    Repayment,
    Theme,
    Transaction,
    TransactionType,
)
from money_manager.models.audit import (
    AuditSeverity,
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventType,
)

__all__ = [
    # Ledger models
    "OTHER_CATEGORY",
    "Account",
    "AccountBalance",
    "AccountType",
    "CashFlow",
    "Emi",
    "FeedEntry",
    "LedgerState",
    "LedgerTotals",
    "NewAccount",
    "NewEmi",
    "NewTransaction",
    "Preset",
    "Repayment",
    "Theme",
    "Transaction",
    "TransactionType",
    # Audit models
    "AuditSeverity",
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventType",
]
