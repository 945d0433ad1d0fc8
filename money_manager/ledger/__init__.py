"""
Ledger Package

The computation engine and the pieces built directly on it:
presets, read-only reports and the backup codec.
"""

from money_manager.ledger.engine import (
    DEBT_REPAYMENT_CATEGORY,
    REPAYMENT_CATEGORY,
    LedgerError,
    PreconditionError,
    add_account,
    add_emi,
    add_transaction,
    compute_balance,
    compute_totals,
    delete_account,
    delete_emi,
    delete_transaction,
    eligible_repayment_sources,
    find_account,
    repay_debt,
    toggle_theme,
)
from money_manager.ledger.presets import (
    DEFAULT_EXPENSE_PRESETS,
    DEFAULT_INCOME_PRESETS,
    add_custom_preset,
    available_presets,
    delete_custom_preset,
)
from money_manager.ledger.reports import (
    account_balances,
    cash_flow,
    transaction_feed,
)
from money_manager.ledger.backup import (
    MalformedImportError,
    backup_filename,
    export_state,
    import_state,
)

__all__ = [
    # Engine
    "DEBT_REPAYMENT_CATEGORY",
    "REPAYMENT_CATEGORY",
    "LedgerError",
    "PreconditionError",
    "add_account",
    "add_emi",
    "add_transaction",
    "compute_balance",
    "compute_totals",
    "delete_account",
    "delete_emi",
    "delete_transaction",
    "eligible_repayment_sources",
    "find_account",
    "repay_debt",
    "toggle_theme",
    # Presets
    "DEFAULT_EXPENSE_PRESETS",
    "DEFAULT_INCOME_PRESETS",
    "add_custom_preset",
    "available_presets",
    "delete_custom_preset",
    # Reports
    "account_balances",
    "cash_flow",
    "transaction_feed",
    # Backup
    "MalformedImportError",
    "backup_filename",
    "export_state",
    "import_state",
]
