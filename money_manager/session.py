"""
Ledger Session

This module ties the ledger engine to storage, audit logging and the UI.

DESIGN DECISION: The engine only transforms the document it is handed.
The session owns that document and, after every successful mutation:
1. Persists it (before anything else can read it)
2. Emits an audit event
3. Notifies listeners that state changed (the host re-renders)

A rejected operation is audited and re-raised. Nothing is persisted and
listeners are not called, because the document did not change.

If the save itself fails, the document is rolled back to what it was before
the mutation, so memory never runs ahead of storage.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Optional, TypeVar, Union

from money_manager.audit import AuditLogger, configure_logging
from money_manager.config import get_settings
from money_manager.ledger import backup, engine, presets, reports
from money_manager.ledger.engine import LedgerError
from money_manager.models.ledger import (
    Account,
    AccountBalance,
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
from money_manager.services.storage import (
    CorruptStateError,
    JsonFileStateStorage,
    StateStorageInterface,
    StorageError,
)


StateListener = Callable[[LedgerState], None]
T = TypeVar("T")


class LedgerSession:
    """
    Owns one state document for the lifetime of the app.

    Every read goes through the engine against the current document;
    every write is followed by persist -> audit -> notify.
    """

    def __init__(
        self,
        storage: StateStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        state: Optional[LedgerState] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        if state is None:
            state = LedgerState(theme=get_settings().ledger.default_theme)
        self._state = state
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> LedgerState:
        return self._state

    # -------------------------------------------------------------------------
    # Lifecycle and listeners
    # -------------------------------------------------------------------------

    def load(self) -> LedgerState:
        """
        Replace the in-memory document with the stored one.

        Corrupt stored data is logged and a fresh document is used instead.
        Nothing is saved here, so the corrupt file survives until the next
        change.
        """
        try:
            stored = self._storage.load()
        except CorruptStateError as e:
            self._audit_logger.log_storage_error(str(e))
            stored = None

        if stored is not None:
            self._state = stored
            self._audit_logger.log_state_loaded(
                accounts=len(stored.accounts),
                transactions=len(stored.transactions),
            )
        else:
            self._state = LedgerState(theme=get_settings().ledger.default_theme)

        self._notify()
        return self._state

    def subscribe(self, listener: StateListener) -> None:
        """Call `listener(state)` after every committed change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)

    def _run(self, operation: str, action: Callable[[], T]) -> T:
        """Run an engine call; audit and re-raise if it is rejected."""
        try:
            return action()
        except LedgerError as e:
            self._audit_logger.log_operation_rejected(operation, str(e))
            raise

    def _snapshot(self) -> LedgerState:
        return self._state.model_copy(deep=True)

    def _commit(self, previous: LedgerState, audit: Callable[[], None]) -> None:
        """
        Persist, then audit, then tell listeners.

        Raises:
            StorageError: the save failed; the document is back to `previous`
        """
        try:
            self._storage.save(self._state)
        except StorageError as e:
            self._state = previous
            self._audit_logger.log_storage_error(str(e))
            raise
        audit()
        self._notify()

    # -------------------------------------------------------------------------
    # Derived figures
    # -------------------------------------------------------------------------

    def balance(self, account_id: str) -> Decimal:
        return engine.compute_balance(self._state, account_id)

    def totals(self) -> LedgerTotals:
        return engine.compute_totals(self._state)

    def account_balances(self) -> list[AccountBalance]:
        return reports.account_balances(self._state)

    def feed(self, limit: Optional[int] = None) -> list[FeedEntry]:
        """Newest-first transactions, capped at the configured feed size."""
        if limit is None:
            limit = get_settings().ledger.recent_transactions_limit
        return reports.transaction_feed(self._state, limit=limit)

    def cash_flow(self) -> CashFlow:
        return reports.cash_flow(self._state)

    def repayment_sources(self) -> list[Account]:
        return engine.eligible_repayment_sources(self._state)

    def available_presets(self, preset_type: TransactionType) -> list[Preset]:
        return presets.available_presets(self._state, preset_type)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_account(self, request: NewAccount) -> Account:
        previous = self._snapshot()
        account = self._run("add_account", lambda: engine.add_account(self._state, request))
        self._commit(previous, lambda: self._audit_logger.log_account_added(
            account.id, account.name, account.type.value,
        ))
        return account

    def delete_account(self, account_id: str) -> None:
        previous = self._snapshot()
        removed_transactions = sum(
            1 for t in self._state.transactions if t.account_id == account_id
        )
        removed_emis = sum(1 for e in self._state.emis if e.account_id == account_id)

        engine.delete_account(self._state, account_id)
        self._commit(previous, lambda: self._audit_logger.log_account_deleted(
            account_id=account_id,
            removed_transactions=removed_transactions,
            removed_emis=removed_emis,
        ))

    def add_transaction(self, request: NewTransaction) -> Transaction:
        previous = self._snapshot()
        transaction = self._run(
            "add_transaction",
            lambda: engine.add_transaction(self._state, request),
        )
        self._commit(previous, lambda: self._audit_logger.log_transaction_added(
            transaction_id=transaction.id,
            tx_type=transaction.type.value,
            amount=str(transaction.amount),
            account_id=transaction.account_id,
        ))
        return transaction

    def delete_transaction(self, transaction_id: str) -> None:
        previous = self._snapshot()
        engine.delete_transaction(self._state, transaction_id)
        self._commit(previous, lambda: self._audit_logger.log_transaction_deleted(transaction_id))

    def add_emi(self, request: NewEmi) -> Emi:
        previous = self._snapshot()
        emi = self._run("add_emi", lambda: engine.add_emi(self._state, request))
        self._commit(previous, lambda: self._audit_logger.log_emi_added(
            emi.id, emi.description, str(emi.amount),
        ))
        return emi

    def delete_emi(self, emi_id: str) -> None:
        previous = self._snapshot()
        engine.delete_emi(self._state, emi_id)
        self._commit(previous, lambda: self._audit_logger.log_emi_deleted(emi_id))

    def repay_debt(self, request: Repayment) -> tuple[Transaction, Transaction]:
        previous = self._snapshot()
        postings = self._run("repay_debt", lambda: engine.repay_debt(self._state, request))
        self._commit(previous, lambda: self._audit_logger.log_debt_repaid(
            credit_account_id=request.credit_account_id,
            source_account_id=request.source_account_id,
            amount=str(request.amount),
        ))
        return postings

    def add_custom_preset(self, preset: Preset) -> Preset:
        previous = self._snapshot()
        added = self._run(
            "add_custom_preset",
            lambda: presets.add_custom_preset(self._state, preset),
        )
        self._commit(previous, lambda: self._audit_logger.log_preset_added(
            added.name, added.type.value,
        ))
        return added

    def delete_custom_preset(self, name: str, preset_type: TransactionType) -> None:
        previous = self._snapshot()
        presets.delete_custom_preset(self._state, name, preset_type)
        self._commit(previous, lambda: self._audit_logger.log_preset_deleted(
            name, preset_type.value,
        ))

    def toggle_theme(self) -> Theme:
        previous = self._snapshot()
        theme = engine.toggle_theme(self._state)
        self._commit(previous, lambda: self._audit_logger.log_theme_changed(theme.value))
        return theme

    # -------------------------------------------------------------------------
    # Backup
    # -------------------------------------------------------------------------

    def export_backup(self, today: Optional[date] = None) -> tuple[str, str]:
        """
        Returns:
            (filename, json_payload)
        """
        filename = backup.backup_filename(today)
        payload = backup.export_state(self._state)
        self._audit_logger.log_state_exported(filename)
        return filename, payload

    def import_backup(self, payload: Union[str, bytes, dict]) -> LedgerState:
        """
        Replace the document with a backup.

        Raises:
            MalformedImportError: the current document is kept untouched
            StorageError: the backup could not be saved; nothing is replaced
        """
        try:
            imported = backup.import_state(self._state, payload)
        except backup.MalformedImportError as e:
            self._audit_logger.log_import_rejected(str(e))
            raise

        previous, self._state = self._state, imported
        self._commit(previous, lambda: self._audit_logger.log_state_imported(
            accounts=len(imported.accounts),
            transactions=len(imported.transactions),
        ))
        return imported


def create_session(
    storage: Optional[StateStorageInterface] = None,
    load: bool = True,
) -> LedgerSession:
    """
    Factory function to build a ready-to-use session.

    Args:
        storage: Storage backend. Defaults to the JSON file from settings.
        load: Whether to read the stored document immediately.
    """
    settings = get_settings()
    configure_logging(settings.logging.level)

    if storage is None:
        storage = JsonFileStateStorage(settings.ledger.state_file_path)

    session = LedgerSession(storage=storage, audit_logger=AuditLogger())
    if load:
        session.load()
    return session
