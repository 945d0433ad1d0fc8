"""
Audit Logger

DESIGN DECISION: Every change to the ledger document is logged as a
structured event. This provides:
1. A traceable history of what the user did
2. Debugging capability when totals look wrong
3. A single place the host can hook to learn that state changed

The audit logger only writes to the local structured log. The state
document itself is the durable record; events are not persisted with it.
"""

import logging
from typing import Optional

import structlog

from money_manager.models.audit import AuditSeverity, LedgerEvent, LedgerEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through the stdlib root logger at `level`."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))


class AuditLogger:
    """
    Central audit logging service.

    Keeps the events of the current process in memory (newest last) so a
    host can show recent activity without reading the log files.
    """

    def __init__(self, history_size: int = 200):
        self._logger = structlog.get_logger("money_manager.audit")
        self._history: list[LedgerEvent] = []
        self._history_size = history_size

    @property
    def history(self) -> list[LedgerEvent]:
        return list(self._history)

    def log(self, event: LedgerEvent) -> None:
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("ledger_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("ledger_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("ledger_event", **log_dict)
        else:
            self._logger.info("ledger_event", **log_dict)

        self._history.append(event)
        if len(self._history) > self._history_size:
            del self._history[: len(self._history) - self._history_size]

    def log_account_added(self, account_id: str, name: str, account_type: str) -> None:
        self.log(LedgerEventBuilder.account_added(account_id, name, account_type))

    def log_account_deleted(
        self,
        account_id: str,
        removed_transactions: int,
        removed_emis: int,
    ) -> None:
        self.log(LedgerEventBuilder.account_deleted(
            account_id=account_id,
            removed_transactions=removed_transactions,
            removed_emis=removed_emis,
        ))

    def log_transaction_added(
        self,
        transaction_id: str,
        tx_type: str,
        amount: str,
        account_id: str,
    ) -> None:
        self.log(LedgerEventBuilder.transaction_added(
            transaction_id=transaction_id,
            tx_type=tx_type,
            amount=amount,
            account_id=account_id,
        ))

    def log_transaction_deleted(self, transaction_id: str) -> None:
        self.log(LedgerEventBuilder.transaction_deleted(transaction_id))

    def log_debt_repaid(
        self,
        credit_account_id: str,
        source_account_id: str,
        amount: str,
    ) -> None:
        self.log(LedgerEventBuilder.debt_repaid(
            credit_account_id=credit_account_id,
            source_account_id=source_account_id,
            amount=amount,
        ))

    def log_emi_added(self, emi_id: str, description: str, amount: str) -> None:
        self.log(LedgerEventBuilder.emi_added(emi_id, description, amount))

    def log_emi_deleted(self, emi_id: str) -> None:
        self.log(LedgerEventBuilder.emi_deleted(emi_id))

    def log_preset_added(self, name: str, preset_type: str) -> None:
        self.log(LedgerEventBuilder.preset_added(name, preset_type))

    def log_preset_deleted(self, name: str, preset_type: str) -> None:
        self.log(LedgerEventBuilder.preset_deleted(name, preset_type))

    def log_theme_changed(self, theme: str) -> None:
        self.log(LedgerEventBuilder.theme_changed(theme))

    def log_state_loaded(self, accounts: int, transactions: int) -> None:
        self.log(LedgerEventBuilder.state_loaded(accounts, transactions))

    def log_state_exported(self, filename: str) -> None:
        self.log(LedgerEventBuilder.state_exported(filename))

    def log_state_imported(self, accounts: int, transactions: int) -> None:
        self.log(LedgerEventBuilder.state_imported(accounts, transactions))

    def log_import_rejected(self, error_message: str) -> None:
        self.log(LedgerEventBuilder.import_rejected(error_message))

    def log_operation_rejected(self, operation: str, error_message: str) -> None:
        self.log(LedgerEventBuilder.operation_rejected(operation, error_message))

    def log_storage_error(self, error_message: str) -> None:
        self.log(LedgerEventBuilder.storage_error(error_message))
