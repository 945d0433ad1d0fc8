"""
Audit Models for Money Manager

Every change to the ledger document is described by one LedgerEvent.
The session emits it right after the document has been persisted, so the
event stream doubles as the "state changed" trail for the host.

DESIGN DECISION: Events are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class LedgerEventType(str, Enum):
    """Types of events we audit."""
    # Accounts
    ACCOUNT_ADDED = "account_added"
    ACCOUNT_DELETED = "account_deleted"

    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_DELETED = "transaction_deleted"
    DEBT_REPAID = "debt_repaid"

    # EMIs
    EMI_ADDED = "emi_added"
    EMI_DELETED = "emi_deleted"

    # Presets and display
    PRESET_ADDED = "preset_added"
    PRESET_DELETED = "preset_deleted"
    THEME_CHANGED = "theme_changed"

    # Backup
    STATE_LOADED = "state_loaded"
    STATE_EXPORTED = "state_exported"
    STATE_IMPORTED = "state_imported"
    IMPORT_REJECTED = "import_rejected"

    # Failures
    OPERATION_REJECTED = "operation_rejected"
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LedgerEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: LedgerEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'account', 'transaction', 'emi')"
    )
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class LedgerEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = LedgerEventBuilder.account_added(account_id, name, "bank")
        event = LedgerEventBuilder.operation_rejected("add_transaction", msg)
    """

    @staticmethod
    def account_added(account_id: str, name: str, account_type: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.ACCOUNT_ADDED,
            entity_type="account",
            entity_id=account_id,
            description=f"Account added: {name}",
            details={"name": name, "type": account_type},
        )

    @staticmethod
    def account_deleted(
        account_id: str,
        removed_transactions: int,
        removed_emis: int,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.ACCOUNT_DELETED,
            entity_type="account",
            entity_id=account_id,
            description=(
                f"Account deleted with {removed_transactions} transactions "
                f"and {removed_emis} EMIs"
            ),
            details={
                "removed_transactions": removed_transactions,
                "removed_emis": removed_emis,
            },
        )

    @staticmethod
    def transaction_added(
        transaction_id: str,
        tx_type: str,
        amount: str,
        account_id: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"{tx_type.capitalize()} of {amount} recorded",
            details={"type": tx_type, "amount": amount, "account_id": account_id},
        )

    @staticmethod
    def transaction_deleted(transaction_id: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Transaction deleted",
        )

    @staticmethod
    def debt_repaid(
        credit_account_id: str,
        source_account_id: str,
        amount: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.DEBT_REPAID,
            entity_type="account",
            entity_id=credit_account_id,
            description=f"Repaid {amount} on credit account",
            details={
                "source_account_id": source_account_id,
                "amount": amount,
            },
        )

    @staticmethod
    def emi_added(emi_id: str, description: str, amount: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.EMI_ADDED,
            entity_type="emi",
            entity_id=emi_id,
            description=f"EMI added: {description}",
            details={"amount": amount},
        )

    @staticmethod
    def emi_deleted(emi_id: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.EMI_DELETED,
            entity_type="emi",
            entity_id=emi_id,
            description="EMI deleted",
        )

    @staticmethod
    def preset_added(name: str, preset_type: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.PRESET_ADDED,
            entity_type="preset",
            entity_id=name,
            description=f"Custom {preset_type} preset added: {name}",
            details={"type": preset_type},
        )

    @staticmethod
    def preset_deleted(name: str, preset_type: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.PRESET_DELETED,
            entity_type="preset",
            entity_id=name,
            description=f"Custom {preset_type} preset deleted: {name}",
            details={"type": preset_type},
        )

    @staticmethod
    def theme_changed(theme: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.THEME_CHANGED,
            description=f"Theme switched to {theme}",
            details={"theme": theme},
        )

    @staticmethod
    def state_loaded(accounts: int, transactions: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.STATE_LOADED,
            description=f"Loaded {accounts} accounts and {transactions} transactions",
            details={"accounts": accounts, "transactions": transactions},
        )

    @staticmethod
    def state_exported(filename: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.STATE_EXPORTED,
            description=f"Backup exported: {filename}",
            details={"filename": filename},
        )

    @staticmethod
    def state_imported(accounts: int, transactions: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.STATE_IMPORTED,
            description=f"Imported {accounts} accounts and {transactions} transactions",
            details={"accounts": accounts, "transactions": transactions},
        )

    @staticmethod
    def import_rejected(error_message: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.IMPORT_REJECTED,
            severity=AuditSeverity.WARNING,
            description="Backup import rejected, current data kept",
            error_message=error_message,
        )

    @staticmethod
    def operation_rejected(operation: str, error_message: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.OPERATION_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Operation rejected: {operation}",
            error_message=error_message,
            details={"operation": operation},
        )

    @staticmethod
    def storage_error(error_message: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description="Stored state could not be read, starting fresh",
            error_message=error_message,
        )
